#!/usr/bin/env python3
"""CLI entry point for the Hoops arcade sim.

Usage:
    python main.py play              Launch the Pygame hoop toss
    python main.py sim [throw]       Fly throw presets headless and print outcomes
    python main.py analyze           Generate analysis charts
    python main.py tip               Ask the coach for one tip
    python main.py test              Run all tests
    python main.py demo              Headless throws, a coach tip and charts
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

logging.basicConfig(
    level=os.environ.get("HOOPS_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def cmd_play():
    """Launch the Pygame hoop toss."""
    print("Launching Hoops...")
    print("Controls: drag ball=throw  R=restart  B=ball skins  C=coach tip  Esc=close  Q=quit")
    print("-" * 60)
    from hoopsim.visualizer import run_visualizer
    run_visualizer()


def cmd_sim():
    """Fly throw presets headless and print outcomes."""
    from hoopengine.hoop import create_hoop
    from hoopengine.physics import simulate
    from hoopengine.throws import COURT_HEIGHT, COURT_WIDTH, THROW_PRESETS, get_throw, list_throws
    from hoopengine.types import BackboardEvent, OutEvent, RimEvent, ScoreEvent

    keys = list_throws()
    if len(sys.argv) > 2:
        if sys.argv[2] not in THROW_PRESETS:
            print(f"Unknown throw '{sys.argv[2]}'. Available: {', '.join(keys)}")
            sys.exit(1)
        keys = [sys.argv[2]]

    hoop = create_hoop(COURT_WIDTH, COURT_HEIGHT)
    print("=" * 60)
    print(f"  HEADLESS THROWS  ({COURT_WIDTH}x{COURT_HEIGHT} court)")
    print("=" * 60)

    made = 0
    for key in keys:
        preset = THROW_PRESETS[key]
        ball = get_throw(key)
        positions, events = simulate(ball, hoop, COURT_WIDTH, COURT_HEIGHT)

        scored = any(isinstance(e, ScoreEvent) for e in events)
        rims = sum(1 for e in events if isinstance(e, RimEvent))
        boards = sum(1 for e in events if isinstance(e, BackboardEvent))
        out = next((e for e in events if isinstance(e, OutEvent)), None)
        made += scored

        print(f"\n  {preset['label']:12s} drag=({preset['dx']:+d}, {preset['dy']:+d})  "
              f"v0=({ball.vel.x:+.2f}, {ball.vel.y:+.2f})")
        print(f"    {'SCORE' if scored else 'miss '}  frames: {len(positions) - 1:3d}  "
              f"rim: {rims}  backboard: {boards}")
        if out:
            print(f"    left court at ({out.pos.x:.0f}, {out.pos.y:.0f}) on frame {out.frame}")

    print()
    print(f"  Made {made}/{len(keys)}")
    print("=" * 60)


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from hoopsim.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_tip():
    """Ask the coach for one tip."""
    from hoopengine.themes import get_theme
    from hoopsim.coach import fetch_tip

    theme = get_theme(0)
    print(f"Asking the coach about the {theme.name} ball...")
    print(f"\n  {fetch_tip(0, 0, theme.name)}\n")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


def cmd_demo():
    """Headless throws, a coach tip and charts."""
    print("=" * 60)
    print("  HOOPS — SIMULATION DEMO")
    print("=" * 60)
    print()

    cmd_sim()

    print("-" * 60)
    cmd_tip()

    print("-" * 60)
    cmd_analyze()

    print()
    print("=" * 60)
    print("  Demo complete! Check the 'output' folder for charts.")
    print("=" * 60)


COMMANDS = {
    "play": cmd_play,
    "sim": cmd_sim,
    "analyze": cmd_analyze,
    "tip": cmd_tip,
    "test": cmd_test,
    "demo": cmd_demo,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
