"""Matplotlib analysis charts — preset flight paths, drag outcome map, guide accuracy."""

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
import numpy as np

from hoopengine.types import BackboardEvent, Ball, DragGesture, OutEvent, RimEvent, ScoreEvent, Vec2
from hoopengine.hoop import create_hoop, rack_ball
from hoopengine.physics import simulate
from hoopengine.predictor import predict_trajectory
from hoopengine.throws import COURT_HEIGHT, COURT_WIDTH, THROW_PRESETS, get_throw, launch, list_throws
from hoopengine import constants

# Outcome codes used by the drag outcome map
OUTCOME_MISS = 0
OUTCOME_RIM_MISS = 1
OUTCOME_SCORE = 2


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _draw_hoop(ax, hoop):
    """Backboard, rim and swish gate in screen coordinates."""
    ax.add_patch(plt.Rectangle(
        (hoop.backboard_x, hoop.backboard_y), hoop.backboard_w, hoop.backboard_h,
        facecolor="#ffffff22", edgecolor="#ffffff88",
    ))
    ax.plot(
        [hoop.rim_left.x, hoop.rim_right.x], [hoop.y, hoop.y],
        color="#ef4444", linewidth=4, solid_capstyle="round",
    )
    ax.add_patch(plt.Rectangle(
        (hoop.rim_left.x, hoop.y - constants.SWISH_WINDOW),
        hoop.width, constants.SWISH_WINDOW * 2,
        facecolor="#28a74522", edgecolor="none",
    ))


def classify_throw(dx, dy, width=COURT_WIDTH, height=COURT_HEIGHT, max_frames=600):
    """Outcome code for a drag of (dx, dy) from the rack."""
    hoop = create_hoop(width, height)
    ball = launch(rack_ball(Ball(), height), dx, dy)
    _, events = simulate(ball, hoop, width, height, max_frames=max_frames)
    if any(isinstance(e, ScoreEvent) for e in events):
        return OUTCOME_SCORE
    if any(isinstance(e, RimEvent) for e in events):
        return OUTCOME_RIM_MISS
    return OUTCOME_MISS


def outcome_grid(dx_values, dy_values, width=COURT_WIDTH, height=COURT_HEIGHT):
    """Matrix of outcome codes, rows indexed by dy and columns by dx."""
    grid = np.zeros((len(dy_values), len(dx_values)), dtype=int)
    for i, dy in enumerate(dy_values):
        for j, dx in enumerate(dx_values):
            grid[i][j] = classify_throw(dx, dy, width, height)
    return grid


def chart_throw_paths(save_path=None):
    """Chart 1: Flight paths of every throw preset over the reference court."""
    hoop = create_hoop(COURT_WIDTH, COURT_HEIGHT)

    fig, ax = plt.subplots(figsize=(10, 6))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Throw Preset Flight Paths")

    colors = ["#28a745", "#e94560", "#ffc107", "#4ecdc4", "#a855f7", "#64748b", "#fb923c"]

    for key, color in zip(list_throws(), colors):
        positions, events = simulate(get_throw(key), hoop, COURT_WIDTH, COURT_HEIGHT)
        xs = [p.pos.x for p in positions]
        ys = [p.pos.y for p in positions]
        scored = any(isinstance(e, ScoreEvent) for e in events)
        label = f"{THROW_PRESETS[key]['label']}{' (score)' if scored else ''}"
        ax.plot(xs, ys, color=color, linewidth=1.8, label=label)

        for e in events:
            if isinstance(e, (RimEvent, BackboardEvent)):
                ax.scatter(e.pos.x, e.pos.y, c=color, s=30, marker="x", zorder=5)

    _draw_hoop(ax, hoop)
    ax.set_xlim(-constants.OUT_OF_BOUNDS_MARGIN, COURT_WIDTH + constants.OUT_OF_BOUNDS_MARGIN)
    ax.set_ylim(COURT_HEIGHT + constants.OUT_OF_BOUNDS_MARGIN, -50)  # screen y grows down
    ax.set_aspect("equal")
    ax.set_xlabel("x (px)")
    ax.set_ylabel("y (px)")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=8, loc="lower right")
    ax.grid(True, alpha=0.15)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_outcome_map(resolution=32, save_path=None):
    """Chart 2: Which drags score.

    Grid over drag displacement; each cell is a full headless flight.
    """
    dx_values = np.linspace(40, 260, resolution)
    dy_values = np.linspace(-260, -20, resolution)
    grid = outcome_grid(dx_values, dy_values)

    fig, ax = plt.subplots(figsize=(8, 6))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Drag Outcome Map")

    cmap = ListedColormap(["#1e293b", "#ffc107", "#28a745"])
    im = ax.imshow(
        grid, cmap=cmap, vmin=-0.5, vmax=2.5, origin="lower", aspect="auto",
        extent=(dx_values[0], dx_values[-1], dy_values[0], dy_values[-1]),
    )
    ax.set_xlabel("Drag dx (px)")
    ax.set_ylabel("Drag dy (px, negative = up)")

    cbar = fig.colorbar(im, ax=ax, ticks=[OUTCOME_MISS, OUTCOME_RIM_MISS, OUTCOME_SCORE], shrink=0.8)
    cbar.ax.set_yticklabels(["Miss", "Rim, no score", "Score"])
    cbar.ax.tick_params(colors="#888")

    score_rate = (grid == OUTCOME_SCORE).mean() * 100
    ax.text(
        0.02, 0.97, f"{score_rate:.1f}% of drags score", transform=ax.transAxes,
        color="#e0e0e0", fontsize=9, va="top",
    )

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def guide_error(dx, dy, height=COURT_HEIGHT):
    """Per-step distance between the drag guide and the real flight.

    The guide ignores air resistance, so the gap grows with time.
    """
    ball = rack_ball(Ball(), height)
    drag = DragGesture(start=ball.pos.copy(), current=ball.pos + Vec2(dx, dy))
    guide = predict_trajectory(ball, drag)

    flying = launch(ball.copy(), dx, dy)
    # Open court so contact never bends the real path
    open_w, open_h = COURT_WIDTH * 10, height * 10
    hoop = create_hoop(open_w, open_h)
    positions, _ = simulate(flying, hoop, open_w, open_h, max_frames=len(guide) - 1)
    n = min(len(guide), len(positions))
    return np.array([guide[i].distance_to(positions[i].pos) for i in range(n)])


def chart_guide_error(save_path=None):
    """Chart 3: How far the dashed guide drifts from the real flight."""
    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Trajectory Guide Drift (no air resistance in guide)")

    colors = ["#28a745", "#e94560", "#ffc107", "#4ecdc4", "#a855f7", "#64748b"]
    for key, color in zip(list_throws(), colors):
        preset = THROW_PRESETS[key]
        err = guide_error(preset["dx"], preset["dy"])
        ax.plot(np.arange(len(err)), err, color=color, marker="o", markersize=3,
                linewidth=1.5, label=preset["label"])

    ax.set_xlabel("Frame")
    ax.set_ylabel("Guide error (px)")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_outcome_breakdown(save_path=None):
    """Chart 4: What each preset runs into on its way out."""
    hoop = create_hoop(COURT_WIDTH, COURT_HEIGHT)
    kinds = [("Backboard", BackboardEvent), ("Rim", RimEvent), ("Score", ScoreEvent), ("Out", OutEvent)]
    keys = list_throws()
    counts = np.zeros((len(keys), len(kinds)), dtype=int)

    for i, key in enumerate(keys):
        _, events = simulate(get_throw(key), hoop, COURT_WIDTH, COURT_HEIGHT)
        for j, (_, kind) in enumerate(kinds):
            counts[i][j] = sum(1 for e in events if isinstance(e, kind))

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Contacts per Throw Preset")

    x = np.arange(len(keys))
    width = 0.2
    colors = ["#64748b", "#ef4444", "#28a745", "#ffc107"]
    for j, ((label, _), color) in enumerate(zip(kinds, colors)):
        ax.bar(x + j * width, counts[:, j], width, color=color, label=label, alpha=0.85)

    ax.set_xticks(x + width * 1.5)
    ax.set_xticklabels([THROW_PRESETS[k]["label"] for k in keys], rotation=20, ha="right")
    ax.set_ylabel("Events")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15, axis="y")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def generate_all_charts(output_dir="."):
    """Generate all analysis charts and save to output directory."""
    os.makedirs(output_dir, exist_ok=True)

    paths = []

    path = os.path.join(output_dir, "chart_throw_paths.png")
    chart_throw_paths(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_outcome_map.png")
    print("  Generating outcome map (simulating drag grid)...")
    chart_outcome_map(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_guide_error.png")
    chart_guide_error(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_outcome_breakdown.png")
    chart_outcome_breakdown(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    plt.close("all")
    return paths
