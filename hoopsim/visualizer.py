"""Pygame front end — drag to throw, skin picker, coach tips, auto-scoring."""

import math

try:
    import pygame
except ImportError:
    pygame = None

from hoopengine.types import Ball, Hoop, RestartEvent, ScoreEvent
from hoopengine.session import (
    ClosePicker,
    GameSession,
    OpenPicker,
    PointerDown,
    PointerMove,
    PointerUp,
    Resize,
    Restart,
    SelectTheme,
)
from hoopengine.themes import BALL_THEMES, LIGHT_SEAM_THEMES
from hoopengine import constants
from hoopsim.coach import CoachTipper

WIN_W = 1280
WIN_H = 720
FPS = 60

TOAST_MS = 1000
BUBBLE_MS = 6000

# Colors
BG_COLOR = (15, 23, 42)
RIM_RED = (239, 68, 68)
ACCENT = (251, 146, 60)
CARD_BG = (30, 41, 59)
TEXT_WHITE = (226, 232, 240)
TEXT_DIM = (148, 163, 184)
WHITE = (255, 255, 255)

# Translucent strokes as (r, g, b, a)
FLOOR_RGBA = (255, 255, 255, 13)
BOARD_FILL_RGBA = (255, 255, 255, 20)
BOARD_EDGE_RGBA = (255, 255, 255, 102)
NET_RGBA = (255, 255, 255, 64)
GUIDE_RGBA = (255, 255, 255, 38)
SEAM_DARK_RGBA = (0, 0, 0, 77)
SEAM_LIGHT_RGBA = (255, 255, 255, 26)

PICKER_COLS = 4


def _button_rects(width):
    """Toolbar buttons, right-aligned along the top edge."""
    w, h, gap = 150, 36, 10
    names = ["restart", "skins", "coach"]
    x = width - (w + gap) * len(names)
    return {name: pygame.Rect(x + i * (w + gap), 12, w, h) for i, name in enumerate(names)}


def _picker_layout(width, height):
    """Panel, one cell per theme, and the close button of the skin picker."""
    rows = math.ceil(len(BALL_THEMES) / PICKER_COLS)
    cell_w, cell_h, gap = 120, 110, 12
    panel_w = PICKER_COLS * cell_w + (PICKER_COLS + 1) * gap
    panel_h = rows * cell_h + (rows + 1) * gap + 90
    panel = pygame.Rect((width - panel_w) // 2, (height - panel_h) // 2, panel_w, panel_h)

    cells = []
    for i in range(len(BALL_THEMES)):
        row, col = divmod(i, PICKER_COLS)
        cells.append(pygame.Rect(
            panel.x + gap + col * (cell_w + gap),
            panel.y + 44 + gap + row * (cell_h + gap),
            cell_w, cell_h,
        ))
    close = pygame.Rect(panel.centerx - 60, panel.bottom - 44, 120, 32)
    return panel, cells, close


def _lerp_color(a, b, t):
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


def _draw_dashed_polyline(surface, color, points, dash=4, gap=12, width=2):
    """Dashed line along a polyline; the dash pattern carries across vertices."""
    period = dash + gap
    phase = 0.0
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        seg_len = math.hypot(x2 - x1, y2 - y1)
        if seg_len == 0:
            continue
        ux, uy = (x2 - x1) / seg_len, (y2 - y1) / seg_len
        d = 0.0
        while d < seg_len:
            in_dash = phase < dash
            run = (dash - phase) if in_dash else (period - phase)
            run = min(run, seg_len - d)
            if in_dash:
                start = (x1 + ux * d, y1 + uy * d)
                end = (x1 + ux * (d + run), y1 + uy * (d + run))
                pygame.draw.line(surface, color, start, end, width)
            d += run
            phase = (phase + run) % period


def _draw_court(overlay, width, height):
    floor_y = height - constants.FLOOR_OFFSET
    pygame.draw.line(overlay, FLOOR_RGBA, (0, floor_y), (width, floor_y), 4)


def _draw_hoop(surface, overlay, hoop: Hoop):
    board = pygame.Rect(hoop.backboard_x, hoop.backboard_y, hoop.backboard_w, hoop.backboard_h)
    pygame.draw.rect(overlay, BOARD_FILL_RGBA, board)
    pygame.draw.rect(overlay, BOARD_EDGE_RGBA, board, 1)
    pygame.draw.rect(overlay, BOARD_EDGE_RGBA, (hoop.backboard_x - 2, hoop.y - 45, 5, 60), 1)

    # Net: six strands from the rim, gathered below it
    rim_l = hoop.x - hoop.width / 2
    for i in range(6):
        top = (rim_l + i * (hoop.width / 5), hoop.y)
        bottom = (hoop.x - 15 + i * 6, hoop.y + 55)
        pygame.draw.line(overlay, NET_RGBA, top, bottom, 1)

    left, right = hoop.rim_left, hoop.rim_right
    pygame.draw.line(surface, RIM_RED, (left.x, left.y), (right.x, right.y), int(hoop.rim_thickness))


def _render_ball(ball: Ball, theme):
    """Ball sprite with gradient and seams, rotated to ``ball.angle``."""
    r = int(ball.radius)
    size = r * 2 + 2
    sprite = pygame.Surface((size, size), pygame.SRCALPHA)
    cx = cy = size / 2

    primary = pygame.Color(theme.primary)
    secondary = pygame.Color(theme.secondary)
    steps = r - 4
    for k in range(steps):
        t = k / max(steps - 1, 1)
        radius = r - t * (r - 5)
        color = _lerp_color(secondary, primary, t)
        pygame.draw.circle(sprite, color, (cx - 5 * t, cy - 5 * t), radius)

    seam = SEAM_LIGHT_RGBA if theme.name in LIGHT_SEAM_THEMES else SEAM_DARK_RGBA
    seams = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.line(seams, seam, (cx - r, cy), (cx + r, cy), 2)
    pygame.draw.line(seams, seam, (cx, cy - r), (cx, cy + r), 2)
    pygame.draw.ellipse(seams, seam, (cx - r, cy - r * 0.6, r * 2, r * 1.2), 2)
    sprite.blit(seams, (0, 0))

    return pygame.transform.rotate(sprite, -math.degrees(ball.angle))


def _draw_button(screen, font, rect, label, enabled=True):
    bg = CARD_BG if enabled else (24, 30, 44)
    fg = TEXT_WHITE if enabled else TEXT_DIM
    pygame.draw.rect(screen, bg, rect, border_radius=8)
    pygame.draw.rect(screen, ACCENT if enabled else TEXT_DIM, rect, 1, border_radius=8)
    txt = font.render(label, True, fg)
    screen.blit(txt, (rect.centerx - txt.get_width() // 2, rect.centery - txt.get_height() // 2))


def _draw_picker(screen, fonts, session: GameSession):
    width, height = screen.get_size()
    shade = pygame.Surface((width, height), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 170))
    screen.blit(shade, (0, 0))

    panel, cells, close = _picker_layout(width, height)
    pygame.draw.rect(screen, CARD_BG, panel, border_radius=14)
    title = fonts["title"].render("CHOOSE YOUR BALL", True, ACCENT)
    screen.blit(title, (panel.centerx - title.get_width() // 2, panel.y + 14))

    for i, (cell, theme) in enumerate(zip(cells, BALL_THEMES)):
        active = i == session.theme_index
        pygame.draw.rect(screen, (51, 65, 85) if active else BG_COLOR, cell, border_radius=10)
        if active:
            pygame.draw.rect(screen, ACCENT, cell, 2, border_radius=10)
        preview = Ball(radius=26)
        sprite = _render_ball(preview, theme)
        screen.blit(sprite, (cell.centerx - sprite.get_width() // 2, cell.y + 12))
        name = fonts["sm"].render(theme.name, True, TEXT_WHITE)
        screen.blit(name, (cell.centerx - name.get_width() // 2, cell.bottom - 26))

    _draw_button(screen, fonts["md"], close, "Close")


def _draw_text_card(screen, font, text, center, max_width=520):
    """Word-wrapped text on a rounded card, centred on ``center``."""
    words = text.split()
    lines, line = [], ""
    for word in words:
        trial = f"{line} {word}".strip()
        if font.size(trial)[0] > max_width and line:
            lines.append(line)
            line = word
        else:
            line = trial
    if line:
        lines.append(line)

    rendered = [font.render(ln, True, TEXT_WHITE) for ln in lines]
    w = max((r.get_width() for r in rendered), default=0) + 32
    h = sum(r.get_height() for r in rendered) + 24
    card = pygame.Rect(0, 0, w, h)
    card.center = center
    pygame.draw.rect(screen, CARD_BG, card, border_radius=12)
    pygame.draw.rect(screen, ACCENT, card, 1, border_radius=12)
    y = card.y + 12
    for r in rendered:
        screen.blit(r, (card.centerx - r.get_width() // 2, y))
        y += r.get_height()


def run_visualizer():
    """Launch the Pygame hoop toss."""
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return

    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H), pygame.RESIZABLE)
    pygame.display.set_caption("Hoops — Drag the ball to shoot")
    clock = pygame.time.Clock()

    fonts = {
        "sm": pygame.font.SysFont("monospace", 13),
        "md": pygame.font.SysFont("monospace", 16),
        "title": pygame.font.SysFont("monospace", 20, bold=True),
        "stat": pygame.font.SysFont("monospace", 34, bold=True),
        "toast": pygame.font.SysFont("monospace", 64, bold=True),
        "toast_big": pygame.font.SysFont("monospace", 70, bold=True),
    }

    session = GameSession(*screen.get_size())
    tipper = CoachTipper()

    toast_text, toast_until = "", 0
    bubble_text, bubble_until = "", 0

    def pointer_pressed(x, y):
        """Route a press to the picker, a toolbar button, or the court."""
        width, height = screen.get_size()
        if session.picker_open:
            _, cells, close = _picker_layout(width, height)
            if close.collidepoint(x, y):
                session.post(ClosePicker())
                return
            for i, cell in enumerate(cells):
                if cell.collidepoint(x, y):
                    session.post(SelectTheme(i))
                    return
            return

        buttons = _button_rects(width)
        if buttons["restart"].collidepoint(x, y):
            session.post(Restart())
        elif buttons["skins"].collidepoint(x, y):
            session.post(OpenPicker())
        elif buttons["coach"].collidepoint(x, y):
            tipper.request(session.score, session.misses, session.theme.name)
        else:
            session.post(PointerDown(x, y))

    running = True
    while running:
        clock.tick(FPS)
        width, height = screen.get_size()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                session.post(Resize(event.w, event.h))
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                elif event.key == pygame.K_r:
                    session.post(Restart())
                elif event.key == pygame.K_b:
                    session.post(OpenPicker())
                elif event.key == pygame.K_ESCAPE:
                    session.post(ClosePicker())
                elif event.key == pygame.K_c:
                    tipper.request(session.score, session.misses, session.theme.name)
                elif session.picker_open and event.key == pygame.K_LEFT:
                    session.post(SelectTheme(session.theme_index - 1))
                elif session.picker_open and event.key == pygame.K_RIGHT:
                    session.post(SelectTheme(session.theme_index + 1))
            # Touch also emits synthetic mouse events; handle each touch once
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if not getattr(event, "touch", False):
                    pointer_pressed(*event.pos)
            elif event.type == pygame.MOUSEMOTION:
                if not getattr(event, "touch", False):
                    session.post(PointerMove(*event.pos))
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                if not getattr(event, "touch", False):
                    session.post(PointerUp())
            elif event.type == pygame.FINGERDOWN:
                pointer_pressed(event.x * width, event.y * height)
            elif event.type == pygame.FINGERMOTION:
                session.post(PointerMove(event.x * width, event.y * height))
            elif event.type == pygame.FINGERUP:
                session.post(PointerUp())

        now = pygame.time.get_ticks()
        for e in session.tick():
            if isinstance(e, ScoreEvent):
                toast_text, toast_until = "SWISH!", now + TOAST_MS
            elif isinstance(e, RestartEvent):
                toast_text, toast_until = "RESTARTED", now + TOAST_MS

        tip = tipper.poll()
        if tip:
            bubble_text, bubble_until = tip, now + BUBBLE_MS

        # ---- DRAW ----
        screen.fill(BG_COLOR)
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        _draw_court(overlay, width, height)
        _draw_hoop(screen, overlay, session.hoop)

        guide = session.prediction()
        if guide:
            _draw_dashed_polyline(overlay, GUIDE_RGBA, [(p.x, p.y) for p in guide])
        screen.blit(overlay, (0, 0))

        sprite = _render_ball(session.ball, session.theme)
        screen.blit(sprite, (
            session.ball.pos.x - sprite.get_width() / 2,
            session.ball.pos.y - sprite.get_height() / 2,
        ))

        # Scoreboard
        screen.blit(fonts["sm"].render("SCORE", True, TEXT_DIM), (20, 14))
        screen.blit(fonts["stat"].render(str(session.score), True, ACCENT), (20, 30))
        screen.blit(fonts["sm"].render("MISSES", True, TEXT_DIM), (120, 14))
        screen.blit(fonts["stat"].render(str(session.misses), True, RIM_RED), (120, 30))

        buttons = _button_rects(width)
        _draw_button(screen, fonts["md"], buttons["restart"], "Restart")
        _draw_button(screen, fonts["md"], buttons["skins"], f"Ball: {session.theme.name}")
        _draw_button(screen, fonts["md"], buttons["coach"], tipper.label, enabled=not tipper.busy)

        hint = fonts["sm"].render("Drag the ball toward the hoop and let go", True, TEXT_DIM)
        screen.blit(hint, (20, height - hint.get_height() - 12))

        if bubble_text and now < bubble_until:
            _draw_text_card(screen, fonts["md"], bubble_text, (width // 2, 110))

        if toast_text and now < toast_until:
            # Pops in large, settles to normal size
            font = fonts["toast_big"] if toast_until - now > TOAST_MS * 0.8 else fonts["toast"]
            txt = font.render(toast_text, True, ACCENT)
            screen.blit(txt, (width // 2 - txt.get_width() // 2, height // 2 - txt.get_height() // 2))

        if session.picker_open:
            _draw_picker(screen, fonts, session)

        pygame.display.flip()

    pygame.quit()
