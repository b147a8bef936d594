"""Ball skins for the picker. Purely cosmetic; physics never looks at them."""

from hoopengine.types import BallTheme

BALL_THEMES = [
    BallTheme("Classic", "#fb923c", "#c2410c"),
    BallTheme("Deep Sea", "#38bdf8", "#1e40af"),
    BallTheme("Toxic", "#bef264", "#3f6212"),
    BallTheme("Golden", "#fde047", "#a16207"),
    BallTheme("Void", "#94a3b8", "#0f172a"),
    BallTheme("Gemini", "#8ab4f8", "#4285f4"),
    BallTheme("Neon City", "#ff00ff", "#7000ff"),
    BallTheme("Mars", "#ef4444", "#7f1d1d"),
    BallTheme("Ice", "#e0f2fe", "#3b82f6"),
    BallTheme("Magma", "#f87171", "#450a0a"),
    BallTheme("Forest", "#4ade80", "#064e3b"),
    BallTheme("Candy", "#f472b6", "#9d174d"),
]

# Dark skins get light seams so the pattern stays visible
LIGHT_SEAM_THEMES = {"Void"}


def get_theme(index: int) -> BallTheme:
    """Theme at ``index``, wrapping around the list."""
    return BALL_THEMES[index % len(BALL_THEMES)]


def list_themes() -> list[str]:
    """Return all theme names in picker order."""
    return [t.name for t in BALL_THEMES]
