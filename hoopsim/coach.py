"""Coach tips — a short flavour comment from a remote text model.

The request runs on a background thread so the frame loop never waits on it.
Any failure is replaced by a canned line; nothing here can break the game.
"""

import logging
import os
import queue
import threading
from typing import Optional

import requests

logger = logging.getLogger(__name__)

COACH_URL = os.environ.get(
    "HOOPS_COACH_URL",
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.5-flash-preview-09-2025:generateContent",
)

FALLBACK_TIP = "Keep practicing! Every shot counts."
EMPTY_TIP = "Looking good on the court!"

BUSY_LABEL = "Coach Thinking..."
IDLE_LABEL = "Coach Tip"


def build_system_prompt(score: int, misses: int, theme_name: str) -> str:
    return (
        "You are an expert basketball coach and a witty commentator for a 2D physics game.\n"
        f"Current Stats: Score: {score}, Misses: {misses}.\n"
        f"Current Ball Skin: {theme_name}.\n"
        "Rules:\n"
        "1. Keep it short (max 2 sentences).\n"
        "2. Give a specific comment about their choice of ball skin if appropriate.\n"
        "3. If misses > score, give a 'pro tip' about aiming or arcs.\n"
        "4. Tone: Energetic, encouraging, and smart."
    )


def build_user_query(theme_name: str) -> str:
    return f"Hey coach, how am I doing with this {theme_name} ball?"


def _extract_text(result: dict) -> Optional[str]:
    """First candidate's first text part, if the response has one."""
    try:
        return result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None


def fetch_tip(score: int, misses: int, theme_name: str, api_key: Optional[str] = None) -> str:
    """Ask the model for a tip. Never raises; falls back to a canned line.

    No timeout and no retry: the caller runs this off the frame loop.
    """
    if api_key is None:
        api_key = os.environ.get("GEMINI_API_KEY", "")

    payload = {
        "contents": [{"parts": [{"text": build_user_query(theme_name)}]}],
        "systemInstruction": {"parts": [{"text": build_system_prompt(score, misses, theme_name)}]},
    }

    try:
        response = requests.post(
            COACH_URL,
            params={"key": api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
        )
        response.raise_for_status()
        result = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Coach request failed: %s", e)
        return FALLBACK_TIP

    return _extract_text(result) or EMPTY_TIP


class CoachTipper:
    """One-at-a-time tip requests with results handed back to the frame loop.

    ``busy`` stays True from ``request`` until the worker finishes, success or
    not; the UI disables its button while it is set.
    """

    def __init__(self, fetch=fetch_tip):
        self._fetch = fetch
        self._results: queue.Queue = queue.Queue()
        self._busy = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def busy(self) -> bool:
        return self._busy.is_set()

    @property
    def label(self) -> str:
        return BUSY_LABEL if self.busy else IDLE_LABEL

    def request(self, score: int, misses: int, theme_name: str) -> bool:
        """Start a request unless one is already running."""
        if self.busy:
            return False
        self._busy.set()
        self._thread = threading.Thread(
            target=self._run, args=(score, misses, theme_name), daemon=True,
        )
        self._thread.start()
        return True

    def _run(self, score: int, misses: int, theme_name: str) -> None:
        try:
            self._results.put(self._fetch(score, misses, theme_name))
        except Exception:
            logger.exception("Coach tip worker crashed")
            self._results.put(FALLBACK_TIP)
        finally:
            self._busy.clear()

    def poll(self) -> Optional[str]:
        """Finished tip, if any. Call from the frame loop."""
        try:
            return self._results.get_nowait()
        except queue.Empty:
            return None

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the current request finishes. For tests and the CLI."""
        if self._thread is not None:
            self._thread.join(timeout)
