"""Tests for the coach tip client."""

import threading

import requests

from hoopsim import coach
from hoopsim.coach import CoachTipper, EMPTY_TIP, FALLBACK_TIP, build_system_prompt, fetch_tip


class _FakeResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self._payload = payload
        self.status_code = status
        self._bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


def _tip_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_prompt_includes_stats_and_skin():
    """System prompt carries score, misses and the current skin."""
    prompt = build_system_prompt(4, 7, "Neon City")
    assert "Score: 4" in prompt
    assert "Misses: 7" in prompt
    assert "Neon City" in prompt


def test_fetch_tip_returns_model_text(monkeypatch):
    """Successful response → first candidate's text, request shaped as expected."""
    calls = []

    def fake_post(url, **kwargs):
        calls.append((url, kwargs))
        return _FakeResponse(_tip_payload("Nice arc, rookie!"))

    monkeypatch.setattr(coach.requests, "post", fake_post)
    tip = fetch_tip(2, 1, "Mars", api_key="secret")

    assert tip == "Nice arc, rookie!"
    url, kwargs = calls[0]
    assert url == coach.COACH_URL
    assert kwargs["params"] == {"key": "secret"}
    assert kwargs["json"]["contents"][0]["parts"][0]["text"] == (
        "Hey coach, how am I doing with this Mars ball?"
    )
    assert "Score: 2" in kwargs["json"]["systemInstruction"]["parts"][0]["text"]
    assert "timeout" not in kwargs


def test_fetch_tip_empty_response(monkeypatch):
    """No candidates → the upbeat default line."""
    monkeypatch.setattr(coach.requests, "post", lambda url, **kw: _FakeResponse({"candidates": []}))
    assert fetch_tip(0, 0, "Classic", api_key="") == EMPTY_TIP


def test_fetch_tip_http_error(monkeypatch):
    """Non-success status → fallback line, no exception."""
    monkeypatch.setattr(coach.requests, "post", lambda url, **kw: _FakeResponse(status=503))
    assert fetch_tip(0, 0, "Classic", api_key="") == FALLBACK_TIP


def test_fetch_tip_transport_error(monkeypatch):
    """Connection failure → fallback line, no exception."""
    def boom(url, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(coach.requests, "post", boom)
    assert fetch_tip(0, 0, "Classic", api_key="") == FALLBACK_TIP


def test_fetch_tip_bad_json(monkeypatch):
    """Unparseable body → fallback line."""
    monkeypatch.setattr(coach.requests, "post", lambda url, **kw: _FakeResponse(bad_json=True))
    assert fetch_tip(0, 0, "Classic", api_key="") == FALLBACK_TIP


def test_fetch_tip_reads_key_from_env(monkeypatch):
    """Without an explicit key the environment is used."""
    seen = {}

    def fake_post(url, **kwargs):
        seen.update(kwargs["params"])
        return _FakeResponse(_tip_payload("ok"))

    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    monkeypatch.setattr(coach.requests, "post", fake_post)
    fetch_tip(0, 0, "Classic")
    assert seen["key"] == "from-env"


def test_tipper_busy_until_request_finishes():
    """One request at a time; busy clears and the tip arrives via poll."""
    release = threading.Event()

    def slow_fetch(score, misses, theme_name):
        release.wait(5)
        return f"{theme_name}: {score}/{misses}"

    tipper = CoachTipper(fetch=slow_fetch)
    assert tipper.request(1, 2, "Ice") is True
    assert tipper.busy is True
    assert tipper.label == coach.BUSY_LABEL
    assert tipper.request(1, 2, "Ice") is False
    assert tipper.poll() is None

    release.set()
    tipper.wait(5)

    assert tipper.busy is False
    assert tipper.label == coach.IDLE_LABEL
    assert tipper.poll() == "Ice: 1/2"
    assert tipper.poll() is None


def test_tipper_recovers_from_crashing_fetch():
    """A fetch that raises still re-enables the button and yields the fallback."""
    def broken_fetch(score, misses, theme_name):
        raise RuntimeError("bug")

    tipper = CoachTipper(fetch=broken_fetch)
    tipper.request(0, 0, "Void")
    tipper.wait(5)

    assert tipper.busy is False
    assert tipper.poll() == FALLBACK_TIP
    assert tipper.request(0, 0, "Void") is True
    tipper.wait(5)
