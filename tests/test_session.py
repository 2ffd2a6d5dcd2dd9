"""Tests for duet.session."""

import stat
from pathlib import Path
from typing import Any

import pytest
import requests

from duet.errors import RemoteFailure
from duet.session import Session, clear_session, load_session, save_session, sign_in


class FakeResponse:
    def __init__(self, payload: dict[str, Any], status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> dict[str, Any]:
        return self.payload


@pytest.fixture(autouse=True)
def no_env_session(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DUET_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("DUET_USER_ID", raising=False)


class TestSessionFile:
    """Tests for saving, loading and clearing the session file."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Should read back the saved session."""
        path = tmp_path / "duet" / "session.toml"
        session = Session(access_token="abc", user_id="u1")

        save_session(session, path)

        assert load_session(path) == session
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should return None when nobody signed in."""
        assert load_session(tmp_path / "session.toml") is None

    def test_environment_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should prefer the environment over the file."""
        path = tmp_path / "session.toml"
        save_session(Session(access_token="file", user_id="u1"), path)
        monkeypatch.setenv("DUET_ACCESS_TOKEN", "env")
        monkeypatch.setenv("DUET_USER_ID", "u2")

        assert load_session(path) == Session(access_token="env", user_id="u2")

    def test_clear(self, tmp_path: Path) -> None:
        """Should delete the file and report whether one existed."""
        path = tmp_path / "session.toml"
        save_session(Session(access_token="abc", user_id="u1"), path)

        assert clear_session(path)
        assert not clear_session(path)
        assert load_session(path) is None


class TestSignIn:
    """Tests for sign_in."""

    def test_success(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should return the token and user id from the auth response."""
        calls: list[dict[str, Any]] = []

        def fake_post(url: str, **kwargs: Any) -> FakeResponse:
            calls.append({"url": url, **kwargs})
            return FakeResponse({"access_token": "tok", "user": {"id": "u1"}})

        monkeypatch.setattr(requests, "post", fake_post)

        session = sign_in("https://example.test", "anon", " ana@example.test ", "secret")

        assert session == Session(access_token="tok", user_id="u1")
        assert calls[0]["url"] == "https://example.test/auth/v1/token"
        assert calls[0]["params"] == {"grant_type": "password"}
        assert calls[0]["json"]["email"] == "ana@example.test"

    def test_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should raise RemoteFailure for bad credentials."""
        monkeypatch.setattr(requests, "post", lambda url, **kwargs: FakeResponse({}, status_code=400))

        with pytest.raises(RemoteFailure, match="Invalid email or password"):
            sign_in("https://example.test", "anon", "ana@example.test", "wrong")
