"""Signed-in session for the remote ledger."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import requests
import tomli_w

from duet.errors import RemoteFailure
from duet.store.schema import get_xdg_data_home


@dataclass(frozen=True)
class Session:
    """Access token and user identity handed out by the auth endpoint."""

    access_token: str
    user_id: str


def get_session_path() -> Path:
    """Get the session file path (XDG compliant)."""
    return get_xdg_data_home() / "duet" / "session.toml"


def load_session(session_path: Path | None = None) -> Session | None:
    """Load the current session.

    DUET_ACCESS_TOKEN and DUET_USER_ID take precedence over the session file.

    Returns:
        Session, or None when nobody is signed in.
    """
    token = os.environ.get("DUET_ACCESS_TOKEN")
    user_id = os.environ.get("DUET_USER_ID")
    if token and user_id:
        return Session(access_token=token, user_id=user_id)

    if session_path is None:
        session_path = get_session_path()
    if not session_path.exists():
        return None

    with open(session_path, "rb") as f:
        data = tomllib.load(f)

    if not data.get("access_token") or not data.get("user_id"):
        return None
    return Session(access_token=data["access_token"], user_id=data["user_id"])


def save_session(session: Session, session_path: Path | None = None) -> None:
    """Write the session file with owner-only permissions."""
    if session_path is None:
        session_path = get_session_path()

    session_path.parent.mkdir(parents=True, exist_ok=True)

    with open(session_path, "wb") as f:
        tomli_w.dump({"access_token": session.access_token, "user_id": session.user_id}, f)

    os.chmod(session_path, 0o600)


def clear_session(session_path: Path | None = None) -> bool:
    """Delete the session file.

    Returns:
        True if a session file was removed.
    """
    if session_path is None:
        session_path = get_session_path()
    if not session_path.exists():
        return False
    session_path.unlink()
    return True


def sign_in(base_url: str, api_key: str, email: str, password: str, timeout: float = 10.0) -> Session:
    """Exchange email and password for a session.

    Raises:
        RemoteFailure: If the credentials are rejected or the call fails.
    """
    try:
        response = requests.post(
            f"{base_url}/auth/v1/token",
            params={"grant_type": "password"},
            headers={"apikey": api_key, "Content-Type": "application/json"},
            json={"email": email.strip(), "password": password},
            timeout=timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        raise RemoteFailure("Invalid email or password. Check them and try again.") from e

    return Session(access_token=payload["access_token"], user_id=payload["user"]["id"])
