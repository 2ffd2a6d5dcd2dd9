"""Configuration file management for duet."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from duet.domain.carry_forward import CopyFlags
from duet.domain.models import PlannerSettings

DEFAULT_TIMEOUT = 10.0


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "duet" / "config.toml"


def default_config() -> dict[str, Any]:
    """Build the configuration written by 'duet init'."""
    settings = PlannerSettings()
    flags = CopyFlags()
    return {
        "planner": {
            "name": settings.planner_name,
            "spouse_a": settings.spouse_a,
            "spouse_b": settings.spouse_b,
        },
        "storage": {
            "backend": "local",
            "exclude_linked": False,
        },
        "remote": {
            "url": "",
            "api_key": "",
            "timeout": DEFAULT_TIMEOUT,
        },
        "carry_forward": {name: getattr(flags, name) for name in flags.__dataclass_fields__},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_config_or_default(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration, falling back to defaults when no file exists yet."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return default_config()


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_planner_settings(config: dict[str, Any]) -> PlannerSettings:
    """Read planner and partner names, keeping defaults for missing keys."""
    planner = config.get("planner", {})
    defaults = PlannerSettings()
    return PlannerSettings(
        planner_name=planner.get("name", defaults.planner_name),
        spouse_a=planner.get("spouse_a", defaults.spouse_a),
        spouse_b=planner.get("spouse_b", defaults.spouse_b),
    )


def get_copy_flags(config: dict[str, Any]) -> CopyFlags:
    """Read carry-forward flags; unknown keys are ignored."""
    section = config.get("carry_forward", {})
    known = CopyFlags.__dataclass_fields__
    return CopyFlags(**{k: bool(v) for k, v in section.items() if k in known})


def get_backend(config: dict[str, Any]) -> str:
    """Active persistence backend: "local" or "remote"."""
    return str(config.get("storage", {}).get("backend", "local"))


def get_exclude_linked(config: dict[str, Any]) -> bool:
    return bool(config.get("storage", {}).get("exclude_linked", False))


def get_remote_settings(config: dict[str, Any]) -> tuple[str, str, float]:
    """Get remote base URL, API key and request timeout.

    Returns:
        Tuple of (url, api_key, timeout_seconds). URL and key may be empty.
    """
    remote = config.get("remote", {})
    return (
        str(remote.get("url", "")).rstrip("/"),
        str(remote.get("api_key", "")),
        float(remote.get("timeout", DEFAULT_TIMEOUT)),
    )
