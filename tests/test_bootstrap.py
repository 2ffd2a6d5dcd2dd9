"""Tests for building a Planner from config and storage."""

from pathlib import Path

import pytest

from duet.bootstrap import load_planner
from duet.config import default_config, save_config
from duet.domain.models import Month
from duet.errors import DuetError, SessionExpired
from duet.planner import GoalDraft, TransactionDraft
from duet.store.local import LocalStore
from duet.store.schema import init_database


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "duet.db"
    init_database(path)
    return path


@pytest.fixture(autouse=True)
def no_env_session(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("DUET_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("DUET_USER_ID", raising=False)


def write_config(tmp_path: Path, **storage: object) -> Path:
    config = default_config()
    config["storage"].update(storage)
    config["planner"]["name"] = "Casa"
    path = tmp_path / "config.toml"
    save_config(config, path)
    return path


class TestLoadPlanner:
    """Tests for load_planner with the local backend."""

    def test_selects_month(self, tmp_path: Path, db_path: Path) -> None:
        """Should select the requested month."""
        planner = load_planner(Month("2025-04"), db_path, write_config(tmp_path))

        assert planner.state.selected_month == "2025-04"
        assert planner.ledger is None

    def test_settings_default_from_config(self, tmp_path: Path, db_path: Path) -> None:
        """Should take planner names from the config until they are saved."""
        planner = load_planner(Month("2025-04"), db_path, write_config(tmp_path))

        assert planner.state.settings.planner_name == "Casa"

    def test_mutations_persist(self, tmp_path: Path, db_path: Path) -> None:
        """Should save each changed collection and load it back."""
        config_path = write_config(tmp_path)
        planner = load_planner(Month("2025-04"), db_path, config_path)
        planner.add_goal(GoalDraft(name="Trip", target="1.000,00"))
        planner.add_transaction(TransactionDraft(description="Market", amount="10,00"))

        reloaded = load_planner(Month("2025-04"), db_path, config_path)

        assert [g.name for g in reloaded.state.goals] == ["Trip"]
        assert [t.description for t in reloaded.state.transactions] == ["Market"]

    def test_untouched_collections_not_written(self, tmp_path: Path, db_path: Path) -> None:
        """Should only write the collection that changed."""
        planner = load_planner(Month("2025-04"), db_path, write_config(tmp_path))

        planner.add_goal(GoalDraft(name="Trip", target="1.000,00"))

        store = LocalStore(db_path)
        assert store.load("goals") is not None
        assert store.load("budget_items") is None


class TestRemoteBackend:
    """Tests for load_planner with the remote backend."""

    def test_requires_url_and_key(self, tmp_path: Path, db_path: Path) -> None:
        """Should refuse a remote backend without connection settings."""
        with pytest.raises(DuetError, match="url and api_key"):
            load_planner(Month("2025-04"), db_path, write_config(tmp_path, backend="remote"))

    def test_refresh_without_session(self, tmp_path: Path, db_path: Path) -> None:
        """Should raise SessionExpired when nobody is signed in."""
        config = default_config()
        config["storage"]["backend"] = "remote"
        config["remote"].update({"url": "https://example.test", "api_key": "anon"})
        config_path = tmp_path / "config.toml"
        save_config(config, config_path)

        with pytest.raises(SessionExpired):
            load_planner(Month("2025-04"), db_path, config_path)
