from __future__ import annotations

from typing import TYPE_CHECKING

from jobtracker.config import get_database_config, get_storage_config

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def test_storage_config_uses_env_data_dir(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("JOBTRACKER_DATA_DIR", str(tmp_path / "data"))

    config = get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "data").resolve()
    assert config.database_uri().endswith("jobtracker.db")
    assert (tmp_path / "data").is_dir()


def test_database_config_prefers_database_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"


def test_database_config_falls_back_to_storage(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("JOBTRACKER_DATA_DIR", str(tmp_path))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'jobtracker.db'}"
