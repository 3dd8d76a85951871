from __future__ import annotations

import json
from pathlib import Path

import pytest

import settings
from core.config import DEFAULT_JOKE_BOUND, JokeConfig
from core.errors import TransportAuthFailure


def _write_config(tmp_path: Path, data: dict) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_missing_config_file_uses_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    loaded = settings.load_settings(str(tmp_path / "absent.json"))
    assert loaded.db_path == str(tmp_path / "chats.db")
    assert "@каждый" in loaded.triggers.notify
    assert loaded.notify.rehearsal is False
    assert loaded.notify.prefix == ""
    assert loaded.joke.bound == DEFAULT_JOKE_BOUND
    assert loaded.logging_config["file"]["enabled"] is True


def test_config_values_are_applied(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        {
            "database": {"path": str(tmp_path / "members.db")},
            "triggers": {"locale": "en"},
            "notify": {"rehearsal": True, "prefix": "Ping!"},
            "joke": {"base_url": "https://t.me/puns", "bound": 10},
            "logging": {"level": "DEBUG", "file": {"path": "other.log"}},
        },
    )
    loaded = settings.load_settings(path)
    assert loaded.db_path == str(tmp_path / "members.db")
    assert loaded.triggers.notify == ("@all", "@everyone")
    assert loaded.notify.rehearsal is True
    assert loaded.notify.prefix == "Ping!"
    assert loaded.joke == JokeConfig(base_url="https://t.me/puns", bound=10)
    assert loaded.logging_config["level"] == "DEBUG"
    # Nested sections merge over defaults.
    assert loaded.logging_config["file"] == {"enabled": True, "path": "other.log"}


def test_rehearsal_flag_overrides_file(tmp_path: Path) -> None:
    path = _write_config(tmp_path, {"notify": {"rehearsal": False}})
    assert settings.load_settings(path, rehearsal=True).notify.rehearsal is True


def test_non_positive_joke_bound_is_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, {"joke": {"bound": 0}})
    with pytest.raises(ValueError):
        settings.load_settings(path)


def test_credentials_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("API_ID", "12345")
    monkeypatch.setenv("API_HASH", "deadbeef")
    monkeypatch.delenv("SESSION_NAME", raising=False)
    credentials = settings.load_credentials()
    assert credentials.bot_token == "123:abc"
    assert credentials.api_id == 12345
    assert credentials.session_name == "rollcall"


def test_missing_token_is_auth_failure(monkeypatch) -> None:
    monkeypatch.setenv("BOT_TOKEN", "")
    monkeypatch.setenv("API_ID", "12345")
    monkeypatch.setenv("API_HASH", "deadbeef")
    with pytest.raises(TransportAuthFailure, match="BOT_TOKEN"):
        settings.load_credentials()


def test_non_numeric_api_id_is_auth_failure(monkeypatch) -> None:
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("API_ID", "abc")
    monkeypatch.setenv("API_HASH", "deadbeef")
    with pytest.raises(TransportAuthFailure):
        settings.load_credentials()


def test_relative_paths_resolve_against_working_directory(tmp_path: Path, monkeypatch) -> None:
    workdir = tmp_path / "bot"
    workdir.mkdir()
    (workdir / "config.json").write_text(
        json.dumps({"database": {"path": "data/members.db"}, "notify": {"prefix": "Hi"}}),
        encoding="utf-8",
    )
    monkeypatch.chdir(workdir)
    monkeypatch.delenv("ROLLCALL_CONFIG", raising=False)

    loaded = settings.load_settings()

    assert loaded.db_path == str(workdir / "data" / "members.db")
    assert loaded.notify.prefix == "Hi"


def test_config_location_from_environment(tmp_path: Path, monkeypatch) -> None:
    path = _write_config(tmp_path, {"notify": {"prefix": "From env"}})
    monkeypatch.setenv("ROLLCALL_CONFIG", path)
    assert settings.load_settings().notify.prefix == "From env"


def test_rehearsal_must_be_a_json_boolean(tmp_path: Path) -> None:
    path = _write_config(tmp_path, {"notify": {"rehearsal": "false"}})
    with pytest.raises(ValueError, match="notify.rehearsal"):
        settings.load_settings(path)
