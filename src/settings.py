"""Static configuration for rollcall.

Secrets (bot token, API credentials) come from the environment, optionally via
a .env file. Everything else lives in an optional config.json so operators can
switch locale, rehearsal mode or the joke collection without touching Python.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from core.config import DEFAULT_JOKE_BASE_URL, DEFAULT_JOKE_BOUND, JokeConfig, NotifyConfig
from core.errors import TransportAuthFailure
from core.triggers import LOCALE_RU, TriggerSet, build_triggers

# Relative paths (config, database, log file) resolve against the working
# directory, so the bot reads the files of the directory it was started in.
# ROLLCALL_CONFIG overrides the config location.
CONFIG_PATH = "config.json"

DEFAULT_DB_PATH = "chats.db"
DEFAULT_LOG_PATH = "logs/rollcall.log"
DEFAULT_SESSION_NAME = "rollcall"


@dataclass(frozen=True)
class Credentials:
    """Transport secrets. Telethon needs API_ID/API_HASH even for bots."""

    bot_token: str
    api_id: int
    api_hash: str
    session_name: str = DEFAULT_SESSION_NAME


@dataclass(frozen=True)
class AppSettings:
    """Everything read at startup, passed explicitly to each component."""

    db_path: str
    triggers: TriggerSet
    notify: NotifyConfig
    joke: JokeConfig
    logging_config: Mapping[str, Any] = field(default_factory=dict)


def _load_json_config(path: str) -> dict:
    """Load config.json; a missing file means all defaults."""

    if not os.path.exists(path):
        return {}

    with open(path, "r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must hold a JSON object: {path}")
    return data


def resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(os.getcwd(), path)


def _as_bool(value: Any, name: str) -> bool:
    # JSON strings such as "false" would be truthy under bool().
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")
    return value


def _default_logging() -> dict:
    return {
        "enabled": True,
        "level": "INFO",
        "console": True,
        "file": {"enabled": True, "path": DEFAULT_LOG_PATH},
        "redact": {"enabled": True, "patterns": ["BOT_TOKEN", "API_HASH"]},
    }


def load_settings(config_path: Optional[str] = None, rehearsal: bool = False) -> AppSettings:
    """Build the immutable settings object from config.json.

    rehearsal=True (the -d flag) overrides notify.rehearsal from the file.
    """

    path = resolve_path(config_path or os.getenv("ROLLCALL_CONFIG") or CONFIG_PATH)
    raw = _load_json_config(path)

    database = raw.get("database", {})
    db_path = resolve_path(database.get("path", DEFAULT_DB_PATH))

    trigger_cfg = raw.get("triggers", {})
    triggers = build_triggers(
        locale=trigger_cfg.get("locale", LOCALE_RU),
        notify=trigger_cfg.get("notify"),
        joke=trigger_cfg.get("joke"),
        help_literals=trigger_cfg.get("help"),
    )

    notify_cfg = raw.get("notify", {})
    notify = NotifyConfig(
        rehearsal=rehearsal or _as_bool(notify_cfg.get("rehearsal", False), "notify.rehearsal"),
        prefix=str(notify_cfg.get("prefix", "")),
    )

    joke_cfg = raw.get("joke", {})
    joke = JokeConfig(
        base_url=str(joke_cfg.get("base_url", DEFAULT_JOKE_BASE_URL)),
        bound=int(joke_cfg.get("bound", DEFAULT_JOKE_BOUND)),
    )

    logging_cfg = _default_logging()
    for key, value in raw.get("logging", {}).items():
        # Nested sections (file, redact) merge over the defaults key by key.
        if isinstance(value, dict) and isinstance(logging_cfg.get(key), dict):
            logging_cfg[key] = {**logging_cfg[key], **value}
        else:
            logging_cfg[key] = value

    return AppSettings(
        db_path=db_path,
        triggers=triggers,
        notify=notify,
        joke=joke,
        logging_config=logging_cfg,
    )


def load_credentials() -> Credentials:
    """Read transport secrets from the environment (and .env)."""

    load_dotenv()

    bot_token = os.getenv("BOT_TOKEN")
    if not bot_token:
        raise TransportAuthFailure("Empty token: set BOT_TOKEN")

    api_id = os.getenv("API_ID")
    api_hash = os.getenv("API_HASH")
    # Fail fast on missing credentials to avoid an ambiguous login error.
    if not api_id or not api_hash:
        raise TransportAuthFailure("Missing API_ID or API_HASH in environment")
    try:
        parsed_api_id = int(api_id)
    except ValueError as exc:
        raise TransportAuthFailure(f"API_ID must be an integer, got {api_id!r}") from exc

    return Credentials(
        bot_token=bot_token,
        api_id=parsed_api_id,
        api_hash=api_hash,
        session_name=os.getenv("SESSION_NAME", DEFAULT_SESSION_NAME),
    )
