"""Application entry point for the rollcall bot."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Mapping, Optional

from art import tprint
from dotenv import load_dotenv
from telethon import events

import settings
from adapters.sqlite_storage import SQLiteMembershipStore
from adapters.telegram_mapper import build_update
from adapters.telegram_sender import TelegramSender
from client import build_client, sign_in_bot
from core.dispatcher import Dispatcher
from core.errors import StoreUnavailable, TransportAuthFailure
from settings import AppSettings

NAME = "ROLLCALL"
FONT = "tarty-1"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: Mapping) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def build_handlers(config: Mapping, rehearsal: bool = False) -> list[logging.Handler]:
    """Build console and rotating-file handlers from the logging section.

    Rehearsal runs log to the console only and leave the log file untouched.
    """

    if not config.get("enabled", False) and not rehearsal:
        return []

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True) or rehearsal:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)
        if rehearsal:
            return handlers

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = settings.resolve_path(file_cfg.get("path", settings.DEFAULT_LOG_PATH))
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def configure_logging(config: Mapping, rehearsal: bool = False) -> None:
    load_dotenv()
    handlers = build_handlers(config, rehearsal)
    if not handlers:
        return

    level_name = str(config.get("level", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), handlers=handlers)


def _open_store(app_settings: AppSettings) -> SQLiteMembershipStore:
    # The store must be reachable before the event loop starts.
    store = SQLiteMembershipStore(app_settings.db_path)
    store.check()
    LOGGER.info(
        "Membership store ready: %s (%s chats registered)",
        app_settings.db_path,
        len(store.list_chats()),
    )
    return store


def _run(app_settings: AppSettings) -> None:
    logger = LOGGER
    logger.info("Starting rollcall")
    if app_settings.notify.rehearsal:
        logger.info("Rehearsal mode: mentions are sent without '@'")

    credentials = settings.load_credentials()
    store = _open_store(app_settings)

    client = build_client(credentials)
    client.loop.run_until_complete(sign_in_bot(client, credentials.bot_token))

    dispatcher = Dispatcher(
        store=store,
        sender=TelegramSender(client),
        triggers=app_settings.triggers,
        notify_config=app_settings.notify,
        joke_config=app_settings.joke,
    )

    # Single handler keeps Telethon integration minimal and defers all
    # decisions to the dispatcher.
    @client.on(events.NewMessage(incoming=True))
    async def handler(event) -> None:
        try:
            await dispatcher.handle(build_update(event.message))
        except Exception:
            logger.exception("Error while processing message")

    logger.info("Client connected. Listening for incoming messages...")
    try:
        client.run_until_disconnected()
    finally:
        logger.info("Stopping rollcall")


def _list_chats(app_settings: AppSettings) -> None:
    store = _open_store(app_settings)
    chats = store.list_chats()
    if not chats:
        print("No chats are registered.")
        return

    for index, chat in enumerate(chats, start=1):
        print(f"{index}. telegram_id={chat.platform_id} | id={chat.internal_id} | members={chat.member_count}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="rollcall")
    parser.add_argument("--config", help="Path to config.json")
    parser.add_argument(
        "-d",
        "--rehearsal",
        action="store_true",
        help="Disables actual notifications with @",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("chats", help="List registered chats with member counts.")

    args = parser.parse_args(argv)
    load_dotenv()

    try:
        app_settings = settings.load_settings(args.config, rehearsal=args.rehearsal)
    except (OSError, ValueError) as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1) from exc

    if args.command == "chats":
        try:
            _list_chats(app_settings)
        except StoreUnavailable as exc:
            print(f"Store unavailable: {exc}")
            raise SystemExit(1) from exc
        return

    _print_banner()
    configure_logging(app_settings.logging_config, rehearsal=app_settings.notify.rehearsal)
    try:
        _run(app_settings)
    except (TransportAuthFailure, StoreUnavailable) as exc:
        LOGGER.critical("%s: %s", type(exc).__name__, exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
