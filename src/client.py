"""Telegram client factory for rollcall.

We explicitly manage the client's lifecycle (start/run_until_disconnected)
so it is obvious when the bot session is created and when it ends.
"""

from __future__ import annotations

import logging

from telethon import TelegramClient, errors

from core.errors import TransportAuthFailure
from settings import Credentials


def build_client(credentials: Credentials) -> TelegramClient:
    """Create a Telethon client for the bot session.

    sequential_updates makes Telethon await each handler before taking the
    next update, so chats are served strictly in arrival order.
    """

    logging.getLogger(__name__).info("Initializing Telegram client")

    return TelegramClient(
        credentials.session_name,
        credentials.api_id,
        credentials.api_hash,
        sequential_updates=True,
    )


async def sign_in_bot(client: TelegramClient, bot_token: str) -> None:
    """Connect and authorize with the bot token."""

    try:
        await client.start(bot_token=bot_token)
    except (errors.AccessTokenInvalidError, errors.AccessTokenExpiredError) as exc:
        raise TransportAuthFailure(f"Bot token rejected: {exc}") from exc
    except errors.ApiIdInvalidError as exc:
        raise TransportAuthFailure(f"API_ID/API_HASH rejected: {exc}") from exc
