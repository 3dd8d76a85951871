"""Telegram outbound adapter.

Sends plain-text messages back into the originating chat through the bot
session.
"""

from __future__ import annotations

import asyncio

from telethon import errors

from core.errors import DeliveryFailed


class TelegramSender:
    """Sender adapter that posts messages via a Telethon bot client."""

    def __init__(self, client) -> None:
        self._client = client

    async def send(self, chat_id: int, text: str) -> None:
        """Send text to the chat, surfacing transport errors as DeliveryFailed."""

        try:
            # Plain text: handles may contain markdown characters.
            await self._client.send_message(chat_id, text, parse_mode=None, link_preview=True)
        except (errors.RPCError, ConnectionError, ValueError, asyncio.TimeoutError) as exc:
            # ValueError: the chat entity cannot be resolved; ConnectionError: client offline.
            raise DeliveryFailed(f"Send to chat {chat_id} failed: {exc}") from exc
