"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the dispatcher.
"""

from __future__ import annotations

from telethon.tl.custom import Message

from core.models import InboundUpdate


def build_update(message: Message) -> InboundUpdate:
    """Build a core InboundUpdate from a Telethon Message.

    Media without a caption, service messages and empty bodies all map to
    text=None so the dispatcher ignores them without touching the store.
    """

    text = getattr(message, "raw_text", None)
    return InboundUpdate(chat_id=message.chat_id, text=text or None)
