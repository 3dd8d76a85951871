"""Error taxonomy shared by the core and adapters."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for every condition rollcall reports."""


class UnknownChat(RelayError):
    """The inbound chat has no row in the chats relation."""

    def __init__(self, platform_chat_id: int) -> None:
        super().__init__(f"Message in unknown chat with ID {platform_chat_id}")
        self.platform_chat_id = platform_chat_id


class NoMembers(RelayError):
    """The chat is registered but has no members recorded."""

    def __init__(self, platform_chat_id: int) -> None:
        super().__init__(f"No members found in chat with ID {platform_chat_id}")
        self.platform_chat_id = platform_chat_id


class StoreUnavailable(RelayError):
    """The membership database cannot be opened or queried."""


class TransportAuthFailure(RelayError):
    """Credentials for the messaging transport are missing or rejected."""


class DeliveryFailed(RelayError):
    """The transport refused an outbound message."""
