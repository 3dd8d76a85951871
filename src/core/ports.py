"""Ports (interfaces) used by the dispatcher.

Ports define the minimal contracts for the membership store and the outbound
message sink so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol, Sequence


class MembershipPort(Protocol):
    """Read-only membership lookups required by the dispatcher."""

    def resolve_internal_id(self, platform_chat_id: int) -> int:
        ...

    def list_members(self, internal_id: int) -> Sequence[str]:
        ...


class SenderPort(Protocol):
    """Outbound message delivery required by the dispatcher."""

    async def send(self, chat_id: int, text: str) -> None:
        ...
