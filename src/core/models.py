"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class InboundUpdate:
    """Minimal inbound event consumed by the dispatcher."""

    chat_id: int
    text: Optional[str]


@dataclass(frozen=True)
class Chat:
    """A chat resolved against the membership store."""

    platform_id: int
    internal_id: int


@dataclass(frozen=True)
class ChatSummary:
    """Read-only inventory row for one registered chat."""

    platform_id: int
    internal_id: int
    member_count: int
