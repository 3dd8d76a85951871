"""Outbound message composition.

Keeping formatting here prevents drift between the dispatcher and the CLI and
keeps messages consistent regardless of delivery channel.
"""

from __future__ import annotations

from typing import Sequence

from core.triggers import TriggerSet


def format_mentions(members: Sequence[str], rehearsal: bool) -> str:
    """Join member handles, each followed by a single space (trailing one included)."""

    template = "{} " if rehearsal else "@{} "
    return "".join(template.format(member) for member in members)


def compose_notification(members: Sequence[str], rehearsal: bool, prefix: str = "") -> str:
    mentions = format_mentions(members, rehearsal)
    if not prefix:
        return mentions
    return f"{prefix}\n{mentions}"


def format_joke_link(base_url: str, index: int) -> str:
    return f"{base_url.rstrip('/')}/{index}"


def format_help(triggers: TriggerSet) -> str:
    """Describe the active trigger literals in one message."""

    lines = [
        "Ping everyone: " + ", ".join(triggers.notify),
        "Random joke: " + ", ".join(triggers.joke),
    ]
    return "\n".join(lines)
