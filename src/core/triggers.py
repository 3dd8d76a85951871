"""Trigger literal sets and matching (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

LOCALE_RU = "ru"
LOCALE_EN = "en"

_NOTIFY_LITERALS = {
    LOCALE_EN: ("@all", "@everyone"),
    LOCALE_RU: ("@all", "@everyone", "@все", "@каждый"),
}

_JOKE_LITERALS = {
    LOCALE_EN: ("@joke", "@anecdote"),
    LOCALE_RU: ("@joke", "@anecdote", "@анекдот", "@анек"),
}

DEFAULT_HELP_LITERALS = ("@help",)


@dataclass(frozen=True)
class TriggerSet:
    """Immutable trigger literals built once at startup."""

    notify: Tuple[str, ...]
    joke: Tuple[str, ...]
    help: Tuple[str, ...] = DEFAULT_HELP_LITERALS


def build_triggers(
    locale: str = LOCALE_RU,
    notify: Optional[Iterable[str]] = None,
    joke: Optional[Iterable[str]] = None,
    help_literals: Optional[Iterable[str]] = None,
) -> TriggerSet:
    """Build the trigger set for a locale, applying explicit overrides.

    The "en" locale keeps only ASCII literals. Explicit lists replace the
    locale defaults entirely; empty strings are dropped because they would
    match every message.
    """

    if locale not in _NOTIFY_LITERALS:
        raise ValueError(f"Unsupported trigger locale: {locale}")

    def _clean(values: Optional[Iterable[str]], default: Tuple[str, ...]) -> Tuple[str, ...]:
        if values is None:
            return default
        return tuple(value for value in values if value)

    return TriggerSet(
        notify=_clean(notify, _NOTIFY_LITERALS[locale]),
        joke=_clean(joke, _JOKE_LITERALS[locale]),
        help=_clean(help_literals, DEFAULT_HELP_LITERALS),
    )


def contains_any(text: str, literals: Iterable[str]) -> bool:
    return any(literal in text for literal in literals)


def requests_notify_all(text: str, triggers: TriggerSet) -> bool:
    """True when the text asks to ping every member of the chat."""

    return contains_any(text, triggers.notify)


def requests_joke(text: str, triggers: TriggerSet) -> bool:
    """True when the text asks for a random joke link."""

    return contains_any(text, triggers.joke)


def requests_help(text: str, triggers: TriggerSet) -> bool:
    return contains_any(text, triggers.help)
