"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_JOKE_BASE_URL = "https://t.me/myfavoritejumoreski"
DEFAULT_JOKE_BOUND = 11786


@dataclass(frozen=True)
class NotifyConfig:
    """Mention composition settings.

    rehearsal drops the "@" so operators can try the bot without paging
    anyone; prefix is an optional header line placed before the mentions.
    """

    rehearsal: bool = False
    prefix: str = ""


@dataclass(frozen=True)
class JokeConfig:
    """Where joke links point and how many posts the collection holds."""

    base_url: str = DEFAULT_JOKE_BASE_URL
    bound: int = DEFAULT_JOKE_BOUND

    def __post_init__(self) -> None:
        if self.bound <= 0:
            raise ValueError(f"joke bound must be a positive integer, got {self.bound}")
