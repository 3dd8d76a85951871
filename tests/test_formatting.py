from __future__ import annotations

from core.formatting import compose_notification, format_help, format_joke_link, format_mentions
from core.triggers import LOCALE_EN, build_triggers


def test_rehearsal_mentions_keep_order_and_trailing_space() -> None:
    assert format_mentions(["alice", "bob"], rehearsal=True) == "alice bob "


def test_live_mentions_use_at_sign() -> None:
    assert format_mentions(["alice", "bob"], rehearsal=False) == "@alice @bob "


def test_notification_without_prefix_is_mentions_only() -> None:
    assert compose_notification(["alice"], rehearsal=False) == "@alice "


def test_notification_prefix_goes_on_its_own_line() -> None:
    message = compose_notification(["alice", "bob"], rehearsal=False, prefix="Heads up!")
    assert message == "Heads up!\n@alice @bob "


def test_joke_link_appends_index() -> None:
    assert format_joke_link("https://t.me/myfavoritejumoreski", 42) == "https://t.me/myfavoritejumoreski/42"
    assert format_joke_link("https://t.me/channel/", 0) == "https://t.me/channel/0"


def test_help_lists_active_literals() -> None:
    text = format_help(build_triggers(LOCALE_EN))
    assert "@all, @everyone" in text
    assert "@joke, @anecdote" in text
