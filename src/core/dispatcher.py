"""Per-update dispatch.

This module is integration-agnostic. It only relies on ports for membership
lookups and outbound delivery.

Each update runs through a fixed order:
1) Ignore updates without a text body
2) Resolve the internal chat id (unknown chats are reported and dropped)
3) Classify the text against the trigger set
4) Notify, joke and help branches, each faulting independently
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from core.config import JokeConfig, NotifyConfig
from core.errors import NoMembers, RelayError
from core.formatting import compose_notification, format_help, format_joke_link
from core.models import Chat, InboundUpdate
from core.ports import MembershipPort, SenderPort
from core.triggers import TriggerSet, requests_help, requests_joke, requests_notify_all

LOGGER = logging.getLogger(__name__)


class Dispatcher:
    """Orchestrates resolution, classification and outbound messages."""

    def __init__(
        self,
        store: MembershipPort,
        sender: SenderPort,
        triggers: TriggerSet,
        notify_config: NotifyConfig,
        joke_config: JokeConfig,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._store = store
        self._sender = sender
        self._triggers = triggers
        self._notify = notify_config
        self._joke = joke_config
        self._rng = rng or random.Random()

    async def handle(self, update: InboundUpdate) -> List[RelayError]:
        """Process one update and return the conditions reported for it."""

        if not update.text:
            return []

        try:
            internal_id = self._store.resolve_internal_id(update.chat_id)
        except RelayError as exc:
            return self._report([exc])
        chat = Chat(platform_id=update.chat_id, internal_id=internal_id)
        text = update.text

        reported: List[RelayError] = []
        if requests_notify_all(text, self._triggers):
            reported.extend(await self._run_branch(self.notify_all_members(chat)))
        if requests_joke(text, self._triggers):
            reported.extend(await self._run_branch(self.post_joke(chat)))
        if requests_help(text, self._triggers):
            reported.extend(await self._run_branch(self.post_help(chat)))
        return self._report(reported)

    async def notify_all_members(self, chat: Chat) -> None:
        members = self._store.list_members(chat.internal_id)
        if not members:
            raise NoMembers(chat.platform_id)
        message = compose_notification(members, self._notify.rehearsal, self._notify.prefix)
        await self._sender.send(chat.platform_id, message)
        LOGGER.info("Notified %s members in chat %s", len(members), chat.platform_id)

    async def post_joke(self, chat: Chat) -> None:
        index = self.pick_joke_index()
        await self._sender.send(chat.platform_id, format_joke_link(self._joke.base_url, index))
        LOGGER.info("Posted joke %s to chat %s", index, chat.platform_id)

    async def post_help(self, chat: Chat) -> None:
        await self._sender.send(chat.platform_id, format_help(self._triggers))

    def pick_joke_index(self) -> int:
        """Return a post index in [0, bound)."""

        return self._rng.randrange(self._joke.bound)

    @staticmethod
    async def _run_branch(branch) -> List[RelayError]:
        try:
            await branch
        except RelayError as exc:
            return [exc]
        return []

    @staticmethod
    def _report(conditions: List[RelayError]) -> List[RelayError]:
        for condition in conditions:
            LOGGER.warning("%s: %s", type(condition).__name__, condition)
        return conditions
