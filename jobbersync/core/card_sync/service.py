import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from jobbersync.common.exceptions import CardUpdateError
from jobbersync.common.logging import get_logger
from jobbersync.config import settings
from jobbersync.core.card_sync.correlation import find_card_by_deal_id
from jobbersync.core.card_sync.description import merge_description
from jobbersync.core.card_sync.schemas import SyncResult
from jobbersync.integrations.trello import TrelloClient

logger = get_logger("card_sync.service")


class CardSyncService:
    """Applies Jobber notes to the matching Trello card.

    Updates to one card are serialized with a per-card lock so concurrent
    events for the same deal cannot overwrite each other's description.
    The description write and the comment are separate effects: if the
    comment fails the card keeps its new description and neither step is
    retried.
    """

    def __init__(self, client: TrelloClient | None = None, board_id: str | None = None):
        self.client = client or TrelloClient()
        self.board_id = settings.TRELLO_BOARD_ID if board_id is None else board_id
        # card id -> (lock, number of holders and waiters); entries go away once unused
        self._card_locks: dict[str, tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def card_lock(self, card_id: str) -> AsyncIterator[None]:
        lock, users = self._card_locks.get(card_id, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._card_locks[card_id] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._card_locks[card_id]
            if users == 1:
                del self._card_locks[card_id]
            else:
                self._card_locks[card_id] = (lock, users - 1)

    async def sync_note(self, deal_id: str, note: str, comment_prefix: str = "Jobber update") -> SyncResult:
        card = await find_card_by_deal_id(self.client, self.board_id, deal_id)
        if card is None:
            return SyncResult(matched=False)

        async with self.card_lock(card.id):
            try:
                current = await self.client.get_description(card.id)
                description = merge_description(current, note)
                await self.client.set_description(card.id, description)
            except Exception as e:
                logger.error("Description update failed for card %s: %s", card.id, e)
                raise CardUpdateError("description", card.id, e) from e

            try:
                await self.client.add_comment(card.id, f"{comment_prefix}: {note}")
            except Exception as e:
                logger.error("Comment failed for card %s after description update: %s", card.id, e)
                raise CardUpdateError("comment", card.id, e) from e

        logger.info("Synced deal %s to card %s (%s)", deal_id, card.name, card.id)
        return SyncResult(matched=True, card_id=card.id, card_name=card.name, description=description)
