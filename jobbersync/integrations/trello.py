"""Trello integration client.

Covers the handful of card calls the sync needs: listing a board's cards
with their custom-field items, reading and overwriting a card description,
and posting a comment. Every call is authenticated with the ``key`` and
``token`` query parameters.
"""

from __future__ import annotations

from typing import Any

import httpx

from jobbersync.config import settings
from jobbersync.core.card_sync.schemas import Card
from jobbersync.integrations.base import BaseIntegration


class TrelloClient(BaseIntegration):
    """Thin async wrapper around the Trello REST API."""

    def __init__(
        self,
        api_key: str | None = None,
        token: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("trello")
        self.api_key = settings.TRELLO_API_KEY if api_key is None else api_key
        self.token = settings.TRELLO_TOKEN if token is None else token
        self.api_url = (api_url or settings.TRELLO_API_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.token)

    def _params(self) -> dict[str, str]:
        return {"key": self.api_key, "token": self.token}

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        params = {**self._params(), **kwargs.pop("params", {})}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.request(method, f"{self.api_url}{path}", params=params, **kwargs)
            resp.raise_for_status()
            return resp.json()

    async def health_check(self) -> bool:
        if not self.is_configured:
            self.logger.warning("Trello health check skipped: credentials not configured")
            return False
        try:
            await self._request("GET", "/members/me")
            return True
        except Exception as e:
            self.logger.error("Trello health check failed: %s", e)
            return False

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    async def list_cards_with_custom_fields(self, board_id: str) -> list[Card]:
        data = await self._request(
            "GET", f"/boards/{board_id}/cards", params={"customFieldItems": "true"},
        )
        cards = [Card.model_validate(item) for item in data]
        self.logger.info("Fetched %d cards from board %s", len(cards), board_id)
        return cards

    async def get_description(self, card_id: str) -> str:
        card = await self._request("GET", f"/cards/{card_id}", params={"fields": "desc"})
        return card.get("desc") or ""

    async def set_description(self, card_id: str, text: str) -> dict[str, Any]:
        card = await self._request("PUT", f"/cards/{card_id}", json={"desc": text})
        self.logger.info("Updated description on card %s (%d chars)", card_id, len(text))
        return card

    async def add_comment(self, card_id: str, text: str) -> dict[str, Any]:
        comment = await self._request("POST", f"/cards/{card_id}/actions/comments", json={"text": text})
        self.logger.info("Added comment on card %s", card_id)
        return comment
