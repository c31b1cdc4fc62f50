import asyncio
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from jobbersync.core.card_sync.schemas import Card
from jobbersync.core.card_sync.service import CardSyncService
from jobbersync.core.oauth.token_store import TokenStore
from jobbersync.integrations.jobber import JobberClient
from jobbersync.integrations.trello import TrelloClient

BOARD_ID = "board123"


class FakeTrelloClient(TrelloClient):
    """In-memory board standing in for the Trello API."""

    def __init__(self, cards: list[dict] | None = None):
        super().__init__(api_key="key", token="token")
        self.cards: dict[str, dict] = {c["id"]: dict(c) for c in (cards or [])}
        self.comments: list[tuple[str, str]] = []
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def _maybe_fail(self, op: str) -> None:
        self.calls.append(op)
        if op in self.fail_on:
            raise httpx.ConnectError(f"simulated {op} failure")

    async def list_cards_with_custom_fields(self, board_id: str) -> list[Card]:
        self._maybe_fail("list")
        return [Card.model_validate(c) for c in self.cards.values()]

    async def get_description(self, card_id: str) -> str:
        self._maybe_fail("get_description")
        # Yield so concurrent updates interleave
        await asyncio.sleep(0)
        return self.cards[card_id].get("desc") or ""

    async def set_description(self, card_id: str, text: str) -> dict[str, Any]:
        self._maybe_fail("set_description")
        await asyncio.sleep(0)
        self.cards[card_id]["desc"] = text
        return self.cards[card_id]

    async def add_comment(self, card_id: str, text: str) -> dict[str, Any]:
        self._maybe_fail("add_comment")
        self.comments.append((card_id, text))
        return {"idCard": card_id, "data": {"text": text}}


def make_card(card_id: str, deal_id: str, name: str = "Card", desc: str = "") -> dict:
    return {
        "id": card_id,
        "name": name,
        "desc": desc,
        "customFieldItems": [
            {"id": f"cfi-{card_id}", "idCustomField": "deal-field", "value": {"text": deal_id}},
        ],
    }


@pytest.fixture
def fake_trello():
    return FakeTrelloClient([
        make_card("card-745", "745", name="Smith kitchen remodel", desc="Initial scope"),
        make_card("card-800", "800", name="Jones deck"),
    ])


@pytest.fixture
def sync_service(fake_trello):
    return CardSyncService(fake_trello, board_id=BOARD_ID)


@pytest.fixture
def token_store():
    return TokenStore()


@pytest.fixture
def jobber_requests():
    return []


@pytest.fixture
def jobber_handler():
    """Default Jobber API behavior; tests replace it to simulate failures."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth/token"):
            return httpx.Response(200, json={"access_token": "jobber-token", "token_type": "bearer"})
        if request.url.path.endswith("/webhooks"):
            return httpx.Response(201, json={"id": "wh_1", "active": True})
        return httpx.Response(404)

    return handler


@pytest.fixture
def jobber_client(jobber_handler, jobber_requests):
    def recording_handler(request: httpx.Request) -> httpx.Response:
        jobber_requests.append(request)
        return jobber_handler(request)

    return JobberClient(
        client_id="client-id",
        client_secret="client-secret",
        api_url="https://jobber.test/api",
        transport=httpx.MockTransport(recording_handler),
    )


@pytest.fixture
async def client(sync_service, token_store, jobber_client):
    from jobbersync.api.deps import get_jobber_client, get_sync_service, get_token_store
    from jobbersync.main import app

    app.dependency_overrides[get_sync_service] = lambda: sync_service
    app.dependency_overrides[get_token_store] = lambda: token_store
    app.dependency_overrides[get_jobber_client] = lambda: jobber_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
