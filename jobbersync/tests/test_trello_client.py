import json

import httpx
import pytest

from jobbersync.integrations.trello import TrelloClient


def _client(handler, requests):
    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return TrelloClient(
        api_key="k", token="t", api_url="https://trello.test/1", transport=httpx.MockTransport(recording),
    )


@pytest.mark.asyncio
async def test_list_cards_requests_custom_fields():
    requests = []
    cards = [
        {"id": "c1", "name": "One", "desc": "", "idList": "l1",
         "customFieldItems": [{"id": "i1", "idCustomField": "f1", "value": {"text": "745"}}]},
        {"id": "c2", "name": "Two", "desc": None, "customFieldItems": []},
    ]
    client = _client(lambda r: httpx.Response(200, json=cards), requests)

    result = await client.list_cards_with_custom_fields("b1")

    assert [c.id for c in result] == ["c1", "c2"]
    assert result[0].custom_field_items[0].text == "745"
    url = requests[0].url
    assert url.path == "/1/boards/b1/cards"
    assert url.params["customFieldItems"] == "true"
    assert url.params["key"] == "k"
    assert url.params["token"] == "t"


@pytest.mark.asyncio
async def test_get_description_handles_missing_desc():
    requests = []
    client = _client(lambda r: httpx.Response(200, json={"id": "c1", "desc": None}), requests)

    assert await client.get_description("c1") == ""
    assert requests[0].url.params["fields"] == "desc"


@pytest.mark.asyncio
async def test_set_description_overwrites():
    requests = []
    client = _client(lambda r: httpx.Response(200, json={"id": "c1", "desc": "new"}), requests)

    await client.set_description("c1", "new")

    assert requests[0].method == "PUT"
    assert requests[0].url.path == "/1/cards/c1"
    assert json.loads(requests[0].content) == {"desc": "new"}


@pytest.mark.asyncio
async def test_add_comment():
    requests = []
    client = _client(lambda r: httpx.Response(200, json={"id": "a1"}), requests)

    await client.add_comment("c1", "Jobber update: hi")

    assert requests[0].method == "POST"
    assert requests[0].url.path == "/1/cards/c1/actions/comments"
    assert json.loads(requests[0].content) == {"text": "Jobber update: hi"}


@pytest.mark.asyncio
async def test_write_errors_propagate():
    client = _client(lambda r: httpx.Response(500), [])

    with pytest.raises(httpx.HTTPStatusError):
        await client.set_description("c1", "x")
    with pytest.raises(httpx.HTTPStatusError):
        await client.add_comment("c1", "x")


@pytest.mark.asyncio
async def test_health_check():
    ok = _client(lambda r: httpx.Response(200, json={"id": "me"}), [])
    down = _client(lambda r: httpx.Response(401), [])
    unconfigured = TrelloClient(api_key="", token="")

    assert await ok.health_check() is True
    assert await down.health_check() is False
    assert await unconfigured.health_check() is False
