"""Tests for the Discord webhook client."""

import json

import httpx
import pytest

from hookcord.discord import DiscordClient

WEBHOOK_URL = "https://discord.com/api/webhooks/1/token"


def recording_transport(requests: list, status_code: int = 204) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_send_message_with_mentions():
    requests = []
    embed = {"title": "Pull request opened"}

    async with DiscordClient(transport=recording_transport(requests)) as client:
        await client.send_message(WEBHOOK_URL, "<@335363734446931968>", [embed])

    assert len(requests) == 1
    assert str(requests[0].url) == WEBHOOK_URL
    body = json.loads(requests[0].content)
    assert body == {
        "content": "<@335363734446931968>",
        "embeds": [embed],
        "allowed_mentions": {"parse": ["users"]},
    }


@pytest.mark.asyncio
async def test_send_message_without_mentions_omits_content():
    requests = []

    async with DiscordClient(transport=recording_transport(requests)) as client:
        await client.send_message(WEBHOOK_URL, None, [{"title": "x"}])

    body = json.loads(requests[0].content)
    assert "content" not in body
    assert body["embeds"] == [{"title": "x"}]


@pytest.mark.asyncio
async def test_username_override():
    requests = []

    async with DiscordClient(username="GitHub", transport=recording_transport(requests)) as client:
        await client.send_message(WEBHOOK_URL, None, [])

    assert json.loads(requests[0].content)["username"] == "GitHub"


@pytest.mark.asyncio
async def test_error_status_raises():
    async with DiscordClient(transport=recording_transport([], status_code=400)) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await client.send_message(WEBHOOK_URL, None, [])


def test_client_requires_context_manager():
    with pytest.raises(RuntimeError):
        DiscordClient().client
