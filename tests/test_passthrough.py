"""Tests for the blocking passthrough gateway client."""

from __future__ import annotations

from types import SimpleNamespace
from unittest import mock

from competitorfinder.config import CONTENTS_ACTION_ID, FIND_SIMILAR_ACTION_ID, PassthroughSettings
from competitorfinder.services.passthrough import PassthroughClient


def make_client(calls: list[dict]) -> PassthroughClient:
    def fake_post(url, json, headers, timeout):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return SimpleNamespace(status_code=200)

    settings = PassthroughSettings(secret_key="secret", connection_key="conn")
    return PassthroughClient(settings, session=SimpleNamespace(post=fake_post))


def test_find_similar_posts_url_with_action_headers() -> None:
    calls: list[dict] = []
    client = make_client(calls)

    client.find_similar("https://example.com")

    assert len(calls) == 1
    call = calls[0]
    assert call["url"] == "https://api.picaos.com/v1/passthrough/findSimilar"
    assert call["json"] == {"url": "https://example.com"}
    assert call["headers"]["x-pica-secret"] == "secret"
    assert call["headers"]["x-pica-connection-key"] == "conn"
    assert call["headers"]["x-pica-action-id"] == FIND_SIMILAR_ACTION_ID
    assert call["timeout"] is None


def test_get_contents_posts_url_list() -> None:
    calls: list[dict] = []
    client = make_client(calls)

    client.get_contents(("https://a.com", "https://b.com"))

    call = calls[0]
    assert call["url"] == "https://api.picaos.com/v1/passthrough/contents"
    assert call["json"] == {"urls": ["https://a.com", "https://b.com"]}
    assert call["headers"]["x-pica-action-id"] == CONTENTS_ACTION_ID


def test_without_session_each_call_uses_requests_post() -> None:
    """No shared session is created; every call goes through ``requests.post``."""

    settings = PassthroughSettings(secret_key="secret", connection_key="conn")
    client = PassthroughClient(settings, timeout=3)

    with mock.patch("competitorfinder.services.passthrough.requests.post") as post:
        client.find_similar("https://example.com")
        client.get_contents(["https://a.com"])

    assert post.call_count == 2
    first, second = post.call_args_list
    assert first.args == ("https://api.picaos.com/v1/passthrough/findSimilar",)
    assert first.kwargs["json"] == {"url": "https://example.com"}
    assert first.kwargs["headers"]["x-pica-action-id"] == FIND_SIMILAR_ACTION_ID
    assert first.kwargs["timeout"] == 3
    assert second.kwargs["json"] == {"urls": ["https://a.com"]}

    client.close()
