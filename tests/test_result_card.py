"""Tests for the result card controller and the result list renderer."""

from __future__ import annotations

import asyncio

from competitorfinder.errors import TransportError, UpstreamError
from competitorfinder.models import CompetitorResult
from competitorfinder.ui.result_card import (
    NO_CONTENT_MESSAGE,
    CardState,
    ResultCardController,
)
from competitorfinder.ui.result_list import render_result_list


class FakeClient:
    """Replies to ``get_contents`` from a queue; a ``(gate, reply)`` pair waits for the gate."""

    def __init__(self, *replies) -> None:
        self.replies = list(replies)
        self.calls: list[list[str]] = []

    async def get_contents(self, urls):
        self.calls.append(list(urls))
        reply = self.replies.pop(0)
        if isinstance(reply, tuple):
            gate, reply = reply
            await gate.wait()
        if isinstance(reply, Exception):
            raise reply
        return reply


ACME = CompetitorResult(id="acme", title="Acme", url="https://acme.com")
CONTENT = {
    "results": [
        {
            "title": "Acme",
            "url": "https://acme.com",
            "author": "Jane",
            "publishedDate": "2024-05-01",
            "text": "First paragraph\n\nSecond paragraph",
        }
    ]
}


def test_expand_loads_first_result_and_opens_modal() -> None:
    """Expanding fetches the card URL and opens the detail modal."""

    client = FakeClient(CONTENT)
    card = ResultCardController(ACME, client)

    state = asyncio.run(card.toggle())

    assert state is CardState.EXPANDED_LOADED
    assert client.calls == [["https://acme.com"]]
    assert card.is_expanded is True
    assert card.is_loading is False
    assert card.modal_open is True
    assert card.content is not None and card.content.author == "Jane"
    assert card.detail_paragraphs() == ["First paragraph", "Second paragraph"]
    assert card.byline() == "By Jane • 2024-05-01"


def test_collapse_then_expand_fetches_again() -> None:
    """Every expansion issues a fresh contents request."""

    client = FakeClient(CONTENT, CONTENT)
    card = ResultCardController(ACME, client)

    asyncio.run(card.toggle())
    state = asyncio.run(card.toggle())
    assert state is CardState.COLLAPSED
    assert card.modal_open is False
    asyncio.run(card.toggle())

    assert len(client.calls) == 2
    assert card.state is CardState.EXPANDED_LOADED


def test_missing_results_show_no_content_message() -> None:
    """A contents payload without ``results`` is reported as no content."""

    card = ResultCardController(ACME, FakeClient({"requestId": "x"}))

    state = asyncio.run(card.toggle())

    assert state is CardState.EXPANDED_ERROR
    assert card.error == NO_CONTENT_MESSAGE
    assert card.is_loading is False
    assert card.modal_open is False


def test_empty_results_show_placeholder_detail() -> None:
    """An empty ``results`` list loads successfully with no content."""

    card = ResultCardController(ACME, FakeClient({"results": []}))

    state = asyncio.run(card.toggle())

    assert state is CardState.EXPANDED_LOADED
    assert card.content is None
    assert card.error is None


def test_summary_is_used_when_text_is_missing() -> None:
    """The summary stands in for missing page text."""

    payload = {"results": [{"title": "Acme", "url": "https://acme.com", "summary": "Short"}]}
    card = ResultCardController(ACME, FakeClient(payload))

    asyncio.run(card.toggle())

    assert card.detail_paragraphs() == ["Short"]
    assert card.byline() is None


def test_errors_surface_their_message() -> None:
    """Proxy and transport errors keep their own message."""

    card = ResultCardController(
        ACME,
        FakeClient(UpstreamError("rate limited", status_code=429), TransportError("connection refused")),
    )

    asyncio.run(card.toggle())
    assert card.error == "rate limited"

    card.collapse()
    asyncio.run(card.toggle())
    assert card.error == "connection refused"
    assert card.state is CardState.EXPANDED_ERROR


def test_response_after_collapse_is_discarded() -> None:
    """A reply that lands after the card was collapsed is ignored."""

    async def scenario() -> ResultCardController:
        gate = asyncio.Event()
        card = ResultCardController(ACME, FakeClient((gate, CONTENT)))
        task = asyncio.create_task(card.toggle())
        await asyncio.sleep(0)
        assert card.state is CardState.EXPANDING

        await card.toggle()
        gate.set()
        await task
        return card

    card = asyncio.run(scenario())

    assert card.state is CardState.COLLAPSED
    assert card.content is None
    assert card.modal_open is False
    assert card.is_loading is False


def test_close_modal_keeps_card_expanded() -> None:
    """Closing the modal does not collapse the card."""

    card = ResultCardController(ACME, FakeClient(CONTENT))
    asyncio.run(card.toggle())

    card.close_modal()

    assert card.modal_open is False
    assert card.is_expanded is True


def test_result_list_renders_placeholder_while_loading() -> None:
    """While loading only the placeholder is rendered."""

    view = render_result_list([ACME], is_loading=True, client=FakeClient())

    assert view.placeholder is True
    assert view.cards == []


def test_result_list_renders_nothing_for_no_results() -> None:
    """No results render an empty list without a placeholder."""

    view = render_result_list([], is_loading=False, client=FakeClient())

    assert view.is_empty


def test_result_list_keeps_order_and_reuses_cards() -> None:
    """Cards follow result order and survive a re-render by key."""

    beta = CompetitorResult(id="beta", title="Beta", url="https://beta.io")
    client = FakeClient(CONTENT)

    first = render_result_list([beta, ACME], is_loading=False, client=client)
    assert first.keys == ["beta", "acme"]
    asyncio.run(first.cards[1].toggle())

    second = render_result_list(
        [ACME],
        is_loading=False,
        client=client,
        cards={card.key: card for card in first.cards},
    )

    assert second.keys == ["acme"]
    assert second.cards[0] is first.cards[1]
    assert second.cards[0].is_expanded is True
