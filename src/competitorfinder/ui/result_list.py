"""Rendering rule for the collection of competitor cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from competitorfinder.models import CompetitorResult
from competitorfinder.ui.client import ProxyClient
from competitorfinder.ui.result_card import ResultCardController

__all__ = ["ResultListView", "render_result_list"]


@dataclass
class ResultListView:
    placeholder: bool = False
    cards: List[ResultCardController] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.placeholder and not self.cards

    @property
    def keys(self) -> List[str]:
        return [card.key for card in self.cards]


def render_result_list(
    results: Sequence[CompetitorResult],
    *,
    is_loading: bool,
    client: ProxyClient,
    cards: Mapping[str, ResultCardController] | None = None,
) -> ResultListView:
    """Return the loading placeholder, nothing, or one card per result in order.

    Cards in ``cards`` whose key is still present are reused so their
    expansion state survives a re-render.
    """

    if is_loading:
        return ResultListView(placeholder=True)

    existing: Dict[str, ResultCardController] = dict(cards or {})
    rendered = []
    for result in results:
        card = existing.get(result.id)
        if card is None or card.competitor != result:
            card = ResultCardController(result, client)
        rendered.append(card)
    return ResultListView(cards=rendered)
