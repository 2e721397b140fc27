"""Controller behind the company URL search form."""

from __future__ import annotations

import enum
import logging
from typing import Dict, List, Optional

from competitorfinder.errors import (
    CompetitorFinderError,
    EmptyInputError,
    MissingResultsError,
    TransportError,
)
from competitorfinder.models import CompetitorResult
from competitorfinder.services.mapper import map_competitor_results
from competitorfinder.ui.client import ProxyClient
from competitorfinder.ui.result_card import ResultCardController
from competitorfinder.ui.result_list import ResultListView, render_result_list

__all__ = [
    "SearchFormController",
    "SearchState",
    "EMPTY_INPUT_MESSAGE",
    "NO_RESULTS_MESSAGE",
    "FETCH_FAILED_MESSAGE",
]

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter a company URL"
NO_RESULTS_MESSAGE = "No results returned from the API"
FETCH_FAILED_MESSAGE = "An error occurred while fetching data"


class SearchState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class SearchFormController:
    """Owns the company URL input and the results of the latest search."""

    def __init__(self, client: ProxyClient | None = None) -> None:
        self._client = client if client is not None else ProxyClient()
        self._generation = 0
        self._cards: Dict[str, ResultCardController] = {}
        self.state = SearchState.IDLE
        self.company_url = ""
        self.is_loading = False
        self.results: List[CompetitorResult] = []
        self.error: Optional[str] = None

    def set_url(self, value: str) -> None:
        self.company_url = value
        if not self.is_loading:
            self.state = SearchState.IDLE

    def clear(self) -> None:
        """Empty the input field; an in-flight search is left running."""

        self.set_url("")

    def _validated_url(self) -> str:
        url = self.company_url.strip()
        if not url:
            raise EmptyInputError(EMPTY_INPUT_MESSAGE)
        return url

    async def submit(self) -> SearchState:
        """Validate the input and run a similarity search for it.

        Only the most recent submission may update the form. Earlier ones that
        complete afterwards are ignored, and a blank submit supersedes any
        search still in flight. Cards from the previous result set are dropped.
        """

        self.state = SearchState.VALIDATING
        self.error = None

        try:
            url = self._validated_url()
        except EmptyInputError as exc:
            self._generation += 1
            self.is_loading = False
            self.error = exc.message
            self.state = SearchState.FAILED
            return self.state

        self._generation += 1
        generation = self._generation
        self.state = SearchState.SUBMITTING
        self.is_loading = True
        self._cards = {}

        results: Optional[List[CompetitorResult]] = None
        error: Optional[str] = None
        try:
            payload = await self._client.find_similar(url)
            results = map_competitor_results(payload)
        except MissingResultsError:
            error = NO_RESULTS_MESSAGE
        except TransportError:
            logger.exception("Similarity search for %s failed", url)
            error = FETCH_FAILED_MESSAGE
        except CompetitorFinderError as exc:
            error = exc.message or FETCH_FAILED_MESSAGE
        except Exception:
            logger.exception("Similarity search for %s failed", url)
            error = FETCH_FAILED_MESSAGE

        if generation != self._generation:
            logger.debug("Discarding stale search response for %s", url)
            return self.state

        self.is_loading = False
        if error is not None:
            self.error = error
            self.state = SearchState.FAILED
        else:
            self.error = None
            self.results = results or []
            self.state = SearchState.SUCCESS
        return self.state

    def render(self) -> ResultListView:
        """Return the result list view, keeping card state for unchanged results."""

        view = render_result_list(
            self.results,
            is_loading=self.is_loading,
            client=self._client,
            cards=self._cards,
        )
        if not view.placeholder:
            self._cards = {card.key: card for card in view.cards}
        return view
