"""Per-result expand/collapse controller with on-demand content loading."""

from __future__ import annotations

import enum
import logging
from typing import List, Optional

from competitorfinder.errors import CompetitorFinderError, MissingResultsError
from competitorfinder.models import CompetitorResult, ContentResult
from competitorfinder.services.mapper import map_content_results
from competitorfinder.ui.client import ProxyClient

__all__ = ["CardState", "ResultCardController", "NO_CONTENT_MESSAGE", "LOAD_FAILED_MESSAGE"]

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "No content found for this URL"
LOAD_FAILED_MESSAGE = "Failed to load detailed content"
EMPTY_DETAIL_MESSAGE = "No detailed content available."


class CardState(str, enum.Enum):
    COLLAPSED = "collapsed"
    EXPANDING = "expanding"
    EXPANDED_LOADED = "expanded_loaded"
    EXPANDED_ERROR = "expanded_error"


class ResultCardController:
    """State of a single competitor card.

    Each expansion fetches the card's page contents afresh. Every fetch is
    tagged with a generation number; a response that arrives after the card
    was collapsed or expanded again is dropped.
    """

    def __init__(self, competitor: CompetitorResult, client: ProxyClient) -> None:
        self.competitor = competitor
        self._client = client
        self._generation = 0
        self.state = CardState.COLLAPSED
        self.is_expanded = False
        self.is_loading = False
        self.error: Optional[str] = None
        self.content: Optional[ContentResult] = None
        self.modal_open = False

    @property
    def key(self) -> str:
        return self.competitor.id

    async def toggle(self) -> CardState:
        """Collapse an expanded card, or expand and load a collapsed one."""

        if self.is_expanded:
            self.collapse()
            return self.state
        return await self.expand()

    def collapse(self) -> None:
        self._generation += 1
        self.is_expanded = False
        self.is_loading = False
        self.modal_open = False
        self.state = CardState.COLLAPSED

    async def expand(self) -> CardState:
        self._generation += 1
        generation = self._generation

        self.is_expanded = True
        self.is_loading = True
        self.error = None
        self.state = CardState.EXPANDING

        content: Optional[ContentResult] = None
        error: Optional[str] = None
        try:
            payload = await self._client.get_contents([self.competitor.url])
            results = map_content_results(payload)
            content = results[0] if results else None
        except MissingResultsError:
            error = NO_CONTENT_MESSAGE
        except CompetitorFinderError as exc:
            error = exc.message or LOAD_FAILED_MESSAGE
        except Exception as exc:
            logger.exception("Loading content for %s failed", self.competitor.url)
            error = str(exc) or LOAD_FAILED_MESSAGE

        if generation != self._generation:
            logger.debug("Discarding stale content response for %s", self.competitor.url)
            return self.state

        self.is_loading = False
        if error is not None:
            self.error = error
            self.content = None
            self.state = CardState.EXPANDED_ERROR
        else:
            self.content = content
            self.modal_open = True
            self.state = CardState.EXPANDED_LOADED
        return self.state

    def close_modal(self) -> None:
        self.modal_open = False

    def detail_paragraphs(self) -> List[str]:
        """Return the loaded text split into non-blank paragraphs."""

        if self.content is None:
            return []
        if self.content.text:
            return [line for line in self.content.text.split("\n") if line]
        if self.content.summary:
            return [self.content.summary]
        return [EMPTY_DETAIL_MESSAGE]

    def byline(self) -> Optional[str]:
        if self.content is None or not (self.content.author and self.content.published_date):
            return None
        return f"By {self.content.author} • {self.content.published_date}"
