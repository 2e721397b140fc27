"""Normalise raw upstream payloads into :mod:`competitorfinder.models` objects."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping

from pydantic import ValidationError

from competitorfinder.errors import MissingResultsError, UpstreamError
from competitorfinder.models import CompetitorResult, ContentResult, generate_id

__all__ = [
    "UNKNOWN_COMPANY",
    "ensure_unique_ids",
    "extract_results",
    "map_competitor_result",
    "map_competitor_results",
    "map_content_results",
]

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown Company"


def extract_results(payload: Any, message: str = "No results returned from the API") -> List[Any]:
    """Return the ``results`` list of ``payload`` or raise :class:`MissingResultsError`.

    An empty list is returned as-is; only an absent or non-list ``results``
    field is an error.
    """

    if not isinstance(payload, Mapping):
        raise MissingResultsError(message)

    results = payload.get("results")
    if not isinstance(results, list):
        raise MissingResultsError(message)

    return results


def map_competitor_result(entry: Any) -> CompetitorResult:
    """Convert a single find-similar entry into a :class:`CompetitorResult`."""

    if not isinstance(entry, Mapping):
        raise UpstreamError(f"Unexpected result entry: {entry!r}")

    try:
        return CompetitorResult(
            id=entry.get("id") or generate_id(),
            title=entry.get("title") or UNKNOWN_COMPANY,
            url=entry.get("url"),
            summary=entry.get("summary"),
            text=entry.get("text"),
            favicon=entry.get("favicon"),
        )
    except ValidationError as exc:
        raise UpstreamError(f"Malformed result entry: {exc}") from exc


def ensure_unique_ids(results: Iterable[CompetitorResult]) -> List[CompetitorResult]:
    """Replace repeated identifiers so every result can serve as a rendering key."""

    seen: set[str] = set()
    unique: List[CompetitorResult] = []
    for result in results:
        if result.id in seen:
            logger.debug("Duplicate result id %s for %s; generating a new one", result.id, result.url)
            result = result.model_copy(update={"id": generate_id()})
        seen.add(result.id)
        unique.append(result)
    return unique


def map_competitor_results(payload: Any) -> List[CompetitorResult]:
    """Map a find-similar payload to competitor results, preserving upstream order."""

    entries = extract_results(payload)
    return ensure_unique_ids(map_competitor_result(entry) for entry in entries)


def map_content_results(payload: Any) -> List[ContentResult]:
    """Decode a contents payload into :class:`ContentResult` records."""

    entries = extract_results(payload, "No content found for this URL")
    try:
        return [ContentResult.model_validate(entry) for entry in entries]
    except ValidationError as exc:
        raise UpstreamError(f"Malformed content result: {exc}") from exc
