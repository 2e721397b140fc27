"""Exception hierarchy shared by the proxies, the mapper, and the UI controllers."""

from __future__ import annotations

__all__ = [
    "CompetitorFinderError",
    "EmptyInputError",
    "InvalidRequestError",
    "MissingResultsError",
    "TransportError",
    "UpstreamError",
]


class CompetitorFinderError(Exception):
    """Base class for errors that end up as a user-visible message."""

    status_code: int | None = None

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(CompetitorFinderError):
    """A request field is missing or malformed."""

    status_code = 400


class EmptyInputError(InvalidRequestError):
    """The search form was submitted without a company URL."""


class UpstreamError(CompetitorFinderError):
    """The external API (or a proxy relaying it) reported an error."""


class MissingResultsError(UpstreamError):
    """A response payload did not contain a ``results`` list."""


class TransportError(CompetitorFinderError):
    """The request never produced a response (connection failure, timeout)."""
