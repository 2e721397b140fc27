"""Blocking client for the find-similar and contents operations of the passthrough gateway."""

from __future__ import annotations

import logging
from typing import Sequence

import requests

from competitorfinder.config import PassthroughSettings

__all__ = ["PassthroughClient", "FIND_SIMILAR_OPERATION", "CONTENTS_OPERATION"]

logger = logging.getLogger(__name__)

FIND_SIMILAR_OPERATION = "findSimilar"
CONTENTS_OPERATION = "contents"


class PassthroughClient:
    """Issue single, unretried calls against the upstream similarity service.

    Both methods return the raw :class:`requests.Response` so the proxies can
    relay the upstream body untouched. Network failures propagate as
    :class:`requests.RequestException`.

    Without an explicit ``session`` every call goes through :func:`requests.post`,
    which opens its own session. The proxies call this client from several
    threadpool workers at once and a shared :class:`requests.Session` is not
    thread-safe.
    """

    def __init__(
        self,
        settings: PassthroughSettings | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.settings = settings if settings is not None else PassthroughSettings.from_env()
        self._session = session
        self._timeout = timeout

    def _post(self, operation: str, action_id: str, payload: dict) -> requests.Response:
        url = self.settings.endpoint(operation)
        logger.debug("POST %s", url)
        post = self._session.post if self._session is not None else requests.post
        return post(
            url,
            json=payload,
            headers=self.settings.headers(action_id),
            timeout=self._timeout,
        )

    def find_similar(self, url: str) -> requests.Response:
        """Ask the upstream API for companies similar to ``url``."""

        return self._post(
            FIND_SIMILAR_OPERATION,
            self.settings.find_similar_action_id,
            {"url": url},
        )

    def get_contents(self, urls: Sequence[str]) -> requests.Response:
        """Fetch page contents for ``urls`` in a single upstream call."""

        return self._post(
            CONTENTS_OPERATION,
            self.settings.contents_action_id,
            {"urls": list(urls)},
        )

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
