"""Client for the proxy endpoints, used by the UI controllers."""

from __future__ import annotations

from typing import Any, Dict, Sequence

import requests
from fastapi.concurrency import run_in_threadpool

from competitorfinder.config import ClientSettings
from competitorfinder.errors import TransportError, UpstreamError
from competitorfinder.models import ContentsQuery, SearchQuery

__all__ = ["ProxyClient", "FIND_SIMILAR_ENDPOINT", "GET_CONTENTS_ENDPOINT"]

FIND_SIMILAR_ENDPOINT = "find_similar"
GET_CONTENTS_ENDPOINT = "get_contents"


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return response.text or f"Request failed with {response.status_code}"


class ProxyClient:
    """Invoke the similarity and content proxies and return their JSON payloads.

    Errors are raised rather than returned: :class:`TransportError` when no
    response arrived, :class:`UpstreamError` for a non-success status, an
    unreadable body, or a body carrying an ``error`` field.

    Calls run in threadpool workers, possibly several at once when cards are
    expanded together, so without an explicit ``session`` each call uses
    :func:`requests.post` rather than one shared :class:`requests.Session`.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings if settings is not None else ClientSettings.from_env()
        self._session = session

    def invoke(self, endpoint: str, body: Dict[str, Any]) -> Any:
        url = f"{self.settings.api_url.rstrip('/')}/{endpoint}"
        try:
            post = self._session.post if self._session is not None else requests.post
            response = post(
                url,
                json=body,
                headers=self.settings.headers(),
                timeout=self.settings.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc

        if not response.ok:
            raise UpstreamError(_error_message(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(f"Invalid JSON from {endpoint}") from exc

        if isinstance(data, dict) and data.get("error") and "results" not in data:
            raise UpstreamError(str(data["error"]), status_code=response.status_code)

        return data

    async def find_similar(self, url: str) -> Any:
        body = SearchQuery(url=url).model_dump()
        return await run_in_threadpool(self.invoke, FIND_SIMILAR_ENDPOINT, body)

    async def get_contents(self, urls: Sequence[str]) -> Any:
        body = ContentsQuery(urls=list(urls)).model_dump()
        return await run_in_threadpool(self.invoke, GET_CONTENTS_ENDPOINT, body)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
