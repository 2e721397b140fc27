"""API routes proxying the upstream find-similar and contents operations."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, List

import requests
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from competitorfinder.config import PassthroughSettings
from competitorfinder.errors import InvalidRequestError
from competitorfinder.services.passthrough import PassthroughClient

logger = logging.getLogger(__name__)

router = APIRouter()

ALLOW_ORIGIN_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **ALLOW_ORIGIN_HEADERS,
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

URL_REQUIRED = "URL is required"
INVALID_URLS = "Invalid or missing 'urls' array"


class HealthResponse(BaseModel):
    status: str
    configured: bool


@lru_cache(maxsize=1)
def get_passthrough_client() -> PassthroughClient:
    """Return the process-wide upstream client built from the environment."""

    return PassthroughClient(PassthroughSettings.from_env())


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=ALLOW_ORIGIN_HEADERS)


def _relay(upstream: requests.Response) -> Response:
    """Return the upstream JSON body unchanged with a 200 status."""

    return Response(
        content=upstream.content,
        status_code=200,
        media_type="application/json",
        headers=ALLOW_ORIGIN_HEADERS,
    )


def _require_url(body: Any) -> str:
    url = body.get("url") if isinstance(body, dict) else None
    if not url or not isinstance(url, str):
        raise InvalidRequestError(URL_REQUIRED)
    return url


def _require_urls(body: Any) -> List[Any]:
    urls = body.get("urls") if isinstance(body, dict) else None
    if not urls or not isinstance(urls, list):
        raise InvalidRequestError(INVALID_URLS)
    return urls


def _preflight() -> PlainTextResponse:
    return PlainTextResponse("ok", status_code=200, headers=PREFLIGHT_HEADERS)


@router.options("/find_similar")
async def find_similar_preflight() -> PlainTextResponse:
    return _preflight()


@router.options("/get_contents")
async def get_contents_preflight() -> PlainTextResponse:
    return _preflight()


@router.post("/find_similar")
async def find_similar(
    request: Request,
    client: PassthroughClient = Depends(get_passthrough_client),
) -> Response:
    """Forward a company URL to the find-similar operation and relay the answer.

    Any failure, including an unreadable request body or a non-JSON upstream
    reply, is reported as a 400 error envelope.
    """

    try:
        url = _require_url(await request.json())
        upstream = await run_in_threadpool(client.find_similar, url)
        upstream.json()
    except InvalidRequestError as exc:
        return _error_response(exc.message, exc.status_code)
    except Exception as exc:
        logger.exception("find_similar request failed")
        return _error_response(str(exc), 400)

    return _relay(upstream)


@router.post("/get_contents")
async def get_contents(
    request: Request,
    client: PassthroughClient = Depends(get_passthrough_client),
) -> Response:
    """Forward a list of URLs to the contents operation and relay the answer."""

    try:
        body = await request.json()
    except ValueError as exc:
        logger.exception("get_contents received an unreadable body")
        return _error_response(str(exc), 500)

    try:
        urls = _require_urls(body)
    except InvalidRequestError as exc:
        return _error_response(exc.message, exc.status_code)

    try:
        upstream = await run_in_threadpool(client.get_contents, urls)
        if not upstream.ok:
            logger.warning("Upstream contents call failed with %s", upstream.status_code)
            return _error_response(upstream.text, upstream.status_code)
        upstream.json()
    except Exception as exc:
        logger.exception("get_contents request failed")
        return _error_response(str(exc), 500)

    return _relay(upstream)


@router.get("/health", response_model=HealthResponse)
async def health(client: PassthroughClient = Depends(get_passthrough_client)) -> HealthResponse:
    """Report whether the upstream credentials are present."""

    return HealthResponse(status="ok", configured=client.settings.is_configured)
