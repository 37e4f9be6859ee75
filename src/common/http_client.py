"""Shared HTTP helpers used by the version sources and the hash verifier.

Encapsulates session construction and the common request/status/JSON error
handling so callers only ever see :class:`common.errors.NetworkError`. The
session itself is created once by the entry point and passed into every
component that needs it; nothing in here keeps a module-level client.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Optional

import aiohttp

from constants import Constants
from common.errors import NetworkError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def create_session(
    user_agent: str = Constants.USER_AGENT,
    timeout: Optional[int] = Constants.REQUEST_TIMEOUT,
) -> aiohttp.ClientSession:
    """Build the process-wide client session with a fixed identity header.

    Must be called from within a running event loop.
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout) if timeout else aiohttp.ClientTimeout()
    return aiohttp.ClientSession(
        headers={"User-Agent": user_agent},
        timeout=client_timeout,
        raise_for_status=False,
    )


def _check_status(response: aiohttp.ClientResponse, url: str, context: str) -> None:
    if 200 <= response.status < 300:
        return
    logger.warning(
        "%s returned HTTP %s",
        context,
        response.status,
        extra=extra_context(
            event="http_response",
            component="http_client",
            outcome="bad_status",
            status_code=response.status,
            target=safe_url(url),
            context=context,
        ),
    )
    raise NetworkError(
        url,
        f"{context} request to {safe_url(url)} failed with HTTP {response.status}",
        status=response.status,
    )


async def get_bytes(session: aiohttp.ClientSession, url: str, *, context: str, **kwargs: Any) -> bytes:
    """GET ``url`` and return the whole body, raising NetworkError on failure."""
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                ),
            )
        try:
            async with session.get(url, **kwargs) as response:
                _check_status(response, url, context)
                body = await response.read()
        except asyncio.TimeoutError as exc:
            raise NetworkError(url, f"{context} request to {safe_target} timed out") from exc
        except aiohttp.ClientError as exc:
            raise NetworkError(url, f"{context} connection error for {safe_target}: {exc}") from exc
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=response.status,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
    return body


async def get_text(session: aiohttp.ClientSession, url: str, *, context: str, **kwargs: Any) -> str:
    """GET ``url`` and decode the body as UTF-8 text."""
    body = await get_bytes(session, url, context=context, **kwargs)
    return body.decode("utf-8", errors="replace")


async def get_json(session: aiohttp.ClientSession, url: str, *, context: str, **kwargs: Any) -> Any:
    """GET ``url`` and parse the body as JSON.

    Args:
        session: Shared client session
        url: Target URL
        context: Human-readable source tag for logs (e.g., "github", "pypi")
        **kwargs: Additional ``session.get`` parameters

    Returns:
        Parsed JSON document

    Raises:
        NetworkError: on transport failure, non-2xx status or malformed JSON
    """
    headers = kwargs.pop("headers", None) or {}
    headers.setdefault("Accept", "application/json")
    body = await get_bytes(session, url, context=context, headers=headers, **kwargs)
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    target=safe_url(url),
                ),
            )
        raise NetworkError(url, f"{context} returned malformed JSON from {safe_url(url)}") from exc


async def iter_chunks(
    session: aiohttp.ClientSession,
    url: str,
    *,
    context: str,
    chunk_size: int = Constants.HASH_CHUNK_SIZE,
) -> AsyncIterator[bytes]:
    """Stream the body of ``url`` in chunks of at most ``chunk_size`` bytes."""
    safe_target = safe_url(url)
    if is_debug_enabled(logger):
        logger.debug(
            "HTTP streaming request",
            extra=extra_context(
                event="http_request",
                component="http_client",
                action="GET",
                target=safe_target,
                context=context,
            ),
        )
    try:
        async with session.get(url) as response:
            _check_status(response, url, context)
            async for chunk in response.content.iter_chunked(chunk_size):
                yield chunk
    except asyncio.TimeoutError as exc:
        raise NetworkError(url, f"{context} download of {safe_target} timed out") from exc
    except aiohttp.ClientError as exc:
        raise NetworkError(url, f"{context} download of {safe_target} failed: {exc}") from exc
