"""Streaming SHA-256 of remote artifacts."""

from __future__ import annotations

import hashlib
import logging

import aiohttp

from constants import Constants
from common.http_client import iter_chunks
from common.logging_utils import extra_context, safe_url, Timer

logger = logging.getLogger(__name__)


class HashVerifier:
    """Digest a URL's body chunk by chunk; the payload is never held whole.

    The digest is whatever the server sends right now; it is not compared
    with any previously trusted value.
    """

    def __init__(self, session: aiohttp.ClientSession, chunk_size: int = Constants.HASH_CHUNK_SIZE):
        self.session = session
        self.chunk_size = chunk_size

    async def compute(self, url: str) -> str:
        """Return the lowercase hex SHA-256 of ``url``'s body.

        Raises:
            NetworkError: on transport failure or non-2xx status
        """
        logger.info("Calculating hash for %s", safe_url(url))
        digest = hashlib.sha256()
        size = 0
        with Timer() as t:
            async for chunk in iter_chunks(self.session, url, context="download", chunk_size=self.chunk_size):
                digest.update(chunk)
                size += len(chunk)
        final_hash = digest.hexdigest()
        logger.info(
            "Done calculating hash %s",
            final_hash,
            extra=extra_context(
                event="hash",
                component="hash_verifier",
                action="compute",
                outcome="success",
                bytes=size,
                duration_ms=t.duration_ms(),
                target=safe_url(url),
            ),
        )
        return final_hash
