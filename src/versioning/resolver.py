"""Dispatch download URLs to the version source of their host."""

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import urlsplit

import aiohttp

from common.errors import UnsupportedHost
from common.logging_utils import extra_context, safe_url
from .models import LenientVersion
from .sources import SOURCES, VersionSource

logger = logging.getLogger(__name__)


class VersionResolver:
    """Builds version sources for download URLs and drives their lookup.

    Args:
        session: Shared client session handed to every source
        base_urls: Optional API base URL per host, e.g. for a local mirror
    """

    def __init__(self, session: aiohttp.ClientSession, base_urls: Optional[Dict[str, str]] = None):
        self.session = session
        self.base_urls = dict(base_urls or {})

    def resolve(self, download_url: str, current_version: LenientVersion) -> VersionSource:
        """Return a fresh source for ``download_url``.

        Raises:
            UnsupportedHost: if no source is registered for the URL's host
        """
        try:
            host = urlsplit(download_url).hostname
        except ValueError:
            host = None
        source_cls = SOURCES.get(host or "")
        if source_cls is None:
            raise UnsupportedHost(download_url, host)
        logger.debug(
            "Selected version source",
            extra=extra_context(
                event="decision",
                component="resolver",
                action="resolve",
                checker=source_cls.checker_name,
                target=safe_url(download_url),
            ),
        )
        base_url = self.base_urls.get(host)
        if base_url:
            return source_cls(self.session, download_url, current_version, base_url)
        return source_cls(self.session, download_url, current_version)

    async def check(
        self,
        download_url: str,
        current_version: LenientVersion,
        file_template: str,
    ) -> VersionSource:
        """Resolve a source and run its single lookup."""
        source = self.resolve(download_url, current_version)
        await source.fetch_last_version(file_template)
        return source
