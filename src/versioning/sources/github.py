"""GitHub version source: releases with matching assets, tags as fallback."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import aiohttp

from constants import Constants
from common.errors import MissingRepository, NetworkError, ParseError
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled
from ..models import LenientVersion
from ..template import render, url_path
from .base import VersionSource

logger = logging.getLogger(__name__)

Best = Tuple[Optional[LenientVersion], Optional[str]]


def _track_max(best: Best, version: LenientVersion, url: str) -> Best:
    """Keep the running maximum; equal versions never replace the incumbent."""
    current, _ = best
    if current is None or version > current:
        return version, url
    return best


def _parse_name(name: Any) -> Optional[LenientVersion]:
    if not isinstance(name, str):
        return None
    try:
        return LenientVersion.parse(name)
    except ParseError:
        if is_debug_enabled(logger):
            logger.debug("Skipping unparsable tag %r", name)
        return None


class GithubSource(VersionSource):
    """Resolve versions from ``github.com/<organization>/<repository>`` URLs."""

    checker_name = "github"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str,
        current_version: LenientVersion,
        api_base: str = Constants.GITHUB_API_BASE,
    ):
        super().__init__(session, current_version)
        segments = url_path(url).split("/")
        if len(segments) < 3 or not segments[1]:
            raise MissingRepository(f"failed to get organization from {url!r}")
        if not segments[2]:
            raise MissingRepository(f"failed to get repository from {url!r}")
        self.organization = segments[1]
        self.repository = segments[2]
        self.api_base = api_base.rstrip("/")

    def _api_url(self, kind: str) -> str:
        return f"{self.api_base}/repos/{self.organization}/{self.repository}/{kind}"

    def tag_download_url(self, tag: str) -> str:
        """Source archive URL GitHub serves for ``tag``."""
        return Constants.GITHUB_ARCHIVE_URL.format(
            organization=self.organization,
            repository=self.repository,
            tag=tag,
        )

    async def _list(self, kind: str) -> List[Any]:
        url = self._api_url(kind)
        # Single page only: GitHub lists newest first, older entries are never read.
        # TODO: follow the Link header if packages with >100 releases need it.
        data = await get_json(
            self.session,
            url,
            context="github",
            params={"per_page": str(Constants.REPO_API_PER_PAGE)},
        )
        if not isinstance(data, list):
            raise NetworkError(url, f"github {kind} listing is not a JSON array")
        logger.debug("found %d %s", len(data), kind)
        return data

    async def fetch_last_version(self, file_template: str) -> None:
        best: Best = (None, None)

        for release in await self._list("releases"):
            if not isinstance(release, dict):
                continue
            version = _parse_name(release.get("tag_name"))
            if version is None:
                continue
            logger.debug("checking tag %s", version)
            file_name = render(file_template, version)
            for asset in release.get("assets") or []:
                download_url = asset.get("browser_download_url") if isinstance(asset, dict) else None
                if isinstance(download_url, str) and file_name in download_url:
                    best = _track_max(best, version, download_url)

        if best[0] is not None:
            self._set_result(*best)
            return

        logger.debug(
            "Falling back to tags as no releases lead to a newer version",
            extra=extra_context(
                event="fallback",
                component="github",
                action="fetch_last_version",
                repository=f"{self.organization}/{self.repository}",
            ),
        )
        for tag in await self._list("tags"):
            if not isinstance(tag, dict):
                continue
            name = tag.get("name")
            version = _parse_name(name)
            if version is None:
                continue
            logger.debug("checking tag %s", version)
            best = _track_max(best, version, self.tag_download_url(name))

        self._set_result(*best)
