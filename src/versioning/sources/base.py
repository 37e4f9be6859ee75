"""Base class for upstream version sources."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import aiohttp

from common.logging_utils import extra_context
from ..models import LenientVersion, ReleaseCandidate

logger = logging.getLogger(__name__)


class VersionSource(ABC):
    """Queries one hosting provider for the newest release of a project.

    An instance is built for a single check: ``fetch_last_version`` is called
    exactly once and fills ``remote_version``/``remote_url`` (or leaves them
    empty); the getters are then queried by the pipeline.
    """

    checker_name: str = ""

    def __init__(self, session: aiohttp.ClientSession, current_version: LenientVersion):
        self.session = session
        self.current_version = current_version
        self.remote_version: Optional[LenientVersion] = None
        self.remote_url: Optional[str] = None

    @abstractmethod
    async def fetch_last_version(self, file_template: str) -> None:
        """Look up the newest release matching ``file_template``."""

    def get_current_version(self) -> LenientVersion:
        return self.current_version

    def get_remote_version(self) -> Optional[LenientVersion]:
        return self.remote_version

    def get_download_url(self) -> Optional[str]:
        return self.remote_url

    def has_newer_version(self) -> bool:
        """True iff a remote version was found and is strictly greater."""
        if self.remote_version is None:
            return False
        return self.remote_version > self.current_version

    def release_candidate(self) -> Optional[ReleaseCandidate]:
        if self.remote_version is None:
            return None
        return ReleaseCandidate(self.remote_version, self.remote_url)

    def _set_result(self, version: Optional[LenientVersion], url: Optional[str]) -> None:
        self.remote_version = version
        self.remote_url = url
        logger.debug(
            "Version source resolved",
            extra=extra_context(
                event="decision",
                component="version_source",
                action="fetch_last_version",
                outcome="found" if version is not None else "not_found",
                checker=self.checker_name,
                remote_version=str(version) if version is not None else None,
            ),
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(current={self.current_version!s}, "
            f"remote={self.remote_version!s}, url={self.remote_url!r})"
        )
