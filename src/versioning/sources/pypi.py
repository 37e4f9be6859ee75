"""PyPI version source backed by the project JSON API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import aiohttp
from packaging import version as pep440

from constants import Constants
from common.errors import MissingProjectName, NetworkError, ParseError
from common.http_client import get_json
from common.logging_utils import extra_context, safe_url
from ..models import LenientVersion
from ..template import render_for_update, url_path
from .base import VersionSource

logger = logging.getLogger(__name__)

# files.pythonhosted.org/packages/source/<initial>/<project>/<file>
PROJECT_SEGMENT = 4


def is_prerelease(text: str, parsed: LenientVersion) -> bool:
    """True for semver pre-releases and for PEP 440 pre/dev releases."""
    if parsed.is_prerelease:
        return True
    try:
        return pep440.Version(text).is_prerelease
    except pep440.InvalidVersion:
        return False


class PyPiSource(VersionSource):
    """Resolve versions of the project a ``files.pythonhosted.org`` URL points at."""

    checker_name = "pypi"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str,
        current_version: LenientVersion,
        base_url: str = Constants.REGISTRY_URL_PYPI,
    ):
        super().__init__(session, current_version)
        segments = url_path(url).split("/")
        if len(segments) <= PROJECT_SEGMENT or not segments[PROJECT_SEGMENT]:
            raise MissingProjectName(f"failed to get project from current url {url}")
        self.project_name = segments[PROJECT_SEGMENT]
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"

    @property
    def project_url(self) -> str:
        return f"{self.base_url}{self.project_name}/json"

    def latest_release(self, releases: Dict[str, Any]) -> Optional[Tuple[LenientVersion, List[Any]]]:
        """Pick the highest non-prerelease entry of a ``releases`` mapping.

        Keys that do not parse are skipped. Among numerically equal keys
        (``1.0`` and ``1.0.0``) the first one seen wins.
        """
        best: Optional[Tuple[LenientVersion, List[Any]]] = None
        for text, files in releases.items():
            try:
                parsed = LenientVersion.parse(text)
            except ParseError:
                logger.debug("Skipping unparsable release %r", text)
                continue
            if is_prerelease(text, parsed):
                continue
            if best is None or parsed > best[0]:
                best = (parsed, files if isinstance(files, list) else [])
        return best

    def matching_file(self, files: List[Any], file_template: str) -> Optional[str]:
        """URL of the file whose name is the template rendered for the remote version."""
        if self.remote_version is None:
            return None
        expected = render_for_update(file_template, self.current_version, self.remote_version)
        for entry in files:
            if isinstance(entry, dict) and entry.get("filename") == expected:
                url = entry.get("url")
                if isinstance(url, str):
                    return url
        logger.info(
            "No release file named %s for %s %s",
            expected,
            self.project_name,
            self.remote_version,
            extra=extra_context(
                event="decision",
                component="pypi",
                action="matching_file",
                outcome="no_match",
            ),
        )
        return None

    async def fetch_last_version(self, file_template: str) -> None:
        url = self.project_url
        logger.debug("fetching pypi version from %s for template %s", safe_url(url), file_template)
        project = await get_json(self.session, url, context="pypi")
        releases = project.get("releases") if isinstance(project, dict) else None
        if not isinstance(releases, dict):
            raise NetworkError(url, "pypi project document has no releases mapping")

        latest = self.latest_release(releases)
        if latest is None:
            self._set_result(None, None)
            return
        remote_version, files = latest
        self.remote_version = remote_version
        self._set_result(remote_version, self.matching_file(files, file_template))
