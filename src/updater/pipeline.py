"""Update pipeline for a single package definition.

States advance strictly in this order::

    CREATED -> METADATA_PARSED -> VERSION_CHECKED -> NO_UPDATE
                                                  -> UPDATED -> MUTATION_APPLIED

``NO_UPDATE`` is terminal and performs no mutation. The pipeline never
recovers from an error itself: ``run`` wraps whatever went wrong in a
``PackageError`` carrying the package name and lets the caller decide.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from constants import Constants
from common.errors import AutoUpdaterError, MissingDownloadTarget, PackageError
from common.logging_utils import extra_context
from versioning import template
from versioning.models import LenientVersion
from versioning.resolver import VersionResolver
from versioning.sources import VersionSource
from .hashing import HashVerifier
from .metadata import PackageMetadata, parse_build_metadata

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    """Where a pipeline is in its lifecycle."""
    CREATED = "created"
    METADATA_PARSED = "metadata_parsed"
    VERSION_CHECKED = "version_checked"
    NO_UPDATE = "no_update"
    UPDATED = "updated"
    MUTATION_APPLIED = "mutation_applied"


@dataclass
class UpdateResult:
    """Outcome of a pipeline run that found and applied an update."""
    label: str
    remote_version: LenientVersion
    download_url: str
    remote_hash: str
    contents: str


def commit_label(version: LenientVersion) -> str:
    return Constants.COMMIT_MESSAGE.format(version=version)


class PackageUpdatePipeline:
    """Sequence metadata parsing, version check, hashing and text mutation."""

    def __init__(self, metadata: PackageMetadata, resolver: VersionResolver, hash_verifier: HashVerifier):
        self.metadata = metadata
        self.resolver = resolver
        self.hash_verifier = hash_verifier
        self.state = PipelineState.CREATED
        self.source: Optional[VersionSource] = None
        self.remote_hash: Optional[str] = None

    def _require(self, *states: PipelineState) -> None:
        if self.state not in states:
            expected = ", ".join(s.value for s in states)
            raise RuntimeError(f"pipeline is {self.state.value}, expected {expected}")

    def parse_build_metadata(self, lines: Iterable[str]) -> PackageMetadata:
        self._require(PipelineState.CREATED)
        parse_build_metadata(self.metadata, lines)
        self.state = PipelineState.METADATA_PARSED
        return self.metadata

    async def decide_update(self) -> Optional[VersionSource]:
        """Look for a newer release.

        Returns the version source when an update with a concrete artifact
        exists, ``None`` when the package is already up to date.

        Raises:
            MissingDownloadTarget: newer version without a resolvable artifact
        """
        self._require(PipelineState.METADATA_PARSED)
        current_version = self.metadata.current_version
        download_url = self.metadata.current_download_url
        file_template = template.derive(download_url, current_version)
        source = await self.resolver.check(download_url, current_version, file_template)
        self.source = source
        self.state = PipelineState.VERSION_CHECKED

        if not source.has_newer_version():
            logger.info(
                "%s is already on the latest version",
                self.metadata.name,
                extra=extra_context(
                    event="decision",
                    component="pipeline",
                    action="decide_update",
                    outcome="no_update",
                    package=self.metadata.name,
                ),
            )
            self.state = PipelineState.NO_UPDATE
            return None

        remote_version = source.get_remote_version()
        if not source.get_download_url():
            raise MissingDownloadTarget(str(remote_version))
        self.state = PipelineState.UPDATED
        return source

    async def compute_remote_hash(self) -> str:
        self._require(PipelineState.UPDATED)
        self.remote_hash = await self.hash_verifier.compute(self.source.get_download_url())
        return self.remote_hash

    def apply_update(self, contents: str) -> str:
        """Rewrite every occurrence of the current version and hash in ``contents``."""
        self._require(PipelineState.UPDATED)
        if self.remote_hash is None:
            raise RuntimeError("remote hash has not been computed")
        current_version = self.metadata.current_version
        remote_version = self.source.get_remote_version()
        current_hash = self.metadata.current_sha256
        logger.info(
            "Updating version %s (%s) to %s (%s)",
            current_version,
            current_hash,
            remote_version,
            self.remote_hash,
            extra=extra_context(
                event="update",
                component="pipeline",
                action="apply_update",
                package=self.metadata.name,
            ),
        )
        contents = contents.replace(current_version.original_value(), remote_version.clean_original_value())
        if current_hash:
            contents = contents.replace(current_hash, self.remote_hash)
        else:
            logger.warning("%s has no sha256sums entry; only the version was replaced", self.metadata.name)
        logger.debug("Final PKGBUILD file:\n%s", contents)
        self.state = PipelineState.MUTATION_APPLIED
        return contents

    @property
    def label(self) -> Optional[str]:
        if self.source is None or self.state not in (PipelineState.UPDATED, PipelineState.MUTATION_APPLIED):
            return None
        return commit_label(self.source.get_remote_version())

    async def run(self, lines: Iterable[str], contents: str) -> Optional[UpdateResult]:
        """Run every step; ``None`` means the package is up to date."""
        try:
            self.parse_build_metadata(lines)
            if await self.decide_update() is None:
                return None
            await self.compute_remote_hash()
            new_contents = self.apply_update(contents)
        except AutoUpdaterError as exc:
            if isinstance(exc, PackageError):
                raise
            raise PackageError(self.metadata.name) from exc
        return UpdateResult(
            label=self.label,
            remote_version=self.source.get_remote_version(),
            download_url=self.source.get_download_url(),
            remote_hash=self.remote_hash,
            contents=new_contents,
        )
