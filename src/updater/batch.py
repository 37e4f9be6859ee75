"""Sequential processing of many packages with per-package failure isolation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from common.errors import AutoUpdaterError, error_chain
from common.logging_utils import extra_context
from .hashing import HashVerifier
from .package import Package
from .pipeline import UpdateResult
from .workspace import CommandRunner
from versioning.resolver import VersionResolver

logger = logging.getLogger(__name__)


@dataclass
class PackageResult:
    """Outcome of one package in a batch."""
    name: str
    update: Optional[UpdateResult] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    results: List[PackageResult]

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def failed(self) -> List[str]:
        return [result.name for result in self.results if not result.ok]


async def process_packages(
    packages: Iterable[Package],
    resolver: VersionResolver,
    hash_verifier: HashVerifier,
    runner: Optional[CommandRunner] = None,
) -> BatchReport:
    """Process ``packages`` one after the other.

    A failing package is logged with its full error chain and skipped; the
    remaining packages still run.
    """
    results: List[PackageResult] = []
    for package in packages:
        try:
            update = await package.process(resolver, hash_verifier, runner)
        except AutoUpdaterError as exc:
            logger.error(
                "Skipping package %s because of an error: %s",
                package.name,
                error_chain(exc),
                exc_info=exc,
                extra=extra_context(
                    event="package_failed",
                    component="batch",
                    action="process_packages",
                    package=package.name,
                    repository=package.repository,
                ),
            )
            results.append(PackageResult(package.name, error=exc))
            continue
        results.append(PackageResult(package.name, update=update))
    return BatchReport(results)
