"""One AUR package: clone, check upstream, update, build and publish."""

from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from common.errors import AutoUpdaterError, PackageError
from .config import UpdaterConfig
from .hashing import HashVerifier
from .metadata import PackageMetadata
from .pipeline import PackageUpdatePipeline, UpdateResult
from .workspace import CommandRunner, PackageWorkspace
from versioning.resolver import VersionResolver

logger = logging.getLogger(__name__)


class Package:
    """An AUR package processed end to end."""

    def __init__(self, name: str, config: UpdaterConfig, repository: Optional[str] = None):
        self.name = name
        self.config = config
        self.metadata = PackageMetadata(
            name=name,
            repository=repository or Constants.AUR_REPOSITORY.format(name=name),
            clone_directory=config.clone_directory(name),
        )

    @property
    def repository(self) -> str:
        return self.metadata.repository

    async def process(
        self,
        resolver: VersionResolver,
        hash_verifier: HashVerifier,
        runner: Optional[CommandRunner] = None,
    ) -> Optional[UpdateResult]:
        """Bring the package up to date; ``None`` when nothing changed.

        Raises:
            PackageError: wrapping whatever failed, with the package name
        """
        logger.info("Processing %s", self.name)
        workspace = PackageWorkspace(self.metadata, runner)
        pipeline = PackageUpdatePipeline(self.metadata, resolver, hash_verifier)
        try:
            await workspace.clone()
            await workspace.cleanup()
            lines = await workspace.evaluate_metadata(self.config.helper_script)
            result = await pipeline.run(lines, workspace.read_pkgbuild())
            if result is None:
                return None
            workspace.write_pkgbuild(result.contents)
            await workspace.build()
            await workspace.write_src_info()
            await workspace.commit(result.label)
            await workspace.push()
        except PackageError:
            raise
        except (AutoUpdaterError, OSError, ValueError) as exc:
            raise PackageError(self.name) from exc
        logger.info("%s: %s", self.name, result.label)
        return result

    def __repr__(self) -> str:
        return f"Package(name={self.name!r}, repository={self.repository!r})"
