"""Package update orchestration.

- metadata.py: package metadata and the helper-output parser
- hashing.py: streaming SHA-256 of remote artifacts
- pipeline.py: version check, hashing and PKGBUILD mutation for one package
- workspace.py: git/makepkg glue around the local clone
- package.py / batch.py: end-to-end processing of one or many packages
- user_page.py: package names of an AUR maintainer
"""

from .batch import BatchReport, PackageResult, process_packages
from .config import UpdaterConfig
from .hashing import HashVerifier
from .metadata import PackageMetadata, parse_build_metadata
from .package import Package
from .pipeline import PackageUpdatePipeline, PipelineState, UpdateResult

__all__ = [
    "BatchReport",
    "PackageResult",
    "process_packages",
    "UpdaterConfig",
    "HashVerifier",
    "PackageMetadata",
    "parse_build_metadata",
    "Package",
    "PackageUpdatePipeline",
    "PipelineState",
    "UpdateResult",
]
