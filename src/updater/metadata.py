"""Package metadata and the parser for helper-script output."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from constants import Constants, MetadataKeys
from common.errors import MissingField, UnknownMetadataKey
from versioning.models import LenientVersion

logger = logging.getLogger(__name__)


@dataclass
class PackageMetadata:
    """What is known about one package definition."""
    name: str
    repository: str
    clone_directory: Path
    current_version: Optional[LenientVersion] = None
    current_download_url: Optional[str] = None
    current_sha256: Optional[str] = None

    @property
    def pkgbuild_file(self) -> Path:
        return self.clone_directory / Constants.PKGBUILD_FILE

    @property
    def src_info_file(self) -> Path:
        return self.clone_directory / Constants.SRCINFO_FILE


def parse_build_metadata(metadata: PackageMetadata, lines: Iterable[str]) -> PackageMetadata:
    """Fill ``metadata`` from ``key=value`` lines printed by the helper script.

    Only the version, source and sha256 keys are known; anything else means
    the helper and this parser disagree and is fatal.

    Raises:
        UnknownMetadataKey: for any other key
        MissingField: when no version or no download URL was emitted
        ParseError: when the version text cannot be parsed
    """
    for line in lines:
        if not line.strip():
            continue
        variable, _, value = line.partition("=")
        variable = variable.strip()
        value = value.strip()
        if variable == MetadataKeys.VERSION.value:
            metadata.current_version = LenientVersion.parse(value)
        elif variable == MetadataKeys.SOURCE.value:
            metadata.current_download_url = value
        elif variable == MetadataKeys.SHA256.value:
            metadata.current_sha256 = value
        else:
            raise UnknownMetadataKey(variable)

    if metadata.current_version is None:
        raise MissingField("helper script could not determine the current version")
    if not metadata.current_download_url:
        raise MissingField("helper script could not determine the current download url")
    logger.debug(
        "Parsed build metadata for %s: version=%s url=%s",
        metadata.name,
        metadata.current_version,
        metadata.current_download_url,
    )
    return metadata
