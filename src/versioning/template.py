"""Filename templates: version-agnostic patterns derived from download URLs."""

from __future__ import annotations

from urllib.parse import urlsplit

from constants import Constants
from common.errors import NoFileSegment, SourceUrlError
from .models import LenientVersion

PLACEHOLDER = Constants.VERSION_PLACEHOLDER


def url_path(url: str) -> str:
    """Path component of ``url``; unparsable URLs raise SourceUrlError."""
    try:
        return urlsplit(url).path
    except ValueError as exc:
        raise SourceUrlError(f"malformed download url {url!r}: {exc}") from exc


def derive(download_url: str, current_version: LenientVersion) -> str:
    """Build a filename template from the last path segment of ``download_url``.

    Every occurrence of the canonical form of ``current_version`` inside the
    file name is replaced with the placeholder.

    Raises:
        NoFileSegment: if the URL path has no non-empty last segment
        SourceUrlError: if the URL cannot be parsed at all
    """
    segments = url_path(download_url).split("/")
    file_name = segments[-1] if segments else ""
    if not file_name:
        raise NoFileSegment(f"Could not determine the download file from {download_url!r}")
    return file_name.replace(str(current_version), PLACEHOLDER)


def render(template: str, version: LenientVersion) -> str:
    """Substitute the placeholder with the version's original text."""
    return template.replace(PLACEHOLDER, version.original_value())


def render_for_update(template: str, current: LenientVersion, remote: LenientVersion) -> str:
    """Expected file name of ``remote`` given a template built for ``current``.

    Besides the placeholder, literal occurrences of the current version's
    original text are swapped too: file names such as ``Project-2.0.tar.gz``
    never contain the canonical ``2.0.0`` and so keep their version verbatim.
    Only the literal parts around the placeholder are searched, never the
    inserted remote text.
    """
    current_text = current.original_value()
    remote_text = remote.original_value()
    parts = template.split(PLACEHOLDER)
    if current_text:
        parts = [part.replace(current_text, remote_text) for part in parts]
    return remote_text.join(parts)
