"""Exception hierarchy shared by the version resolution engine and the updater.

Every error raised on purpose derives from :class:`AutoUpdaterError` so the
batch driver can tell expected failures apart from programming mistakes.
``UnsupportedHost`` and ``NetworkError`` are unrelated siblings.
"""

from __future__ import annotations

from typing import Optional


class AutoUpdaterError(Exception):
    """Base class for all errors raised by aur-autoupdater."""


class ParseError(AutoUpdaterError, ValueError):
    """Raised when a version string has no usable numeric component."""

    def __init__(self, text: str, reason: Optional[str] = None):
        self.text = text
        self.reason = reason
        message = f"failed to parse version {text!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedHost(AutoUpdaterError):
    """Raised when no version source is registered for a URL's host."""

    def __init__(self, url: str, host: Optional[str]):
        self.url = url
        self.host = host
        super().__init__(f"version checker not implemented for domain {host!r} yet ({url})")


class SourceUrlError(AutoUpdaterError, ValueError):
    """Raised when a download URL lacks a component a source needs."""


class MissingRepository(SourceUrlError):
    """GitHub URL without organization/repository path segments."""


class MissingProjectName(SourceUrlError):
    """PyPI files URL without the project name path segment."""


class NoFileSegment(SourceUrlError):
    """Download URL without a last path segment to build a template from."""


class MetadataError(AutoUpdaterError):
    """Raised when the helper script output cannot be turned into metadata."""


class MissingField(MetadataError):
    """A required build metadata field was never emitted."""


class UnknownMetadataKey(MetadataError):
    """The helper emitted a variable nobody knows how to handle."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"unsupported variable {key!r}")


class MissingDownloadTarget(AutoUpdaterError):
    """A newer version exists but no artifact could be matched for it."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"found version {version} but no matching download url")


class NetworkError(AutoUpdaterError):
    """Transport failure, non-success status or malformed JSON body."""

    def __init__(self, url: str, message: str, status: Optional[int] = None):
        self.url = url
        self.status = status
        super().__init__(message)


class CommandError(AutoUpdaterError):
    """An external command (git, makepkg, helper script) failed."""

    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        self.stdout = stdout
        self.stderr = stderr
        details = [message]
        if stdout:
            details.append(f"Stdout:\n{stdout}")
        if stderr:
            details.append(f"Stderr:\n{stderr}")
        super().__init__("\n".join(details))


class PackageError(AutoUpdaterError):
    """Wraps any failure while processing one package with its name."""

    def __init__(self, package_name: str, message: str = "failed to process package"):
        self.package_name = package_name
        super().__init__(f"{package_name}: {message}")


class BatchFailed(AutoUpdaterError):
    """At least one package of a batch failed."""

    def __init__(self, failed):
        self.failed = list(failed)
        super().__init__(f"Failed to process all packages ({', '.join(self.failed)})")


def error_chain(exc: BaseException) -> str:
    """Render ``exc`` and its causes as a single ``a: b: c`` line."""
    parts = []
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(str(current) or current.__class__.__name__)
        current = current.__cause__ or current.__context__
    return ": ".join(parts)
