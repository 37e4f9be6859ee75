"""Version sources for the supported upstream hosts.

The registry is closed: a download URL's host selects exactly one source
class. Supporting a new provider means adding a ``VersionSource`` subclass
and one entry in ``SOURCES``.
"""

from constants import Constants

from .base import VersionSource
from .github import GithubSource
from .pypi import PyPiSource

SOURCES = {
    Constants.GITHUB_HOST: GithubSource,
    Constants.PYPI_FILES_HOST: PyPiSource,
}

__all__ = [
    "SOURCES",
    "VersionSource",
    "GithubSource",
    "PyPiSource",
]
