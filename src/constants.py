"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    PACKAGE_ERROR = 1
    CONNECTION_ERROR = 2
    USAGE_ERROR = 3


class MetadataKeys(Enum):
    """Variables emitted by the helper script for a PKGBUILD.

    Args:
        Enum (string): Variable names recognised in build metadata.
    """

    VERSION = "pkgver"
    SOURCE = "source"
    SHA256 = "sha256sums"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROJECT_NAME = "aur-autoupdater"
    PROJECT_URL = "https://github.com/jaysonsantos/aur-autoupdater"
    USER_AGENT = f"AUR-AutoUpdater (+{PROJECT_URL})"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Upstream API constants
    GITHUB_HOST = "github.com"
    GITHUB_API_BASE = "https://api.github.com"
    REPO_API_PER_PAGE = 100
    GITHUB_ARCHIVE_URL = "https://github.com/{organization}/{repository}/archive/refs/tags/{tag}.tar.gz"
    PYPI_FILES_HOST = "files.pythonhosted.org"
    REGISTRY_URL_PYPI = "https://pypi.org/pypi/"

    # AUR constants
    AUR_USER_PACKAGES_URL = "https://aur.archlinux.org/packages/?K={username}&SeB=m"
    AUR_REPOSITORY = "aur.archlinux.org:{name}.git"
    PKGBUILD_FILE = "PKGBUILD"
    SRCINFO_FILE = ".SRCINFO"
    HELPER_SCRIPT_NAME = "helper.sh"

    # Version templating
    VERSION_PLACEHOLDER = "_VERSION_PLACEHOLDER_"
    COMMIT_MESSAGE = "Update to version {version}"

    HASH_CHUNK_SIZE = 64 * 1024

    # Environment overrides
    ENV_LOG_LEVEL = "AUTOUPDATER_LOG_LEVEL"
    ENV_CACHE_DIR = "AUTOUPDATER_CACHE_DIR"
    ENV_XDG_CACHE_HOME = "XDG_CACHE_HOME"
