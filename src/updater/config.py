"""Runtime configuration for the updater."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from constants import Constants


def default_cache_dir() -> Path:
    """``$AUTOUPDATER_CACHE_DIR``, else ``$XDG_CACHE_HOME/aur-autoupdater``, else ``~/.cache/...``."""
    explicit = os.environ.get(Constants.ENV_CACHE_DIR)
    if explicit:
        return Path(explicit).expanduser()
    xdg = os.environ.get(Constants.ENV_XDG_CACHE_HOME)
    base = Path(xdg).expanduser() if xdg else Path.home() / ".cache"
    return base / Constants.PROJECT_NAME


@dataclass
class UpdaterConfig:
    """Configuration shared by every package of a run."""

    cache_dir: Path = field(default_factory=default_cache_dir)
    user_agent: str = Constants.USER_AGENT
    timeout: int = Constants.REQUEST_TIMEOUT
    base_urls: Dict[str, str] = field(default_factory=dict)

    @property
    def helper_script(self) -> Path:
        return self.cache_dir / Constants.HELPER_SCRIPT_NAME

    def clone_directory(self, name: str) -> Path:
        return self.cache_dir / name

    @classmethod
    def from_args(cls, args: Any) -> "UpdaterConfig":
        """Create config from CLI arguments.

        Args:
            args: Parsed CLI arguments namespace.

        Returns:
            UpdaterConfig instance.
        """
        config = cls()
        cache_dir: Optional[str] = getattr(args, "CACHE_DIR", None)
        if cache_dir:
            config.cache_dir = Path(cache_dir).expanduser()
        timeout = getattr(args, "TIMEOUT", None)
        if timeout:
            config.timeout = int(timeout)
        return config
