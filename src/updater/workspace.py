"""Git and makepkg glue around a cloned package repository.

Every operation is one or two external commands and a non-zero exit status
becomes a :class:`common.errors.CommandError`.
The command runner is injectable so tests never spawn processes.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from constants import Constants
from common.errors import CommandError
from .metadata import PackageMetadata

logger = logging.getLogger(__name__)

HELPER_SCRIPT = """#!/usr/bin/env bash
# Evaluates a PKGBUILD and prints the fields aur-autoupdater cares about.
set -euo pipefail
source "$1"
first_source="${source[0]}"
echo "pkgver=${pkgver}"
echo "source=${first_source#*::}"
if [[ -n "${sha256sums+x}" ]]; then
    echo "sha256sums=${sha256sums[0]}"
fi
"""


@dataclass
class CommandResult:
    """Exit status and captured output of one command."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs external commands with asyncio subprocesses."""

    async def run(
        self,
        args: Sequence[str],
        *,
        cwd: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
        capture: bool = False,
    ) -> CommandResult:
        logger.debug("Running %s (cwd=%s)", " ".join(args), cwd)
        full_env = None
        if env:
            full_env = dict(os.environ)
            full_env.update(env)
        pipe = asyncio.subprocess.PIPE if capture else None
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                cwd=str(cwd) if cwd else None,
                env=full_env,
                stdout=pipe,
                stderr=pipe,
            )
        except OSError as exc:
            raise CommandError(f"failed to start {args[0]}: {exc}") from exc
        stdout, stderr = await process.communicate()
        return CommandResult(
            returncode=process.returncode,
            stdout=(stdout or b"").decode("utf-8", errors="replace"),
            stderr=(stderr or b"").decode("utf-8", errors="replace"),
        )


def write_helper_script(cache_dir: Path) -> Path:
    """Write the PKGBUILD evaluator into ``cache_dir`` and return its path."""
    cache_dir.mkdir(parents=True, exist_ok=True)
    path = cache_dir / Constants.HELPER_SCRIPT_NAME
    path.write_text(HELPER_SCRIPT, encoding="utf-8")
    return path


class PackageWorkspace:
    """The local clone of one package repository."""

    def __init__(self, metadata: PackageMetadata, runner: Optional[CommandRunner] = None):
        self.metadata = metadata
        self.runner = runner or CommandRunner()

    @property
    def directory(self) -> Path:
        return self.metadata.clone_directory

    async def _run(self, args: List[str], failure: str, **kwargs) -> CommandResult:
        kwargs.setdefault("cwd", self.directory)
        result = await self.runner.run(args, **kwargs)
        if not result.ok:
            raise CommandError(failure, stdout=result.stdout, stderr=result.stderr)
        return result

    async def clone(self) -> None:
        """Clone the repository unless a clone already exists."""
        if self.directory.exists():
            return
        self.directory.parent.mkdir(parents=True, exist_ok=True)
        await self._run(
            ["git", "clone", "-v", self.metadata.repository, str(self.directory)],
            "failed to clone repository",
            cwd=self.directory.parent,
        )

    async def cleanup(self) -> None:
        """Throw away local changes and sync with the remote master branch."""
        await self._run(["git", "remote", "update", "-p"], f"failed to update repository on {self.directory}")
        await self._run(["git", "reset", "--hard", "origin/master"], "failed to reset to master")

    async def evaluate_metadata(self, helper_script: Path) -> List[str]:
        """Run the helper script against the PKGBUILD and return its output lines."""
        result = await self._run(
            ["bash", str(helper_script), str(self.metadata.pkgbuild_file)],
            "failed to run helper script",
            capture=True,
        )
        return result.stdout.splitlines()

    def read_pkgbuild(self) -> str:
        return self.metadata.pkgbuild_file.read_text(encoding="utf-8")

    def write_pkgbuild(self, contents: str) -> None:
        self.metadata.pkgbuild_file.write_text(contents, encoding="utf-8")

    async def build(self) -> None:
        # yay resolves AUR dependencies; "nice" keeps makepkg away from sudo
        await self._run(
            ["makepkg", "--clean", "--force", "--syncdeps", "--noconfirm"],
            "failed to make a package for the current version",
            env={"PACMAN": "yay", "PACMAN_AUTH": "nice"},
        )

    async def write_src_info(self) -> None:
        result = await self._run(["makepkg", "--printsrcinfo"], "failed to update .SRCINFO", capture=True)
        self.metadata.src_info_file.write_text(result.stdout, encoding="utf-8")

    async def commit(self, label: str) -> None:
        await self._run(["git", "commit", "-am", label], "failed to commit")

    async def push(self) -> None:
        await self._run(["git", "push"], "failed to push")
