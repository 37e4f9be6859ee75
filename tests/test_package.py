"""End-to-end processing of one package with fake collaborators."""

import asyncio
from pathlib import Path

import pytest

from common.errors import CommandError, PackageError
from updater.config import UpdaterConfig
from updater.package import Package
from updater.workspace import CommandResult
from versioning.models import LenientVersion
from versioning.sources.base import VersionSource

OLD_URL = "https://github.com/jaysonsantos/mambembe/releases/download/0.1.0/mambembe-0.1.0.tar.gz"
NEW_URL = "https://github.com/jaysonsantos/mambembe/releases/download/0.2.0/mambembe-0.2.0.tar.gz"
OLD_HASH = "a" * 64
NEW_HASH = "b" * 64
PKGBUILD = f"pkgname=mambembe\npkgver=0.1.0\nsource=(\"{OLD_URL}\")\nsha256sums=('{OLD_HASH}')\n"


class StaticSource(VersionSource):
    checker_name = "static"

    def __init__(self, current_version, remote):
        super().__init__(None, current_version)
        self._remote = remote

    async def fetch_last_version(self, file_template):
        self._set_result(LenientVersion.parse(self._remote), NEW_URL)


class StaticResolver:
    def __init__(self, remote="0.2.0"):
        self.remote = remote

    async def check(self, download_url, current_version, file_template):
        source = StaticSource(current_version, self.remote)
        await source.fetch_last_version(file_template)
        return source


class StaticHasher:
    async def compute(self, url):
        return NEW_HASH


class FakeAurRunner:
    """Pretends to be git, bash and makepkg for a single package clone."""

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    async def run(self, args, *, cwd=None, env=None, capture=False):
        args = list(args)
        self.calls.append(args)
        if self.fail_on and args[:2] == self.fail_on:
            return CommandResult(1, stderr="boom")
        if args[:2] == ["git", "clone"]:
            directory = args[-1]
            Path(directory).mkdir(parents=True)
            (Path(directory) / "PKGBUILD").write_text(PKGBUILD, encoding="utf-8")
        if args[0] == "bash":
            return CommandResult(0, stdout=f"pkgver=0.1.0\nsource={OLD_URL}\nsha256sums={OLD_HASH}\n")
        if args[:2] == ["makepkg", "--printsrcinfo"]:
            return CommandResult(0, stdout="pkgbase = mambembe\n\tpkgver = 0.2.0\n")
        return CommandResult(0)


@pytest.fixture
def config(tmp_path):
    return UpdaterConfig(cache_dir=tmp_path)


class TestPackageProcess:
    """Clone, check, update, build and publish."""

    def test_update_is_committed_and_pushed(self, config):
        runner = FakeAurRunner()
        package = Package("mambembe", config)
        result = asyncio.run(package.process(StaticResolver(), StaticHasher(), runner))

        assert result.label == "Update to version 0.2.0"
        pkgbuild = (config.cache_dir / "mambembe" / "PKGBUILD").read_text(encoding="utf-8")
        assert "pkgver=0.2.0" in pkgbuild
        assert "0.1.0" not in pkgbuild and pkgbuild.count("0.2.0") == 3
        assert NEW_HASH in pkgbuild and OLD_HASH not in pkgbuild
        srcinfo = (config.cache_dir / "mambembe" / ".SRCINFO").read_text(encoding="utf-8")
        assert "pkgver = 0.2.0" in srcinfo
        commands = [call[:2] for call in runner.calls]
        assert commands[-3:] == [["makepkg", "--printsrcinfo"], ["git", "commit"], ["git", "push"]]
        assert ["git", "commit", "-am", "Update to version 0.2.0"] in runner.calls

    def test_up_to_date_does_nothing_else(self, config):
        runner = FakeAurRunner()
        result = asyncio.run(Package("mambembe", config).process(StaticResolver("0.1.0"), StaticHasher(), runner))
        assert result is None
        assert not any(call[0] == "makepkg" for call in runner.calls)
        assert ["git", "push"] not in runner.calls

    def test_command_failure_is_wrapped(self, config):
        runner = FakeAurRunner(fail_on=["git", "push"])
        with pytest.raises(PackageError) as excinfo:
            asyncio.run(Package("mambembe", config).process(StaticResolver(), StaticHasher(), runner))
        assert excinfo.value.package_name == "mambembe"
        assert isinstance(excinfo.value.__cause__, CommandError)

    def test_default_repository(self, config):
        package = Package("mambembe", config)
        assert package.repository == "aur.archlinux.org:mambembe.git"
        assert package.metadata.clone_directory == config.cache_dir / "mambembe"
        assert Package("x", config, repository="git@example.com:x.git").repository == "git@example.com:x.git"

    def test_undecodable_pkgbuild_is_wrapped(self, config):
        class Latin1Runner(FakeAurRunner):
            async def run(self, args, *, cwd=None, env=None, capture=False):
                result = await super().run(args, cwd=cwd, env=env, capture=capture)
                if list(args[:2]) == ["git", "clone"]:
                    (Path(args[-1]) / "PKGBUILD").write_bytes(b"pkgdesc='caf\xe9'\npkgver=0.1.0\n")
                return result

        with pytest.raises(PackageError) as excinfo:
            asyncio.run(Package("mambembe", config).process(StaticResolver(), StaticHasher(), Latin1Runner()))
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
