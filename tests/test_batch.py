"""Tests for batch processing with per-package failure isolation."""

import asyncio
import logging
from pathlib import Path

from common.errors import CommandError, PackageError, SourceUrlError
from updater.batch import process_packages
from updater.config import UpdaterConfig
from updater.package import Package
from updater.workspace import CommandResult
from versioning.sources.base import VersionSource


class ScriptedPackage:
    """Stands in for ``Package``: returns or raises a canned outcome."""

    def __init__(self, name, outcome=None):
        self.name = name
        self.repository = f"aur.archlinux.org:{name}.git"
        self.outcome = outcome
        self.processed = False

    async def process(self, resolver, hash_verifier, runner=None):
        self.processed = True
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


def _failure(name):
    try:
        raise CommandError("failed to push", stderr="denied")
    except CommandError as exc:
        try:
            raise PackageError(name) from exc
        except PackageError as wrapped:
            return wrapped


class TestProcessPackages:
    """Every package runs regardless of earlier failures."""

    def test_failure_does_not_stop_the_batch(self, caplog):
        packages = [
            ScriptedPackage("first"),
            ScriptedPackage("broken", _failure("broken")),
            ScriptedPackage("last"),
        ]
        with caplog.at_level(logging.ERROR):
            report = asyncio.run(process_packages(packages, resolver=None, hash_verifier=None))

        assert all(package.processed for package in packages)
        assert not report.ok
        assert report.failed == ["broken"]
        assert [result.ok for result in report.results] == [True, False, True]
        assert "Skipping package broken because of an error" in caplog.text
        assert "failed to push" in caplog.text

    def test_all_succeed(self):
        report = asyncio.run(process_packages([ScriptedPackage("a"), ScriptedPackage("b")], None, None))
        assert report.ok
        assert report.failed == []

    def test_empty_batch(self):
        assert asyncio.run(process_packages([], None, None)).ok


class PerPackageRunner:
    """Fake git/bash/makepkg whose helper output depends on the package clone."""

    def __init__(self, helper_output):
        self.helper_output = helper_output
        self.helpers_run = []

    async def run(self, args, *, cwd=None, env=None, capture=False):
        args = list(args)
        if args[:2] == ["git", "clone"]:
            directory = Path(args[-1])
            directory.mkdir(parents=True)
            (directory / "PKGBUILD").write_text("pkgver=1.0\n", encoding="utf-8")
        if args[0] == "bash":
            name = Path(args[2]).parent.name
            self.helpers_run.append(name)
            return CommandResult(0, stdout=self.helper_output[name])
        return CommandResult(0)


class UpToDateResolver:
    async def check(self, download_url, current_version, file_template):
        source = StaticSource(None, current_version)
        await source.fetch_last_version(file_template)
        return source


class StaticSource(VersionSource):
    checker_name = "static"

    async def fetch_last_version(self, file_template):
        self._set_result(self.current_version, None)


class TestRealPackagesInBatch:
    """Malformed package input only fails that package."""

    def test_malformed_source_url_does_not_stop_the_batch(self, tmp_path, caplog):
        runner = PerPackageRunner({
            "bad": "pkgver=1.0\nsource=https://[github.com/o/r/x-1.0.tar.gz\n",
            "good": "pkgver=1.0\nsource=https://github.com/o/r/releases/download/1.0/x-1.0.tar.gz\n",
        })
        config = UpdaterConfig(cache_dir=tmp_path)
        packages = [Package("bad", config), Package("good", config)]
        with caplog.at_level(logging.ERROR):
            report = asyncio.run(process_packages(packages, UpToDateResolver(), None, runner))

        assert runner.helpers_run == ["bad", "good"]
        assert report.failed == ["bad"]
        assert isinstance(report.results[0].error, PackageError)
        assert isinstance(report.results[0].error.__cause__, SourceUrlError)
        assert report.results[1].ok and report.results[1].update is None
        assert "Skipping package bad" in caplog.text
