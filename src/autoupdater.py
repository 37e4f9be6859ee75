"""aur-autoupdater - keep AUR package definitions in sync with upstream releases.

    Returns:
        int: Exit code
"""
import asyncio
import json
import logging
import sys

from constants import ExitCodes
from common.errors import AutoUpdaterError, BatchFailed, NetworkError, error_chain
from common.http_client import create_session
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from updater import HashVerifier, Package, UpdaterConfig, process_packages
from updater.user_page import fetch_package_names
from updater.workspace import write_helper_script
from versioning import VersionResolver

logger = logging.getLogger(__name__)


async def list_user_packages(session, config, username):
    """Packages maintained by ``username`` on the AUR."""
    names = await fetch_package_names(session, username)
    return [Package(name, config) for name in names]


async def process_package(session, config, package_name):
    resolver = VersionResolver(session, config.base_urls)
    await Package(package_name, config).process(resolver, HashVerifier(session))


async def process_user(session, config, username):
    """Process every package of ``username``; raises BatchFailed if any failed."""
    packages = await list_user_packages(session, config, username)
    logger.info("Found %d packages for %s", len(packages), username)
    resolver = VersionResolver(session, config.base_urls)
    report = await process_packages(packages, resolver, HashVerifier(session))
    if not report.ok:
        raise BatchFailed(report.failed)


async def run(args):
    config = UpdaterConfig.from_args(args)
    write_helper_script(config.cache_dir)
    async with create_session(config.user_agent, config.timeout) as session:
        if args.COMMAND == "process-package":
            await process_package(session, config, args.PACKAGE_NAME)
        elif args.COMMAND == "process-user":
            await process_user(session, config, args.USERNAME)
        elif args.COMMAND == "list-user-packages":
            packages = await list_user_packages(session, config, args.USERNAME)
            print(json.dumps([package.name for package in packages]))


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(getattr(args, "LOG_LEVEL", None), getattr(args, "LOG_FILE", None))
    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main", command=args.COMMAND)
        )

    try:
        asyncio.run(run(args))
    except NetworkError as exc:
        logger.error("%s", error_chain(exc))
        sys.exit(ExitCodes.CONNECTION_ERROR.value)
    except BatchFailed as exc:
        logger.error("%s", exc)
        sys.exit(ExitCodes.PACKAGE_ERROR.value)
    except AutoUpdaterError as exc:
        logger.error("%s", error_chain(exc), exc_info=exc)
        sys.exit(ExitCodes.PACKAGE_ERROR.value)
    except OSError as exc:
        logger.error("Could not prepare the cache directory: %s", exc)
        sys.exit(ExitCodes.USAGE_ERROR.value)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
