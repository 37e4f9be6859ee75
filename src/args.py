"""Argument parsing functionality for aur-autoupdater."""

import argparse


def _add_common_arguments(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--cache-dir",
                        dest="CACHE_DIR",
                        help="Directory holding package clones and the helper script",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="HTTP timeout in seconds",
                        action="store",
                        type=int)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="aur-autoupdater",
        description="Keep AUR packages in sync with their upstream releases",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="COMMAND", metavar="command")
    subparsers.required = True

    process_package = subparsers.add_parser(
        "process-package", help="Update a single package")
    process_package.add_argument("-p", "--package-name",
                                 dest="PACKAGE_NAME",
                                 help="AUR package name",
                                 required=True)
    _add_common_arguments(process_package)

    process_user = subparsers.add_parser(
        "process-user", help="Update every package maintained by a user")
    process_user.add_argument("-u", "--username",
                              dest="USERNAME",
                              help="AUR maintainer name",
                              required=True)
    _add_common_arguments(process_user)

    list_packages = subparsers.add_parser(
        "list-user-packages", help="Print the packages maintained by a user")
    list_packages.add_argument("-u", "--username",
                               dest="USERNAME",
                               help="AUR maintainer name",
                               required=True)
    list_packages.add_argument("-o", "--output-type",
                               dest="OUTPUT_TYPE",
                               help="Output format",
                               type=str.lower,
                               choices=["json"],
                               default="json")
    _add_common_arguments(list_packages)

    return parser.parse_args(argv)
