"""Lenient version text parsing."""

import re

import semantic_version

from common.errors import ParseError

# Anything before the first digit: "v", "release-", "version_", ...
_PREFIX_RE = re.compile(r"^[^0-9]*")
_BASE_RE = re.compile(r"^(\d+(?:\.\d+){0,2})(.*)$", re.DOTALL)


def strip_prefix(text: str) -> str:
    """Return ``text`` without surrounding whitespace and non-numeric prefix."""
    return _PREFIX_RE.sub("", text.strip(), count=1)


def coerce_version(text: str) -> semantic_version.Version:
    """Turn free-form version text into a semver ``Version``.

    Missing minor/patch components default to 0, leading zeros are dropped
    (``2021.01`` -> ``2021.1.0``) and extra numeric components end up as
    build metadata (``1.2.3.4`` -> ``1.2.3+4``).
    """
    if not isinstance(text, str):
        raise ParseError(repr(text), "not a string")
    match = _BASE_RE.match(strip_prefix(text))
    if match is None:
        raise ParseError(text, "no numeric major component")
    base, rest = match.groups()
    base = ".".join(str(int(part)) for part in base.split("."))
    try:
        return semantic_version.Version.coerce(base + rest)
    except ValueError as exc:
        raise ParseError(text, str(exc)) from exc
