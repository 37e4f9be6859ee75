"""Data models for versioning and release resolution."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Optional, Tuple

import semantic_version

from .parser import coerce_version

_V_PREFIX = re.compile(r"^v(?=\d)")


@functools.total_ordering
class LenientVersion:
    """A semver value parsed tolerantly that remembers the text it came from.

    Ordering follows semver precedence. Equality and hashing use the same
    fields as ordering (major, minor, patch, prerelease): build metadata and
    the original text never take part in identity, so ``1.0``, ``v1.0.0`` and
    ``1.0.0+build`` are the same key in a dict.
    """

    __slots__ = ("_inner", "_original")

    def __init__(self, inner: semantic_version.Version, original: str):
        self._inner = inner
        self._original = original

    @classmethod
    def parse(cls, text: str) -> "LenientVersion":
        """Parse ``text``; raises :class:`common.errors.ParseError`."""
        return cls(coerce_version(text), text)

    @property
    def inner(self) -> semantic_version.Version:
        return self._inner

    @property
    def major(self) -> int:
        return self._inner.major

    @property
    def minor(self) -> int:
        return self._inner.minor

    @property
    def patch(self) -> int:
        return self._inner.patch

    @property
    def prerelease(self) -> Tuple[str, ...]:
        return tuple(self._inner.prerelease or ())

    @property
    def build(self) -> Tuple[str, ...]:
        return tuple(self._inner.build or ())

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def original_value(self) -> str:
        """The untouched input text, used for exact substring replacement."""
        return self._original

    def clean_original_value(self) -> str:
        """The input text minus one leading ``v`` when a digit follows it."""
        return _V_PREFIX.sub("", self._original, count=1)

    def _key(self) -> Tuple[int, int, int, Tuple[str, ...]]:
        return (self.major, self.minor, self.patch, self.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LenientVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "LenientVersion") -> bool:
        if not isinstance(other, LenientVersion):
            return NotImplemented
        return self._inner < other._inner

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return str(self._inner)

    def __repr__(self) -> str:
        return f"LenientVersion({str(self._inner)!r}, original={self._original!r})"


@dataclass(frozen=True)
class ReleaseCandidate:
    """Newest qualifying release reported by a version source."""
    version: LenientVersion
    download_url: Optional[str]
