"""Version resolution engine: lenient versions, filename templates, sources."""

from .models import LenientVersion, ReleaseCandidate
from .resolver import VersionResolver

__all__ = ["LenientVersion", "ReleaseCandidate", "VersionResolver"]
