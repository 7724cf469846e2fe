"""
Location: the immutable URI value used for every file and folder Trawler touches.

A Location is stored in normalized form (lower-case scheme, decoded path,
collapsed "." / ".." segments, no trailing slash except for the root), so
dataclass equality and hashing are equality of the normalized string form:

    Location.parse("file:///ws/sub/") == Location.parse("file:///ws/a/../sub")

Only the "file" scheme maps to a local path. Other schemes (e.g. "memory:" or
"builtin:") stay usable as opaque identifiers for synthesized documents.
"""

import os
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote, urlsplit

from trawler.errors import UnsupportedSchemeError

FILE_SCHEME = "file"

# "/C:/Users" -> "C:/Users" when converting back to a Windows path
_WINDOWS_DRIVE = re.compile(r"^/[A-Za-z]:")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def _normalize_path(path: str) -> str:
    if not path:
        return "/"
    if not path.startswith("/"):
        # Opaque path (e.g. "untitled:Untitled-1"), keep as-is
        return path
    normalized = posixpath.normpath(path)
    # POSIX keeps a leading "//"; URIs have no use for it
    return "/" + normalized.lstrip("/")


@dataclass(frozen=True)
class Location:
    """Hierarchical URI for a file-system resource."""

    scheme: str
    authority: str
    path: str

    def __post_init__(self):
        object.__setattr__(self, "scheme", self.scheme.lower())
        object.__setattr__(self, "authority", self.authority.lower())
        object.__setattr__(self, "path", _normalize_path(self.path))

    @classmethod
    def parse(cls, text: str) -> "Location":
        """
        Parse a URI string. Strings without a scheme are treated as local paths.

        Windows drive paths ("C:\\src") are recognized as paths, not schemes.
        """
        if not _SCHEME.match(text) or re.match(r"^[A-Za-z]:[\\/]", text):
            return cls.file(text)
        parts = urlsplit(text)
        return cls(parts.scheme, parts.netloc, unquote(parts.path))

    @classmethod
    def file(cls, path) -> "Location":
        """Build a file: Location from a local path (made absolute)."""
        absolute = os.path.abspath(os.fspath(path)).replace("\\", "/")
        if not absolute.startswith("/"):
            absolute = "/" + absolute
        return cls(FILE_SCHEME, "", absolute)

    @property
    def name(self) -> str:
        """Final path segment ("" for the root)."""
        return posixpath.basename(self.path)

    @property
    def suffix(self) -> str:
        return posixpath.splitext(self.name)[1]

    @property
    def parent(self) -> "Location":
        """Containing folder. The root is its own parent."""
        return Location(self.scheme, self.authority, posixpath.dirname(self.path))

    def joinpath(self, name: str) -> "Location":
        """Resolve a child name (or relative path) against this location."""
        return Location(self.scheme, self.authority, posixpath.join(self.path, name))

    def __truediv__(self, name: str) -> "Location":
        return self.joinpath(name)

    @property
    def fs_path(self) -> Path:
        """
        Local file-system path for a file: Location.

        Raises:
            UnsupportedSchemeError: If the scheme is not "file"
        """
        if self.scheme != FILE_SCHEME:
            raise UnsupportedSchemeError(str(self), self.scheme)
        path = self.path
        if os.name == "nt" and _WINDOWS_DRIVE.match(path):
            path = path[1:]
        if self.authority:
            # UNC share: file://server/share -> //server/share
            path = f"//{self.authority}{path}"
        return Path(path)

    def __str__(self) -> str:
        encoded = quote(self.path, safe="/:@!$&'()*+,;=")
        if self.authority or self.path.startswith("/"):
            return f"{self.scheme}://{self.authority}{encoded}"
        return f"{self.scheme}:{encoded}"

    def __repr__(self) -> str:
        return f"Location('{self}')"
