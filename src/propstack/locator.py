"""Resource locators."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from os import path
from urllib.parse import unquote, urlsplit

FILE_SCHEME = "file"


@dataclass(frozen=True)
class Locator:
    """Immutable reference to a resource.

    A locator is used to find an appropriate loader (usually from its extension) and
    to open the resource. It holds no I/O state.

    Use :meth:`parse` rather than the constructor: it normalizes plain filesystem
    paths to the ``file`` scheme.

    Parameters
    ----------
    url
        Full URL of the resource.
    scheme
        Lowercase URL scheme (``file``, ``classpath``, ``http``...).
    path
        Path part of the URL. For the ``file`` scheme this is a filesystem path.
    """

    url: str
    scheme: str
    path: str
    name: str = field(init=False)
    """Last segment of the path."""
    extension: str = field(init=False)
    """Extension of :attr:`name`, without the leading dot. Empty if there is none."""

    def __post_init__(self) -> None:
        name = self.path.rstrip("/").rsplit("/", 1)[-1]
        if self.scheme == FILE_SCHEME:
            name = path.basename(self.path)
        _, ext = path.splitext(name)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "extension", ext.lstrip("."))

    def __str__(self) -> str:
        return self.url

    @classmethod
    def parse(cls, value: str | os.PathLike | Locator) -> Locator:
        """Return a Locator from a URL string, a path, or a Locator.

        Strings without scheme, and strings whose scheme is a single letter (Windows
        drives), are taken as filesystem paths. So is any string naming an existing
        file or directory, even if it contains a colon (``env:dev.properties``).
        """
        if isinstance(value, Locator):
            return value
        if isinstance(value, os.PathLike):
            return cls.from_path(value)

        parts = urlsplit(value)
        scheme = parts.scheme.lower()
        if len(scheme) <= 1 or path.exists(value):
            return cls.from_path(value)

        if scheme == FILE_SCHEME:
            return cls(value, scheme, unquote(parts.path))

        if parts.netloc:
            return cls(value, scheme, parts.path)
        # opaque URLs such as 'classpath:package/file.properties'
        return cls(value, scheme, value.split(":", 1)[1])

    @classmethod
    def from_path(cls, filename: str | os.PathLike) -> Locator:
        """Return a ``file`` Locator for a filesystem path."""
        full_filename = path.abspath(os.fspath(filename))
        url = f"{FILE_SCHEME}://{full_filename}"
        return cls(url, FILE_SCHEME, full_filename)
