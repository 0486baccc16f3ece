"""Open resources from their locator.

Supported schemes are:

- ``file``, and plain filesystem paths,
- ``classpath``, for data files shipped inside a python package:
  ``classpath:package.subpackage/relative/path.properties``,
- ``http`` and ``https``.

A resource that does not exist is not an error: :meth:`ResourceOpener.open` returns
None. Any other problem raises an :class:`OSError`.
"""

from __future__ import annotations

import importlib.resources
import io
import logging
import typing as t

import requests

from .locator import FILE_SCHEME, Locator
from .types import UnsupportedResourceError

log = logging.getLogger(__name__)

CLASSPATH_SCHEME = "classpath"
HTTP_SCHEMES = ("http", "https")
ABSENT_STATUS_CODES = (404, 410)
"""HTTP status codes meaning the resource does not exist."""


class ResourceOpener:
    """Open streams on resources.

    This is purely a transport operation, content is not interpreted.

    Parameters
    ----------
    session
        Session used for HTTP requests. If None, a new :class:`requests.Session` is
        created when first needed.
    timeout
        Timeout in seconds for HTTP requests.
    """

    def __init__(
        self, session: requests.Session | None = None, timeout: float | None = 10.0
    ) -> None:
        self._session = session
        self.timeout = timeout

    @property
    def session(self) -> requests.Session:
        """Session used for HTTP requests."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def open(self, locator: t.Any) -> t.BinaryIO | None:
        """Return a binary stream for this resource, or None if it does not exist.

        Raises
        ------
        OSError
            If the resource exists but cannot be read (permission denied, connection
            refused, server error...).
        UnsupportedResourceError
            If the locator scheme is not supported.
        """
        locator = Locator.parse(locator)
        if locator.scheme == FILE_SCHEME:
            return self.open_file(locator)
        if locator.scheme == CLASSPATH_SCHEME:
            return self.open_package_data(locator)
        if locator.scheme in HTTP_SCHEMES:
            return self.open_url(locator)

        raise UnsupportedResourceError(
            locator, f"Can't open the URL {locator}: unsupported scheme."
        )

    def open_file(self, locator: Locator) -> t.BinaryIO | None:
        """Open a local file."""
        try:
            return open(locator.path, "rb")
        except (FileNotFoundError, NotADirectoryError):
            log.debug("File %s not found", locator.path)
            return None

    def open_package_data(self, locator: Locator) -> t.BinaryIO | None:
        """Open a data file from a python package."""
        package, _, resource = locator.path.strip("/").partition("/")
        if not package or not resource:
            raise UnsupportedResourceError(
                locator,
                f"Malformed URL {locator}, "
                "expected 'classpath:package.name/path/to/resource'.",
            )

        try:
            root = importlib.resources.files(package)
        except ModuleNotFoundError:
            log.debug("Package %s not found", package)
            return None

        traversable = root.joinpath(*resource.split("/"))
        if not traversable.is_file():
            log.debug("Resource %s not found in package %s", resource, package)
            return None
        return t.cast(t.BinaryIO, traversable.open("rb"))

    def open_url(self, locator: Locator) -> t.BinaryIO | None:
        """Open a remote resource.

        The body is read through :mod:`requests`, so that a transport failure while
        reading also raises a :class:`requests.RequestException`. Exceptions raised by
        :mod:`requests` are all subclasses of :class:`OSError`.
        """
        response = self.session.get(locator.url, stream=True, timeout=self.timeout)
        try:
            if response.status_code in ABSENT_STATUS_CODES:
                log.debug("URL %s not found (%d)", locator.url, response.status_code)
                return None
            response.raise_for_status()
            content = response.content
        finally:
            response.close()

        return io.BytesIO(content)
