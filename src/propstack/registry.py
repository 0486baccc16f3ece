"""Registry of loaders."""

from __future__ import annotations

import logging
import threading
import typing as t
from collections import abc

from .loaders import DEFAULT_LOADERS, ExtensionLoader, Loader
from .locator import Locator
from .types import UnsupportedResourceError
from .utils import did_you_mean, import_item

log = logging.getLogger(__name__)


class LoaderRegistry:
    """Ordered collection of loaders.

    The registry finds the appropriate loader for a resource. Loaders are tried in
    order of priority and the first one to accept the resource is selected. A loader
    newly registered takes precedence over all existing ones, so that a specific loader
    can shadow a more generic one.

    Registration and lookup are thread-safe: lookups iterate over a snapshot of the
    loaders list.

    Parameters
    ----------
    defaults
        If True, register the built-in loaders (:data:`~.loaders.DEFAULT_LOADERS`).
    """

    def __init__(self, defaults: bool = True) -> None:
        self._loaders: list[Loader] = []
        self._lock = threading.Lock()

        if defaults:
            for loader_cls in DEFAULT_LOADERS:
                self.register(loader_cls)

    @property
    def loaders(self) -> tuple[Loader, ...]:
        """Snapshot of the registered loaders, in order of priority."""
        with self._lock:
            return tuple(self._loaders)

    def __iter__(self) -> abc.Iterator[Loader]:
        return iter(self.loaders)

    def __len__(self) -> int:
        with self._lock:
            return len(self._loaders)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self.loaders)})"

    def register(self, loader: Loader | type[Loader] | str) -> Loader:
        """Register a loader with the highest priority.

        Parameters
        ----------
        loader
            Loader instance, loader class (that will be instantiated without
            arguments), or import string of a loader class
            (``"package.module.LoaderClass"``).

        Returns
        -------
        loader
            The registered instance.
        """
        if isinstance(loader, str):
            loader = import_item(loader)
        if isinstance(loader, type):
            loader = loader()
        if not isinstance(loader, Loader):
            raise TypeError(f"Expected a Loader, received {loader!r}")

        with self._lock:
            self._loaders.insert(0, loader)
        log.debug("Registered loader %s", loader)
        return loader

    def find(self, locator: t.Any) -> Loader:
        """Return the first loader that accepts this resource.

        Raises
        ------
        UnsupportedResourceError
            If no loader accepts the resource.
        """
        locator = Locator.parse(locator)
        loaders = self.loaders
        for loader in loaders:
            if loader.accept(locator):
                return loader

        raise UnsupportedResourceError(locator, self._unsupported_message(locator))

    def _unsupported_message(self, locator: Locator) -> str:
        extensions: list[str] = []
        for loader in self.loaders:
            if isinstance(loader, ExtensionLoader):
                extensions += [e for e in loader.extensions if e not in extensions]

        msg = f"Can't resolve a loader for the URL {locator}."
        if extensions:
            msg += f" Supported extensions are {extensions}."
        if locator.extension and (
            suggestion := did_you_mean(extensions, locator.extension, max_distance=2)
        ):
            msg += f" Did you mean '.{suggestion}'?"
        return msg
