"""Load resources into a mapping."""

from __future__ import annotations

import logging
import typing as t

from .loaders import Loader
from .locator import Locator
from .registry import LoaderRegistry
from .resources import ResourceOpener
from .types import Properties

log = logging.getLogger(__name__)


class Dispatcher:
    """Open a resource, select its loader and merge its content into a mapping.

    Parameters
    ----------
    registry
        Registry of loaders to choose from. If None, a new registry with the built-in
        loaders is created.
    opener
        Object opening resources. If None, a default :class:`ResourceOpener` is used.
    """

    def __init__(
        self,
        registry: LoaderRegistry | None = None,
        opener: ResourceOpener | None = None,
    ) -> None:
        if registry is None:
            registry = LoaderRegistry()
        if opener is None:
            opener = ResourceOpener()
        self.registry = registry
        self.opener = opener

    def register(self, loader: Loader | type[Loader] | str) -> Loader:
        """Register a loader in the registry, with highest priority."""
        return self.registry.register(loader)

    def load_into(self, mapping: Properties, locator: t.Any) -> bool:
        """Load a resource into `mapping`.

        Existing keys are overwritten. If the loader fails halfway, the mapping may have
        been partially updated.

        Parameters
        ----------
        mapping
            Mapping to update.
        locator
            Location of the resource. A URL string, a path, or a :class:`.Locator`.

        Returns
        -------
        loaded
            True if the resource was found and loaded, False if it does not exist.

        Raises
        ------
        OSError
            If the resource could not be opened or read.
        UnsupportedResourceError
            If no loader accepts the resource.
        FormatError
            If the content is malformed.
        """
        locator = Locator.parse(locator)
        stream = self.opener.open(locator)
        if stream is None:
            log.debug("Resource %s is absent", locator)
            return False

        with stream:
            loader = self.registry.find(locator)
            log.debug("Loading %s with %s", locator, loader)
            loader.load(mapping, stream)
        return True
