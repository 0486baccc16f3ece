"""Configuration loaders bases."""

from __future__ import annotations

import typing as t
from collections import abc

from propstack.locator import Locator
from propstack.types import Properties

LIST_SEPARATOR = ","
"""Separator used when converting a list to a single string value."""


class Loader:
    """Abstract Loader.

    Define the API used by the :class:`~propstack.registry.LoaderRegistry` and the
    :class:`~propstack.dispatch.Dispatcher`. A loader is a stateless object: the same
    instance can be used concurrently for multiple resources.
    """

    def accept(self, locator: Locator) -> bool:
        """Return if this loader is appropriate for this resource.

        It must not do any I/O, the resource might not even exist.

        :Not implemented:
        """
        raise NotImplementedError

    def load(self, mapping: Properties, stream: t.BinaryIO) -> None:
        """Parse `stream` and merge its key/value pairs into `mapping`.

        The stream must be consumed but not closed, this is the caller responsibility.
        Existing keys are overwritten.

        :Not implemented:

        Raises
        ------
        FormatError
            If the content does not conform to the format.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ExtensionLoader(Loader):
    """Loader that selects resources from their file extension.

    Common logic for file formats goes here.
    """

    extensions: list[str] = []
    """File extensions that are supported by this loader, without leading dot."""
    case_sensitive: bool = False
    """Whether extensions are compared case-sensitively."""

    def accept(self, locator: Locator) -> bool:
        """Return if the locator extension is supported.

        By default, only check supported file extensions.
        """
        ext = locator.extension
        if self.case_sensitive:
            return ext in self.extensions
        return ext.lower() in [e.lower() for e in self.extensions]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(self.extensions)})"


def to_property_value(value: t.Any) -> str:
    """Convert a parsed value to its string representation.

    Booleans are lowercase, None is an empty string, sequences are joined by
    :data:`LIST_SEPARATOR`.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, abc.Sequence | abc.Set):
        return LIST_SEPARATOR.join(to_property_value(v) for v in value)
    return str(value)


class DictLikeLoaderMixin:
    """Load a configuration from a nested mapping.

    Nested mappings are flattened into dot-separated keys. As we only deal with
    string values, there is no way to keep a mapping as a single value.
    """

    def resolve_mapping(self, input: abc.Mapping) -> abc.Iterator[tuple[str, str]]:
        """Flatten an input nested mapping."""

        def recurse(d: abc.Mapping, key: list[str]) -> abc.Iterator[tuple[str, str]]:
            for k, v in d.items():
                fullkey = key + [str(k)]
                if isinstance(v, abc.Mapping):
                    yield from recurse(v, fullkey)
                else:
                    yield ".".join(fullkey), to_property_value(v)

        yield from recurse(input, [])

    def merge_mapping(self, mapping: Properties, input: abc.Mapping) -> None:
        """Flatten `input` and update `mapping` with it."""
        for key, value in self.resolve_mapping(input):
            mapping[key] = value
