"""Type definitions."""

import typing as t
from collections import abc

Properties = abc.MutableMapping[str, str]
"""Accumulating mapping of configuration keys to their string values."""


class ConfigError(Exception):
    """General exception for config loading."""


class UnsupportedResourceError(ConfigError):
    """No registered loader can handle a resource."""

    def __init__(self, locator: t.Any, msg: str | None = None) -> None:
        if msg is None:
            msg = f"Can't resolve a loader for the URL {locator}."
        super().__init__(msg)
        self.locator = locator


class FormatError(ConfigError):
    """Content of a resource does not conform to the loader format."""

    def __init__(
        self, msg: str, origin: str | None = None, lineno: int | None = None
    ) -> None:
        self.origin = origin
        self.lineno = lineno

        location = []
        if origin is not None:
            location.append(origin)
        if lineno is not None:
            location.append(f"line {lineno}")
        if location:
            msg = f"{msg} ({', '.join(location)})"
        super().__init__(msg)


class MultipleConfigKeyError(FormatError):
    """A parameter was specified more than once."""

    def __init__(
        self,
        key: str,
        values: abc.Sequence[t.Any],
        msg: str | None = None,
        origin: str | None = None,
    ) -> None:
        if msg is None:
            msg = (
                f"Configuration key '{key}' was specified more than once "
                f"with values {values}"
            )
        super().__init__(msg, origin=origin)

        self.key = key
        self.values = values
