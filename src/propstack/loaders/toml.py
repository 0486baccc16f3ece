"""Toml configuration file loader.

We use :mod:`tomlkit` to parse file.
"""

from __future__ import annotations

import typing as t

import tomlkit
from tomlkit.exceptions import ParseError, TOMLKitError

from propstack.types import FormatError, Properties

from .core import DictLikeLoaderMixin, ExtensionLoader


class TomlkitLoader(ExtensionLoader, DictLikeLoaderMixin):
    """Load config from TOML files using tomlkit library.

    Tables are flattened into dot-separated keys, so that::

        [server]
        host = "localhost"
        ports = [8080, 8081]

    gives ``server.host = localhost`` and ``server.ports = 8080,8081``.
    """

    extensions = ["toml"]

    def load(self, mapping: Properties, stream: t.BinaryIO) -> None:
        """Parse stream and update mapping with its content."""
        try:
            root_table = tomlkit.parse(stream.read().decode("utf-8"))
        except ParseError as e:
            raise FormatError(f"Invalid TOML: {e}", lineno=e.line) from e
        except TOMLKitError as e:
            raise FormatError(f"Invalid TOML: {e}") from e
        except UnicodeDecodeError as e:
            raise FormatError("Could not decode TOML content as utf-8") from e

        self.merge_mapping(mapping, root_table.unwrap())
