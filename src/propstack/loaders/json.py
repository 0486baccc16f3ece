"""JSON configuration file loader."""

import json
from collections.abc import Sequence
from typing import IO, Any

from propstack.types import FormatError, MultipleConfigKeyError, Properties

from .core import DictLikeLoaderMixin, ExtensionLoader


def dict_raise_on_duplicate(ordered_pairs: Sequence[tuple[Any, Any]]) -> dict:
    """Raise if there are duplicate keys."""
    d: dict = {}
    for k, v in ordered_pairs:
        if k in d:
            raise MultipleConfigKeyError(k, [v, d[k]])
        d[k] = v
    return d


class JsonLoader(ExtensionLoader, DictLikeLoaderMixin):
    """Loader for JSON files."""

    extensions = ["json"]

    JSON_DECODER: type[json.JSONDecoder] | None = None
    """Custom json decoder to use."""

    def load(self, mapping: Properties, stream: IO[bytes]) -> None:
        """Parse stream and update mapping with its content.

        We use builtin :mod:`json` to parse file, with eventually a custom decoder
        specified by :attr:`JSON_DECODER`.
        """
        try:
            input = json.load(
                stream, cls=self.JSON_DECODER, object_pairs_hook=dict_raise_on_duplicate
            )
        except json.JSONDecodeError as e:
            raise FormatError(f"Invalid JSON: {e.msg}", lineno=e.lineno) from e
        except UnicodeDecodeError as e:
            raise FormatError("Could not decode JSON content") from e

        if not isinstance(input, dict):
            raise FormatError(
                f"Top-level JSON value must be an object, not {type(input).__name__}"
            )
        self.merge_mapping(mapping, input)
