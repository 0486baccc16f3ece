"""Yaml configuration file loader.

This uses :mod:`ruamel.yaml`.
"""

from __future__ import annotations

import typing as t
from collections import abc

from ruamel.yaml import YAML
from ruamel.yaml.error import MarkedYAMLError, YAMLError

from propstack.types import FormatError, Properties

from .core import DictLikeLoaderMixin, ExtensionLoader


class YamlLoader(DictLikeLoaderMixin, ExtensionLoader):
    """Loader for Yaml files."""

    extensions = ["yaml", "yml"]

    def setup_yaml(self) -> YAML:
        """Return a YAML instance.

        You can customize the yaml parsing here. A new instance is created for every
        resource, so that the loader stays stateless.
        """
        return YAML(typ="safe", pure=True)

    def load(self, mapping: Properties, stream: t.BinaryIO) -> None:
        """Parse stream and update mapping with its content."""
        yaml = self.setup_yaml()

        try:
            data = yaml.load(stream.read())
        except MarkedYAMLError as e:
            lineno = None if e.problem_mark is None else e.problem_mark.line + 1
            raise FormatError(f"Invalid YAML: {e.problem}", lineno=lineno) from e
        except YAMLError as e:
            raise FormatError(f"Invalid YAML: {e}") from e

        # empty file
        if data is None:
            data = {}

        if not isinstance(data, abc.Mapping):
            raise FormatError(
                f"Top-level YAML node must be a mapping, not {type(data).__name__}"
            )

        self.merge_mapping(mapping, data)
