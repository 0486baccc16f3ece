"""Propstack.

Provides:
- loaders for configuration files of various formats (properties, XML, JSON, TOML,
  YAML, python), selected from the resource location,
- a registry and dispatcher to merge one or more resources (local files, package
  data, URLs) into a single flat mapping of string keys to string values.
"""

from importlib.metadata import version

from .dispatch import Dispatcher
from .locator import Locator
from .registry import LoaderRegistry
from .resources import ResourceOpener
from .sources import ConfigSources
from .types import (
    ConfigError,
    FormatError,
    MultipleConfigKeyError,
    UnsupportedResourceError,
)

try:
    __version__ = version("propstack")
except Exception:
    # Local copy or not installed with setuptools.
    __version__ = "9999"

__all__ = [
    "ConfigError",
    "ConfigSources",
    "Dispatcher",
    "FormatError",
    "LoaderRegistry",
    "Locator",
    "MultipleConfigKeyError",
    "ResourceOpener",
    "UnsupportedResourceError",
]
