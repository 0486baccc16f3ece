"""Configuration loaders.

A loader does two things: it tells if it can handle a resource, only by looking at its
:class:`~propstack.locator.Locator` (typically its extension), and it parses a binary
stream into flat string key/values that are merged into an existing mapping.

Loaders never open nor close resources, this is the job of the
:class:`~propstack.dispatch.Dispatcher`.

"""

from .core import DictLikeLoaderMixin, ExtensionLoader, Loader
from .json import JsonLoader
from .properties import PropertiesLoader
from .python import PyLoader
from .toml import TomlkitLoader
from .xml import XmlLoader
from .yaml import YamlLoader

DEFAULT_LOADERS: list[type[Loader]] = [
    PropertiesLoader,
    XmlLoader,
    JsonLoader,
    TomlkitLoader,
    YamlLoader,
]
"""Loaders registered in a new registry, in order of registration.

The last registered has the highest priority.
"""

__all__ = [
    "DEFAULT_LOADERS",
    "DictLikeLoaderMixin",
    "ExtensionLoader",
    "JsonLoader",
    "Loader",
    "PropertiesLoader",
    "PyLoader",
    "TomlkitLoader",
    "XmlLoader",
    "YamlLoader",
]
