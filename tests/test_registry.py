"""Test the loaders registry."""

import threading

import pytest

from propstack.loaders import (
    DEFAULT_LOADERS,
    ExtensionLoader,
    JsonLoader,
    PropertiesLoader,
    XmlLoader,
)
from propstack.registry import LoaderRegistry
from propstack.types import UnsupportedResourceError


class IniLoader(ExtensionLoader):
    extensions = ["ini", "cfg"]

    def load(self, mapping, stream):
        for line in stream.read().decode().splitlines():
            key, _, value = line.partition("=")
            mapping[key.strip()] = value.strip()


class CustomPropertiesLoader(PropertiesLoader):
    pass


def test_defaults():
    registry = LoaderRegistry()
    assert len(registry) == len(DEFAULT_LOADERS)
    # last registered first
    assert [type(loader) for loader in registry] == DEFAULT_LOADERS[::-1]

    assert isinstance(registry.find("config.properties"), PropertiesLoader)
    assert isinstance(registry.find("config.xml"), XmlLoader)
    assert isinstance(registry.find("https://host/config.json"), JsonLoader)


def test_empty():
    registry = LoaderRegistry(defaults=False)
    assert len(registry) == 0
    with pytest.raises(UnsupportedResourceError):
        registry.find("config.properties")


def test_unsupported():
    registry = LoaderRegistry()
    with pytest.raises(UnsupportedResourceError) as excinfo:
        registry.find("config.ini")
    assert excinfo.value.locator.extension == "ini"
    assert "properties" in str(excinfo.value)


def test_unsupported_suggestion():
    registry = LoaderRegistry()
    with pytest.raises(UnsupportedResourceError, match="Did you mean '.yaml'"):
        registry.find("config.yamll")
    with pytest.raises(UnsupportedResourceError) as excinfo:
        registry.find("config.abcdefgh")
    assert "Did you mean" not in str(excinfo.value)


def test_register_extends():
    registry = LoaderRegistry()
    with pytest.raises(UnsupportedResourceError):
        registry.find("config.ini")

    loader = registry.register(IniLoader())
    assert registry.find("config.ini") is loader
    assert registry.find("config.cfg") is loader
    assert registry.loaders[0] is loader


def test_register_shadows():
    """Most recently registered loader wins ties."""
    registry = LoaderRegistry()
    first = registry.find("config.properties")
    custom = registry.register(CustomPropertiesLoader())
    assert registry.find("config.properties") is custom
    assert registry.find("config.properties") is not first

    # duplicates are allowed
    again = registry.register(custom)
    assert again is custom
    assert len(registry) == len(DEFAULT_LOADERS) + 2


def test_register_class_and_string():
    registry = LoaderRegistry(defaults=False)
    loader = registry.register(IniLoader)
    assert isinstance(loader, IniLoader)

    loader = registry.register("tests.test_registry.CustomPropertiesLoader")
    assert isinstance(loader, CustomPropertiesLoader)
    assert registry.loaders[0] is loader
    assert len(registry) == 2

    with pytest.raises(ImportError):
        registry.register("tests.test_registry.MissingLoader")
    with pytest.raises(TypeError):
        registry.register(object())


def test_snapshot():
    registry = LoaderRegistry()
    snapshot = registry.loaders
    registry.register(IniLoader())
    assert len(snapshot) == len(DEFAULT_LOADERS)
    assert len(registry.loaders) == len(DEFAULT_LOADERS) + 1


def test_concurrent_register():
    registry = LoaderRegistry(defaults=False)
    n_threads, n_loaders = 8, 50
    barrier = threading.Barrier(n_threads)

    def work():
        barrier.wait()
        for _ in range(n_loaders):
            registry.register(IniLoader())
            registry.find("config.ini")

    threads = [threading.Thread(target=work) for _ in range(n_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry) == n_threads * n_loaders
    assert len({id(loader) for loader in registry}) == n_threads * n_loaders
