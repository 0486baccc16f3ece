"""Test the chain of configuration sources."""

import logging

import pytest
from traitlets import TraitError
from traitlets.config import Config

from propstack.loaders import PropertiesLoader
from propstack.registry import LoaderRegistry
from propstack.resources import ResourceOpener
from propstack.sources import ConfigSources
from propstack.types import FormatError, UnsupportedResourceError
from tests.utils import RESOURCES


class IniLoader(PropertiesLoader):
    """Read simple ini-like files as properties."""

    extensions = ["ini"]


LAYER_A = str(RESOURCES / "layer_a.properties")
LAYER_B = str(RESOURCES / "layer_b.properties")
MISSING = str(RESOURCES / "missing.properties")


def test_merge():
    sources = ConfigSources(sources=[LAYER_A, MISSING, LAYER_B])
    assert sources.load() == {"x": "1", "y": "3", "z": "4"}
    assert [str(loc) for loc in sources.loaded] == [
        f"file://{LAYER_A}",
        f"file://{LAYER_B}",
    ]


def test_first():
    sources = ConfigSources(sources=[MISSING, LAYER_B, LAYER_A], load_policy="first")
    assert sources.load() == {"y": "3", "z": "4"}
    assert len(sources.loaded) == 1


def test_existing_mapping():
    sources = ConfigSources(sources=[LAYER_B])
    mapping = {"x": "0", "y": "0"}
    out = sources.load(mapping)
    assert out is mapping
    assert mapping == {"x": "0", "y": "3", "z": "4"}


def test_none_found(caplog: pytest.LogCaptureFixture):
    sources = ConfigSources(sources=[MISSING])
    with caplog.at_level(logging.INFO, logger="propstack"):
        assert sources.load() == {}
    assert sources.loaded == []
    assert "No configuration sources found" in caplog.text


def test_mixed_formats():
    sources = ConfigSources(
        sources=[str(RESOURCES / "config.json"), str(RESOURCES / "config.xml")]
    )
    conf = sources.load()
    assert conf["server.host"] == "localhost"
    assert conf["server.debug"] == "false"
    assert conf["empty"] == ""


def test_errors_propagate():
    sources = ConfigSources(sources=[LAYER_A, str(RESOURCES / "malformed.properties")])
    with pytest.raises(FormatError):
        sources.load()

    # python loader is not registered by default
    sources = ConfigSources(sources=[str(RESOURCES / "config.py")])
    with pytest.raises(UnsupportedResourceError):
        sources.load()


def test_extra_loaders(tmp_path):
    ini = tmp_path / "conf.ini"
    ini.write_text("a = 1\n")

    sources = ConfigSources(
        sources=[str(ini)], extra_loaders=["tests.test_sources.IniLoader"]
    )
    assert isinstance(sources.registry.loaders[0], IniLoader)
    assert sources.load() == {"a": "1"}


def test_register(tmp_path):
    ini = tmp_path / "conf.ini"
    ini.write_text("a = 1\n")

    sources = ConfigSources(sources=[str(ini)])
    with pytest.raises(UnsupportedResourceError):
        sources.load()
    sources.register(IniLoader)
    assert sources.load() == {"a": "1"}


def test_owned_registry():
    """Registries are not shared between instances."""
    s1 = ConfigSources()
    s2 = ConfigSources()
    s1.register(IniLoader)
    assert len(s1.registry) == len(s2.registry) + 1

    registry = LoaderRegistry(defaults=False)
    s3 = ConfigSources(registry=registry)
    assert s3.registry is registry


def test_config_object():
    config = Config()
    config.ConfigSources.sources = [LAYER_A]
    config.ConfigSources.load_policy = "first"
    sources = ConfigSources(config=config)
    assert sources.load_policy == "first"
    assert sources.load() == {"x": "1", "y": "2"}


def test_validation():
    with pytest.raises(TraitError):
        ConfigSources(load_policy="all")


def test_http_timeout():
    sources = ConfigSources(http_timeout=2.0)
    assert sources.dispatcher.opener.timeout == 2.0
    sources.http_timeout = 5.0
    assert sources.dispatcher.opener.timeout == 5.0

    opener = ResourceOpener(timeout=1.0)
    sources = ConfigSources(opener=opener)
    assert sources.dispatcher.opener is opener


def test_log_level():
    sources = ConfigSources(log_level="DEBUG")
    assert isinstance(sources.log, logging.Logger)
    assert logging.getLogger("propstack").level == logging.DEBUG
    sources.log_level = "WARN"
    assert logging.getLogger("propstack").level == logging.WARNING
