"""Chain of configuration sources."""

from __future__ import annotations

import logging
import logging.config
import typing as t

from traitlets import Bunch, Enum, Float, Int, List, Unicode, Union, default, observe
from traitlets.config.configurable import LoggingConfigurable

from .dispatch import Dispatcher
from .loaders import Loader
from .locator import Locator
from .registry import LoaderRegistry
from .resources import ResourceOpener
from .types import Properties


class ConfigSources(LoggingConfigurable):
    """Load a chain of configuration sources into a single flat mapping.

    Each instance owns its :class:`.LoaderRegistry`, built-in loaders are registered
    at initialization, followed by :attr:`extra_loaders`. More loaders can be added
    with :meth:`register`.

    Sources are loaded in order. Depending on :attr:`load_policy`, all sources are
    merged (later sources overriding earlier keys) or only the first existing source is
    loaded.

    Parameters
    ----------
    registry
        Use this registry instead of creating a new one. :attr:`extra_loaders` are
        still registered into it.
    opener
        Use this opener instead of creating a new one. :attr:`http_timeout` is then
        ignored.
    kwargs
        Passed to :class:`traitlets.config.Configurable`: traits values, or a
        ``config`` object.
    """

    # -- Config --

    sources = List(
        Unicode(),
        default_value=[],
        help=(
            "Locations of the configuration sources, in order. Either URLs or paths "
            "relative from interpreter working directory or absolute."
        ),
    ).tag(config=True)

    load_policy = Enum(
        ("merge", "first"),
        default_value="merge",
        help="""\
        How to deal with multiple sources. If 'merge', all existing sources are loaded,
        a key found in multiple sources takes the value of the last one. If 'first',
        only the first existing source is loaded.
        """,
    ).tag(config=True)

    extra_loaders = List(
        Unicode(),
        default_value=[],
        help=(
            "Import strings of additional loader classes. They are registered in order "
            "and take precedence over the built-in loaders."
        ),
    ).tag(config=True)

    http_timeout = Float(
        10.0, allow_none=True, help="Timeout in seconds for HTTP sources."
    ).tag(config=True)

    # -- Log config --

    log_level = Union(
        [Enum(("DEBUG", "INFO", "WARN", "ERROR", "CRITICAL")), Int()],
        default_value="INFO",
        help="Set the log level by value or name.",
    ).tag(config=True)

    log_datefmt = Unicode(
        "%Y-%m-%d %H:%M:%S",
        help="The date format used by logging formatters for %(asctime)s",
    ).tag(config=True)

    log_format = Unicode(
        "[%(levelname)s]%(name)s:: %(message)s",
        help="The Logging format template",
    ).tag(config=True)

    def _get_logging_config(self) -> dict:
        """Return dictionary config for logging.

        See :func:`logging.config.dictConfig`.

        Whenever the relevant traits or the logger are modified, callbacks events will
        use this method to create a configuration dict. It can be overriden in a
        subclass to modify the logging configuration further.
        """
        config = {
            "version": 1,
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                    "stream": "ext://sys.stderr",
                },
            },
            "formatters": {
                "console": {
                    "format": self.log_format,
                    "datefmt": self.log_datefmt,
                },
            },
            "loggers": {
                __package__: {
                    "level": logging.getLevelName(self.log_level),
                    "handlers": ["console"],
                }
            },
            "disable_existing_loggers": False,
        }

        return config

    @observe("log_format", "log_datefmt", "log_level")
    def _observe_log_format_change(self, change: Bunch) -> None:
        self._configure_logging()

    @observe("log", type="default")
    def _observe_log_default(self, change: Bunch) -> None:
        self._configure_logging()

    def _configure_logging(self) -> None:
        config = self._get_logging_config()
        logging.config.dictConfig(config)

    @default("log")
    def _log_default(self) -> logging.Logger:
        return logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @observe("http_timeout")
    def _observe_http_timeout(self, change: Bunch) -> None:
        if hasattr(self, "dispatcher"):
            self.dispatcher.opener.timeout = change["new"]

    # -- Instance attributes --

    dispatcher: Dispatcher
    """Dispatcher used to load each source."""
    loaded: list[Locator]
    """Sources that were found and loaded during the last call to :meth:`load`."""

    def __init__(
        self,
        registry: LoaderRegistry | None = None,
        opener: ResourceOpener | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)

        if opener is None:
            opener = ResourceOpener(timeout=self.http_timeout)
        self.dispatcher = Dispatcher(registry, opener)
        self.loaded = []

        for loader in self.extra_loaders:
            self.register(loader)

    @property
    def registry(self) -> LoaderRegistry:
        """Registry of loaders."""
        return self.dispatcher.registry

    def register(self, loader: Loader | type[Loader] | str) -> Loader:
        """Register a loader, with highest priority."""
        loader = self.dispatcher.register(loader)
        self.log.debug("Registered loader %s", loader)
        return loader

    @t.overload
    def load(self, mapping: None = None) -> dict[str, str]: ...

    @t.overload
    def load(self, mapping: Properties) -> Properties: ...

    def load(self, mapping: Properties | None = None) -> Properties:
        """Load sources into a mapping.

        Parameters
        ----------
        mapping
            Mapping to update. If None, a new dictionary is created.

        Returns
        -------
        mapping
            The updated mapping.

        Raises
        ------
        OSError
            If a source could not be opened or read.
        UnsupportedResourceError
            If no loader accepts one of the sources.
        FormatError
            If the content of a source is malformed.
        """
        if mapping is None:
            mapping = {}

        self.loaded = []
        for source in self.sources:
            locator = Locator.parse(source)
            if not self.dispatcher.load_into(mapping, locator):
                self.log.debug("Source %s not found", locator)
                continue

            self.log.debug("Loaded source %s", locator)
            self.loaded.append(locator)
            if self.load_policy == "first":
                break

        if not self.loaded:
            self.log.info("No configuration sources found (%s)", str(self.sources))

        return mapping
