"""Python configuration file loader."""

from __future__ import annotations

import typing as t

from propstack.locator import FILE_SCHEME, Locator
from propstack.types import FormatError, MultipleConfigKeyError, Properties

from .core import ExtensionLoader, to_property_value


class PyConfigContainer:
    """Object that can define attributes recursively on the fly.

    Allows the config file syntax::

        c.group.subgroup.parameter = 3
        c.another_group.parameter = True

    It patches ``__getattribute__`` to allow this. Any unknown attribute is
    automatically created and assigned a new instance of PyConfigContainer. The
    attributes values can be explored (recursively) in the ``__dict__`` attribute.

    This is a very minimalist approach and caution should be applied if this class is to
    be expanded.
    """

    def __getattribute__(self, key: str) -> t.Any:
        try:
            return super().__getattribute__(key)
        except AttributeError:
            obj = PyConfigContainer()
            self.__setattr__(key, obj)
            return obj

    def __setattr__(self, name: str, value: t.Any):
        if name in self.__dict__:
            raise MultipleConfigKeyError(name, [value, getattr(self, name)])
        super().__setattr__(name, value)

    def as_flat_dict(self) -> dict[str, t.Any]:
        """Return flat dict of attributes.

        We must use a flat dict, a nested one would not differentiate nested attribute
        and a dictionnary as attribute value.
        """
        out = {}

        def recurse(cfg: PyConfigContainer, key: list[str]):
            for k, v in cfg.__dict__.items():
                newkey = key + [k]
                if isinstance(v, PyConfigContainer):
                    recurse(v, newkey)
                else:
                    out[".".join(newkey)] = v

        recurse(self, [])
        return out


class PyLoader(ExtensionLoader):
    """Load config from a python file.

    The object ``c`` is already defined. It is a simple object only meant to allow for
    this syntax (:class:`PyConfigContainer`)::

        c.group.subgroup.parameter = True

    Any code will be run, so some logic can be used in the config files directly
    (changing a value depending on OS or hostname for instance). For that reason this
    loader only accepts local files, and is not registered by default.
    """

    extensions = ["py", "ipy"]

    def accept(self, locator: Locator) -> bool:
        """Return if the locator is a local python file."""
        return locator.scheme == FILE_SCHEME and super().accept(locator)

    def load(self, mapping: Properties, stream: t.BinaryIO) -> None:
        """Execute the file and update mapping with the assigned parameters.

        Compile the config file, and execute it with the variable ``c`` defined
        as an empty :class:`PyConfigContainer` object.
        """
        read_config = PyConfigContainer()
        filename = getattr(stream, "name", "<config>")

        # from traitlets.config.loader.PyFileConfigLoader
        namespace = dict(c=read_config, __file__=filename)
        try:
            exec(
                compile(source=stream.read(), filename=filename, mode="exec"),
                namespace,  # globals and locals
                namespace,
            )
        except MultipleConfigKeyError:
            raise
        except Exception as e:
            raise FormatError(
                f"Exception while executing '{filename}'.", origin=filename
            ) from e

        for key, value in read_config.as_flat_dict().items():
            mapping[key] = to_property_value(value)
