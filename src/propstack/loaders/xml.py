"""XML configuration file loader.

Two layouts are supported. The ``java.util.Properties`` one::

    <?xml version="1.0" encoding="UTF-8"?>
    <!DOCTYPE properties SYSTEM "http://java.sun.com/dtd/properties.dtd">
    <properties>
        <comment>Server settings</comment>
        <entry key="server.host">localhost</entry>
        <entry key="server.port">8080</entry>
    </properties>

and any other hierarchical document, where keys are the dot-separated path of
elements below the root::

    <config>
        <server host="localhost">
            <port>8080</port>
        </server>
    </config>

giving ``server.host = localhost`` and ``server.port = 8080``.

We use :mod:`defusedxml` to parse files, as they may come from the network.
"""

from __future__ import annotations

import typing as t
from collections import abc
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, parse

from propstack.types import FormatError, Properties

from .core import ExtensionLoader

PROPERTIES_ROOT = "properties"


class XmlLoader(ExtensionLoader):
    """Loader for XML files."""

    extensions = ["xml"]

    def load(self, mapping: Properties, stream: t.BinaryIO) -> None:
        """Parse stream and update mapping with its content."""
        try:
            root = parse(stream).getroot()
        except ParseError as e:
            raise FormatError(f"Invalid XML: {e}", lineno=e.position[0]) from e
        except DefusedXmlException as e:
            raise FormatError(f"Forbidden XML construct: {e}") from e

        if root.tag == PROPERTIES_ROOT:
            items = self.read_entries(root)
        else:
            items = self.read_tree(root)

        for key, value in items:
            mapping[key] = value

    def read_entries(self, root: Element) -> abc.Iterator[tuple[str, str]]:
        """Yield key/values from the ``<entry key="...">`` elements."""
        for element in root:
            if element.tag != "entry":
                continue
            key = element.get("key")
            if key is None:
                raise FormatError("Missing 'key' attribute in <entry> element")
            yield key, element.text or ""

    def read_tree(self, root: Element) -> abc.Iterator[tuple[str, str]]:
        """Yield key/values from elements text and attributes, recursively."""

        def recurse(element: Element, key: list[str]):
            for name, value in element.attrib.items():
                yield ".".join(key + [name]), value

            text = (element.text or "").strip()
            if text and key:
                yield ".".join(key), text

            for child in element:
                yield from recurse(child, key + [child.tag])

        yield from recurse(root, [])
