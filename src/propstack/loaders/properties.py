"""Properties file loader.

Flat ``key = value`` text files, as understood by ``java.util.Properties``::

    # comment
    ! also a comment
    database.host = localhost
    database.port: 5432
    greeting Hello \
             World
    path = C:\\temp\\config
    unicode = caf\u00e9

"""

from __future__ import annotations

import re
import typing as t
from collections import abc

from propstack.types import FormatError, Properties

from .core import ExtensionLoader

WHITESPACE = " \t\f"
SEPARATORS = "=:"
COMMENTS = "#!"

ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}

_line_rgx = re.compile(r"\r\n|\r|\n")


def iter_logical_lines(text: str) -> abc.Iterator[tuple[int, str]]:
    """Yield logical lines with the line number they start at.

    Comments and blank lines are skipped. Lines ending with an odd number of
    backslashes are joined with the next one, whose leading whitespace is dropped.
    """
    buffer: list[str] = []
    start = 0
    for lineno, line in enumerate(_line_rgx.split(text), start=1):
        line = line.lstrip(WHITESPACE)
        if not buffer:
            if not line or line[0] in COMMENTS:
                continue
            start = lineno

        n_backslash = len(line) - len(line.rstrip("\\"))
        if n_backslash % 2 == 1:
            buffer.append(line[:-1])
            continue

        buffer.append(line)
        yield start, "".join(buffer)
        buffer = []

    # continuation on last line
    if buffer:
        yield start, "".join(buffer)


def unescape(s: str, lineno: int | None = None) -> str:
    """Replace escape sequences.

    Raises
    ------
    FormatError
        On a malformed ``\\uXXXX`` sequence.
    """
    if "\\" not in s:
        return s

    out = []
    i = 0
    while i < len(s):
        c = s[i]
        i += 1
        if c != "\\":
            out.append(c)
            continue
        # a lone trailing backslash is dropped
        if i == len(s):
            break

        c = s[i]
        i += 1
        if c == "u":
            code = s[i : i + 4]
            if len(code) != 4 or not all(h in "0123456789abcdefABCDEF" for h in code):
                raise FormatError(r"Malformed \uxxxx encoding", lineno=lineno)
            out.append(chr(int(code, 16)))
            i += 4
        else:
            out.append(ESCAPES.get(c, c))

    return "".join(out)


def split_key_value(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    key_end = len(line)
    value_start = len(line)
    has_separator = False
    escaped = False
    for i, c in enumerate(line):
        if escaped:
            escaped = False
            continue
        if c == "\\":
            escaped = True
        elif c in SEPARATORS:
            key_end, value_start = i, i + 1
            has_separator = True
            break
        elif c in WHITESPACE:
            key_end, value_start = i, i + 1
            break

    while value_start < len(line):
        c = line[value_start]
        if c not in WHITESPACE:
            if has_separator or c not in SEPARATORS:
                break
            has_separator = True
        value_start += 1

    return line[:key_end], line[value_start:]


class PropertiesLoader(ExtensionLoader):
    """Loader for properties files."""

    extensions = ["properties"]

    encoding: str = "iso-8859-1"
    """Encoding of the files. Other characters can be written with ``\\uXXXX``."""

    def load(self, mapping: Properties, stream: t.BinaryIO) -> None:
        """Parse stream and update mapping with its content."""
        try:
            text = stream.read().decode(self.encoding)
        except UnicodeDecodeError as e:
            raise FormatError(f"Could not decode content as {self.encoding}") from e

        for lineno, line in iter_logical_lines(text):
            key, value = split_key_value(line)
            mapping[unescape(key, lineno)] = unescape(value, lineno)
