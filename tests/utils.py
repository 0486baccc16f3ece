"""Utilities for tests."""

import io
from collections import abc
from pathlib import Path

from hypothesis import strategies as st

from propstack.locator import Locator

RESOURCES = Path(__file__).parent / "resources"


class RecordingStream(io.BytesIO):
    """In-memory stream that counts calls to close."""

    def __init__(self, data: bytes = b"") -> None:
        super().__init__(data)
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        super().close()


class StubOpener:
    """Opener serving in-memory resources, keyed by URL.

    Every stream handed out is kept in :attr:`streams` for inspection.
    """

    def __init__(self, resources: abc.Mapping[str, bytes] | None = None) -> None:
        self.resources = dict(resources or {})
        self.streams: list[RecordingStream] = []

    def open(self, locator) -> RecordingStream | None:
        locator = Locator.parse(locator)
        data = self.resources.get(locator.url)
        if data is None:
            return None
        stream = RecordingStream(data)
        self.streams.append(stream)
        return stream


valid = "".join(chr(i) for i in range(97, 123))
valid += valid.upper()
valid += "".join(str(i) for i in range(10))
valid += "_"
st_key = st.lists(
    st.text(alphabet=valid, min_size=1, max_size=12), min_size=1, max_size=3
).map(".".join)
st_value = st.text(alphabet=valid + " .,:=/-", max_size=24).filter(
    lambda s: not s.startswith(" ")
)
