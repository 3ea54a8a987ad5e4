"""Buffers and buffer views of a glTF document."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass
from typing import Any, Optional


class Target(enum.IntEnum):
    """The GPU buffer type a view should be bound to."""

    ARRAY_BUFFER = 34962
    ELEMENT_ARRAY_BUFFER = 34963


@dataclass(frozen=True)
class BufferSource:
    """Where buffer data lives: an external URI, or the GLB ``BIN`` chunk when ``uri`` is None."""

    uri: Optional[str] = None

    @property
    def is_bin(self) -> bool:
        """True when the data is in the binary chunk of a GLB file."""
        return self.uri is None


def _nth(iterable, n: int, what: str):
    found = next(itertools.islice(iterable, n, None), None)
    if found is None:
        raise IndexError(f"{what} index {n} out of range")
    return found


@dataclass(frozen=True)
class Buffer:
    """A buffer of binary geometry, animation or skin data."""

    document: Any
    index: int
    json: dict

    @property
    def source(self) -> BufferSource:
        """The buffer data source."""
        return BufferSource(self.json.get("uri"))

    @property
    def length(self) -> int:
        """Length of the buffer in bytes."""
        return int(self.json["byteLength"])

    @property
    def name(self) -> Optional[str]:
        """Optional user-defined name."""
        return self.json.get("name")

    @property
    def extensions(self) -> Optional[dict]:
        """Extension data, or None when there is none."""
        return self.json.get("extensions")

    def extension_value(self, name: str) -> Any:
        """The value of one extension, or None."""
        return (self.extensions or {}).get(name)

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")


@dataclass(frozen=True)
class View:
    """A view into a subset of a buffer."""

    document: Any
    index: int
    json: dict

    @property
    def buffer(self) -> Buffer:
        """The parent buffer."""
        return _nth(self.document.buffers(), int(self.json["buffer"]), "buffer")

    @property
    def length(self) -> int:
        """Length of the view in bytes."""
        return int(self.json["byteLength"])

    @property
    def offset(self) -> int:
        """Offset into the parent buffer in bytes."""
        return int(self.json.get("byteOffset", 0))

    @property
    def stride(self) -> Optional[int]:
        """Byte stride between elements; None means tightly packed."""
        stride = self.json.get("byteStride")
        # A stride of zero is treated as if none were given.
        return stride or None

    @property
    def name(self) -> Optional[str]:
        """Optional user-defined name."""
        return self.json.get("name")

    @property
    def target(self) -> Optional[Target]:
        """Optional target the buffer should be bound to."""
        target = self.json.get("target")
        return None if target is None else Target(target)

    @property
    def extensions(self) -> Optional[dict]:
        """Extension data, or None when there is none."""
        return self.json.get("extensions")

    def extension_value(self, name: str) -> Any:
        """The value of one extension, or None."""
        return (self.extensions or {}).get(name)

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")