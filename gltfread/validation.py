"""Validation of glTF JSON data: error kinds, paths and checked values."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_USIZE_MAX = 2 * sys.maxsize + 1


class ValidationError(enum.Enum):
    """The kind of problem found during validation."""

    INDEX_OUT_OF_BOUNDS = "Index out of bounds"
    INVALID = "Invalid value"
    MISSING = "Missing data"
    OVERSIZE = "Size exceeds system limits"
    UNSUPPORTED = "Unsupported extension"

    def __str__(self) -> str:
        return self.value

    def _rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: "ValidationError") -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self._rank() < other._rank()

    def __le__(self, other: "ValidationError") -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self._rank() <= other._rank()

    def __gt__(self, other: "ValidationError") -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self._rank() > other._rank()

    def __ge__(self, other: "ValidationError") -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self._rank() >= other._rank()


@dataclass(frozen=True)
class JsonPath:
    """A location inside a glTF JSON document, such as ``textures[0].source``."""

    value: str = ""

    def field(self, name: str) -> "JsonPath":
        """Return the path extended by an object member."""
        return JsonPath(f"{self.value}.{name}" if self.value else name)

    def index(self, index: int) -> "JsonPath":
        """Return the path extended by an array index."""
        return JsonPath(f"{self.value}[{index}]")

    def key(self, key: str) -> "JsonPath":
        """Return the path extended by a map key."""
        return JsonPath(f'{self.value}["{key}"]')

    def __str__(self) -> str:
        return self.value


Report = Callable[[JsonPath, ValidationError], None]


@dataclass(frozen=True)
class Checked(Generic[T]):
    """A value that was checked when it was read: valid with an item, or invalid."""

    item: Optional[T] = None
    is_valid: bool = True

    @classmethod
    def valid(cls, item: T) -> "Checked[T]":
        return cls(item, True)

    @classmethod
    def invalid(cls) -> "Checked[T]":
        return cls(None, False)

    def unwrap(self) -> T:
        """Return the item, raising ValueError when it is invalid."""
        if not self.is_valid:
            raise ValueError("attempted to unwrap an invalid item")
        return self.item  # type: ignore[return-value]

    def validate(self, root: Any, path: JsonPath, report: Report) -> None:
        if not self.is_valid:
            report(path, ValidationError.INVALID)


def validate_usize64(value: int, path: JsonPath, report: Report) -> None:
    """Report a byte size or offset that does not fit this platform's sizes."""
    if value > _USIZE_MAX:
        report(path, ValidationError.OVERSIZE)


def validate_value(value: Any, root: Any, path: JsonPath, report: Report) -> None:
    """Validate any value: optional, sequence, mapping or validatable object."""
    if value is None or isinstance(value, (str, bytes, bool, int, float)):
        return
    validate = getattr(value, "validate", None)
    if callable(validate):
        validate(root, path, report)
    elif isinstance(value, dict):
        for key, item in value.items():
            item_path = path.key(str(key))
            validate_value(key, root, item_path, report)
            validate_value(item, root, item_path, report)
    elif isinstance(value, (list, tuple)):
        for position, item in enumerate(value):
            validate_value(item, root, path.index(position), report)