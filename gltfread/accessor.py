"""Accessors: typed views into buffer views, with optional sparse storage."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass
from typing import Any, Optional

from .buffer import View


class DataType(enum.IntEnum):
    """The component type of accessor data, by its OpenGL enum value."""

    I8 = 5120
    U8 = 5121
    I16 = 5122
    U16 = 5123
    U32 = 5125
    F32 = 5126

    def size(self) -> int:
        """Size of one component in bytes."""
        return _DATA_TYPE_SIZES[self]


_DATA_TYPE_SIZES = {
    DataType.I8: 1,
    DataType.U8: 1,
    DataType.I16: 2,
    DataType.U16: 2,
    DataType.U32: 4,
    DataType.F32: 4,
}


class Dimensions(enum.Enum):
    """Whether an attribute is a scalar, a vector or a matrix."""

    SCALAR = "SCALAR"
    VEC2 = "VEC2"
    VEC3 = "VEC3"
    VEC4 = "VEC4"
    MAT2 = "MAT2"
    MAT3 = "MAT3"
    MAT4 = "MAT4"

    def multiplicity(self) -> int:
        """Number of components in one element."""
        return _MULTIPLICITIES[self]


_MULTIPLICITIES = {
    Dimensions.SCALAR: 1,
    Dimensions.VEC2: 2,
    Dimensions.VEC3: 3,
    Dimensions.VEC4: 4,
    Dimensions.MAT2: 4,
    Dimensions.MAT3: 9,
    Dimensions.MAT4: 16,
}


class IndexType(enum.IntEnum):
    """The data type of sparse indices."""

    U8 = 5121
    U16 = 5123
    U32 = 5125

    def size(self) -> int:
        """Size of one index in bytes."""
        return _INDEX_SIZES[self]


_INDEX_SIZES = {IndexType.U8: 1, IndexType.U16: 2, IndexType.U32: 4}


def _nth(iterable, n: int, what: str):
    found = next(itertools.islice(iterable, n, None), None)
    if found is None:
        raise IndexError(f"{what} index {n} out of range")
    return found


def _view_of(document: Any, json: dict) -> View:
    return _nth(document.views(), int(json["bufferView"]), "buffer view")


@dataclass(frozen=True)
class SparseIndices:
    """Indices of the elements that deviate from their initial value."""

    document: Any
    json: dict

    @property
    def view(self) -> View:
        """The buffer view holding the indices."""
        return _view_of(self.document, self.json)

    @property
    def offset(self) -> int:
        """Offset relative to the start of the buffer view in bytes."""
        return int(self.json.get("byteOffset", 0))

    @property
    def index_type(self) -> IndexType:
        """The data type of each index."""
        value = self.json.get("componentType")
        try:
            return IndexType(value)
        except ValueError:
            raise ValueError(f"invalid sparse index component type {value!r}") from None

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")


@dataclass(frozen=True)
class SparseValues:
    """The displaced element values that the sparse indices point to."""

    document: Any
    json: dict

    @property
    def view(self) -> View:
        """The buffer view holding the values."""
        return _view_of(self.document, self.json)

    @property
    def offset(self) -> int:
        """Offset relative to the start of the buffer view in bytes."""
        return int(self.json.get("byteOffset", 0))

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")


@dataclass(frozen=True)
class Sparse:
    """Sparse storage of elements that deviate from their initial value."""

    document: Any
    json: dict

    @property
    def count(self) -> int:
        """Number of elements encoded in the sparse storage."""
        return int(self.json["count"])

    @property
    def indices(self) -> SparseIndices:
        """The indices of the displaced elements."""
        return SparseIndices(self.document, self.json["indices"])

    @property
    def values(self) -> SparseValues:
        """The displaced element values."""
        return SparseValues(self.document, self.json["values"])

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")


@dataclass(frozen=True)
class Accessor:
    """A typed view into a buffer view."""

    document: Any
    index: int
    json: dict

    @property
    def data_type(self) -> DataType:
        """The component data type."""
        value = self.json.get("componentType")
        try:
            return DataType(value)
        except ValueError:
            raise ValueError(f"invalid accessor component type {value!r}") from None

    @property
    def dimensions(self) -> Dimensions:
        """Whether elements are scalars, vectors or matrices."""
        value = self.json.get("type")
        try:
            return Dimensions(value)
        except ValueError:
            raise ValueError(f"invalid accessor type {value!r}") from None

    @property
    def size(self) -> int:
        """Size of one element in bytes."""
        return self.data_type.size() * self.dimensions.multiplicity()

    @property
    def view(self) -> Optional[View]:
        """The buffer view read from; None for a sparse accessor without one."""
        if self.json.get("bufferView") is None:
            return None
        return _view_of(self.document, self.json)

    @property
    def offset(self) -> int:
        """Offset relative to the start of the buffer view in bytes."""
        return int(self.json.get("byteOffset", 0))

    @property
    def count(self) -> int:
        """Number of elements, not bytes."""
        return int(self.json["count"])

    @property
    def min(self) -> Any:
        """Minimum value of each component, if given."""
        return self.json.get("min")

    @property
    def max(self) -> Any:
        """Maximum value of each component, if given."""
        return self.json.get("max")

    @property
    def name(self) -> Optional[str]:
        """Optional user-defined name."""
        return self.json.get("name")

    @property
    def normalized(self) -> bool:
        """Whether integer values should be normalized."""
        return bool(self.json.get("normalized", False))

    @property
    def sparse(self) -> Optional[Sparse]:
        """Sparse storage of deviating elements, if any."""
        data = self.json.get("sparse")
        return None if data is None else Sparse(self.document, data)

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