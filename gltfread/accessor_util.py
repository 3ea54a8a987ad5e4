"""Iterating over the elements an accessor describes."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Union

from .accessor import Accessor, DataType, IndexType
from .buffer import Buffer, View

GetBufferData = Callable[[Buffer], Optional[bytes]]

_VALID_CODES = "bBhHIf"


@dataclass(frozen=True)
class ItemType:
    """An element type: ``count`` little-endian components of a struct code."""

    component: str
    count: int = 1

    def __post_init__(self) -> None:
        if len(self.component) != 1 or self.component not in _VALID_CODES:
            raise ValueError(f"unsupported component code {self.component!r}")
        if self.count < 1:
            raise ValueError("an item has at least one component")

    @property
    def _format(self) -> str:
        return "<" + self.component * self.count

    @property
    def size(self) -> int:
        """Size of one item in bytes."""
        return struct.calcsize(self._format)

    def from_bytes(self, data) -> Any:
        """Read one item from the start of ``data``: a number or a tuple."""
        try:
            values = struct.unpack_from(self._format, data)
        except struct.error as exc:
            raise ValueError(f"not enough data for item: {exc}") from exc
        return values[0] if self.count == 1 else values

    def zero(self) -> Any:
        """The zero value of this item type."""
        value = 0.0 if self.component == "f" else 0
        return value if self.count == 1 else (value,) * self.count


I8 = ItemType("b")
U8 = ItemType("B")
I16 = ItemType("h")
U16 = ItemType("H")
U32 = ItemType("I")
F32 = ItemType("f")

COMPONENT_CODES = {
    DataType.I8: "b",
    DataType.U8: "B",
    DataType.I16: "h",
    DataType.U16: "H",
    DataType.U32: "I",
    DataType.F32: "f",
}

_INDEX_ITEMS = {IndexType.U8: U8, IndexType.U16: U16, IndexType.U32: U32}


class ItemIter:
    """Visits items laid out in a byte slice at a fixed stride."""

    def __init__(self, data, stride: int, item: ItemType) -> None:
        if stride <= 0:
            raise ValueError("stride must be positive")
        self._data = memoryview(data)
        self.stride = stride
        self.item = item

    def __iter__(self) -> "ItemIter":
        return self

    def __next__(self) -> Any:
        remaining = len(self._data)
        if remaining >= self.stride:
            step = self.stride
        elif remaining >= self.item.size:
            step = self.item.size
        else:
            raise StopIteration
        chunk = self._data[:step]
        self._data = self._data[step:]
        return self.item.from_bytes(chunk)

    def nth(self, n: int) -> Any:
        """Skip ``n`` items and return the next, or None when there is none."""
        if n < 0:
            raise ValueError("n must not be negative")
        start = n * self.stride
        if start > len(self._data):
            return None
        rest = self._data[start:]
        if len(rest) < self.item.size:
            return None
        value = self.item.from_bytes(rest)
        self._data = rest[min(self.stride, len(rest)):]
        return value

    def last(self) -> Any:
        """Consume the iterator and return its final item, or None."""
        remaining = len(self._data)
        if remaining < self.item.size:
            self._data = self._data[:0]
            return None
        start = (remaining - 1) // self.stride * self.stride
        tail = self._data[start:]
        self._data = self._data[:0]
        return self.item.from_bytes(tail)

    def __len__(self) -> int:
        remaining = len(self._data)
        whole, partial = divmod(remaining, self.stride)
        return whole + (1 if partial >= self.item.size else 0)


_UNPEEKED = object()


class SparseIter:
    """Visits base values with the sparse values substituted at their indices.

    Without a base iterator, ``base_count`` zero values are produced.
    """

    def __init__(
        self,
        base: Optional[ItemIter],
        indices: Iterable[int],
        values: ItemIter,
        base_count: int = 0,
    ) -> None:
        self._base = base
        self._base_count = base_count
        self._indices: Iterator[int] = iter(indices)
        self._values = values
        self._counter = 0
        self._peeked: Any = _UNPEEKED

    def _peek(self) -> Optional[int]:
        if self._peeked is _UNPEEKED:
            self._peeked = next(self._indices, None)
        return self._peeked

    def __iter__(self) -> "SparseIter":
        return self

    def __next__(self) -> Any:
        if self._base is not None:
            value = next(self._base)
        elif self._counter < self._base_count:
            value = self._values.item.zero()
        else:
            raise StopIteration

        index = self._peek()
        if index is not None and index == self._counter:
            self._peeked = _UNPEEKED
            try:
                value = next(self._values)
            except StopIteration:
                raise ValueError("sparse values ended before sparse indices") from None

        self._counter += 1
        return value

    def __len__(self) -> int:
        return self._base_count - min(self._counter, self._base_count)


def sparse_indices(data, stride: int, index_type: IndexType) -> ItemIter:
    """Iterate over sparse indices of the given type as integers."""
    return ItemIter(data, stride, _INDEX_ITEMS[index_type])


def _view_slice(view: View, get_buffer_data: GetBufferData) -> Optional[memoryview]:
    data = get_buffer_data(view.buffer)
    if data is None:
        return None
    start = view.offset
    end = start + view.length
    if end > len(data):
        return None
    return memoryview(data)[start:end]


def _subslice(
    data: Optional[memoryview], start: int, stride: int, count: int, size: int
) -> Optional[memoryview]:
    if data is None:
        return None
    end = start + stride * (count - 1) + size
    if start > end or end > len(data):
        return None
    return data[start:end]


def read_accessor(
    accessor: Accessor, item: ItemType, get_buffer_data: GetBufferData
) -> Optional[Union[ItemIter, SparseIter]]:
    """Iterate over an accessor's items, or return None when data is unavailable."""
    view = accessor.view
    sparse = accessor.sparse

    if sparse is None:
        if view is None:
            return None
        stride = view.stride or item.size
        sub = _subslice(
            _view_slice(view, get_buffer_data), accessor.offset, stride, accessor.count, item.size
        )
        return None if sub is None else ItemIter(sub, stride, item)

    base = None
    if view is not None:
        stride = view.stride or item.size
        sub = _subslice(
            _view_slice(view, get_buffer_data), accessor.offset, stride, accessor.count, item.size
        )
        if sub is None:
            return None
        base = ItemIter(sub, stride, item)

    sparse_count = sparse.count

    indices = sparse.indices
    index_type = indices.index_type
    index_size = index_type.size()
    index_view = indices.view
    index_stride = index_view.stride or index_size
    index_data = _subslice(
        _view_slice(index_view, get_buffer_data),
        indices.offset,
        index_stride,
        sparse_count,
        index_size,
    )
    if index_data is None:
        return None
    index_iter = sparse_indices(index_data, index_stride, index_type)

    values = sparse.values
    value_view = values.view
    value_stride = value_view.stride or item.size
    value_data = _subslice(
        _view_slice(value_view, get_buffer_data),
        values.offset,
        value_stride,
        sparse_count,
        item.size,
    )
    if value_data is None:
        return None
    value_iter = ItemIter(value_data, value_stride, item)

    return SparseIter(base, index_iter, value_iter, accessor.count)