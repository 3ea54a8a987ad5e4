import struct

import pytest

from gltfread.accessor import Accessor, IndexType
from gltfread.accessor_util import (
    F32,
    U8,
    ItemIter,
    ItemType,
    SparseIter,
    read_accessor,
    sparse_indices,
)
from gltfread.buffer import Buffer, View


class _Doc:
    def __init__(self, gltf):
        self.gltf = gltf

    def accessors(self):
        return (Accessor(self, i, j) for i, j in enumerate(self.gltf.get("accessors", [])))

    def views(self):
        return (View(self, i, j) for i, j in enumerate(self.gltf.get("bufferViews", [])))

    def buffers(self):
        return (Buffer(self, i, j) for i, j in enumerate(self.gltf.get("buffers", [])))


def _getter(buffers):
    def get(buffer):
        return buffers[buffer.index] if buffer.index < len(buffers) else None

    return get


EXPECTED_POSITIONS = [
    (0.0, 0.0, 0.0),
    (1.0, 0.0, 0.0),
    (2.0, 0.0, 0.0),
    (3.0, 0.0, 0.0),
    (4.0, 0.0, 0.0),
    (5.0, 0.0, 0.0),
    (6.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (1.0, 2.0, 0.0),
    (2.0, 1.0, 0.0),
    (3.0, 3.0, 0.0),
    (4.0, 1.0, 0.0),
    (5.0, 4.0, 0.0),
    (6.0, 1.0, 0.0),
]


def _simple_sparse():
    base = b"".join(struct.pack("<3f", x, y, 0.0) for y in (0.0, 1.0) for x in range(7))
    indices = struct.pack("<3H", 8, 10, 12) + b"\x00\x00"
    values = struct.pack("<9f", 1, 2, 0, 3, 3, 0, 5, 4, 0)
    data = base + indices + values
    doc = _Doc(
        {
            "buffers": [{"byteLength": len(data)}],
            "bufferViews": [
                {"buffer": 0, "byteLength": len(base)},
                {"buffer": 0, "byteOffset": len(base), "byteLength": 6},
                {"buffer": 0, "byteOffset": len(base) + 8, "byteLength": len(values)},
            ],
            "accessors": [
                {
                    "bufferView": 0,
                    "componentType": 5126,
                    "count": 14,
                    "type": "VEC3",
                    "sparse": {
                        "count": 3,
                        "indices": {"bufferView": 1, "componentType": 5123},
                        "values": {"bufferView": 2},
                    },
                }
            ],
        }
    )
    return next(doc.accessors()), [data]


def _box_sparse():
    data = struct.pack("<I", 1) + struct.pack("<f", 1.0)
    doc = _Doc(
        {
            "buffers": [{"byteLength": len(data)}],
            "bufferViews": [
                {"buffer": 0, "byteLength": 4},
                {"buffer": 0, "byteOffset": 4, "byteLength": 4},
            ],
            "accessors": [
                {
                    "componentType": 5126,
                    "count": 2,
                    "type": "SCALAR",
                    "sparse": {
                        "count": 1,
                        "indices": {"bufferView": 0, "componentType": 5125},
                        "values": {"bufferView": 1},
                    },
                }
            ],
        }
    )
    return next(doc.accessors()), [data]


def test_sparse_accessor_with_base_buffer_view_yield_exact_size_hints():
    accessor, buffers = _simple_sparse()
    positions = read_accessor(accessor, ItemType("f", 3), _getter(buffers))
    for i in range(14, -1, -1):
        assert len(positions) == i
        next(positions, None)


def test_sparse_accessor_with_base_buffer_view_yield_all_values():
    accessor, buffers = _simple_sparse()
    positions = list(read_accessor(accessor, ItemType("f", 3), _getter(buffers)))
    assert positions == EXPECTED_POSITIONS


def test_sparse_accessor_without_base_buffer_view_yield_exact_size_hints():
    accessor, buffers = _box_sparse()
    outputs = read_accessor(accessor, F32, _getter(buffers))
    for i in range(2, -1, -1):
        assert len(outputs) == i
        next(outputs, None)


def test_sparse_accessor_without_base_buffer_view_yield_all_values():
    accessor, buffers = _box_sparse()
    outputs = list(read_accessor(accessor, F32, _getter(buffers)))
    assert outputs == [0.0, 1.0]


def test_dense_accessor_with_stride():
    data = b"".join(struct.pack("<2f", v, v + 0.5) + b"\xff" * 4 for v in (1.0, 2.0, 3.0))
    doc = _Doc(
        {
            "buffers": [{"byteLength": len(data)}],
            "bufferViews": [{"buffer": 0, "byteLength": len(data), "byteStride": 12}],
            "accessors": [
                {"bufferView": 0, "componentType": 5126, "count": 3, "type": "VEC2"}
            ],
        }
    )
    accessor = next(doc.accessors())
    items = read_accessor(accessor, ItemType("f", 2), _getter([data]))
    assert len(items) == 3
    assert list(items) == [(1.0, 1.5), (2.0, 2.5), (3.0, 3.5)]


def test_missing_buffer_data_gives_none():
    accessor, _ = _simple_sparse()
    assert read_accessor(accessor, ItemType("f", 3), _getter([])) is None


def test_view_past_buffer_end_gives_none():
    accessor, buffers = _simple_sparse()
    assert read_accessor(accessor, ItemType("f", 3), _getter([buffers[0][:100]])) is None


def test_item_iter_tightly_packed():
    it = ItemIter(bytes([10, 20, 30, 40]), 1, U8)
    assert len(it) == 4
    assert list(it) == [10, 20, 30, 40]
    assert len(it) == 0


def test_item_iter_nth_advances():
    it = ItemIter(bytes([10, 20, 30, 40]), 1, U8)
    assert it.nth(1) == 20
    assert next(it) == 30
    assert it.nth(5) is None


def test_item_iter_last():
    it = ItemIter(bytes([10, 20, 30, 40]), 1, U8)
    assert it.last() == 40
    assert list(it) == []


def test_item_iter_last_strided():
    data = struct.pack("<f", 7.0) + b"\x00" * 4 + struct.pack("<f", 9.0)
    assert ItemIter(data, 8, F32).last() == 9.0


def test_item_iter_rejects_zero_stride():
    with pytest.raises(ValueError):
        ItemIter(b"\x00", 0, U8)


def test_item_type_round_trip():
    item = ItemType("h", 4)
    values = (-3, 7, 0, 32767)
    assert item.from_bytes(struct.pack("<4h", *values)) == values
    assert item.size == len(struct.pack("<4h", *values))


def test_item_type_zero():
    assert ItemType("f", 3).zero() == (0.0, 0.0, 0.0)
    assert U8.zero() == 0


def test_item_type_short_data_raises():
    with pytest.raises(ValueError):
        ItemType("f", 3).from_bytes(b"\x00" * 4)


def test_item_type_rejects_unknown_code():
    with pytest.raises(ValueError):
        ItemType("q")


def test_sparse_indices_iterates_as_ints():
    data = struct.pack("<3H", 4, 9, 300)
    assert list(sparse_indices(data, 2, IndexType.U16)) == [4, 9, 300]


def test_sparse_iter_over_base():
    base = ItemIter(bytes([1, 2, 3, 4]), 1, U8)
    values = ItemIter(bytes([50, 60]), 1, U8)
    it = SparseIter(base, [0, 3], values, 4)
    assert list(it) == [50, 2, 3, 60]


def test_sparse_iter_values_exhausted_raises():
    with pytest.raises(ValueError):
        next(SparseIter(None, [0], ItemIter(b"", 1, U8), 2))