import pytest

from gltfread.accessor import (
    Accessor,
    DataType,
    Dimensions,
    IndexType,
    SparseIndices,
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


def _doc():
    return _Doc(
        {
            "buffers": [{"byteLength": 64}],
            "bufferViews": [
                {"buffer": 0, "byteLength": 32},
                {"buffer": 0, "byteOffset": 32, "byteLength": 32},
            ],
            "accessors": [
                {
                    "bufferView": 1,
                    "byteOffset": 8,
                    "componentType": 5126,
                    "count": 2,
                    "type": "VEC3",
                    "min": [-1, -2, -3],
                    "max": [1, 2, 3],
                    "name": "positions",
                    "extensions": {"EXT_sample": {"flag": True}},
                },
                {
                    "componentType": 5126,
                    "count": 5,
                    "type": "SCALAR",
                    "sparse": {
                        "count": 1,
                        "indices": {"bufferView": 0, "componentType": 5123},
                        "values": {"bufferView": 1, "byteOffset": 4},
                    },
                },
            ],
        }
    )


def _json(doc, index):
    return doc.gltf["accessors"][index]


def test_documented_sizes():
    assert IndexType.U16.size() == 2
    assert DataType.F32.size() == 4
    assert Dimensions.MAT4.multiplicity() == 16


def test_accessor_fields_come_from_json():
    doc = _doc()
    accessor = Accessor(doc, 0, _json(doc, 0))
    assert accessor.index == 0
    assert accessor.data_type is DataType.F32
    assert accessor.dimensions is Dimensions.VEC3
    assert accessor.count == 2
    assert accessor.offset == 8
    assert accessor.min == [-1, -2, -3]
    assert accessor.max == [1, 2, 3]
    assert accessor.name == "positions"
    assert accessor.normalized is False


def test_accessor_size_is_component_size_times_multiplicity():
    doc = _doc()
    sizes = [Accessor(doc, i, j).size for i, j in enumerate(doc.gltf["accessors"])]
    assert sizes == [12, 4]


def test_accessor_view_resolves_index():
    doc = _doc()
    view = Accessor(doc, 0, _json(doc, 0)).view
    assert view.index == 1
    assert view.offset == 32


def test_sparse_accessor_without_view():
    doc = _doc()
    accessor = Accessor(doc, 1, _json(doc, 1))
    assert accessor.view is None
    assert accessor.offset == 0
    sparse = accessor.sparse
    assert sparse.count == 1
    assert sparse.indices.index_type is IndexType.U16
    assert sparse.indices.view.index == 0
    assert sparse.values.view.index == 1
    assert sparse.values.offset == 4


def test_dense_accessor_has_no_sparse():
    doc = _doc()
    accessor = Accessor(doc, 0, _json(doc, 0))
    assert accessor.sparse is None
    assert accessor.count == 2


def test_extension_value():
    doc = _doc()
    accessor = Accessor(doc, 0, _json(doc, 0))
    assert accessor.extension_value("EXT_sample") == {"flag": True}
    assert accessor.extension_value("EXT_other") is None


def test_invalid_component_type_raises():
    doc = _doc()
    with pytest.raises(ValueError):
        Accessor(doc, 0, {"componentType": 1, "count": 1, "type": "SCALAR"}).data_type


def test_invalid_type_raises():
    doc = _doc()
    with pytest.raises(ValueError):
        Accessor(doc, 0, {"componentType": 5126, "count": 1, "type": "VEC9"}).dimensions


def test_float_sparse_index_type_rejected():
    doc = _doc()
    with pytest.raises(ValueError):
        SparseIndices(doc, {"bufferView": 0, "componentType": 5126}).index_type


def test_view_index_out_of_range():
    doc = _doc()
    json = {"bufferView": 7, "componentType": 5126, "count": 1, "type": "SCALAR"}
    with pytest.raises(IndexError):
        Accessor(doc, 0, json).view