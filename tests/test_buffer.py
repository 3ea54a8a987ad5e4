import pytest

from gltfread.buffer import Buffer, BufferSource, Target, View


class _Doc:
    def __init__(self, buffers):
        self._buffers = buffers

    def buffers(self):
        return (Buffer(self, i, j) for i, j in enumerate(self._buffers))


def test_buffer_uri_source():
    buffer = Buffer(_Doc([]), 0, {"byteLength": 4, "uri": "data.bin"})
    assert buffer.source == BufferSource("data.bin")
    assert buffer.source.is_bin is False


def test_buffer_bin_source():
    buffer = Buffer(_Doc([]), 0, {"byteLength": 4})
    assert buffer.source.uri is None
    assert buffer.source.is_bin is True


def test_buffer_length_name_and_extras():
    buffer = Buffer(_Doc([]), 3, {"byteLength": 24, "name": "geo", "extras": {"k": 1}})
    assert buffer.index == 3
    assert buffer.length == 24
    assert buffer.name == "geo"
    assert buffer.extras == {"k": 1}


def test_buffer_extensions():
    buffer = Buffer(_Doc([]), 0, {"byteLength": 1, "extensions": {"EXT_a": {"x": 2}}})
    assert buffer.extension_value("EXT_a") == {"x": 2}
    assert buffer.extension_value("EXT_b") is None
    plain = Buffer(_Doc([]), 0, {"byteLength": 1})
    assert plain.extensions is None
    assert plain.extension_value("EXT_a") is None


def test_view_resolves_parent_buffer():
    doc = _Doc([{"byteLength": 8}, {"byteLength": 16, "uri": "b.bin"}])
    view = View(doc, 0, {"buffer": 1, "byteLength": 4})
    parent = view.buffer
    assert parent.index == 1
    assert parent.source == BufferSource("b.bin")


def test_view_missing_parent_raises():
    doc = _Doc([{"byteLength": 8}])
    with pytest.raises(IndexError):
        View(doc, 0, {"buffer": 5, "byteLength": 4}).buffer


def test_view_offset_default_and_given():
    doc = _Doc([{"byteLength": 8}])
    assert View(doc, 0, {"buffer": 0, "byteLength": 4}).offset == 0
    assert View(doc, 0, {"buffer": 0, "byteLength": 4, "byteOffset": 4}).offset == 4


@pytest.mark.parametrize("json, expected", [
    ({"buffer": 0, "byteLength": 4}, None),
    ({"buffer": 0, "byteLength": 4, "byteStride": 0}, None),
    ({"buffer": 0, "byteLength": 4, "byteStride": 12}, 12),
])
def test_view_stride(json, expected):
    assert View(_Doc([]), 0, json).stride == expected


def test_view_target():
    doc = _Doc([])
    view = View(doc, 0, {"buffer": 0, "byteLength": 4, "target": 34963})
    assert view.target is Target.ELEMENT_ARRAY_BUFFER
    assert View(doc, 0, {"buffer": 0, "byteLength": 4}).target is None


def test_view_invalid_target_raises():
    doc = _Doc([])
    with pytest.raises(ValueError):
        View(doc, 0, {"buffer": 0, "byteLength": 4, "target": 7}).target


def test_view_length_and_extensions():
    view = View(_Doc([]), 2, {"buffer": 0, "byteLength": 10, "extensions": {"EXT_v": 1}})
    assert view.index == 2
    assert view.length == 10
    assert view.extension_value("EXT_v") == 1
    assert view.extras is None