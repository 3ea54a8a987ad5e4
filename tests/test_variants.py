import pytest

from gltfread.variants import Mapping, Variant


def test_variant_name_and_index():
    variant = Variant(None, 2, {"name": "midnight"})
    assert variant.name == "midnight"
    assert variant.index == 2


def test_variant_missing_name():
    with pytest.raises(KeyError):
        Variant(None, 0, {}).name


def test_mapping_variants_and_material():
    mapping = Mapping(None, {"material": 3, "variants": [0, 2]})
    assert mapping.variants == (0, 2)
    assert mapping.material_index == 3


def test_mapping_without_variants_is_empty():
    mapping = Mapping(None, {"material": 1})
    assert mapping.variants == ()
    assert mapping.material_index == 1


def test_mapping_keeps_document():
    document = object()
    mapping = Mapping(document, {"material": 0, "variants": [1]})
    assert mapping.document is document