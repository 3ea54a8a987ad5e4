import math

import pytest

from gltfread.lights import Kind, Light, Spot


def test_point_light_fields():
    light = Light(
        None,
        3,
        {"type": "point", "color": [0.5, 0.25, 1.0], "intensity": 20.0, "range": 7.5, "name": "lamp"},
    )
    assert light.index == 3
    assert light.kind is Kind.POINT
    assert light.color == (0.5, 0.25, 1.0)
    assert light.intensity == 20.0
    assert light.range == 7.5
    assert light.name == "lamp"
    assert light.spot is None


def test_defaults():
    light = Light(None, 0, {"type": "directional"})
    assert light.kind is Kind.DIRECTIONAL
    assert light.color == (1.0, 1.0, 1.0)
    assert light.intensity == 1.0
    assert light.range is None
    assert light.name is None
    assert light.extras is None


def test_spot_light():
    light = Light(None, 0, {"type": "spot", "spot": {"innerConeAngle": 0.1, "outerConeAngle": 0.6}})
    assert light.kind is Kind.SPOT
    assert light.spot == Spot(inner_cone_angle=0.1, outer_cone_angle=0.6)


def test_spot_defaults():
    spot = Light(None, 0, {"type": "spot", "spot": {}}).spot
    assert spot.inner_cone_angle == 0.0
    assert spot.outer_cone_angle == pytest.approx(math.pi / 4)
    assert spot.inner_cone_angle < spot.outer_cone_angle


def test_spot_without_parameters_fails():
    with pytest.raises(ValueError):
        Light(None, 0, {"type": "spot"}).spot


@pytest.mark.parametrize("value", ["area", None])
def test_invalid_type_fails(value):
    with pytest.raises(ValueError, match="invalid light type"):
        Light(None, 0, {"type": value}).kind


def test_extras():
    assert Light(None, 0, {"type": "point", "extras": {"tag": "x"}}).extras == {"tag": "x"}