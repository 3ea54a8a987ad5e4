"""Punctual lights (KHR_lights_punctual)."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Optional


class Kind(enum.Enum):
    """Light subcategory."""

    DIRECTIONAL = "directional"
    POINT = "point"
    SPOT = "spot"


@dataclass(frozen=True)
class Spot:
    """Cone angles of a spot light, in radians from the centre of the cone."""

    inner_cone_angle: float
    outer_cone_angle: float


@dataclass(frozen=True)
class Light:
    """A light in the scene."""

    document: Any
    index: int
    json: dict

    @property
    def color(self) -> tuple[float, float, float]:
        """Colour of the light source."""
        r, g, b = self.json.get("color", (1.0, 1.0, 1.0))
        return (float(r), float(g), float(b))

    @property
    def name(self) -> Optional[str]:
        """Optional user-defined name."""
        return self.json.get("name")

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")

    @property
    def intensity(self) -> float:
        """Candela for point and spot lights, lux for directional lights."""
        return float(self.json.get("intensity", 1.0))

    @property
    def range(self) -> Optional[float]:
        """Distance at which the intensity may be taken as zero."""
        value = self.json.get("range")
        return None if value is None else float(value)

    @property
    def kind(self) -> Kind:
        """The light subcategory."""
        value = self.json.get("type")
        try:
            return Kind(value)
        except ValueError:
            raise ValueError(f"invalid light type {value!r}") from None

    @property
    def spot(self) -> Optional[Spot]:
        """Cone angles for a spot light; None for other kinds."""
        if self.kind is not Kind.SPOT:
            return None
        args = self.json.get("spot")
        if args is None:
            raise ValueError("spot light has no spot parameters")
        return Spot(
            inner_cone_angle=float(args.get("innerConeAngle", 0.0)),
            outer_cone_angle=float(args.get("outerConeAngle", math.pi / 4)),
        )