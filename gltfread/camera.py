"""Cameras and their projections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union


def _extension_value(json: dict, name: str) -> Any:
    return (json.get("extensions") or {}).get(name)


@dataclass(frozen=True)
class Orthographic:
    """Values of an orthographic projection."""

    document: Any
    json: dict

    @property
    def xmag(self) -> float:
        """Horizontal magnification of the view."""
        return float(self.json["xmag"])

    @property
    def ymag(self) -> float:
        """Vertical magnification of the view."""
        return float(self.json["ymag"])

    @property
    def zfar(self) -> float:
        """Distance to the far clipping plane."""
        return float(self.json["zfar"])

    @property
    def znear(self) -> float:
        """Distance to the near clipping plane."""
        return float(self.json["znear"])

    @property
    def extensions(self) -> Optional[dict]:
        """Extension data, or None when there is none."""
        return self.json.get("extensions")

    def extension_value(self, name: str) -> Any:
        """The value of one extension, or None."""
        return _extension_value(self.json, name)

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")


@dataclass(frozen=True)
class Perspective:
    """Values of a perspective projection."""

    document: Any
    json: dict

    @property
    def aspect_ratio(self) -> Optional[float]:
        """Aspect ratio of the field of view, if given."""
        value = self.json.get("aspectRatio")
        return None if value is None else float(value)

    @property
    def yfov(self) -> float:
        """Vertical field of view in radians."""
        return float(self.json["yfov"])

    @property
    def zfar(self) -> Optional[float]:
        """Distance to the far clipping plane; None means infinite."""
        value = self.json.get("zfar")
        return None if value is None else float(value)

    @property
    def znear(self) -> float:
        """Distance to the near clipping plane."""
        return float(self.json["znear"])

    @property
    def extensions(self) -> Optional[dict]:
        """Extension data, or None when there is none."""
        return self.json.get("extensions")

    def extension_value(self, name: str) -> Any:
        """The value of one extension, or None."""
        return _extension_value(self.json, name)

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")


Projection = Union[Orthographic, Perspective]


@dataclass(frozen=True)
class Camera:
    """A camera projection, placed in the scene by the nodes referencing it."""

    document: Any
    index: int
    json: dict

    @property
    def name(self) -> Optional[str]:
        """Optional user-defined name."""
        return self.json.get("name")

    def projection(self) -> Projection:
        """The camera's projection; raises ValueError when it is not given."""
        kind = self.json.get("type")
        if kind == "orthographic":
            data = self.json.get("orthographic")
            if data is None:
                raise ValueError("orthographic camera has no orthographic parameters")
            return Orthographic(self.document, data)
        if kind == "perspective":
            data = self.json.get("perspective")
            if data is None:
                raise ValueError("perspective camera has no perspective parameters")
            return Perspective(self.document, data)
        raise ValueError(f"invalid camera type {kind!r}")

    @property
    def extensions(self) -> Optional[dict]:
        """Extension data, or None when there is none."""
        return self.json.get("extensions")

    def extension_value(self, name: str) -> Any:
        """The value of one extension, or None."""
        return _extension_value(self.json, name)

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")