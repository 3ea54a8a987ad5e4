"""Keyframe animations: channels, samplers and their targets."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Optional

from .accessor import Accessor

if TYPE_CHECKING:
    from .accessor_util import GetBufferData
    from .animation_util import Reader


class Interpolation(enum.Enum):
    """Keyframe interpolation algorithm."""

    LINEAR = "LINEAR"
    STEP = "STEP"
    CUBIC_SPLINE = "CUBICSPLINE"


class Property(enum.Enum):
    """The node property an animation channel modifies."""

    TRANSLATION = "translation"
    ROTATION = "rotation"
    SCALE = "scale"
    MORPH_TARGET_WEIGHTS = "weights"


def _nth(iterable, n: int, what: str):
    found = next(itertools.islice(iterable, n, None), None)
    if found is None:
        raise IndexError(f"{what} index {n} out of range")
    return found


@dataclass(frozen=True)
class Animation:
    """A keyframe animation."""

    document: Any
    index: int
    json: dict

    @property
    def name(self) -> Optional[str]:
        """Optional user-defined name."""
        return self.json.get("name")

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")

    def channels(self) -> Iterator["Channel"]:
        """Visit the channels, each targeting a sampler at a node property."""
        return (
            Channel(self, index, json)
            for index, json in enumerate(self.json.get("channels", ()))
        )

    def samplers(self) -> Iterator["Sampler"]:
        """Visit the samplers, each pairing input and output accessors."""
        return (
            Sampler(self, index, json)
            for index, json in enumerate(self.json.get("samplers", ()))
        )

    @property
    def extensions(self) -> Optional[dict]:
        """Extension data, or None when there is none."""
        return self.json.get("extensions")

    def extension_value(self, name: str) -> Any:
        """The value of one extension, or None."""
        return (self.extensions or {}).get(name)


@dataclass(frozen=True)
class Channel:
    """Targets an animation sampler at a node property."""

    animation: Animation
    index: int
    json: dict

    @property
    def sampler(self) -> "Sampler":
        """The sampler that computes the values for the target."""
        return _nth(self.animation.samplers(), int(self.json["sampler"]), "sampler")

    @property
    def target(self) -> "Target":
        """The node and property to modify."""
        return Target(self.animation, self.json["target"])

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")

    def reader(self, get_buffer_data: "GetBufferData") -> "Reader":
        """Construct a reader for this channel's keyframe data."""
        from .animation_util import Reader

        return Reader(self, get_buffer_data)


@dataclass(frozen=True)
class Target:
    """The node and property an animation channel targets."""

    animation: Animation
    json: dict

    @property
    def node_index(self) -> int:
        """Index of the target node."""
        return int(self.json["node"])

    @property
    def property(self) -> Property:
        """The node property to modify, or the morph target weights."""
        value = self.json.get("path")
        try:
            return Property(value)
        except ValueError:
            raise ValueError(f"invalid animation target path {value!r}") from None

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")


@dataclass(frozen=True)
class Sampler:
    """A keyframe graph: input and output accessors with an interpolation."""

    animation: Animation
    index: int
    json: dict

    @property
    def input(self) -> Accessor:
        """The accessor holding keyframe input values such as times."""
        return _nth(self.animation.document.accessors(), int(self.json["input"]), "accessor")

    @property
    def output(self) -> Accessor:
        """The accessor holding keyframe output values."""
        return _nth(self.animation.document.accessors(), int(self.json["output"]), "accessor")

    @property
    def interpolation(self) -> Interpolation:
        """The keyframe interpolation algorithm."""
        value = self.json.get("interpolation", "LINEAR")
        try:
            return Interpolation(value)
        except ValueError:
            raise ValueError(f"invalid interpolation {value!r}") from None

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")