"""Texture, sampler and texture reference objects of glTF JSON."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from .validation import Checked, JsonPath, Report, ValidationError, validate_value

NEAREST = 9728
LINEAR = 9729
NEAREST_MIPMAP_NEAREST = 9984
LINEAR_MIPMAP_NEAREST = 9985
NEAREST_MIPMAP_LINEAR = 9986
LINEAR_MIPMAP_LINEAR = 9987
CLAMP_TO_EDGE = 33_071
MIRRORED_REPEAT = 33_648
REPEAT = 10_497

VALID_MAG_FILTERS = (NEAREST, LINEAR)
VALID_MIN_FILTERS = (
    NEAREST,
    LINEAR,
    NEAREST_MIPMAP_NEAREST,
    LINEAR_MIPMAP_NEAREST,
    NEAREST_MIPMAP_LINEAR,
    LINEAR_MIPMAP_LINEAR,
)
VALID_WRAPPING_MODES = (CLAMP_TO_EDGE, MIRRORED_REPEAT, REPEAT)

#: Marker for a texture that names no image source.
SOURCE_NONE = 0xFFFFFFFF

_U32_MASK = 0xFFFFFFFF
_U64_MAX = 2**64 - 1


def _checked_gl(enum_cls: type[enum.Enum], value: Any, valid: tuple[int, ...]) -> Checked:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise ValueError(f"invalid value {value!r}, expected any of: {list(valid)}")
    try:
        return Checked.valid(enum_cls(value & _U32_MASK))
    except ValueError:
        return Checked.invalid()


def _serialize_checked(checked: Checked) -> int:
    if not checked.is_valid:
        raise ValueError("invalid item")
    return checked.item.as_gl_enum()


def _read_index(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MASK:
        raise ValueError(f"invalid index for `{name}`: {value!r}")
    return value


def _validate_index(
    root: Mapping, collection: str, index: int, path: JsonPath, report: Report
) -> None:
    items = root.get(collection) or ()
    if not 0 <= index < len(items):
        report(path, ValidationError.INDEX_OUT_OF_BOUNDS)


class MagFilter(enum.Enum):
    """Magnification filter."""

    NEAREST = NEAREST
    LINEAR = LINEAR

    def as_gl_enum(self) -> int:
        """Return the OpenGL enum value."""
        return self.value

    @classmethod
    def checked(cls, value: Any) -> Checked["MagFilter"]:
        """Read a filter from its OpenGL enum value."""
        return _checked_gl(cls, value, VALID_MAG_FILTERS)


class MinFilter(enum.Enum):
    """Minification filter."""

    NEAREST = NEAREST
    LINEAR = LINEAR
    NEAREST_MIPMAP_NEAREST = NEAREST_MIPMAP_NEAREST
    LINEAR_MIPMAP_NEAREST = LINEAR_MIPMAP_NEAREST
    NEAREST_MIPMAP_LINEAR = NEAREST_MIPMAP_LINEAR
    LINEAR_MIPMAP_LINEAR = LINEAR_MIPMAP_LINEAR

    def as_gl_enum(self) -> int:
        """Return the OpenGL enum value."""
        return self.value

    @classmethod
    def checked(cls, value: Any) -> Checked["MinFilter"]:
        """Read a filter from its OpenGL enum value."""
        return _checked_gl(cls, value, VALID_MIN_FILTERS)


class WrappingMode(enum.Enum):
    """Texture co-ordinate wrapping mode."""

    CLAMP_TO_EDGE = CLAMP_TO_EDGE
    MIRRORED_REPEAT = MIRRORED_REPEAT
    REPEAT = REPEAT

    def as_gl_enum(self) -> int:
        """Return the OpenGL enum value."""
        return self.value

    @classmethod
    def checked(cls, value: Any) -> Checked["WrappingMode"]:
        """Read a wrapping mode from its OpenGL enum value."""
        return _checked_gl(cls, value, VALID_WRAPPING_MODES)


def _default_wrap() -> Checked[WrappingMode]:
    return Checked.valid(WrappingMode.REPEAT)


@dataclass
class Sampler:
    """Texture sampler properties for filtering and wrapping modes."""

    mag_filter: Optional[Checked[MagFilter]] = None
    min_filter: Optional[Checked[MinFilter]] = None
    name: Optional[str] = None
    wrap_s: Checked[WrappingMode] = field(default_factory=_default_wrap)
    wrap_t: Checked[WrappingMode] = field(default_factory=_default_wrap)
    extensions: Optional[dict] = None
    extras: Any = None

    @classmethod
    def from_json(cls, data: Mapping) -> "Sampler":
        """Build a sampler from its JSON object."""
        mag = data.get("magFilter")
        min_ = data.get("minFilter")
        sampler = cls(
            mag_filter=None if mag is None else MagFilter.checked(mag),
            min_filter=None if min_ is None else MinFilter.checked(min_),
            name=data.get("name"),
            extensions=data.get("extensions"),
            extras=data.get("extras"),
        )
        if "wrapS" in data:
            sampler.wrap_s = WrappingMode.checked(data["wrapS"])
        if "wrapT" in data:
            sampler.wrap_t = WrappingMode.checked(data["wrapT"])
        return sampler

    def to_json(self) -> dict:
        """Return the JSON object; raises ValueError for invalid values."""
        out: dict = {}
        if self.mag_filter is not None:
            out["magFilter"] = _serialize_checked(self.mag_filter)
        if self.min_filter is not None:
            out["minFilter"] = _serialize_checked(self.min_filter)
        if self.name is not None:
            out["name"] = self.name
        out["wrapS"] = _serialize_checked(self.wrap_s)
        out["wrapT"] = _serialize_checked(self.wrap_t)
        if self.extensions is not None:
            out["extensions"] = self.extensions
        if self.extras is not None:
            out["extras"] = self.extras
        return out

    def validate(self, root: Mapping, path: JsonPath, report: Report) -> None:
        """Report invalid filter or wrapping values."""
        validate_value(self.mag_filter, root, path.field("magFilter"), report)
        validate_value(self.min_filter, root, path.field("minFilter"), report)
        self.wrap_s.validate(root, path.field("wrapS"), report)
        self.wrap_t.validate(root, path.field("wrapT"), report)
        validate_value(self.extensions, root, path.field("extensions"), report)


@dataclass
class Texture:
    """A texture and its sampler."""

    source: int = SOURCE_NONE
    sampler: Optional[int] = None
    name: Optional[str] = None
    extensions: Optional[dict] = None
    extras: Any = None

    @classmethod
    def from_json(cls, data: Mapping) -> "Texture":
        """Build a texture from its JSON object."""
        sampler = data.get("sampler")
        source = data.get("source")
        return cls(
            source=SOURCE_NONE if source is None else _read_index(source, "source"),
            sampler=None if sampler is None else _read_index(sampler, "sampler"),
            name=data.get("name"),
            extensions=data.get("extensions"),
            extras=data.get("extras"),
        )

    def to_json(self) -> dict:
        """Return the JSON object, leaving out empty members."""
        out: dict = {}
        if self.name is not None:
            out["name"] = self.name
        if self.sampler is not None:
            out["sampler"] = self.sampler
        if self.source != SOURCE_NONE:
            out["source"] = self.source
        if self.extensions is not None:
            out["extensions"] = self.extensions
        if self.extras is not None:
            out["extras"] = self.extras
        return out

    def primary_source(self) -> int:
        """The image index to use, preferring a non-empty WebP source."""
        webp = (self.extensions or {}).get("EXT_texture_webp")
        if isinstance(webp, Mapping):
            candidate = webp.get("source", SOURCE_NONE)
            if candidate != SOURCE_NONE:
                return candidate
        return self.source

    def validate(self, root: Mapping, path: JsonPath, report: Report) -> None:
        """Report out-of-range indices and a missing image source."""
        if self.sampler is not None:
            _validate_index(root, "samplers", self.sampler, path.field("sampler"), report)
        validate_value(self.extensions, root, path.field("extensions"), report)
        source = self.primary_source()
        if source == SOURCE_NONE:
            report(path.field("source"), ValidationError.MISSING)
        else:
            _validate_index(root, "images", source, path.field("source"), report)


@dataclass
class Info:
    """Reference to a texture."""

    index: int
    tex_coord: int = 0
    extensions: Optional[dict] = None
    extras: Any = None

    @classmethod
    def from_json(cls, data: Mapping) -> "Info":
        """Build a texture reference from its JSON object."""
        if "index" not in data:
            raise ValueError("missing field `index`")
        return cls(
            index=_read_index(data["index"], "index"),
            tex_coord=int(data.get("texCoord", 0)),
            extensions=data.get("extensions"),
            extras=data.get("extras"),
        )

    def to_json(self) -> dict:
        """Return the JSON object."""
        out: dict = {"index": self.index, "texCoord": self.tex_coord}
        if self.extensions is not None:
            out["extensions"] = self.extensions
        if self.extras is not None:
            out["extras"] = self.extras
        return out

    def validate(self, root: Mapping, path: JsonPath, report: Report) -> None:
        """Report a texture index that is out of range."""
        _validate_index(root, "textures", self.index, path.field("index"), report)
        validate_value(self.extensions, root, path.field("extensions"), report)