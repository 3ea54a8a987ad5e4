"""Images of a glTF document and their decoded pixel data."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass
from typing import Any, Optional, Union

from PIL import Image as PILImage

from .buffer import View


class Format(enum.Enum):
    """Layout of decoded image pixel data."""

    R8 = "R8"
    R8G8 = "R8G8"
    R8G8B8 = "R8G8B8"
    R8G8B8A8 = "R8G8B8A8"
    R16 = "R16"
    R16G16 = "R16G16"
    R16G16B16 = "R16G16B16"
    R16G16B16A16 = "R16G16B16A16"
    R32G32B32FLOAT = "R32G32B32FLOAT"
    R32G32B32A32FLOAT = "R32G32B32A32FLOAT"


_MODE_FORMATS = {
    "L": Format.R8,
    "LA": Format.R8G8,
    "RGB": Format.R8G8B8,
    "RGBA": Format.R8G8B8A8,
    "I;16": Format.R16,
    "I;16L": Format.R16,
}


@dataclass(frozen=True)
class ViewSource:
    """Encoded image data stored in a buffer view."""

    view: View
    mime_type: str


@dataclass(frozen=True)
class UriSource:
    """Encoded image data stored at an external URI."""

    uri: str
    mime_type: Optional[str] = None


ImageSource = Union[ViewSource, UriSource]


def _nth(iterable, n: int, what: str):
    found = next(itertools.islice(iterable, n, None), None)
    if found is None:
        raise IndexError(f"{what} index {n} out of range")
    return found


@dataclass(frozen=True)
class Image:
    """Image data used to create a texture."""

    document: Any
    index: int
    json: dict

    @property
    def name(self) -> Optional[str]:
        """Optional user-defined name."""
        return self.json.get("name")

    @property
    def source(self) -> ImageSource:
        """Where the encoded image data lives."""
        view_index = self.json.get("bufferView")
        if view_index is not None:
            view = _nth(self.document.views(), int(view_index), "buffer view")
            mime_type = self.json.get("mimeType")
            if mime_type is None:
                raise ValueError("image stored in a buffer view has no mimeType")
            return ViewSource(view, mime_type)
        uri = self.json.get("uri")
        if uri is None:
            raise ValueError("image has neither a bufferView nor a uri")
        return UriSource(uri, self.json.get("mimeType"))

    @property
    def extensions(self) -> Optional[dict]:
        """Extension data, or None when there is none."""
        return self.json.get("extensions")

    def extension_value(self, name: str) -> Any:
        """The value of one extension, or None."""
        return (self.extensions or {}).get(name)

    @property
    def extras(self) -> Any:
        """Optional application specific data."""
        return self.json.get("extras")


def _swap_u16(data: bytes) -> bytes:
    swapped = bytearray(data)
    swapped[0::2], swapped[1::2] = data[1::2], data[0::2]
    return bytes(swapped)


@dataclass(frozen=True)
class ImageData:
    """Decoded pixel data of an imported image."""

    pixels: bytes
    format: Format
    width: int
    height: int

    @classmethod
    def from_pil(cls, image: PILImage.Image) -> "ImageData":
        """Take pixels from a decoded image; raises ValueError for unsupported modes."""
        mode = image.mode
        if mode in _MODE_FORMATS:
            fmt = _MODE_FORMATS[mode]
            pixels = image.tobytes()
        elif mode == "I;16B":
            fmt = Format.R16
            pixels = _swap_u16(image.tobytes())
        else:
            raise ValueError(f"unsupported image format: {mode}")
        width, height = image.size
        return cls(pixels=pixels, format=fmt, width=width, height=height)