"""Loading the buffer and image data a glTF document refers to."""

from __future__ import annotations

import base64
import binascii
import io
import sys
from array import array
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union
from urllib.parse import unquote

from PIL import Image as PILImage

from .buffer import BufferSource
from .image import ImageData, ImageSource, ViewSource


class GltfImportError(Exception):
    """Raised when data referenced by a document cannot be imported."""


@dataclass(frozen=True)
class DataUri:
    """``data:[<media type>];base64,<data>``."""

    media_type: Optional[str]
    data: str


@dataclass(frozen=True)
class FileUri:
    """``file:[//]<absolute path>``; authorities are not supported."""

    path: str


@dataclass(frozen=True)
class RelativeUri:
    """A percent-decoded relative reference such as ``../foo.bin``."""

    path: str


@dataclass(frozen=True)
class UnsupportedUri:
    """A URI with a scheme the importer does not handle."""


ParsedUri = Union[DataUri, FileUri, RelativeUri, UnsupportedUri]

_PathLike = Union[str, Path]


def parse_uri(uri: str) -> ParsedUri:
    """Classify a URI by the schemes the importer supports."""
    if ":" not in uri:
        return RelativeUri(unquote(uri, errors="strict"))
    if uri.startswith("data:"):
        parts = uri[len("data:"):].split(";base64,")
        if len(parts) > 1:
            return DataUri(parts[0], parts[1])
        return DataUri(None, parts[0])
    if uri.startswith("file://"):
        return FileUri(uri[len("file://"):])
    if uri.startswith("file:"):
        return FileUri(uri[len("file:"):])
    return UnsupportedUri()


def _decode_base64(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise GltfImportError(f"invalid base64 data: {exc}") from exc


def _external_reference() -> GltfImportError:
    return GltfImportError("external reference in slice only import")


def read_uri(base: Optional[_PathLike], uri: str) -> bytes:
    """Read the bytes a URI names; files resolve against ``base``."""
    parsed = parse_uri(uri)
    if isinstance(parsed, DataUri):
        return _decode_base64(parsed.data)
    if isinstance(parsed, UnsupportedUri):
        raise GltfImportError("unsupported URI scheme")
    if base is None:
        raise _external_reference()
    if isinstance(parsed, FileUri):
        return Path(parsed.path).read_bytes()
    return (Path(base) / parsed.path).read_bytes()


def load_buffer(
    source: BufferSource, base: Optional[_PathLike], blob: Optional[bytes]
) -> bytes:
    """Read one buffer, padded with zeros to a multiple of four bytes."""
    if source.is_bin:
        if blob is None:
            raise GltfImportError("missing binary portion of binary glTF")
        data = bytes(blob)
    else:
        data = read_uri(base, source.uri)
    return data + b"\x00" * (-len(data) % 4)


def import_buffers(
    document: Any, base: Optional[_PathLike], blob: Optional[bytes]
) -> list[bytes]:
    """Read every buffer of a document; the GLB blob fills the first BIN buffer."""
    buffers = []
    for buffer in document.buffers():
        source = buffer.source
        data = load_buffer(source, base, blob)
        if source.is_bin:
            blob = None
        if len(data) < buffer.length:
            raise GltfImportError(
                f"buffer {buffer.index}: expected {buffer.length} bytes "
                f"but found {len(data)}"
            )
        buffers.append(data)
    return buffers


_MIME_FORMATS = {"image/png": "PNG", "image/jpeg": "JPEG", "image/webp": "WEBP"}
_EXTENSION_FORMATS = {"png": "PNG", "jpg": "JPEG", "jpeg": "JPEG", "webp": "WEBP"}


def _guess_format(encoded: bytes) -> str:
    if encoded.startswith(b"\x89PNG\r\n\x1a\n"):
        return "PNG"
    if encoded.startswith(b"\xff\xd8\xff"):
        return "JPEG"
    if encoded[:4] == b"RIFF" and encoded[8:12] == b"WEBP":
        return "WEBP"
    raise GltfImportError("unsupported image encoding")


def _format_for(key: Optional[str], table: dict, encoded: bytes) -> str:
    return table.get(key) or _guess_format(encoded)


def _normalize(image: PILImage.Image) -> PILImage.Image:
    mode = image.mode
    if mode == "P":
        return image.convert("RGBA" if "transparency" in image.info else "RGB")
    if mode == "PA":
        return image.convert("RGBA")
    if mode == "1":
        return image.convert("L")
    if mode in ("CMYK", "YCbCr", "LAB", "HSV"):
        return image.convert("RGB")
    if mode == "I":
        values = array("H", (min(max(v, 0), 0xFFFF) for v in image.getdata()))
        if sys.byteorder == "big":
            values.byteswap()
        return PILImage.frombytes("I;16", image.size, values.tobytes())
    return image.copy()


def _decode(encoded: bytes, fmt: str) -> ImageData:
    try:
        with PILImage.open(io.BytesIO(encoded), formats=[fmt]) as opened:
            opened.load()
            decoded = _normalize(opened)
    except (OSError, SyntaxError, ValueError, EOFError) as exc:
        raise GltfImportError(f"image decoding failed: {exc}") from exc
    try:
        return ImageData.from_pil(decoded)
    except ValueError as exc:
        raise GltfImportError(str(exc)) from exc


def load_image(
    source: ImageSource, base: Optional[_PathLike], buffer_data: Sequence[bytes]
) -> ImageData:
    """Read and decode one image."""
    if isinstance(source, ViewSource):
        view = source.view
        parent = buffer_data[view.buffer.index]
        begin = view.offset
        end = begin + view.length
        if end > len(parent):
            raise GltfImportError("image buffer view exceeds its buffer")
        encoded = bytes(parent[begin:end])
        return _decode(encoded, _format_for(source.mime_type, _MIME_FORMATS, encoded))

    if base is None:
        raise _external_reference()
    parsed = parse_uri(source.uri)
    if isinstance(parsed, DataUri) and parsed.media_type is not None:
        encoded = _decode_base64(parsed.data)
        fmt = _format_for(parsed.media_type, _MIME_FORMATS, encoded)
    elif isinstance(parsed, UnsupportedUri):
        raise GltfImportError("unsupported URI scheme")
    else:
        encoded = read_uri(base, source.uri)
        if source.mime_type is not None:
            fmt = _format_for(source.mime_type, _MIME_FORMATS, encoded)
        else:
            extension = source.uri.rsplit(".", 1)[-1]
            fmt = _format_for(extension, _EXTENSION_FORMATS, encoded)
    return _decode(encoded, fmt)


def import_images(
    document: Any, base: Optional[_PathLike], buffer_data: Sequence[bytes]
) -> list[ImageData]:
    """Read and decode every image of a document."""
    return [load_image(image.source, base, buffer_data) for image in document.images()]