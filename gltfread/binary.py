"""Reading and writing binary glTF (GLB) containers."""

from __future__ import annotations

import enum
import io
import struct
from dataclasses import dataclass
from typing import BinaryIO, Optional

MAGIC = b"glTF"
_HEADER_SIZE = 12
_CHUNK_HEADER_SIZE = 8
_U32_MAX = 0xFFFFFFFF


class ChunkType(enum.Enum):
    """GLB chunk type."""

    JSON = b"JSON"
    BIN = b"BIN\x00"


_CHUNK_LENGTH_MESSAGES = {
    ChunkType.JSON: "JSON chunk length exceeds that of slice",
    ChunkType.BIN: "BIN\\0 chunk length exceeds that of slice",
}

_CHUNK_TYPE_MESSAGES = {
    ChunkType.JSON: "was not expecting JSON chunk",
    ChunkType.BIN: "was not expecting BIN\\0 chunk",
}


class GlbError(Exception):
    """Raised when binary glTF cannot be read or written."""


class GlbVersionError(GlbError):
    """The GLB header names a version other than 2."""

    def __init__(self, version: int) -> None:
        super().__init__("unsupported version")
        self.version = version


class GlbMagicError(GlbError):
    """The data does not start with the glTF magic."""

    def __init__(self, magic: bytes) -> None:
        super().__init__("not glTF magic")
        self.magic = magic


class GlbLengthError(GlbError):
    """The length in the GLB header exceeds the data available."""

    def __init__(self, length: int, length_read: int) -> None:
        super().__init__("could not completely read the object")
        self.length = length
        self.length_read = length_read


class GlbChunkLengthError(GlbError):
    """A chunk claims more bytes than remain in the data."""

    def __init__(self, ty: ChunkType, length: int, length_read: int) -> None:
        super().__init__(_CHUNK_LENGTH_MESSAGES[ty])
        self.ty = ty
        self.length = length
        self.length_read = length_read


class GlbChunkTypeError(GlbError):
    """A chunk of this type was not expected at this position."""

    def __init__(self, ty: ChunkType) -> None:
        super().__init__(_CHUNK_TYPE_MESSAGES[ty])
        self.ty = ty


class GlbUnknownChunkTypeError(GlbError):
    """A chunk carries a type tag that is neither JSON nor BIN."""

    def __init__(self, ty: bytes) -> None:
        super().__init__("unknown chunk type")
        self.ty = ty


def _read_exact(reader: BinaryIO, count: int) -> bytes:
    parts = []
    remaining = count
    while remaining > 0:
        block = reader.read(remaining)
        if not block:
            raise GlbError("failed to fill whole buffer")
        parts.append(block)
        remaining -= len(block)
    return b"".join(parts)


def _read_u32(reader: BinaryIO) -> int:
    return struct.unpack("<I", _read_exact(reader, 4))[0]


def _aligned(n: int) -> int:
    return (n + 3) & ~3


@dataclass(frozen=True)
class Header:
    """The 12-byte header of a GLB file."""

    magic: bytes
    version: int
    length: int

    @classmethod
    def _read(cls, reader: BinaryIO) -> "Header":
        magic = _read_exact(reader, 4)
        # Only the magic is checked here; version and length are the caller's concern.
        if magic != MAGIC:
            raise GlbMagicError(magic)
        version = _read_u32(reader)
        length = _read_u32(reader)
        return cls(magic, version, length)


def _read_chunk_header(reader: BinaryIO) -> tuple[int, ChunkType]:
    length = _read_u32(reader)
    tag = _read_exact(reader, 4)
    try:
        ty = ChunkType(tag)
    except ValueError:
        raise GlbUnknownChunkTypeError(tag) from None
    return length, ty


def _take_chunk(data: bytes, expected: ChunkType) -> tuple[bytes, bytes]:
    length, ty = _read_chunk_header(io.BytesIO(data))
    if ty is not expected:
        raise GlbChunkTypeError(ty)
    rest = data[_CHUNK_HEADER_SIZE:]
    if length > len(rest):
        raise GlbChunkLengthError(ty, length, len(rest))
    return rest[:length], rest[length:]


def _split(data: bytes) -> tuple[bytes, Optional[bytes]]:
    json, rest = _take_chunk(data, ChunkType.JSON)
    bin_chunk = None
    if rest:
        bin_chunk, _ = _take_chunk(rest, ChunkType.BIN)
    return json, bin_chunk


@dataclass
class Glb:
    """Binary glTF contents: header, JSON chunk and optional BIN chunk."""

    header: Header
    json: bytes
    bin: Optional[bytes] = None

    def _total_length(self) -> int:
        length = _aligned(_HEADER_SIZE + _CHUNK_HEADER_SIZE + len(self.json))
        if self.bin is not None:
            length = _aligned(length + _CHUNK_HEADER_SIZE + len(self.bin))
        return length

    def to_writer(self, writer: BinaryIO) -> None:
        """Write the GLB container to a binary stream."""
        total = self._total_length()
        if total > _U32_MAX:
            raise GlbError("binary glTF exceeds the 32-bit length limit")
        writer.write(MAGIC + struct.pack("<II", 2, total))

        json_length = _aligned(len(self.json))
        writer.write(struct.pack("<I", json_length) + ChunkType.JSON.value)
        writer.write(bytes(self.json))
        writer.write(b" " * (json_length - len(self.json)))

        if self.bin is not None:
            bin_length = _aligned(len(self.bin))
            writer.write(struct.pack("<I", bin_length) + ChunkType.BIN.value)
            writer.write(bytes(self.bin))
            writer.write(b"\x00" * (bin_length - len(self.bin)))

    def to_bytes(self) -> bytes:
        """Return the GLB container as bytes."""
        out = io.BytesIO()
        self.to_writer(out)
        return out.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Glb":
        """Split GLB bytes into header, JSON chunk and optional BIN chunk."""
        data = bytes(data)
        header = Header._read(io.BytesIO(data))
        rest = data[_HEADER_SIZE:]
        contents_length = header.length - _HEADER_SIZE
        if contents_length < 0 or contents_length > len(rest):
            raise GlbLengthError(contents_length, len(rest))
        if header.version != 2:
            raise GlbVersionError(header.version)
        json, bin_chunk = _split(rest)
        return cls(header, json, bin_chunk)

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> "Glb":
        """Read GLB from a binary stream, stopping early on invalid data."""
        header = Header._read(reader)
        if header.version != 2:
            raise GlbVersionError(header.version)
        body_length = header.length - _HEADER_SIZE
        if body_length < 0:
            raise GlbLengthError(body_length, 0)
        body = _read_exact(reader, body_length)
        json, bin_chunk = _split(body)
        return cls(header, json, bin_chunk)