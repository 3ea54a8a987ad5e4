"""Reading the keyframe inputs and outputs of an animation channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .accessor import DataType
from .accessor_util import (
    COMPONENT_CODES,
    F32,
    GetBufferData,
    ItemIter,
    ItemType,
    SparseIter,
    read_accessor,
)
from .animation import Channel, Property

AccessorIter = Union[ItemIter, SparseIter]

_VEC3_F32 = ItemType("f", 3)

_OUTPUT_TYPES = (DataType.I8, DataType.U8, DataType.I16, DataType.U16, DataType.F32)


@dataclass(frozen=True)
class ReadOutputs:
    """Keyframe output values together with what they describe.

    Translations and scales are ``(x, y, z)`` floats, rotations are 4-tuples of
    ``data_type`` components and morph target weights are single components.
    """

    kind: Property
    data_type: DataType
    values: AccessorIter

    def __iter__(self) -> Iterator:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class Reader:
    """Reads the keyframe data of an animation channel."""

    channel: Channel
    get_buffer_data: GetBufferData

    def read_inputs(self) -> Optional[AccessorIter]:
        """Visit the input samples, or None when the data is unavailable."""
        return read_accessor(self.channel.sampler.input, F32, self.get_buffer_data)

    def read_outputs(self) -> Optional[ReadOutputs]:
        """Visit the output samples, or None when the data is unavailable."""
        output = self.channel.sampler.output
        kind = self.channel.target.property
        if kind in (Property.TRANSLATION, Property.SCALE):
            data_type = DataType.F32
            item = _VEC3_F32
        else:
            data_type = output.data_type
            if data_type not in _OUTPUT_TYPES:
                raise ValueError(f"unsupported {kind.value} component type {data_type.name}")
            count = 4 if kind is Property.ROTATION else 1
            item = ItemType(COMPONENT_CODES[data_type], count)
        values = read_accessor(output, item, self.get_buffer_data)
        if values is None:
            return None
        return ReadOutputs(kind, data_type, values)