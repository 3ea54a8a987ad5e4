"""Material variants (KHR_materials_variants)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Variant:
    """A named material variant of a document."""

    document: Any
    index: int
    json: dict

    @property
    def name(self) -> str:
        """Name of the variant."""
        return self.json["name"]


@dataclass(frozen=True)
class Mapping:
    """Maps a set of variants to the material a primitive uses for them."""

    document: Any
    json: dict

    @property
    def variants(self) -> tuple[int, ...]:
        """Indices of the variants that use this material."""
        return tuple(self.json.get("variants", ()))

    @property
    def material_index(self) -> int:
        """Index of the material used for these variants."""
        return int(self.json["material"])