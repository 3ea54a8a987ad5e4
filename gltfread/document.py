"""The root of a glTF document and iteration over its top-level objects."""

from __future__ import annotations

import json as _json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Sequence, TypeVar, Union

from .accessor import Accessor
from .animation import Animation
from .buffer import Buffer, View
from .camera import Camera
from .image import Image
from .lights import Light
from .variants import Variant

T = TypeVar("T")


class _Items(Generic[T]):
    """An iterator over document objects that knows how many remain."""

    def __init__(self, items: Sequence[Any], make: Callable[[int, Any], T]) -> None:
        self._iter = enumerate(items)
        self._remaining = len(items)
        self._make = make

    def __iter__(self) -> "_Items[T]":
        return self

    def __next__(self) -> T:
        index, json = next(self._iter)
        self._remaining -= 1
        return self._make(index, json)

    def __len__(self) -> int:
        return self._remaining


class _Strings:
    """An iterator over extension names that knows how many remain."""

    def __init__(self, names: Sequence[str]) -> None:
        self._iter = iter(names)
        self._remaining = len(names)

    def __iter__(self) -> "_Strings":
        return self

    def __next__(self) -> str:
        name = next(self._iter)
        self._remaining -= 1
        return name

    def __len__(self) -> int:
        return self._remaining


def _list(value: Any, what: str) -> Sequence[Any]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"`{what}` must be an array")
    return value


@dataclass(frozen=True, eq=False)
class Document:
    """A parsed glTF JSON document."""

    root: dict

    @classmethod
    def from_json(cls, data: Union[Mapping, str, bytes, bytearray]) -> "Document":
        """Build a document from a JSON object or JSON text."""
        if isinstance(data, (str, bytes, bytearray)):
            data = _json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError("a glTF document must be a JSON object")
        return cls(dict(data))

    def _items(self, key: str, make: Callable[[int, Any], T]) -> _Items[T]:
        return _Items(_list(self.root.get(key), key), make)

    def _extension(self, name: str) -> Mapping:
        extensions = self.root.get("extensions") or {}
        found = extensions.get(name) or {}
        if not isinstance(found, Mapping):
            raise ValueError(f"extension `{name}` must be an object")
        return found

    def accessors(self) -> _Items[Accessor]:
        """Visit every accessor."""
        return self._items("accessors", lambda i, j: Accessor(self, i, j))

    def animations(self) -> _Items[Animation]:
        """Visit every animation."""
        return self._items("animations", lambda i, j: Animation(self, i, j))

    def buffers(self) -> _Items[Buffer]:
        """Visit every buffer."""
        return self._items("buffers", lambda i, j: Buffer(self, i, j))

    def views(self) -> _Items[View]:
        """Visit every buffer view."""
        return self._items("bufferViews", lambda i, j: View(self, i, j))

    def cameras(self) -> _Items[Camera]:
        """Visit every camera."""
        return self._items("cameras", lambda i, j: Camera(self, i, j))

    def images(self) -> _Items[Image]:
        """Visit every image."""
        return self._items("images", lambda i, j: Image(self, i, j))

    def lights(self) -> _Items[Light]:
        """Visit every punctual light (KHR_lights_punctual)."""
        lights = _list(self._extension("KHR_lights_punctual").get("lights"), "lights")
        return _Items(lights, lambda i, j: Light(self, i, j))

    def variants(self) -> _Items[Variant]:
        """Visit every material variant (KHR_materials_variants)."""
        variants = _list(
            self._extension("KHR_materials_variants").get("variants"), "variants"
        )
        return _Items(variants, lambda i, j: Variant(self, i, j))

    def extensions_used(self) -> _Strings:
        """Visit the names of the extensions the asset uses."""
        return _Strings(_list(self.root.get("extensionsUsed"), "extensionsUsed"))

    def extensions_required(self) -> _Strings:
        """Visit the names of the extensions the asset requires."""
        return _Strings(_list(self.root.get("extensionsRequired"), "extensionsRequired"))