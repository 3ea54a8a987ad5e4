"""Read, validate and import glTF 2.0 and binary GLB assets."""

__version__ = "0.1.0"