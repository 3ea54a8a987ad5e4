# gltfread

A library for reading glTF 2.0 assets: the JSON form and the binary GLB
container, the buffers and images they refer to, and the typed data inside
accessors and animation channels.

## What it offers

- `gltfread.binary.Glb` splits a `.glb` file into its `Header`, JSON chunk
  and optional BIN chunk (`Glb.from_bytes`, `Glb.from_reader`) and writes one
  back out (`Glb.to_bytes`, `Glb.to_writer`), padding the JSON chunk with
  spaces and the BIN chunk with zeros to four-byte boundaries. Malformed
  input raises a subclass of `GlbError`, such as `GlbMagicError`,
  `GlbVersionError` or `GlbChunkLengthError`.
- `gltfread.document.Document` wraps the parsed JSON (`Document.from_json`
  takes a mapping or JSON text) and iterates over accessors, animations,
  buffers, buffer views, cameras, images, punctual lights
  (`KHR_lights_punctual`), material variants (`KHR_materials_variants`) and
  the names in `extensionsUsed` and `extensionsRequired`. Each iterator
  supports `len()` for the items that remain.
- `gltfread.importer` classifies URIs with `parse_uri` (`DataUri`, `FileUri`,
  `RelativeUri`, `UnsupportedUri`), reads them with `read_uri`, and loads the
  data a document refers to with `import_buffers` and `import_images`.
  Buffers are padded with zeros to a multiple of four bytes. Images are
  decoded with Pillow into `gltfread.image.ImageData` (pixels, `Format`,
  width, height). Problems raise `GltfImportError`.
- `gltfread.accessor_util.read_accessor` iterates over an accessor's items
  for a given `ItemType`, substituting sparse values where the accessor has
  sparse storage; it returns `None` when the buffer data is not available.
- `gltfread.animation.Channel.reader` returns a
  `gltfread.animation_util.Reader` whose `read_inputs` and `read_outputs`
  yield keyframe times and translations, rotations, scales or morph target
  weights.
- `gltfread.camera.Camera.projection` gives an `Orthographic` or
  `Perspective` projection.
- `gltfread.texture` holds `Sampler`, `Texture` and `Info` with
  `from_json`/`to_json` and `validate`; `gltfread.validation` holds
  `ValidationError`, `JsonPath` and `Checked`. Validation reports each
  problem to a callback with a path such as `textures[0].source`.

## Example

```python
import json
from pathlib import Path

from gltfread.accessor_util import ItemType, read_accessor
from gltfread.binary import Glb
from gltfread.document import Document
from gltfread.importer import import_buffers, import_images

path = Path("model.glb")
glb = Glb.from_bytes(path.read_bytes())
document = Document.from_json(json.loads(glb.json))

buffers = import_buffers(document, path.parent, glb.bin)
images = import_images(document, path.parent, buffers)

def get_buffer_data(buffer):
    return buffers[buffer.index]

for accessor in document.accessors():
    print(accessor.index, accessor.count, accessor.data_type, accessor.dimensions)

for animation in document.animations():
    for channel in animation.channels():
        reader = channel.reader(get_buffer_data)
        times = reader.read_inputs()
        outputs = reader.read_outputs()
        if times is not None and outputs is not None:
            print(outputs.kind, list(times), list(outputs))
```

Passing `None` as the base directory to `import_buffers` or
`import_images` allows only `data:` URIs and the GLB blob; any file
reference then raises `GltfImportError`.

## What it does not do

- `Document` gives no objects for meshes, primitives, nodes, scenes,
  materials, textures or skins; their JSON is still reachable through
  `Document.root`. A variant `Mapping` gives a `material_index`, not a
  material object.
- There is no single call that opens a file and imports everything; combine
  `Glb`, `Document`, `import_buffers` and `import_images` as above.
- Only `data:`, `file:` and relative URIs are read; nothing is downloaded.
- Whole documents are not validated; validation covers samplers, textures,
  texture references and the helpers in `gltfread.validation`.
- There is no command-line program.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```