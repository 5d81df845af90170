# sfntkit

A small, dependency-free reader for OpenType and TrueType font data. It works
directly on the bytes of a font file and exposes the common tables through
plain Python objects.

Reads that run past the end of the data give `None`, zero or an empty result
rather than raising, so truncated or damaged files can still be inspected.
The exceptions are the entry points that are asked for something specific:
`FontDataRef(data)` and `FontRef.from_offset` raise `ValueError` when the
bytes are not font data, and `FontRef.from_index` raises `IndexError` when
there is no font at the index.

Supported containers:

- single fonts (TrueType and CFF-flavoured OpenType)
- font collections (`ttcf`)
- Macintosh resource-fork fonts (`dfont`)

Supported tables:

| Module             | Table    | Notes                                                     |
|--------------------|----------|-----------------------------------------------------------|
| `sfntkit.head`     | `head`   | `Head.parse(data)`, a frozen dataclass                    |
| `sfntkit.hhea`     | `hhea`   | `Hhea.parse(data)`                                        |
| `sfntkit.maxp`     | `maxp`   | `Maxp.parse(data)`                                        |
| `sfntkit.os2`      | `OS/2`   | `Os2.parse(data)`; later-version fields are `None` if absent |
| `sfntkit.hmtx`     | `hmtx`   | `Hmtx.hmetrics()`, `Hmtx.lsbs()`                          |
| `sfntkit.name`     | `name`   | UTF-16 and Mac Roman strings                              |
| `sfntkit.cmap`     | `cmap`   | formats 4, 12, 13 and format 14 variation sequences       |
| `sfntkit.fvar`     | `fvar`   | axes and named instances                                  |
| `sfntkit.avar`     | `avar`   | per-axis segment maps                                     |
| `sfntkit.cpal`     | `CPAL`   | palettes, themes and name identifiers                     |
| `sfntkit.colr`     | `COLR`   | version 0 layers; version 1 base paints, layers, clip boxes |
| `sfntkit.paint`    | —        | `COLR` paint graph nodes                                  |
| `sfntkit.font`     | —        | containers and the table directory                        |

`sfntkit.binary` holds the bounds-checked big-endian `Reader` and the tag and
fixed-point helpers (`make_tag`, `tag_to_str`, `fixed_mul`, `fixed_div`,
`fixed_from_f2dot14`, `fixed_to_float`).

## Installation

```
pip install sfntkit
```

To run the test suite, install the `test` extra and run `pytest`.

## Usage

```python
from pathlib import Path

from sfntkit.binary import tag_to_str
from sfntkit.font import FontDataRef, FontRef

data = Path("SomeFont.ttf").read_bytes()

font = FontRef.from_index(data, 0)
print(font.kind(), len(font), "tables")
for record in font.records():
    print(tag_to_str(record.tag), record.offset, record.length)

head = font.head()
print("units per em:", head.units_per_em)

# Character mapping
cmap = font.cmap()
print("glyph for 'A':", cmap.map(ord("A")))

# Names
for entry in font.name().entries():
    if entry.record.is_decodable():
        print(entry.record.name_id, entry.text())

# Every font in a collection or resource fork
for face in FontDataRef(data).fonts():
    print(face.maxp().num_glyphs)
```

Tables can be looked up by tag given as an integer, bytes or a string:
`font.find_table("GSUB")` returns a `Table` holding the raw bytes and the
directory record, and `font.table_data(b"post")` returns just the bytes.

`Cmap.map_variant(codepoint, selector)` returns a `MapVariant`: its
`use_default` is true when the default mapping applies, otherwise
`glyph_id` holds the variant glyph.

### Variable fonts

```python
fvar = font.fvar()
if fvar is not None:
    for axis in fvar.axes():
        print(tag_to_str(axis.tag), axis.min_value, axis.default_value, axis.max_value)
```

Axis values are 16.16 fixed-point integers. `Axis.normalize` maps a user
coordinate onto the normalized range −1.0 … 1.0 (as 16.16), and
`Avar.segment_map(axis).apply(coord)` applies the font's axis remapping to
it. Both divide in fixed point and raise `ZeroDivisionError` on a degenerate
axis or segment map.

### Colour fonts

```python
cpal = font.cpal()
for palette in cpal.palettes():
    print(palette.index, palette.theme, list(palette.colors))

colr = font.colr()
for gid, paint in colr.base_paints():
    print(gid, paint)
```

Paint nodes are dataclasses such as `PaintSolid`, `PaintLinearGradient` or
`PaintComposite`; child nodes are `PaintRef` objects that are read on demand
with `PaintRef.get()`, which returns `None` for malformed or unknown
formats. Gradients carry a `ColorLine` whose `stops()` yields `ColorStop`
values.

## What it does not do

- It only reads; nothing here writes or modifies fonts.
- It does not read glyph outlines (`glyf`, `CFF`), `post`, vertical metrics
  (`vhea`, `vmtx`, `VORG`), metric variations (`HVAR`, `VVAR`) or the layout
  tables (`GDEF`, `GSUB`, `GPOS`). Their raw bytes are still reachable with
  `FontRef.table_data`.
- It does not shape or render text.
- There is no command-line tool; it is a library only.