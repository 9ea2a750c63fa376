# streamstart

The non-graphical core of a "stream starting soon" screen: a terminal-style
countdown text that types itself out, deletes back to where it differs from
the next text and types again, plus the geometry helpers and mesh loader
used to place a 3D scene around it. The package has no dependencies beyond
the standard library.

## Modules

- `streamstart.ease` – `in_sine(val)`, the sine ease-in curve
  (`1 - cos(val * pi / 2)`) that paces the delete and append animations.

- `streamstart.animation` – text animations driven by monotonic times in
  seconds.
  - Requests: `WaitRequest(wait_time)`, `DeleteRequest(desired_len,
    animation_duration)` and `AppendRequest(additional_chars,
    animation_duration)`.
  - Running animations, each with `update(now)`, `finished(now)`,
    `into_finished_string()` and a `text` attribute:
    `Wait` (holds the text until its `until` time has passed),
    `DeleteOverTime` (removes characters from the end, eased),
    `AppendOverTime` (types the pending characters, eased) and
    `Static` (a text that is always finished).
    `DeleteOverTime` raises `ValueError` if the target length is negative
    or longer than the text.
  - `construct_animation_requests(current, desired)` plans how to get from
    one text to the next: if `current` is not empty, wait 1.5 s and then
    delete back to the first differing character over 1.5 s; finally type
    the rest of `desired` over 1.5 s. When no differing character is found
    among the overlapping ones, the whole text is deleted and retyped.
  - `apply_animation_req(req, s, now)` starts one request on text `s`.

- `streamstart.mat` – `Vec3` (`length`, `normalized`, subtraction,
  iteration), `cross(a, b)`, the `Axis` enum, and a row-major 4x4
  `Transform` stored as `arr[row][col]` with `zeros`, `identity`, `scale`,
  `from_translation`, `from_axis_angle`, `perspective`, `look_at`,
  `inverted` and matrix multiplication with `*`. `inverted` raises
  `ValueError` for a singular matrix.

- `streamstart.obj_parser` – a small Wavefront OBJ reader.
  `Mesh.from_obj_file(source)` accepts text, bytes, or an iterable of
  lines (such as an open file), reads `v` (with optional `w`, default 1.0),
  `vt`, `vn` and triangular `f` records written as `vert/uv/norm`, logs and
  skips other record types, and merges each distinct vertex/uv/normal
  triple into one `VertData`, so `mesh.vertices` and `mesh.faces` are ready
  for indexed drawing. The record parsers `parse_vertex`, `parse_vertex_3`,
  `parse_tex_coord`, `parse_face` and the merging step `obj_data_to_mesh`
  are available on their own. Malformed input raises a subclass of
  `ObjParseError`: `MissingType` (including blank lines), `MissingVertex`,
  `NonFloatVertex`, `MissingTexCoord`, `NonFloatTexCoord`,
  `MissingFaceVert`, `InvalidFaceVert`, `InvalidFaceUv` or
  `InvalidFaceNorm`. A face that refers to data that does not exist raises
  `IndexError`.

- `streamstart.countdown` –
  - `Args.parse(argv)` reads `--start-time HH:MM:SS` and `--topic TEXT`
    (the first item of `argv` is the process name; `sys.argv` is used when
    `argv` is omitted) and raises `UsageError`, which carries the usage
    text, when an option is unknown, missing or invalid.
  - `stream_starting_string(start_time, now, topic, program)` builds the
    shell-prompt style text with the topic, start time, current time and
    the `HH:MM:SS` remaining.
  - `reset_animation(...)` pairs a `Static` of the current text with the
    requests that lead to a fresh countdown text.
  - `StartScreenText` keeps it all going: call `update(now, now_time)`
    every frame and read `text`; `cursor_visible(now)` toggles the cursor
    every 0.5 s by default.

## Examples

Easing:

```python
from streamstart.ease import in_sine

in_sine(0.0)  # 0.0
in_sine(1.0)  # 1.0, up to rounding
```

Transforms:

```python
from streamstart.mat import Transform

t = Transform.from_translation(1.0, 2.0, 3.0) * Transform.scale(2.0, 2.0, 2.0)
back = t * t.inverted()  # identity, up to rounding
```

Planning a text change:

```python
from streamstart.animation import construct_animation_requests

requests = construct_animation_requests("Current time: 10:00:00",
                                        "Current time: 10:00:01")
# a WaitRequest, a DeleteRequest down to the differing character,
# then an AppendRequest with the rest
```

Driving the countdown text:

```python
import time
from datetime import datetime

from streamstart.countdown import Args, StartScreenText

args = Args.parse(["screen", "--start-time", "18:00:00", "--topic", "parsers"])
screen = StartScreenText(args.start_time, args.topic, "screen",
                         time.monotonic(), datetime.now().time())
screen.update(time.monotonic(), datetime.now().time())
print(screen.text)
```

## What the package does not do

It draws nothing. There is no window, no command to run, no font or glyph
rendering, no texture loading and no GPU upload of meshes: the package
provides the text, its animation, the transforms and the mesh data, and a
renderer of your choice has to put them on screen.

## Running the tests

Install the package with its `test` extra and run pytest from the
project root.