"""Reader for the subset of Wavefront OBJ used by the scene meshes.

Supported records are ``v`` (position, optional w), ``vt`` (texture
coordinate), ``vn`` (normal) and triangular ``f`` faces written as
``vert/uv/norm`` index triples. Other record types are skipped.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)
_INDEX_RE = re.compile(r"\+?[0-9]+", re.ASCII)


class ObjParseError(Exception):
    """Raised when OBJ data cannot be read or parsed."""


class MissingType(ObjParseError):
    """A line has no record type."""


class MissingVertex(ObjParseError):
    """A vertex or normal record has too few components."""


class NonFloatVertex(ObjParseError):
    """A vertex or normal component is not a number."""


class MissingFaceVert(ObjParseError):
    """A face record has fewer than three corners."""


class InvalidFaceVert(ObjParseError):
    """A face corner has an invalid vertex index."""


class InvalidFaceUv(ObjParseError):
    """A face corner has an invalid texture coordinate index."""


class InvalidFaceNorm(ObjParseError):
    """A face corner has an invalid normal index."""


class MissingTexCoord(ObjParseError):
    """A texture coordinate record has too few components."""


class NonFloatTexCoord(ObjParseError):
    """A texture coordinate component is not a number."""


Vec4 = Tuple[float, float, float, float]
Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]


@dataclass(frozen=True)
class FaceIndices:
    """Zero-based indices of one face corner."""

    vert: int
    uv: int
    norm: int


@dataclass(frozen=True)
class VertData:
    """One merged vertex: position, texture coordinate and normal."""

    vert: Vec4 = (0.0, 0.0, 0.0, 0.0)
    uv: Vec2 = (0.0, 0.0)
    norm: Vec3 = (0.0, 0.0, 0.0)


def _parse_float(token: str, error: type[ObjParseError]) -> float:
    if not _FLOAT_RE.fullmatch(token):
        raise error(f"not a number: {token!r}")
    return float(token)


def _take_floats(
    tokens: Iterator[str],
    count: int,
    missing: type[ObjParseError],
    invalid: type[ObjParseError],
) -> List[float]:
    values = []
    for position in range(count):
        token = next(tokens, None)
        if token is None:
            raise missing(f"expected {count} components, got {position}")
        values.append(_parse_float(token, invalid))
    return values


def parse_vertex(tokens: Iterable[str]) -> Vec4:
    """Parse ``x y z [w]``; ``w`` defaults to 1.0."""
    it = iter(tokens)
    x, y, z = _take_floats(it, 3, MissingVertex, NonFloatVertex)
    w_token = next(it, None)
    w = 1.0 if w_token is None else _parse_float(w_token, NonFloatVertex)
    return (x, y, z, w)


def parse_vertex_3(tokens: Iterable[str]) -> Vec3:
    """Parse exactly three leading vertex components; extra tokens are ignored."""
    x, y, z = _take_floats(iter(tokens), 3, MissingVertex, NonFloatVertex)
    return (x, y, z)


def parse_tex_coord(tokens: Iterable[str]) -> Vec2:
    """Parse ``u v``; extra tokens are ignored."""
    u, v = _take_floats(iter(tokens), 2, MissingTexCoord, NonFloatTexCoord)
    return (u, v)


def _parse_index(part: str | None, error: type[ObjParseError]) -> int:
    if part is None:
        raise error("index missing from face corner")
    if not _INDEX_RE.fullmatch(part):
        raise error(f"invalid index: {part!r}")
    value = int(part)
    if value == 0:
        raise error("indices are one-based; 0 is invalid")
    return value - 1


def parse_face(tokens: Iterable[str]) -> Tuple[FaceIndices, FaceIndices, FaceIndices]:
    """Parse three ``vert/uv/norm`` corners into zero-based indices."""
    it = iter(tokens)
    corners = []
    for _ in range(3):
        token = next(it, None)
        if token is None:
            raise MissingFaceVert("face needs three corners")
        parts = token.split("/")
        parts += [None] * (3 - len(parts))
        corners.append(
            FaceIndices(
                vert=_parse_index(parts[0], InvalidFaceVert),
                uv=_parse_index(parts[1], InvalidFaceUv),
                norm=_parse_index(parts[2], InvalidFaceNorm),
            )
        )
    return (corners[0], corners[1], corners[2])


@dataclass
class Mesh:
    """Indexed triangle mesh with one merged vertex per distinct corner."""

    vertices: List[VertData] = field(default_factory=list)
    faces: List[Tuple[int, int, int]] = field(default_factory=list)

    @classmethod
    def from_obj_file(
        cls, source: Union[str, bytes, Iterable[Union[str, bytes]]]
    ) -> Mesh:
        """Build a mesh from OBJ contents (text, bytes, or a file of lines)."""
        vertices: List[Vec4] = []
        uvs: List[Vec2] = []
        normals: List[Vec3] = []
        faces: List[Tuple[FaceIndices, FaceIndices, FaceIndices]] = []

        for line in _lines(source):
            tokens = iter(line.split())
            record = next(tokens, None)
            if record is None:
                raise MissingType("line has no record type")
            if record == "v":
                vertices.append(parse_vertex(tokens))
            elif record == "f":
                faces.append(parse_face(tokens))
            elif record == "vt":
                uvs.append(parse_tex_coord(tokens))
            elif record == "vn":
                normals.append(parse_vertex_3(tokens))
            else:
                logger.info("Unsupported type %s", record)

        return obj_data_to_mesh(vertices, uvs, normals, faces)


def _decode(line: Union[str, bytes]) -> str:
    if isinstance(line, bytes):
        try:
            return line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ObjParseError("obj data is not valid UTF-8") from exc
    return line


def _lines(source: Union[str, bytes, Iterable[Union[str, bytes]]]) -> Iterator[str]:
    if isinstance(source, (str, bytes)):
        source = io.StringIO(_decode(source))
    try:
        for raw in source:
            line = _decode(raw)
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line
    except OSError as exc:
        raise ObjParseError("failed to read obj data") from exc


def obj_data_to_mesh(
    vertices: Sequence[Vec4],
    uvs: Sequence[Vec2],
    normals: Sequence[Vec3],
    faces: Iterable[Sequence[FaceIndices]],
) -> Mesh:
    """Merge per-corner attribute indices into a single index per vertex.

    Raises IndexError when a face refers to data that does not exist.
    """
    mapping: dict[FaceIndices, int] = {}
    mesh = Mesh()

    for face in faces:
        merged = []
        for corner in face:
            index = mapping.get(corner)
            if index is None:
                mesh.vertices.append(
                    VertData(
                        vert=tuple(vertices[corner.vert]),
                        uv=tuple(uvs[corner.uv]),
                        norm=tuple(normals[corner.norm]),
                    )
                )
                index = len(mesh.vertices) - 1
                mapping[corner] = index
            merged.append(index)
        mesh.faces.append((merged[0], merged[1], merged[2]))

    return mesh