"""Texture atlas coordinates.

Artists pick tiles on a grid whose row 0 is the top row. UV space has its
origin at the bottom-left, so rows are flipped when converting a pick into a
UV rectangle.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, NamedTuple, Optional, Union


class Face(str, Enum):
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def parse(cls, tag: Any) -> Optional["Face"]:
        """Return the face named by ``tag``, or ``None`` if it names no face."""
        if isinstance(tag, Face):
            return tag
        if isinstance(tag, str):
            tag = tag.strip().lower()
        try:
            return cls(tag)
        except ValueError:
            return None


class FaceCoordinate(NamedTuple):
    """Zero-based ``(row, col)`` pick on the atlas grid, row 0 at the top."""

    row: int
    col: int

    @classmethod
    def from_value(cls, value: Any) -> "FaceCoordinate":
        if isinstance(value, FaceCoordinate):
            return value
        if isinstance(value, Mapping):
            return cls(int(value.get("row", 0)), int(value.get("col", 0)))
        try:
            row, col = value
        except (TypeError, ValueError) as exc:
            raise TypeError(f"Face coordinates must be [row, col] pairs, got {value!r}") from exc
        return cls(int(row), int(col))


class UVRect(NamedTuple):
    u_min: float
    v_min: float
    u_max: float
    v_max: float


_ORIGIN = FaceCoordinate(0, 0)

FaceTag = Union[Face, str]


@dataclass(frozen=True)
class FaceAtlasSet:
    """Atlas picks for the six faces of a cube."""

    front: FaceCoordinate = _ORIGIN
    back: FaceCoordinate = _ORIGIN
    left: FaceCoordinate = _ORIGIN
    right: FaceCoordinate = _ORIGIN
    top: FaceCoordinate = _ORIGIN
    bottom: FaceCoordinate = _ORIGIN

    def for_face(self, tag: FaceTag) -> FaceCoordinate:
        """Coordinate for ``tag``; unrecognised tags resolve to the front face."""
        face = Face.parse(tag) or Face.FRONT
        return getattr(self, face.value)

    def __getitem__(self, tag: FaceTag) -> FaceCoordinate:
        return self.for_face(tag)

    @classmethod
    def uniform(cls, coordinate: Any) -> "FaceAtlasSet":
        coord = FaceCoordinate.from_value(coordinate)
        return cls(**{face.value: coord for face in Face})

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "FaceAtlasSet":
        if not isinstance(mapping, Mapping):
            raise TypeError(f"Face atlas entries must be a mapping, got {type(mapping)!r}")
        faces: Dict[str, FaceCoordinate] = {}
        for key, value in mapping.items():
            face = Face.parse(key)
            if face is None:
                raise ValueError(f"Unknown face '{key}'")
            faces[face.value] = FaceCoordinate.from_value(value)
        return cls(**faces)

    def to_dict(self) -> Dict[str, list[int]]:
        return {face.value: list(getattr(self, face.value)) for face in Face}


@dataclass(frozen=True)
class AtlasConfig:
    """Row/column layout of an atlas texture. Both counts are at least 1."""

    rows: int = 1
    columns: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", max(int(self.rows), 1))
        object.__setattr__(self, "columns", max(int(self.columns), 1))

    @staticmethod
    def uv(row: int, col: int) -> FaceCoordinate:
        return FaceCoordinate(row, col)

    def to_uv_rect(self, face: FaceCoordinate) -> UVRect:
        """Convert a top-left grid pick into a bottom-left-origin UV rectangle.

        Indices outside the grid are clamped onto its edge.
        """
        row = min(max(int(face.row), 0), self.rows - 1)
        col = min(max(int(face.col), 0), self.columns - 1)
        flipped_row = (self.rows - 1) - row
        return UVRect(
            u_min=col / self.columns,
            v_min=flipped_row / self.rows,
            u_max=(col + 1) / self.columns,
            v_max=(flipped_row + 1) / self.rows,
        )

    def uv_rects(self, faces: FaceAtlasSet) -> Dict[Face, UVRect]:
        return {face: self.to_uv_rect(faces.for_face(face)) for face in Face}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AtlasConfig":
        if not isinstance(mapping, Mapping):
            raise TypeError(f"Atlas config must be a mapping, got {type(mapping)!r}")
        return cls(
            rows=int(mapping.get("rows", 1)),
            columns=int(mapping.get("columns", mapping.get("cols", 1))),
        )

    def to_dict(self) -> Dict[str, int]:
        return {"rows": self.rows, "columns": self.columns}


def resolve_face_uv(face: FaceCoordinate, atlas: AtlasConfig) -> UVRect:
    return atlas.to_uv_rect(face)


__all__ = ["AtlasConfig", "Face", "FaceAtlasSet", "FaceCoordinate", "UVRect", "resolve_face_uv"]
