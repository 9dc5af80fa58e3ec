"""Core data models shared by the generation algorithms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, NamedTuple, Optional

from .atlas import FaceAtlasSet


class ConfigError(ValueError):
    """Raised when a world configuration cannot be used for generation."""


class GridPosition(NamedTuple):
    x: int
    y: int
    z: int


class Column(NamedTuple):
    """One horizontal coordinate and its surface elevation."""

    x: int
    z: int
    surface_y: int


@dataclass(frozen=True)
class BlockType:
    """A block kind in the world palette.

    ``handle`` belongs to whatever places or renders the block (a prefab, a
    mesh id, a colour) and is passed through untouched.
    """

    name: str
    handle: Any = field(default=None, compare=False)
    uvs: Optional[FaceAtlasSet] = None

    @classmethod
    def from_value(cls, value: Any) -> "BlockType":
        if isinstance(value, BlockType):
            return value
        if isinstance(value, str):
            return cls(name=value)
        if not isinstance(value, Mapping):
            raise TypeError(f"Block entries must be names or mappings, got {type(value)!r}")
        name = value.get("name")
        if not name:
            raise ConfigError("Block entries must include a 'name'")
        uvs = value.get("uvs")
        return cls(
            name=str(name),
            handle=value.get("handle"),
            uvs=FaceAtlasSet.from_mapping(uvs) if uvs is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.uvs is not None:
            data["uvs"] = self.uvs.to_dict()
        return data


class BlockPlacement(NamedTuple):
    position: GridPosition
    block: BlockType


__all__ = ["BlockPlacement", "BlockType", "Column", "ConfigError", "GridPosition"]
