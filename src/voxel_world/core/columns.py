"""Column layering: turn a surface height into a stack of typed blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, NamedTuple, Optional, Sequence

from .models import BlockPlacement, BlockType, Column, ConfigError, GridPosition

if TYPE_CHECKING:  # pragma: no cover
    from ..pipeline.config import WorldConfig


class BlockRoles(NamedTuple):
    """The palette resolved into the three layers of a column.

    ``degraded`` is set when the palette has no dedicated subsurface block and
    the bottom-layer block stands in for it.
    """

    surface: BlockType
    subsurface: BlockType
    bottom: BlockType
    degraded: bool = False


def resolve_roles(palette: Optional[Sequence[BlockType]]) -> BlockRoles:
    """Pick surface, subsurface and bottom blocks out of a palette.

    Index 1 is the surface block, index 2 the subsurface block and the last
    entry the bottom-layer block. Index 0 is reserved for empty space.
    """
    if not palette or len(palette) < 2:
        count = len(palette) if palette else 0
        raise ConfigError(f"block_palette must contain at least 2 entries, got {count}")
    degraded = len(palette) < 3
    return BlockRoles(
        surface=palette[1],
        subsurface=palette[-1] if degraded else palette[2],
        bottom=palette[-1],
        degraded=degraded,
    )


def build_column(
    x: int,
    z: int,
    surface_y: int,
    config: "WorldConfig",
    roles: Optional[BlockRoles] = None,
) -> Iterator[BlockPlacement]:
    """Yield the blocks of one column from ``min_height`` up to ``surface_y``."""
    if roles is None:
        roles = resolve_roles(config.block_palette)
    bottom_layer = config.bottom_layer_height
    for y in range(config.min_height, surface_y):
        block = roles.bottom if y < bottom_layer else roles.subsurface
        yield BlockPlacement(GridPosition(x, y, z), block)
    yield BlockPlacement(GridPosition(x, surface_y, z), roles.surface)


class ColumnBuilder:
    """Expands columns for one validated configuration."""

    def __init__(self, config: "WorldConfig", roles: Optional[BlockRoles] = None) -> None:
        self.config = config
        self.roles = roles or resolve_roles(config.block_palette)

    def build(self, column: Column) -> Iterator[BlockPlacement]:
        return build_column(column.x, column.z, column.surface_y, self.config, self.roles)

    def count(self, surface_y: int) -> int:
        return max(surface_y - self.config.min_height, 0) + 1


__all__ = ["BlockRoles", "ColumnBuilder", "build_column", "resolve_roles"]
