"""Pure world-generation algorithms: noise, heights, columns and atlas UVs."""

from .atlas import AtlasConfig, Face, FaceAtlasSet, FaceCoordinate, UVRect, resolve_face_uv
from .columns import BlockRoles, ColumnBuilder, build_column, resolve_roles
from .height import HeightSampler, sample_height
from .models import BlockPlacement, BlockType, Column, ConfigError, GridPosition
from .noise import fractal_field, hash_2d, hash_unit, noise_field

__all__ = [
    "AtlasConfig",
    "Face",
    "FaceAtlasSet",
    "FaceCoordinate",
    "UVRect",
    "resolve_face_uv",
    "BlockRoles",
    "ColumnBuilder",
    "build_column",
    "resolve_roles",
    "HeightSampler",
    "sample_height",
    "BlockPlacement",
    "BlockType",
    "Column",
    "ConfigError",
    "GridPosition",
    "fractal_field",
    "hash_2d",
    "hash_unit",
    "noise_field",
]
