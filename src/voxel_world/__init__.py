"""Seeded voxel world generation."""

from .core import AtlasConfig, BlockType, ConfigError, Face, FaceAtlasSet, FaceCoordinate, resolve_face_uv
from .generate import generate_world, heightmap, render_png
from .pipeline import BuildExtent, WorldConfig

__all__ = [
    "AtlasConfig",
    "BlockType",
    "BuildExtent",
    "ConfigError",
    "Face",
    "FaceAtlasSet",
    "FaceCoordinate",
    "WorldConfig",
    "generate_world",
    "heightmap",
    "render_png",
    "resolve_face_uv",
]
__version__ = "0.1.0"
