"""World generation pipeline exports."""

from .config import BuildExtent, GenerationConfig, WorldConfig, default_config, load_config
from .execution import BlockSequence, BuildContext, World, WorldBuilder, build, clear, generate, initialize
from .logging import RunLogger
from .models import BuildReport, PassStats
from .placement import CallbackTarget, InMemoryTarget, PlacementTarget
from .registry import StrategyDescriptor, StrategyKind, StrategyRegistry, registry, strategy
from .visualization import ExtentOutline, VisualManager, extent_outline, render_heightmap

# Ensure built-in strategies are registered on import.
from . import strategies  # noqa: F401,E402

__all__ = [
    "BuildExtent",
    "GenerationConfig",
    "WorldConfig",
    "default_config",
    "load_config",
    "BlockSequence",
    "BuildContext",
    "World",
    "WorldBuilder",
    "build",
    "clear",
    "generate",
    "initialize",
    "RunLogger",
    "BuildReport",
    "PassStats",
    "CallbackTarget",
    "InMemoryTarget",
    "PlacementTarget",
    "StrategyDescriptor",
    "StrategyKind",
    "StrategyRegistry",
    "registry",
    "strategy",
    "ExtentOutline",
    "VisualManager",
    "extent_outline",
    "render_heightmap",
]
