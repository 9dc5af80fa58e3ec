"""Configuration models for world generation runs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
import json
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple
import uuid

import yaml

from ..core.atlas import AtlasConfig
from ..core.columns import resolve_roles
from ..core.models import BlockType, ConfigError

# Inclusive floor: an out-of-range frequency is raised to exactly this value.
MIN_NOISE_FREQUENCY = 1e-4
DEFAULT_PERSISTENCE = 0.5
DEFAULT_BUILD_EXTENT = (32, 380, 32)
DEFAULT_BLOCK_NAMES = ("air", "grass", "dirt", "stone")


@dataclass(frozen=True)
class BuildExtent:
    """Half-width, vertical span and half-depth of the generated world.

    The world spans ``-half_width..half_width`` on x, ``-half_depth..half_depth``
    on z, and ``vertical_span`` blocks above the minimum height.
    """

    half_width: int
    vertical_span: int
    half_depth: int

    @classmethod
    def from_value(cls, value: Any) -> "BuildExtent":
        if isinstance(value, BuildExtent):
            return value
        if isinstance(value, Mapping):
            return cls(
                half_width=int(value.get("half_width", DEFAULT_BUILD_EXTENT[0])),
                vertical_span=int(value.get("vertical_span", DEFAULT_BUILD_EXTENT[1])),
                half_depth=int(value.get("half_depth", DEFAULT_BUILD_EXTENT[2])),
            )
        try:
            half_width, vertical_span, half_depth = value
        except (TypeError, ValueError) as exc:
            raise TypeError(f"build_extent must have three components, got {value!r}") from exc
        return cls(int(half_width), int(vertical_span), int(half_depth))

    def clamped(self) -> "BuildExtent":
        return BuildExtent(
            half_width=max(1, self.half_width),
            vertical_span=max(1, self.vertical_span),
            half_depth=max(1, self.half_depth),
        )

    @property
    def x_range(self) -> range:
        return range(-self.half_width, self.half_width + 1)

    @property
    def z_range(self) -> range:
        return range(-self.half_depth, self.half_depth + 1)

    def to_dict(self) -> Dict[str, int]:
        return {
            "half_width": self.half_width,
            "vertical_span": self.vertical_span,
            "half_depth": self.half_depth,
        }


def _default_extent() -> BuildExtent:
    return BuildExtent(*DEFAULT_BUILD_EXTENT)


@dataclass(frozen=True)
class WorldConfig:
    """Parameters for one generation pass.

    Construct it freely, then call :meth:`validated` to get the normalized
    copy the generators expect.
    """

    block_palette: Tuple[BlockType, ...]
    seed: int = 12345
    build_extent: BuildExtent = field(default_factory=_default_extent)
    min_height: int = -64
    bottom_layer_height: int = -62
    noise_frequency: float = 0.05
    octaves: int = 1
    persistence: float = DEFAULT_PERSISTENCE

    def __post_init__(self) -> None:
        palette = self.block_palette
        if isinstance(palette, (str, bytes)):
            raise ConfigError(f"block_palette must be a sequence of blocks, got {palette!r}")
        object.__setattr__(
            self, "block_palette", tuple(BlockType.from_value(block) for block in (palette or ()))
        )
        object.__setattr__(self, "build_extent", BuildExtent.from_value(self.build_extent))

    @property
    def max_height(self) -> int:
        return self.min_height + self.build_extent.vertical_span

    def validated(self) -> tuple["WorldConfig", tuple[str, ...]]:
        """Return a normalized copy of this config and any warnings.

        Raises :class:`ConfigError` when the palette has fewer than two
        entries. Every other out-of-range value is corrected in the copy.
        """
        roles = resolve_roles(self.block_palette)
        warnings: list[str] = []
        if roles.degraded:
            warnings.append(
                "block_palette has no subsurface block; "
                f"'{roles.bottom.name}' fills the subsurface band"
            )

        extent = self.build_extent.clamped()
        min_height = int(self.min_height)
        max_height = min_height + extent.vertical_span

        bottom_layer = int(self.bottom_layer_height)
        if bottom_layer < min_height:
            bottom_layer = min_height + 1
        if bottom_layer > max_height:
            bottom_layer = max_height

        frequency = float(self.noise_frequency)
        if not math.isfinite(frequency) or frequency <= MIN_NOISE_FREQUENCY:
            frequency = MIN_NOISE_FREQUENCY

        persistence = float(self.persistence)
        if not 0.0 < persistence <= 1.0:
            persistence = 1.0 if persistence > 1.0 else DEFAULT_PERSISTENCE

        normalized = replace(
            self,
            seed=int(self.seed) % 2**32,
            build_extent=extent,
            min_height=min_height,
            bottom_layer_height=bottom_layer,
            noise_frequency=frequency,
            octaves=max(1, int(self.octaves)),
            persistence=persistence,
        )
        return normalized, tuple(warnings)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "WorldConfig":
        blocks = mapping.get("blocks", mapping.get("block_palette", ()))
        if isinstance(blocks, (str, bytes)) or not isinstance(blocks, Sequence):
            raise TypeError(f"blocks must be a list of block entries, got {type(blocks)!r}")
        return cls(
            block_palette=tuple(BlockType.from_value(entry) for entry in blocks),
            seed=int(mapping.get("seed", 12345)),
            build_extent=BuildExtent.from_value(mapping.get("build_extent", DEFAULT_BUILD_EXTENT)),
            min_height=int(mapping.get("min_height", -64)),
            bottom_layer_height=int(mapping.get("bottom_layer_height", -62)),
            noise_frequency=float(mapping.get("noise_frequency", 0.05)),
            octaves=int(mapping.get("octaves", 1)),
            persistence=float(mapping.get("persistence", DEFAULT_PERSISTENCE)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "build_extent": self.build_extent.to_dict(),
            "min_height": self.min_height,
            "max_height": self.max_height,
            "bottom_layer_height": self.bottom_layer_height,
            "noise_frequency": self.noise_frequency,
            "octaves": self.octaves,
            "persistence": self.persistence,
            "blocks": [block.to_dict() for block in self.block_palette],
        }


def _expand_dir(path: Path) -> Path:
    return Path(path).expanduser().resolve()


def default_run_id() -> str:
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return f"run-{timestamp}-{uuid.uuid4().hex[:8]}"


@dataclass
class GenerationConfig:
    """Top-level configuration for a generation run."""

    world: WorldConfig
    atlas: Optional[AtlasConfig] = None
    strategy: str = "blocks"
    workers: int = 1
    run_id: str = field(default_factory=default_run_id)
    output_dir: Path = field(default_factory=lambda: Path("out"))
    log_dir: Optional[Path] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GenerationConfig":
        if not isinstance(mapping, Mapping):
            raise TypeError(f"Configuration must be a mapping, got {type(mapping)!r}")
        world_mapping = mapping.get("world", mapping)
        if not isinstance(world_mapping, Mapping):
            raise TypeError(f"world must be a mapping, got {type(world_mapping)!r}")
        world = WorldConfig.from_mapping(world_mapping)

        atlas_mapping = mapping.get("atlas")
        atlas = AtlasConfig.from_mapping(atlas_mapping) if atlas_mapping is not None else None

        output_dir = _expand_dir(Path(mapping.get("output_dir", "out")))
        log_dir = mapping.get("log_dir")

        return cls(
            world=world,
            atlas=atlas,
            strategy=str(mapping.get("strategy", "blocks")),
            workers=max(1, int(mapping.get("workers", 1))),
            run_id=str(mapping.get("run_id") or default_run_id()),
            output_dir=output_dir,
            log_dir=_expand_dir(Path(log_dir)) if log_dir else None,
        )

    @classmethod
    def from_file(cls, path: Path | str) -> "GenerationConfig":
        path = Path(path).expanduser()
        if not path.exists():
            raise FileNotFoundError(path)
        with path.open("r", encoding="utf8") as fh:
            if path.suffix.lower() in {".yml", ".yaml"}:
                data = yaml.safe_load(fh)
            else:
                data = json.load(fh)
        if not isinstance(data, Mapping):
            raise TypeError(f"Configuration file must contain a mapping, got {type(data)!r}")
        return cls.from_mapping(data)

    def ensure_directories(self) -> None:
        """Create output directories if they do not exist."""
        for directory in (self.output_dir, self.log_dir):
            if directory is not None:
                directory.mkdir(parents=True, exist_ok=True)

    def run_log_path(self) -> Optional[Path]:
        if self.log_dir is None:
            return None
        return _expand_dir(self.log_dir / f"{self.run_id}.jsonl")


def default_config() -> GenerationConfig:
    return GenerationConfig.from_mapping({"blocks": list(DEFAULT_BLOCK_NAMES)})


def load_config(source: Path | str | None) -> GenerationConfig:
    """Convenience helper for CLI consumers."""
    if not source:
        return default_config()
    return GenerationConfig.from_file(source)


__all__ = [
    "BuildExtent",
    "ConfigError",
    "DEFAULT_BLOCK_NAMES",
    "GenerationConfig",
    "MIN_NOISE_FREQUENCY",
    "WorldConfig",
    "default_config",
    "load_config",
]
