"""Debug overlay geometry and heightmap previews."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import numpy as np
from PIL import Image

from .config import WorldConfig

_BOTTOM_BAND_TINT = np.array([150.0, 105.0, 60.0], dtype=np.float32)


@dataclass(frozen=True)
class ExtentOutline:
    """Wire box enclosing the build extent, in block units."""

    center: tuple[float, float, float]
    size: tuple[int, int, int]

    @property
    def min_corner(self) -> tuple[float, float, float]:
        return tuple(c - (s - 1) / 2.0 for c, s in zip(self.center, self.size))  # type: ignore[return-value]

    @property
    def max_corner(self) -> tuple[float, float, float]:
        return tuple(c + (s - 1) / 2.0 for c, s in zip(self.center, self.size))  # type: ignore[return-value]


def extent_outline(config: WorldConfig) -> ExtentOutline:
    extent = config.build_extent
    size = (
        extent.half_width * 2 + 1,
        (config.max_height - config.min_height) + 1,
        extent.half_depth * 2 + 1,
    )
    center = (0.0, config.min_height + (size[1] - 1) * 0.5, 0.0)
    return ExtentOutline(center=center, size=size)


def render_heightmap(heights: np.ndarray, config: WorldConfig) -> Image.Image:
    """Grayscale top-down view of surface heights.

    Columns sitting on the bottom-layer height are tinted so flattened terrain
    stands out. The +z edge is at the top of the image.
    """
    heights = np.asarray(heights)
    if heights.ndim != 2:
        raise ValueError(f"Expected a 2D heightmap, got shape {heights.shape}")
    span = max(1, config.max_height - config.min_height)
    level = np.clip((heights - config.min_height) / span, 0.0, 1.0).astype(np.float32)
    rgb = np.repeat((level * 255.0)[..., None], 3, axis=-1)
    flat = heights <= config.bottom_layer_height
    rgb[flat] = 0.5 * rgb[flat] + 0.5 * _BOTTOM_BAND_TINT
    img = np.flipud(rgb).clip(0.0, 255.0).astype(np.uint8)
    return Image.fromarray(np.ascontiguousarray(img))


@dataclass(frozen=True)
class VisualizationResult:
    path: Path
    artifact_name: str
    metadata: dict[str, Any]


class VisualManager:
    """Writes PNG previews for generated worlds."""

    def __init__(self, output_root: Path) -> None:
        self._output_root = output_root
        output_root.mkdir(parents=True, exist_ok=True)

    def emit_heightmap(
        self, heights: np.ndarray, config: WorldConfig, name: str = "heightmap", path: Optional[Path] = None
    ) -> VisualizationResult:
        image = render_heightmap(heights, config)
        path = path or self._output_root / f"{name}.png"
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path)
        return VisualizationResult(
            path=path,
            artifact_name=name,
            metadata={
                "shape": list(heights.shape),
                "min": int(np.min(heights)),
                "max": int(np.max(heights)),
            },
        )


__all__ = ["ExtentOutline", "VisualManager", "VisualizationResult", "extent_outline", "render_heightmap"]
