"""Surface elevation sampling."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import numpy as np

from .noise import fractal_field

if TYPE_CHECKING:  # pragma: no cover
    from ..pipeline.config import WorldConfig


class HeightSampler:
    """Maps horizontal coordinates to surface heights for one configuration.

    Heights always lie in ``[bottom_layer_height, max_height]``. The lower
    bound is the bottom-layer height rather than ``min_height`` so a column
    never ends inside the bottom fill band.
    """

    def __init__(self, config: "WorldConfig") -> None:
        self.config = config
        self.y_min = min(config.min_height, config.max_height)
        self.y_max = max(config.min_height, config.max_height)
        self.height_range = max(1, self.y_max - self.y_min)

    def _surface(self, xs: np.ndarray, zs: np.ndarray) -> np.ndarray:
        config = self.config
        frequency = config.noise_frequency
        n = fractal_field(
            xs * frequency,
            zs * frequency,
            config.seed,
            octaves=config.octaves,
            persistence=config.persistence,
        )
        # np.rint rounds half to even
        surface = self.y_min + np.rint(n * self.height_range).astype(np.int64)
        return np.clip(surface, config.bottom_layer_height, self.y_max)

    def sample(self, x: int, z: int) -> int:
        xs = np.array([x], dtype=np.float64)
        zs = np.array([z], dtype=np.float64)
        return int(self._surface(xs, zs)[0])

    def sample_row(self, xs: Iterable[int], z: int) -> np.ndarray:
        x_arr = np.asarray(list(xs), dtype=np.float64)
        z_arr = np.full_like(x_arr, float(z))
        return self._surface(x_arr, z_arr)

    def sample_grid(self, xs: Iterable[int], zs: Iterable[int]) -> np.ndarray:
        """Heights for every ``(x, z)`` pair, shaped ``(len(zs), len(xs))``."""
        x_arr = np.asarray(list(xs), dtype=np.float64)
        z_arr = np.asarray(list(zs), dtype=np.float64)
        xx, zz = np.meshgrid(x_arr, z_arr)
        return self._surface(xx, zz)


def sample_height(x: int, z: int, config: "WorldConfig") -> int:
    return HeightSampler(config).sample(x, z)


__all__ = ["HeightSampler", "sample_height"]
