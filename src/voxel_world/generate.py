"""One-call helpers for generating worlds without managing a World."""

from __future__ import annotations

import numpy as np
from PIL import Image

from .pipeline import BlockSequence, WorldConfig, generate, initialize, render_heightmap


def generate_world(config: WorldConfig) -> BlockSequence:
    """Validate ``config`` and return its restartable block sequence.

    Raises :class:`~voxel_world.core.models.ConfigError` before any work when
    the palette is unusable. Validation warnings are available on the
    returned sequence's ``diagnostics``.
    """
    return generate(initialize(config))


def heightmap(config: WorldConfig) -> np.ndarray:
    return generate_world(config).heightmap()


def render_png(config: WorldConfig) -> Image.Image:
    sequence = generate_world(config)
    return render_heightmap(sequence.heightmap(), sequence.config)
