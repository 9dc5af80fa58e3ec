"""Built-in generation strategies."""

from __future__ import annotations

from collections import Counter
from typing import Mapping

from .execution import BuildContext
from .registry import StrategyKind, strategy


@strategy(StrategyKind.BLOCKS.value, description="Place one object per generated block.")
def place_blocks(context: BuildContext) -> Mapping[str, int]:
    counts: Counter[str] = Counter()
    target = context.target
    for row in context.rows():
        for position, block in row:
            target.place(block, position)
            counts[block.name] += 1
    return counts


@strategy(
    StrategyKind.MESH.value,
    implemented=False,
    description="Merge the world into a single mesh instead of one object per block.",
)
def build_mesh(context: BuildContext) -> Mapping[str, int]:
    # TODO: greedy-mesh each z row and hand merged quads to the target
    raise NotImplementedError("Merged-geometry generation is not implemented yet")


__all__ = ["build_mesh", "place_blocks"]
