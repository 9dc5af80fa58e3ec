"""Placement targets that receive generated blocks."""

from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, Iterator, Optional, Protocol, runtime_checkable

from ..core.models import BlockType, GridPosition


@runtime_checkable
class PlacementTarget(Protocol):
    """Anything that can be wiped and then filled with blocks."""

    def clear_all(self) -> None: ...

    def place(self, block: BlockType, position: GridPosition) -> None: ...


class InMemoryTarget:
    """Keeps placed blocks in a dict keyed by grid position."""

    def __init__(self) -> None:
        self._blocks: Dict[GridPosition, BlockType] = {}
        self.clear_count = 0
        self.place_count = 0

    def clear_all(self) -> None:
        self._blocks.clear()
        self.clear_count += 1

    def place(self, block: BlockType, position: GridPosition) -> None:
        self._blocks[GridPosition(*position)] = block
        self.place_count += 1

    def block_at(self, position: GridPosition) -> Optional[BlockType]:
        return self._blocks.get(GridPosition(*position))

    def counts(self) -> Counter[str]:
        return Counter(block.name for block in self._blocks.values())

    def positions(self) -> Iterator[GridPosition]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)


class CallbackTarget:
    """Adapts a pair of callables (for example an engine scene) to a placement target."""

    def __init__(
        self,
        place: Callable[[BlockType, GridPosition], None],
        clear_all: Callable[[], None],
    ) -> None:
        self._place = place
        self._clear_all = clear_all

    def clear_all(self) -> None:
        self._clear_all()

    def place(self, block: BlockType, position: GridPosition) -> None:
        self._place(block, position)


__all__ = ["CallbackTarget", "InMemoryTarget", "PlacementTarget"]
