"""Result models shared across the generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class PassStats:
    """Timing and volume metrics for one build pass."""

    start_ns: int
    end_ns: int
    duration_ns: int
    cpu_time_ns: int
    columns: int
    blocks: int
    block_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_ns": self.start_ns,
            "end_ns": self.end_ns,
            "duration_ns": self.duration_ns,
            "cpu_time_ns": self.cpu_time_ns,
            "columns": self.columns,
            "blocks": self.blocks,
            "block_counts": dict(self.block_counts),
        }


@dataclass
class BuildReport:
    """Captured outcome of a build pass."""

    run_id: str
    strategy: str
    stats: PassStats
    diagnostics: tuple[str, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "strategy": self.strategy,
            "stats": self.stats.to_dict(),
            "diagnostics": list(self.diagnostics),
            "metadata": self.metadata,
        }


__all__ = ["BuildReport", "PassStats"]
