"""World lifecycle: initialize, generate, clear and build."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass, field
import time
from typing import Iterator, Optional

import numpy as np

from ..core.columns import BlockRoles, build_column, resolve_roles
from ..core.height import HeightSampler
from ..core.models import BlockPlacement, Column
from .config import WorldConfig, default_run_id
from .logging import RunLogger
from .models import BuildReport, PassStats
from .placement import PlacementTarget
from .registry import registry


class BlockSequence:
    """Restartable lazy sequence of block placements for one configuration.

    Iteration walks z rows from ``-half_depth`` up, x from ``-half_width`` up
    within a row, and each column from ``min_height`` up to its surface.
    Iterating again recomputes the same sequence.
    """

    def __init__(
        self,
        config: WorldConfig,
        roles: Optional[BlockRoles] = None,
        diagnostics: tuple[str, ...] = (),
    ) -> None:
        self.config = config
        self.roles = roles or resolve_roles(config.block_palette)
        self.diagnostics = diagnostics
        self._sampler = HeightSampler(config)

    @property
    def x_range(self) -> range:
        return self.config.build_extent.x_range

    @property
    def z_range(self) -> range:
        return self.config.build_extent.z_range

    def columns(self) -> Iterator[Column]:
        xs = self.x_range
        for z in self.z_range:
            heights = self._sampler.sample_row(xs, z)
            for x, surface_y in zip(xs, heights):
                yield Column(x, z, int(surface_y))

    def row(self, z: int) -> list[BlockPlacement]:
        """All placements of the z row, in iteration order."""
        xs = self.x_range
        heights = self._sampler.sample_row(xs, z)
        placements: list[BlockPlacement] = []
        for x, surface_y in zip(xs, heights):
            placements.extend(build_column(x, z, int(surface_y), self.config, self.roles))
        return placements

    def heightmap(self) -> np.ndarray:
        """Surface heights shaped ``(len(z_range), len(x_range))``."""
        return self._sampler.sample_grid(self.x_range, self.z_range)

    def count(self) -> int:
        heights = self.heightmap()
        return int((heights - self.config.min_height + 1).sum())

    def __iter__(self) -> Iterator[BlockPlacement]:
        for column in self.columns():
            yield from build_column(column.x, column.z, column.surface_y, self.config, self.roles)


@dataclass
class World:
    """A validated configuration bound to a strategy and a placement target."""

    config: WorldConfig
    roles: BlockRoles
    strategy: str = "blocks"
    target: Optional[PlacementTarget] = None
    diagnostics: tuple[str, ...] = ()
    logger: RunLogger = field(default_factory=RunLogger)
    run_id: str = field(default_factory=default_run_id)


class BuildContext:
    """State handed to a strategy while it places one world."""

    def __init__(self, world: World, sequence: BlockSequence, target: PlacementTarget, workers: int = 1) -> None:
        self.world = world
        self.sequence = sequence
        self.target = target
        self.workers = max(1, int(workers))
        self.logger = world.logger

    def rows(self) -> Iterator[list[BlockPlacement]]:
        """Yield each z row's placements in coordinate order.

        With more than one worker the rows are computed on a thread pool;
        results are still yielded in z order.
        """
        z_values = list(self.sequence.z_range)
        if self.workers == 1:
            for z in z_values:
                yield self.sequence.row(z)
            return
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            yield from pool.map(self.sequence.row, z_values)

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            end = time.perf_counter_ns()
            self.logger.log_event(
                {
                    "type": "timed_scope",
                    "run_id": self.world.run_id,
                    "label": label,
                    "duration_ns": end - start,
                }
            )


def initialize(
    config: WorldConfig,
    target: Optional[PlacementTarget] = None,
    *,
    strategy: str = "blocks",
    logger: Optional[RunLogger] = None,
    run_id: Optional[str] = None,
) -> World:
    """Validate ``config`` and bind it to a strategy and target.

    Raises :class:`~voxel_world.core.models.ConfigError` for an unusable
    palette and ``KeyError`` for an unknown strategy. Warnings raised by
    validation are kept on ``World.diagnostics`` and logged.
    """
    normalized, diagnostics = config.validated()
    descriptor = registry().get(strategy)
    world = World(
        config=normalized,
        roles=resolve_roles(normalized.block_palette),
        strategy=descriptor.name,
        target=target,
        diagnostics=diagnostics,
        logger=logger or RunLogger(),
        run_id=run_id or default_run_id(),
    )
    for message in diagnostics:
        world.logger.log_warning(message, run_id=world.run_id)
    return world


def generate(world: World) -> BlockSequence:
    return BlockSequence(world.config, world.roles, world.diagnostics)


def clear(world: World) -> None:
    if world.target is None:
        raise RuntimeError("World has no placement target to clear")
    world.target.clear_all()
    world.logger.log_event({"type": "clear", "run_id": world.run_id})


class WorldBuilder:
    """Runs a strategy over a world with timing and logging."""

    def __init__(self, world: World) -> None:
        self._world = world

    @property
    def world(self) -> World:
        return self._world

    def run(self, workers: int = 1) -> BuildReport:
        world = self._world
        if world.target is None:
            raise RuntimeError("World has no placement target to build into")
        descriptor = registry().get(world.strategy)
        if not descriptor.implemented:
            raise NotImplementedError(f"Strategy '{descriptor.name}' is not implemented")

        sequence = generate(world)
        world.logger.log_pass_start(world.run_id, descriptor.name, world.config.to_dict())

        start_ns = time.perf_counter_ns()
        start_cpu = time.process_time_ns()
        clear(world)
        context = BuildContext(world, sequence, world.target, workers)
        with context.timed("place_blocks"):
            block_counts = dict(descriptor.callable(context))
        end_ns = time.perf_counter_ns()
        end_cpu = time.process_time_ns()

        x_count = len(sequence.x_range)
        z_count = len(sequence.z_range)
        stats = PassStats(
            start_ns=start_ns,
            end_ns=end_ns,
            duration_ns=end_ns - start_ns,
            cpu_time_ns=end_cpu - start_cpu,
            columns=x_count * z_count,
            blocks=sum(block_counts.values()),
            block_counts=block_counts,
        )
        report = BuildReport(
            run_id=world.run_id,
            strategy=descriptor.name,
            stats=stats,
            diagnostics=world.diagnostics,
            metadata={"workers": context.workers},
        )
        world.logger.log_pass_end(report)
        return report


def build(world: World, workers: int = 1) -> BuildReport:
    """Clear the world's target and place every generated block into it."""
    return WorldBuilder(world).run(workers=workers)


__all__ = [
    "BlockSequence",
    "BuildContext",
    "World",
    "WorldBuilder",
    "build",
    "clear",
    "generate",
    "initialize",
]
