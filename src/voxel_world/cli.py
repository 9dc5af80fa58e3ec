"""Command-line entry point for world generation."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import time
from pathlib import Path
from typing import Sequence

from voxel_world.pipeline import (
    BuildExtent,
    InMemoryTarget,
    RunLogger,
    VisualManager,
    build,
    generate,
    initialize,
    load_config,
    registry,
)


def _implemented_strategies() -> list[str]:
    return sorted(name for name, descriptor in registry().descriptors().items() if descriptor.implemented)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("voxel_world")
    parser.add_argument("--config", type=str, default=None, help="YAML or JSON config file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--extent",
        type=int,
        nargs=3,
        metavar=("HALF_WIDTH", "SPAN", "HALF_DEPTH"),
        default=None,
    )
    parser.add_argument("--strategy", type=str, default=None, choices=_implemented_strategies())
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--out", type=str, default="out/world.png")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    config = load_config(args.config)

    world_config = config.world
    if args.seed is not None:
        world_config = replace(world_config, seed=args.seed)
    if args.extent is not None:
        world_config = replace(world_config, build_extent=BuildExtent(*args.extent))
    strategy = args.strategy or config.strategy
    workers = args.workers if args.workers is not None else config.workers

    t0 = time.time()
    logger = RunLogger(config.run_log_path())
    target = InMemoryTarget()
    try:
        world = initialize(world_config, target, strategy=strategy, logger=logger, run_id=config.run_id)
        report = build(world, workers=workers)

        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        heights = generate(world).heightmap()
        VisualManager(out_path.parent).emit_heightmap(heights, world.config, path=out_path)
    finally:
        logger.close()

    metadata = {
        "seed": world.config.seed,
        "config": world.config.to_dict(),
        "atlas": config.atlas.to_dict() if config.atlas else None,
        "report": report.to_dict(),
    }
    with open(out_path.with_suffix(".json"), "w", encoding="utf-8") as fh:
        json.dump(metadata, fh, indent=2)

    for message in world.diagnostics:
        print(f"warning: {message}")
    elapsed = time.time() - t0
    print(
        f"Placed {report.stats.blocks} blocks in {report.stats.columns} columns; "
        f"wrote {out_path} and {out_path.with_suffix('.json')} in {elapsed:.2f}s"
    )


if __name__ == "__main__":
    main()
