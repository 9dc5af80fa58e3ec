from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from voxel_world.core.atlas import AtlasConfig, FaceCoordinate
from voxel_world.core.models import BlockType, ConfigError
from voxel_world.pipeline.config import (
    MIN_NOISE_FREQUENCY,
    BuildExtent,
    GenerationConfig,
    WorldConfig,
    load_config,
)

PALETTE = ("air", "grass", "dirt", "stone")


def test_defaults_follow_reference_world():
    config = WorldConfig(block_palette=PALETTE)
    assert config.seed == 12345
    assert config.build_extent == BuildExtent(32, 380, 32)
    assert config.min_height == -64
    assert config.bottom_layer_height == -62
    assert config.max_height == 316
    assert all(isinstance(block, BlockType) for block in config.block_palette)


@pytest.mark.parametrize("palette", [None, (), ("air",)])
def test_short_palette_is_fatal(palette):
    with pytest.raises(ConfigError):
        WorldConfig(block_palette=palette).validated()


@pytest.mark.parametrize("palette", ["grass", b"grass"])
def test_string_palette_is_fatal(palette):
    with pytest.raises(ConfigError):
        WorldConfig(block_palette=palette)


def test_two_entry_palette_warns():
    config, warnings = WorldConfig(block_palette=("air", "grass")).validated()
    assert len(warnings) == 1
    assert "subsurface" in warnings[0]
    assert len(config.block_palette) == 2


def test_full_palette_has_no_warnings():
    _, warnings = WorldConfig(block_palette=PALETTE).validated()
    assert warnings == ()


def test_extent_components_clamped():
    config, _ = WorldConfig(block_palette=PALETTE, build_extent=(0, -5, 3)).validated()
    assert config.build_extent == BuildExtent(1, 1, 3)
    assert config.max_height == config.min_height + 1


def test_bottom_layer_below_min_moves_above_min():
    config, _ = WorldConfig(block_palette=PALETTE, min_height=0, bottom_layer_height=-20).validated()
    assert config.bottom_layer_height == 1


def test_bottom_layer_above_max_moves_to_max():
    config, _ = WorldConfig(
        block_palette=PALETTE, min_height=0, bottom_layer_height=1000, build_extent=(4, 50, 4)
    ).validated()
    assert config.bottom_layer_height == 50


def test_bottom_layer_in_range_untouched():
    config, _ = WorldConfig(block_palette=PALETTE, min_height=-10, bottom_layer_height=-10).validated()
    assert config.bottom_layer_height == -10


@pytest.mark.parametrize("frequency", [0.0, -1.0, 1e-9, float("nan"), float("inf")])
def test_non_positive_frequency_corrected(frequency):
    config, _ = WorldConfig(block_palette=PALETTE, noise_frequency=frequency).validated()
    assert config.noise_frequency == MIN_NOISE_FREQUENCY


def test_seed_and_fractal_settings_normalized():
    config, _ = WorldConfig(block_palette=PALETTE, seed=-1, octaves=0, persistence=4.0).validated()
    assert config.seed == 2**32 - 1
    assert config.octaves == 1
    assert config.persistence == 1.0
    config, _ = WorldConfig(block_palette=PALETTE, persistence=-0.3).validated()
    assert config.persistence == 0.5


def test_validation_does_not_mutate_input():
    config = WorldConfig(block_palette=PALETTE, build_extent=(0, 0, 0), bottom_layer_height=-500)
    normalized, _ = config.validated()
    assert config.build_extent == BuildExtent(0, 0, 0)
    assert config.bottom_layer_height == -500
    assert normalized is not config
    again, _ = normalized.validated()
    assert again == normalized


def test_world_from_mapping_parses_blocks():
    config = WorldConfig.from_mapping(
        {
            "seed": 7,
            "build_extent": {"half_width": 4, "vertical_span": 12, "half_depth": 5},
            "min_height": -3,
            "bottom_layer_height": -1,
            "noise_frequency": 0.2,
            "blocks": [
                "air",
                {"name": "grass", "handle": "grass.prefab", "uvs": {"top": [0, 0], "bottom": [0, 2]}},
                {"name": "dirt"},
                "stone",
            ],
        }
    )
    assert config.build_extent == BuildExtent(4, 12, 5)
    grass = config.block_palette[1]
    assert grass.name == "grass"
    assert grass.handle == "grass.prefab"
    assert grass.uvs is not None
    assert grass.uvs.bottom == FaceCoordinate(0, 2)
    assert [block.name for block in config.block_palette] == ["air", "grass", "dirt", "stone"]


def test_world_from_mapping_rejects_bad_blocks():
    with pytest.raises(TypeError):
        WorldConfig.from_mapping({"blocks": "grass"})
    with pytest.raises(ConfigError):
        WorldConfig.from_mapping({"blocks": ["air", {"handle": 1}]})
    with pytest.raises(TypeError):
        WorldConfig.from_mapping({"blocks": PALETTE, "build_extent": [1, 2]})


def test_generation_config_from_yaml(tmp_path: Path):
    path = tmp_path / "world.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "world": {"seed": 99, "build_extent": [3, 10, 3], "blocks": list(PALETTE)},
                "atlas": {"rows": 4, "columns": 4},
                "strategy": "blocks",
                "workers": 3,
                "run_id": "yaml-run",
                "output_dir": str(tmp_path / "out"),
                "log_dir": str(tmp_path / "logs"),
            }
        )
    )
    config = GenerationConfig.from_file(path)
    assert config.world.seed == 99
    assert config.atlas == AtlasConfig(4, 4)
    assert config.workers == 3
    assert config.run_id == "yaml-run"
    assert config.run_log_path() == (tmp_path / "logs" / "yaml-run.jsonl").resolve()
    config.ensure_directories()
    assert (tmp_path / "out").is_dir()


def test_generation_config_from_flat_json(tmp_path: Path):
    path = tmp_path / "world.json"
    path.write_text(json.dumps({"seed": 5, "blocks": ["air", "grass"]}))
    config = load_config(path)
    assert config.world.seed == 5
    assert config.atlas is None
    assert config.log_dir is None
    assert config.run_log_path() is None


def test_generation_config_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        GenerationConfig.from_file(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n")
    with pytest.raises(TypeError):
        GenerationConfig.from_file(bad)


def test_load_config_without_path_uses_default_palette():
    config = load_config(None)
    assert [block.name for block in config.world.block_palette] == ["air", "grass", "dirt", "stone"]
