from __future__ import annotations

import pytest

from voxel_world.core.atlas import AtlasConfig, Face, FaceAtlasSet, FaceCoordinate, UVRect, resolve_face_uv


def test_top_left_pick_maps_to_top_uv_band():
    atlas = AtlasConfig(rows=4, columns=4)
    rect = resolve_face_uv(FaceCoordinate(0, 0), atlas)
    assert rect == UVRect(u_min=0.0, v_min=0.75, u_max=0.25, v_max=1.0)


def test_bottom_right_pick_maps_to_bottom_uv_band():
    atlas = AtlasConfig(rows=4, columns=4)
    rect = atlas.to_uv_rect(FaceCoordinate(3, 3))
    assert rect == UVRect(u_min=0.75, v_min=0.0, u_max=1.0, v_max=0.25)


def test_non_square_atlas():
    atlas = AtlasConfig(rows=2, columns=8)
    rect = atlas.to_uv_rect(AtlasConfig.uv(1, 5))
    assert rect.u_min == pytest.approx(5 / 8)
    assert rect.u_max == pytest.approx(6 / 8)
    assert rect.v_min == 0.0
    assert rect.v_max == 0.5


@pytest.mark.parametrize(
    "pick, expected",
    [
        (FaceCoordinate(-3, -1), FaceCoordinate(0, 0)),
        (FaceCoordinate(99, 99), FaceCoordinate(3, 3)),
        (FaceCoordinate(2, 17), FaceCoordinate(2, 3)),
    ],
)
def test_out_of_range_picks_are_clamped(pick, expected):
    atlas = AtlasConfig(rows=4, columns=4)
    assert atlas.to_uv_rect(pick) == atlas.to_uv_rect(expected)


def test_rects_are_well_formed():
    atlas = AtlasConfig(rows=3, columns=5)
    for row in range(-1, 5):
        for col in range(-1, 7):
            rect = atlas.to_uv_rect(FaceCoordinate(row, col))
            assert 0.0 <= rect.u_min < rect.u_max <= 1.0
            assert 0.0 <= rect.v_min < rect.v_max <= 1.0


def test_atlas_counts_clamped_to_one():
    atlas = AtlasConfig(rows=0, columns=-4)
    assert (atlas.rows, atlas.columns) == (1, 1)
    assert atlas.to_uv_rect(FaceCoordinate(5, 5)) == UVRect(0.0, 0.0, 1.0, 1.0)


def test_face_lookup_and_front_fallback():
    faces = FaceAtlasSet(
        front=FaceCoordinate(0, 1),
        back=FaceCoordinate(0, 2),
        left=FaceCoordinate(0, 3),
        right=FaceCoordinate(1, 0),
        top=FaceCoordinate(1, 1),
        bottom=FaceCoordinate(1, 2),
    )
    assert faces[Face.TOP] == FaceCoordinate(1, 1)
    assert faces["bottom"] == FaceCoordinate(1, 2)
    assert faces.for_face("Left") == FaceCoordinate(0, 3)
    assert faces["diagonal"] == FaceCoordinate(0, 1)
    assert faces.for_face(7) == faces.front


def test_uv_rects_cover_all_faces():
    atlas = AtlasConfig(rows=4, columns=4)
    faces = FaceAtlasSet.uniform((2, 1))
    rects = atlas.uv_rects(faces)
    assert set(rects) == set(Face)
    assert len(set(rects.values())) == 1


def test_face_set_from_mapping():
    faces = FaceAtlasSet.from_mapping({"top": [0, 0], "bottom": {"row": 0, "col": 2}, "FRONT": (0, 1)})
    assert faces.top == FaceCoordinate(0, 0)
    assert faces.bottom == FaceCoordinate(0, 2)
    assert faces.front == FaceCoordinate(0, 1)
    assert faces.back == FaceCoordinate(0, 0)
    with pytest.raises(ValueError):
        FaceAtlasSet.from_mapping({"sideways": [0, 0]})
    with pytest.raises(TypeError):
        FaceAtlasSet.from_mapping({"top": 3})


def test_atlas_from_mapping():
    assert AtlasConfig.from_mapping({"rows": 16, "columns": 8}) == AtlasConfig(16, 8)
    assert AtlasConfig.from_mapping({"rows": 2, "cols": 3}).columns == 3
