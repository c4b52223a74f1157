"""
Tests for the grid compositor: geometry, concurrent resize, and pasting.

The suite works on in-memory images and inspects canvas pixels directly.
"""
from __future__ import annotations

import pytest
from PIL import Image
from pytest_mock import MockerFixture

from bundle_compositor.errors import CodecError, ConcurrencyError
from bundle_compositor.image_grid import core as ig_core
from bundle_compositor.image_io import new_canvas

pytestmark = pytest.mark.visual

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (255, 255, 255, 0)


def _mk(w: int, h: int, color: tuple[int, ...] = RED) -> Image.Image:
    return Image.new("RGBA", (w, h), color)


class TestGeometry:
    def test_canvas_size_for_partial_last_row(self) -> None:
        geometry = ig_core.grid_geometry(5, (100, 150), 20, 2)
        assert geometry.rows == 3  # noqa: PLR2004
        assert (geometry.cell_width, geometry.cell_height) == (120, 170)
        assert geometry.size() == (240, 510)

    def test_single_column_default(self) -> None:
        geometry = ig_core.grid_geometry(3, (80, 60), 0, 1)
        assert geometry.size() == (80, 180)

    def test_more_columns_than_images(self) -> None:
        geometry = ig_core.grid_geometry(2, (10, 10), 5, 4)
        assert geometry.rows == 1
        assert geometry.size() == (60, 15)

    def test_zero_columns_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            ig_core.grid_geometry(2, (10, 10), 5, 0)

    @pytest.mark.parametrize(
        ("index", "expected"),
        [(0, (0, 0)), (1, (120, 0)), (2, (0, 170)), (4, (0, 340))],
    )
    def test_cell_origin_row_major(
        self,
        index: int,
        expected: tuple[int, int],
    ) -> None:
        geometry = ig_core.grid_geometry(5, (100, 150), 20, 2)
        assert geometry.cell_origin(index, 150) == expected

    def test_short_image_is_centered_vertically(self) -> None:
        geometry = ig_core.grid_geometry(1, (100, 150), 20, 1)
        assert geometry.cell_origin(0, 100) == (0, 25)
        assert geometry.cell_origin(0, 99) == (0, 25)

    def test_tall_image_is_not_shifted(self) -> None:
        geometry = ig_core.grid_geometry(1, (100, 150), 20, 1)
        assert geometry.cell_origin(0, 200) == (0, 0)

    def test_y_offset_moves_whole_grid(self) -> None:
        geometry = ig_core.grid_geometry(4, (10, 10), 2, 2)
        assert geometry.cell_origin(3, 10, 30) == (12, 42)


class TestResize:
    def test_height_mismatch_is_resized_exactly(self) -> None:
        out = ig_core.resize_images([_mk(40, 80)], (30, 30))
        assert out[0].size == (30, 30)

    def test_matching_height_keeps_own_width(self) -> None:
        original = _mk(45, 30)
        out = ig_core.resize_images([original], (30, 30))
        assert out[0] is original

    def test_order_is_preserved(self) -> None:
        images = [_mk(10 + i, 10 + i) for i in range(8)]
        out = ig_core.resize_images(images, (5, 5), max_workers=3)
        assert [im.size for im in out] == [(5, 5)] * 8

    def test_uses_lanczos(self, mocker: MockerFixture) -> None:
        image = _mk(20, 20)
        spy = mocker.spy(image, "resize")
        ig_core.resize_images([image], (10, 10))
        spy.assert_called_once_with((10, 10), Image.Resampling.LANCZOS)

    def test_failure_waits_for_every_task(self, mocker: MockerFixture) -> None:
        calls: list[int] = []

        def flaky(index: int, image: Image.Image, size: tuple[int, int]):
            calls.append(index)
            if index == 0:
                msg = "boom"
                raise RuntimeError(msg)
            return image

        mocker.patch.object(ig_core, "_resize_one", side_effect=flaky)
        with pytest.raises(ConcurrencyError, match="image no 1") as excinfo:
            ig_core.resize_images([_mk(5, 5)] * 4, (5, 5), max_workers=2)
        assert sorted(calls) == [0, 1, 2, 3]
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_empty_input(self) -> None:
        assert ig_core.resize_images([], (5, 5)) == []


class TestPasteGrid:
    def test_members_land_in_their_cells(self) -> None:
        geometry = ig_core.grid_geometry(3, (10, 10), 4, 2)
        canvas = new_canvas(*geometry.size())
        ig_core.paste_grid(
            canvas, [_mk(10, 10, RED), _mk(10, 10, BLUE), _mk(10, 10, RED)],
            geometry,
        )
        assert canvas.getpixel((0, 0)) == RED
        assert canvas.getpixel((14, 0)) == BLUE
        assert canvas.getpixel((0, 14)) == RED
        # padding and the empty last cell stay clear
        assert canvas.getpixel((11, 0)) == CLEAR
        assert canvas.getpixel((20, 20)) == CLEAR

    def test_y_offset_leaves_top_strip_clear(self) -> None:
        geometry = ig_core.grid_geometry(1, (10, 10), 0, 1)
        canvas = new_canvas(10, 30)
        ig_core.paste_grid(canvas, [_mk(10, 10)], geometry, y_offset=20)
        assert canvas.getpixel((5, 19)) == CLEAR
        assert canvas.getpixel((5, 20)) == RED

    def test_short_member_is_centered(self) -> None:
        geometry = ig_core.grid_geometry(1, (10, 10), 0, 1)
        canvas = new_canvas(10, 10)
        ig_core.paste_grid(canvas, [_mk(10, 4)], geometry)
        assert canvas.getpixel((0, 2)) == CLEAR
        assert canvas.getpixel((0, 3)) == RED
        assert canvas.getpixel((0, 6)) == RED
        assert canvas.getpixel((0, 7)) == CLEAR

    def test_member_outside_canvas_raises(self) -> None:
        geometry = ig_core.grid_geometry(1, (10, 10), 0, 1)
        canvas = new_canvas(10, 10)
        with pytest.raises(CodecError, match="exceeds canvas"):
            ig_core.paste_grid(canvas, [_mk(15, 10)], geometry)

    def test_paste_is_deterministic(self) -> None:
        geometry = ig_core.grid_geometry(4, (8, 8), 2, 2)
        members = [_mk(8, 8, RED), _mk(8, 8, BLUE)] * 2
        first = ig_core.paste_grid(new_canvas(20, 20), members, geometry)
        second = ig_core.paste_grid(new_canvas(20, 20), members, geometry)
        assert first.tobytes() == second.tobytes()
