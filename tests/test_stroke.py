import numpy as np
import pytest

from digit_ocr.config import StrokeConfig
from digit_ocr.preprocessing import StrokeRenderer
from digit_ocr.types import UNLABELED


def test_paint_sets_center_and_feathers_neighbours():
    renderer = StrokeRenderer()
    renderer.paint(5, 7)
    canvas = renderer.snapshot()

    assert canvas[7, 5] == 1.0
    assert canvas[7, 6] == pytest.approx(0.15)
    assert canvas[6, 5] == pytest.approx(0.15)
    assert canvas[6, 6] == pytest.approx(0.05)
    assert canvas[8, 4] == pytest.approx(0.05)
    assert canvas[7, 7] == 0.0
    assert canvas.sum() == pytest.approx(1.0 + 4 * 0.15 + 4 * 0.05)


def test_repeated_paint_saturates_at_full_intensity():
    renderer = StrokeRenderer()
    renderer.paint(10, 10)
    renderer.paint(10, 10)
    assert renderer.snapshot()[10, 11] == pytest.approx(0.30)

    for _ in range(10):
        renderer.paint(10, 10)
    canvas = renderer.snapshot()
    assert canvas[10, 11] == 1.0
    assert canvas.max() <= 1.0


@pytest.mark.parametrize(("x", "y"), [(0, 0), (27, 27)])
def test_corner_paint_skips_neighbours_outside_canvas(x, y):
    renderer = StrokeRenderer()
    renderer.paint(x, y)
    canvas = renderer.snapshot()

    assert canvas.shape == (28, 28)
    assert canvas[y, x] == 1.0
    assert canvas.sum() == pytest.approx(1.0 + 2 * 0.15 + 0.05)


@pytest.mark.parametrize(("x", "y"), [(-1, 5), (28, 0), (3, 28), (-5, -5)])
def test_paint_outside_canvas_is_ignored(x, y):
    renderer = StrokeRenderer()
    renderer.paint(x, y)
    assert not renderer.snapshot().any()


def test_snapshot_is_a_read_only_copy():
    renderer = StrokeRenderer()
    renderer.paint(3, 3)
    snapshot = renderer.snapshot()

    renderer.paint(20, 20)
    renderer.clear()

    assert snapshot[3, 3] == 1.0
    assert snapshot[20, 20] == 0.0
    with pytest.raises(ValueError):
        snapshot[0, 0] = 1.0


def test_clear_resets_canvas():
    renderer = StrokeRenderer()
    renderer.paint(12, 14)
    renderer.clear()
    assert not renderer.snapshot().any()


def test_paint_pointer_maps_view_coordinates_to_cells():
    renderer = StrokeRenderer()
    renderer.paint_pointer(55, 123, view_width=280, view_height=280)
    canvas = renderer.snapshot()
    assert canvas[12, 5] == 1.0


def test_custom_canvas_size():
    renderer = StrokeRenderer(StrokeConfig(height=10, width=16))
    renderer.paint(15, 9)
    canvas = renderer.snapshot()
    assert canvas.shape == (10, 16)
    assert canvas[9, 15] == 1.0


def test_to_sample_is_unlabeled_copy():
    renderer = StrokeRenderer()
    renderer.paint(14, 14)
    sample = renderer.to_sample()
    renderer.clear()

    assert sample.label == UNLABELED
    np.testing.assert_array_equal(sample.pixels[14, 14], 1.0)
