import numpy as np
import pytest

from digit_ocr.config import SegmentConfig
from digit_ocr.preprocessing import column_profile, segment_columns
from digit_ocr.types import Span


def _matrix(width, ink_columns, height=28, rows=slice(4, 24)):
    matrix = np.zeros((height, width))
    for start, end in ink_columns:
        matrix[rows, start : end + 1] = 1.0
    return matrix


def test_two_separated_blocks_give_two_ordered_spans():
    spans = segment_columns(_matrix(24, [(2, 6), (15, 20)]))
    assert spans == [Span(2, 6), Span(15, 20)]


def test_blank_matrix_falls_back_to_full_width():
    assert segment_columns(np.zeros((28, 24))) == [Span(0, 23)]


def test_thin_noise_column_is_dropped():
    spans = segment_columns(_matrix(24, [(2, 2), (10, 13)]))
    assert spans == [Span(10, 13)]


def test_only_noise_falls_back_to_full_width():
    assert segment_columns(_matrix(24, [(7, 7)])) == [Span(0, 23)]


def test_narrow_gap_keeps_one_digit():
    spans = segment_columns(_matrix(24, [(2, 5), (8, 11)]))
    assert spans == [Span(2, 11)]


def test_min_gap_width_is_configurable():
    spans = segment_columns(_matrix(24, [(2, 5), (8, 11)]), SegmentConfig(min_gap_width=2))
    assert spans == [Span(2, 5), Span(8, 11)]


def test_span_open_at_the_right_edge_runs_to_last_column():
    spans = segment_columns(_matrix(23, [(2, 6), (18, 20)]))
    assert spans == [Span(2, 6), Span(18, 22)]


def test_faint_columns_below_gap_threshold_are_background():
    matrix = _matrix(24, [(10, 14)])
    matrix[:, 3:8] = 1.0 / 28  # column sum 1.0 < 0.05 * 28
    assert segment_columns(matrix) == [Span(10, 14)]


def test_column_profile_sums_rows():
    matrix = _matrix(6, [(1, 2)], height=4, rows=slice(0, 2))
    np.testing.assert_array_equal(column_profile(matrix), [0, 2, 2, 0, 0, 0])


def test_span_rejects_reversed_bounds():
    with pytest.raises(ValueError):
        Span(5, 4)
    assert Span(3, 3).width == 1
