"""Crop, rescale, and center one digit into classifier format."""

from __future__ import annotations

import logging

import cv2
import numpy as np

from digit_ocr.config import CanonicalConfig
from digit_ocr.types import CanonicalSample, Span, as_pixel_matrix

logger = logging.getLogger(__name__)


def ink_row_bounds(matrix: np.ndarray, span: Span) -> tuple[int, int]:
    """Return the first and last rows with ink inside ``span``.

    Falls back to the full height when the span holds no ink.
    """
    columns = matrix[:, span.start : span.end + 1]
    rows = np.flatnonzero((columns > 0.0).any(axis=1))
    if rows.size == 0:
        return 0, matrix.shape[0] - 1
    return int(rows[0]), int(rows[-1])


def _scaled_size(width: int, height: int, config: CanonicalConfig) -> tuple[int, int]:
    assert width > 0 and height > 0, f"Zero-size segment {width}x{height}"
    available = config.available_size
    scale = max(min(available / width, available / height), config.min_scale)
    scaled_width = min(config.target_size, max(1, round(width * scale)))
    scaled_height = min(config.target_size, max(1, round(height * scale)))
    return scaled_width, scaled_height


def canonicalize(
    matrix: np.ndarray,
    span: Span | None = None,
    config: CanonicalConfig | None = None,
) -> CanonicalSample:
    """Fit the ink of one span into a centered square canvas.

    The span is cropped to its vertical ink extent, scaled uniformly so the
    long side fills the canvas minus the margins, and pasted in the middle
    (odd remainders go to the bottom/right).

    Args:
        matrix: Intensities covering the full height of the scan.
        span: Columns to use; ``None`` means the whole width.
        config: Canvas size, margin, and binarization.

    Returns:
        CanonicalSample: Unlabeled ``target_size`` x ``target_size`` sample.
    """
    config = config or CanonicalConfig()
    matrix = as_pixel_matrix(matrix)
    height, width = matrix.shape
    if span is None:
        span = Span(0, width - 1)
    if span.end >= width:
        raise ValueError(f"Span [{span.start}, {span.end}] exceeds matrix width {width}")

    min_row, max_row = ink_row_bounds(matrix, span)
    segment = matrix[min_row : max_row + 1, span.start : span.end + 1]
    segment_height, segment_width = segment.shape

    scaled_width, scaled_height = _scaled_size(segment_width, segment_height, config)
    scaled = cv2.resize(
        segment.astype(np.float32),
        (scaled_width, scaled_height),
        interpolation=cv2.INTER_LINEAR,
    ).astype(np.float64)
    scaled = scaled.reshape(scaled_height, scaled_width)

    size = config.target_size
    canvas = np.zeros((size, size), dtype=np.float64)
    offset_x = (size - scaled_width) // 2
    offset_y = (size - scaled_height) // 2
    canvas[offset_y : offset_y + scaled_height, offset_x : offset_x + scaled_width] = scaled

    if config.binarize:
        canvas = np.where(canvas > 0.0, 1.0, 0.0)
    else:
        canvas = np.clip(canvas, 0.0, 1.0)

    logger.debug(
        "Canonicalized columns %s-%s rows %s-%s to %sx%s at (%s, %s)",
        span.start,
        span.end,
        min_row,
        max_row,
        scaled_width,
        scaled_height,
        offset_x,
        offset_y,
    )
    return CanonicalSample(canvas)
