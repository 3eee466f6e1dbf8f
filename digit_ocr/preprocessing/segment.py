"""Split a multi-digit scan into per-digit column spans."""

from __future__ import annotations

import logging

import numpy as np

from digit_ocr.config import SegmentConfig
from digit_ocr.types import Span, as_pixel_matrix

logger = logging.getLogger(__name__)


def column_profile(matrix: np.ndarray) -> np.ndarray:
    """Return the ink sum of every column."""
    return as_pixel_matrix(matrix).sum(axis=0)


def _scan_spans(active: np.ndarray, min_gap_width: int) -> list[Span]:
    spans: list[Span] = []
    start: int | None = None
    gap_width = 0

    for col, is_active in enumerate(active):
        if start is None:
            if is_active:
                start = col
                gap_width = 0
            continue

        if is_active:
            gap_width = 0
            continue

        gap_width += 1
        if gap_width >= min_gap_width:
            spans.append(Span(start, col - gap_width))
            start = None
            gap_width = 0

    if start is not None:
        spans.append(Span(start, len(active) - 1))
    return spans


def segment_columns(matrix: np.ndarray, config: SegmentConfig | None = None) -> list[Span]:
    """Detect digit spans with a left-to-right column projection scan.

    A column holds ink when its sum reaches ``gap_ratio`` of the image
    height. A run of ``min_gap_width`` empty columns closes the current digit,
    and spans narrower than ``min_segment_width`` are treated as noise. When
    nothing survives, the whole width is returned as a single span.

    Args:
        matrix: Normalized intensities, ink = 1.0.
        config: Segmentation thresholds.

    Returns:
        list[Span]: Spans ordered left to right; never empty.
    """
    config = config or SegmentConfig()
    if config.min_gap_width < 1:
        raise ValueError("min_gap_width must be at least 1.")

    profile = column_profile(matrix)
    height = np.shape(matrix)[0]
    width = profile.shape[0]
    gap_threshold = config.gap_ratio * height

    candidates = _scan_spans(profile >= gap_threshold, config.min_gap_width)
    spans = [span for span in candidates if span.width >= config.min_segment_width]

    dropped = len(candidates) - len(spans)
    if dropped:
        logger.debug("Dropped %s span(s) narrower than %s columns", dropped, config.min_segment_width)

    if not spans:
        logger.debug("No gap detected; treating all %s columns as one digit", width)
        return [Span(0, width - 1)]
    return spans
