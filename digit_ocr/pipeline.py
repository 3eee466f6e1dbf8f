"""Compose the preprocessing stages for each input source."""

from __future__ import annotations

import logging

import numpy as np

from digit_ocr.config import PipelineConfig
from digit_ocr.preprocessing import (
    StrokeRenderer,
    canonicalize,
    normalize_contrast,
    render_preview,
    segment_columns,
)
from digit_ocr.types import CanonicalSample

logger = logging.getLogger(__name__)


def sample_from_canvas(renderer: StrokeRenderer) -> CanonicalSample:
    """Capture a freehand drawing; the canvas is already canonical size."""
    return renderer.to_sample()


def sample_from_photo(
    gray: np.ndarray,
    config: PipelineConfig | None = None,
) -> tuple[CanonicalSample, np.ndarray]:
    """Normalize a photo that was already resized to the canonical size.

    Returns the sample and a uint8 preview of the normalized intensities.
    """
    config = config or PipelineConfig()
    size = config.canonical.target_size
    if np.shape(gray) != (size, size):
        raise ValueError(f"Photo must be {size}x{size}, got shape {np.shape(gray)}")
    normalized = normalize_contrast(gray, config.contrast)
    return CanonicalSample(normalized), render_preview(normalized)


def samples_from_scan(
    matrix: np.ndarray,
    config: PipelineConfig | None = None,
) -> list[CanonicalSample]:
    """Segment a normalized scan and canonicalize every digit, left to right."""
    config = config or PipelineConfig()
    spans = segment_columns(matrix, config.segment)
    logger.info("Detected %s digit span(s): %s", len(spans), [(s.start, s.end) for s in spans])
    return [canonicalize(matrix, span, config.canonical) for span in spans]


def samples_from_scan_image(
    gray: np.ndarray,
    config: PipelineConfig | None = None,
) -> tuple[list[CanonicalSample], np.ndarray]:
    """Normalize a grayscale multi-digit scan, then split and canonicalize it."""
    config = config or PipelineConfig()
    normalized = normalize_contrast(gray, config.contrast)
    return samples_from_scan(normalized, config), render_preview(normalized)
