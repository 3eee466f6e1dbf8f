"""Contrast normalization for photographed digits."""

from __future__ import annotations

import logging

import cv2
import numpy as np

from digit_ocr.config import ContrastConfig
from digit_ocr.types import to_bytes

logger = logging.getLogger(__name__)


def _invert(gray: np.ndarray) -> np.ndarray:
    return (255.0 - gray.astype(np.float64)) / 255.0


def _binarize(inverted: np.ndarray, threshold: float) -> np.ndarray:
    return np.where(inverted > threshold, 1.0, 0.0)


def _feather(binary: np.ndarray, config: ContrastConfig) -> np.ndarray:
    # filter2D correlates; flipping the kernel makes it a convolution.
    # Zero padding: neighbours outside the image contribute nothing.
    kernel = cv2.flip(np.asarray(config.kernel, dtype=np.float64), -1)
    feathered = cv2.filter2D(binary, cv2.CV_64F, kernel, borderType=cv2.BORDER_CONSTANT)
    return np.minimum(feathered, 1.0)


def _remap(feathered: np.ndarray, config: ContrastConfig) -> np.ndarray:
    floor, threshold = config.floor, config.threshold
    ramp = (feathered - floor) / (threshold - floor)
    remapped = np.where(feathered < floor, 0.0, np.where(feathered > threshold, 1.0, ramp))
    return np.clip(remapped, 0.0, 1.0)


def normalize_contrast(gray: np.ndarray, config: ContrastConfig | None = None) -> np.ndarray:
    """Turn a grayscale photo into ink intensities in [0, 1].

    Dark ink on light paper becomes bright ink on a black background. The
    input is expected to be already resized; any 2D shape is accepted so the
    same routine serves single digits and wide multi-digit scans.

    Args:
        gray: uint8 grayscale image, 0 = black.
        config: Threshold, floor, and smoothing kernel.

    Returns:
        np.ndarray: float64 matrix with the same shape as ``gray``.
    """
    config = config or ContrastConfig()
    gray = np.asarray(gray)
    if gray.ndim != 2 or gray.size == 0:
        raise ValueError(f"Expected a non-empty 2D grayscale image, got shape {gray.shape}")
    if not 0.0 <= config.floor < config.threshold <= 1.0:
        raise ValueError("Contrast config requires 0 <= floor < threshold <= 1.")

    binary = _binarize(_invert(gray), config.threshold)
    remapped = _remap(_feather(binary, config), config)
    logger.debug("Normalized %sx%s image, ink fraction %.3f", *gray.shape, float(binary.mean()))
    return remapped


def render_preview(matrix: np.ndarray, ink_on_paper: bool = False) -> np.ndarray:
    """Encode an intensity matrix as a uint8 grayscale preview.

    With ``ink_on_paper`` the preview keeps the photo polarity (dark ink on
    white) so it can be fed back to :func:`normalize_contrast`. The round trip
    reproduces the same intensities only while every background pixel stays
    at or below the threshold after feathering. A background pixel enclosed
    by ink on most sides (a one-pixel notch) ramps above it and comes back as
    ink.
    """
    values = np.asarray(matrix, dtype=np.float64)
    if ink_on_paper:
        values = 1.0 - values
    return to_bytes(values)
