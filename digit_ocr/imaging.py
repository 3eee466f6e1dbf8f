"""OpenCV helpers that decode and resize images before normalization."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np


def _to_gray(image: np.ndarray) -> np.ndarray:
    if len(image.shape) == 2:
        return image
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def load_grayscale(path: str | Path) -> np.ndarray:
    """Read an image file as uint8 grayscale.

    Raises:
        ValueError: If OpenCV cannot read the file.
    """
    image = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if image is None:
        raise ValueError(f"Failed to read image: {path}")
    return image


def decode_grayscale(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (PNG, JPEG, ...) as uint8 grayscale."""
    image = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ValueError("Failed to decode image bytes")
    if image.ndim == 3 and image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return _to_gray(image)


def resize_to(gray: np.ndarray, size: int = 28) -> np.ndarray:
    """Resize to a ``size`` x ``size`` square, ignoring aspect ratio."""
    return cv2.resize(gray, (size, size), interpolation=cv2.INTER_AREA)


def fit_height(gray: np.ndarray, height: int = 28) -> np.ndarray:
    """Resize to ``height`` rows, keeping the aspect ratio."""
    rows, cols = gray.shape[:2]
    scale = height / max(rows, 1)
    width = max(1, int(round(cols * scale)))
    return cv2.resize(gray, (width, height), interpolation=cv2.INTER_AREA)
