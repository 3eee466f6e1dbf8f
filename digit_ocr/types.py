"""Core data types shared by the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

UNLABELED = -1


def as_pixel_matrix(data: object) -> np.ndarray:
    """Copy ``data`` into a float64 matrix clipped to [0, 1].

    Raises:
        ValueError: If the input is not a non-empty 2D array.
    """
    matrix = np.array(data, dtype=np.float64, copy=True)
    if matrix.ndim != 2:
        raise ValueError(f"Pixel matrix must be 2D, got shape {matrix.shape}")
    if matrix.shape[0] == 0 or matrix.shape[1] == 0:
        raise ValueError(f"Pixel matrix must not be empty, got shape {matrix.shape}")
    return np.clip(matrix, 0.0, 1.0)


def to_bytes(matrix: np.ndarray) -> np.ndarray:
    """Encode intensities as uint8, ``round(value * 255)``."""
    return np.rint(np.clip(matrix, 0.0, 1.0) * 255.0).astype(np.uint8)


@dataclass(frozen=True)
class Span:
    """Inclusive column interval holding one digit candidate."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end}]")

    @property
    def width(self) -> int:
        return self.end - self.start + 1


@dataclass
class CanonicalSample:
    """A fixed-size intensity matrix in classifier format.

    Pixels are frozen on construction; only ``label`` changes afterwards,
    when a prediction or a user correction is attached.
    """

    pixels: np.ndarray
    label: int = UNLABELED

    def __post_init__(self) -> None:
        pixels = as_pixel_matrix(self.pixels)
        pixels.setflags(write=False)
        self.pixels = pixels

    @property
    def shape(self) -> tuple[int, int]:
        return self.pixels.shape  # type: ignore[return-value]

    @property
    def is_labeled(self) -> bool:
        return self.label != UNLABELED

    def to_row(self) -> list[int]:
        """Return ``[label, *pixel bytes]`` in row-major order."""
        return [int(self.label), *to_bytes(self.pixels).ravel().tolist()]
