"""MNIST-style CSV samples and the correction store.

Every row is ``label,p0,p1,...,p783``: the digit followed by the 28x28 pixel
bytes in row-major order, ink = 255.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from digit_ocr.types import CanonicalSample, as_pixel_matrix

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 28
ROW_LENGTH = 1 + SAMPLE_SIZE * SAMPLE_SIZE


def _parse_row(line: str, path: Path, line_number: int) -> CanonicalSample:
    parts = line.split(",")
    if len(parts) != ROW_LENGTH:
        raise ValueError(
            f"Expected {ROW_LENGTH} values at {path}:{line_number}, got {len(parts)}"
        )
    try:
        label = int(parts[0])
        values = np.array([float(value) for value in parts[1:]], dtype=np.float64)
    except ValueError as exc:
        raise ValueError(f"Invalid sample row at {path}:{line_number}") from exc
    if not 0 <= label <= 9:
        raise ValueError(f"Label out of range at {path}:{line_number}: {label}")
    pixels = values.reshape(SAMPLE_SIZE, SAMPLE_SIZE) / 255.0
    return CanonicalSample(pixels, label)


def read_samples(path: str | Path, max_samples: int = 0) -> list[CanonicalSample]:
    """Read labeled samples from a CSV file.

    Args:
        path: CSV file in the layout described above.
        max_samples: Stop after this many samples; 0 reads everything.

    Returns:
        list[CanonicalSample]: Samples in file order.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Sample file not found: {csv_path}")

    samples: list[CanonicalSample] = []
    with csv_path.open("r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            samples.append(_parse_row(line, csv_path, line_number))
            if max_samples and len(samples) >= max_samples:
                break
    return samples


def samples_to_arrays(samples: list[CanonicalSample]) -> tuple[np.ndarray, np.ndarray]:
    """Stack samples into ``(N, 1, 28, 28)`` float32 features and int64 labels."""
    if not samples:
        return (
            np.zeros((0, 1, SAMPLE_SIZE, SAMPLE_SIZE), dtype=np.float32),
            np.zeros((0,), dtype=np.int64),
        )
    features = np.stack([sample.pixels for sample in samples]).astype(np.float32)
    labels = np.array([sample.label for sample in samples], dtype=np.int64)
    return features[:, np.newaxis, :, :], labels


class CorrectionStore:
    """Append-only file of user-corrected samples."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def append(self, matrix: np.ndarray, label: int) -> None:
        pixels = as_pixel_matrix(matrix)
        if pixels.shape != (SAMPLE_SIZE, SAMPLE_SIZE):
            raise ValueError(f"Correction must be {SAMPLE_SIZE}x{SAMPLE_SIZE}, got {pixels.shape}")
        if not 0 <= int(label) <= 9:
            raise ValueError(f"Label must be a digit 0-9, got {label}")

        row = [str(value) for value in CanonicalSample(pixels, int(label)).to_row()]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(",".join(row) + "\n")
        logger.info("Stored correction labeled %s in %s", label, self.path)

    def load(self) -> list[CanonicalSample]:
        if not self.path.exists():
            return []
        return read_samples(self.path)
