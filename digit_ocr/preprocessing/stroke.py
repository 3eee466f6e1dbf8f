"""Freehand drawing canvas with feathered single-pixel strokes."""

from __future__ import annotations

import numpy as np

from digit_ocr.config import StrokeConfig
from digit_ocr.types import CanonicalSample


class StrokeRenderer:
    """Paint strokes onto a small canvas one cell at a time.

    The canvas starts black (0.0). Every painted cell goes to full ink and
    its eight neighbours are raised by the feather kernel, saturating at 1.0.
    Drive a renderer from a single event stream; it is not thread safe.

    Args:
        config: Canvas size and feather kernel.
    """

    def __init__(self, config: StrokeConfig | None = None) -> None:
        self.config = config or StrokeConfig()
        if self.config.height < 1 or self.config.width < 1:
            raise ValueError("Canvas height and width must be positive.")
        self._kernel = np.asarray(self.config.kernel, dtype=np.float64)
        self._canvas = np.zeros((self.config.height, self.config.width), dtype=np.float64)

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def width(self) -> int:
        return self.config.width

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def paint(self, x: int, y: int) -> None:
        """Mark column ``x``, row ``y`` as ink. Points off the canvas are ignored."""
        if not self._contains(x, y):
            return

        self._canvas[y, x] = 1.0
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if not self._contains(nx, ny):
                    continue
                weight = self._kernel[dy + 1, dx + 1]
                self._canvas[ny, nx] = min(1.0, self._canvas[ny, nx] + weight)

    def paint_pointer(self, px: int, py: int, view_width: int, view_height: int) -> None:
        """Paint the cell under a pointer on a view of the given pixel size."""
        cell_width = max(1, view_width // self.width)
        cell_height = max(1, view_height // self.height)
        self.paint(px // cell_width, py // cell_height)

    def clear(self) -> None:
        self._canvas.fill(0.0)

    def snapshot(self) -> np.ndarray:
        """Return a read-only copy of the canvas."""
        frozen = self._canvas.copy()
        frozen.setflags(write=False)
        return frozen

    def to_sample(self) -> CanonicalSample:
        return CanonicalSample(self.snapshot())
