"""Normalization and segmentation stages for digit samples."""

from .canonical import canonicalize, ink_row_bounds
from .contrast import normalize_contrast, render_preview
from .segment import column_profile, segment_columns
from .stroke import StrokeRenderer

__all__ = [
    "StrokeRenderer",
    "canonicalize",
    "column_profile",
    "ink_row_bounds",
    "normalize_contrast",
    "render_preview",
    "segment_columns",
]
