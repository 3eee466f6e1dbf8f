"""Digit sample normalization, segmentation, and classification."""
