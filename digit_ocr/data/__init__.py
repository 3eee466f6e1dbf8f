"""Sample file readers and writers."""

from .samples_csv import CorrectionStore, read_samples, samples_to_arrays

__all__ = ["CorrectionStore", "read_samples", "samples_to_arrays"]
