"""Neural network architectures used by the training and recognition steps."""

from .cnn import CNN

__all__ = ["CNN"]
