"""ZenML steps for digit training and recognition."""
