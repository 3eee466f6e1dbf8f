"""Evaluation metrics for digit predictions."""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

NUM_DIGITS = 10


def compute_metrics(predictions: Sequence[int], labels: Sequence[int]) -> dict[str, float]:
    """Compute overall accuracy and per-digit recall."""
    if len(predictions) != len(labels):
        raise ValueError("Predictions and labels must have the same length.")

    total = len(labels)
    if total == 0:
        return {"accuracy": 0.0, **{f"digit_{digit}_acc": 0.0 for digit in range(NUM_DIGITS)}}

    correct = 0
    digit_hits: dict[int, int] = defaultdict(int)
    digit_total: dict[int, int] = defaultdict(int)

    for pred, label in zip(predictions, labels, strict=True):
        digit_total[int(label)] += 1
        if int(pred) == int(label):
            correct += 1
            digit_hits[int(label)] += 1

    metrics = {"accuracy": correct / total}
    for digit in range(NUM_DIGITS):
        count = digit_total.get(digit, 0)
        metrics[f"digit_{digit}_acc"] = digit_hits[digit] / count if count else 0.0

    return metrics
