"""Data loading step for the ZenML pipeline."""

import numpy as np
from digit_ocr.data import CorrectionStore, read_samples, samples_to_arrays
from digit_ocr.types import CanonicalSample
from sklearn.model_selection import train_test_split
from zenml import step
from zenml.logger import get_logger

logger = get_logger(__name__)


def _can_stratify(labels: list[int]) -> bool:
    if len(labels) < 2:
        return False
    counts: dict[int, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return min(counts.values()) >= 2


def _split_samples(
    samples: list[CanonicalSample],
    test_ratio: float,
    seed: int,
) -> tuple[list[CanonicalSample], list[CanonicalSample]]:
    """Split samples into train/test, stratified by digit when possible."""
    labels = [sample.label for sample in samples]
    stratify = labels if _can_stratify(labels) else None
    try:
        train, test = train_test_split(
            samples,
            test_size=test_ratio,
            random_state=seed,
            shuffle=True,
            stratify=stratify,
        )
    except ValueError:
        logger.warning("Stratified split failed; falling back to unstratified split.")
        train, test = train_test_split(
            samples,
            test_size=test_ratio,
            random_state=seed,
            shuffle=True,
            stratify=None,
        )
    return list(train), list(test)


def _load_samples(
    train_csv: str,
    test_csv: str,
    corrections_csv: str,
    test_ratio: float,
    seed: int,
    max_samples: int,
) -> tuple[list[CanonicalSample], list[CanonicalSample]]:
    train_samples = read_samples(train_csv, max_samples)
    if corrections_csv:
        corrections = CorrectionStore(corrections_csv).load()
        logger.info("Adding %s corrected samples from %s", len(corrections), corrections_csv)
        train_samples.extend(corrections)

    if test_csv:
        return train_samples, read_samples(test_csv, max_samples)
    return _split_samples(train_samples, test_ratio, seed)


@step(enable_cache=False)  # type: ignore[untyped-decorator]
def load_data_step(
    train_csv: str = "data/mnist_train.csv",
    test_csv: str = "data/mnist_test.csv",
    corrections_csv: str = "",
    test_ratio: float = 0.2,
    seed: int = 42,
    max_samples: int = 0,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Load digit samples from CSV files; fallback to dummy data if needed.

    Args:
        train_csv: Training samples, one ``label,pixels...`` row each.
        test_csv: Test samples. When empty, the training set is split.
        corrections_csv: Optional correction store appended to training.
        test_ratio: Test fraction used when splitting the training set.
        seed: Random seed for the split.
        max_samples: Per-file sample cap; 0 reads everything.

    Returns:
        tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]: Train features, train labels,
            test features, and test labels.
    """
    try:
        train_samples, test_samples = _load_samples(
            train_csv, test_csv, corrections_csv, test_ratio, seed, max_samples
        )
        train_features, train_labels = samples_to_arrays(train_samples)
        test_features, test_labels = samples_to_arrays(test_samples)
        logger.info(
            "Loaded %s train samples and %s test samples",
            len(train_labels),
            len(test_labels),
        )
    except (OSError, ValueError) as exc:
        logger.warning("Falling back to dummy data: %s", exc)
        rng = np.random.default_rng(seed)
        train_features = rng.random((1000, 1, 28, 28), dtype=np.float32)
        train_labels = rng.integers(0, 10, size=1000, dtype=np.int64)
        test_features = rng.random((200, 1, 28, 28), dtype=np.float32)
        test_labels = rng.integers(0, 10, size=200, dtype=np.int64)

    return train_features, train_labels, test_features, test_labels
