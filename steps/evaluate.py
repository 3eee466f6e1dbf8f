"""Evaluation step for the ZenML pipeline using the test split."""

import numpy as np
import torch
from digit_ocr.utils.metrics import compute_metrics
from torch.utils.data import DataLoader, TensorDataset
from zenml import step
from zenml.logger import get_logger

logger = get_logger(__name__)


@step(enable_cache=False)  # type: ignore[untyped-decorator]
def evaluate_step(
    model: torch.nn.Module,
    test_features: np.ndarray,
    test_labels: np.ndarray,
    batch_size: int = 64,
) -> dict[str, float]:
    """Evaluate the trained model on the held-out test set.

    Args:
        model: Trained model to evaluate.
        test_features: Test feature array.
        test_labels: Test labels array.
        batch_size: Batch size for evaluation.

    Returns:
        dict[str, float]: Test loss, accuracy, and per-digit accuracy.
    """
    model.eval()
    x_tensor = torch.from_numpy(test_features.astype(np.float32))
    y_tensor = torch.from_numpy(test_labels).long()

    test_loader = DataLoader(
        TensorDataset(x_tensor, y_tensor), batch_size=batch_size, shuffle=False
    )

    criterion = torch.nn.CrossEntropyLoss()
    total_loss = 0.0
    predictions: list[int] = []

    with torch.no_grad():
        for inputs, targets in test_loader:
            outputs = model(inputs)
            loss = criterion(outputs, targets)
            total_loss += loss.item() * inputs.size(0)
            predictions.extend(torch.argmax(outputs, dim=1).tolist())

    metrics = compute_metrics(predictions, test_labels.tolist())
    metrics["test_loss"] = total_loss / len(test_loader.dataset) if len(test_loader.dataset) else 0.0

    logger.info("Test Loss: %.4f Test Acc: %.4f", metrics["test_loss"], metrics["accuracy"])

    return metrics
