"""ZenML step for training the digit classifier."""

import numpy as np
import torch
from digit_ocr.classifier import DigitClassifier, save_model
from model import CNN
from torch import nn, optim
from torch.utils.data import DataLoader, TensorDataset, random_split
from zenml import step
from zenml.logger import get_logger

logger = get_logger(__name__)


def _run_epoch(
    model: nn.Module,
    loader: DataLoader,
    criterion: nn.Module,
    optimizer: optim.Optimizer | None = None,
) -> tuple[float, float]:
    """Run one pass over ``loader``; trains when an optimizer is given."""
    training = optimizer is not None
    model.train(training)
    total_loss = 0.0
    correct = 0
    total = 0

    with torch.set_grad_enabled(training):
        for inputs, targets in loader:
            if optimizer is not None:
                optimizer.zero_grad()
            outputs = model(inputs)
            loss = criterion(outputs, targets)
            if optimizer is not None:
                loss.backward()
                optimizer.step()

            total_loss += loss.item() * inputs.size(0)
            _, predicted = torch.max(outputs.data, 1)
            total += targets.size(0)
            correct += (predicted == targets).sum().item()

    if total == 0:
        return 0.0, 0.0
    return total_loss / total, correct / total


def _split_sizes(count: int) -> tuple[int, int]:
    """Return train/validation sizes, holding out 10% (at least one sample)."""
    if count < 2:
        raise ValueError(f"No training samples: need at least 2, got {count}")
    val_size = max(1, int(0.1 * count))
    return count - val_size, val_size


@step(enable_cache=False)  # type: ignore[untyped-decorator]
def train_step(  # noqa: PLR0913
    train_features: np.ndarray,
    train_labels: np.ndarray,
    model_path: str = "out/digit_cnn.pt",
    num_epochs: int = 3,
    batch_size: int = 64,
    learning_rate: float = 0.001,
    seed: int = 42,
) -> tuple[torch.nn.Module, dict[str, float]]:
    """Train the CNN and save its weights.

    Args:
        train_features: Training samples shaped ``(N, 1, 28, 28)``.
        train_labels: Digit labels.
        model_path: Where the trained weights are written.
        num_epochs: Number of training epochs.
        batch_size: Batch size for training.
        learning_rate: Learning rate for the optimizer.
        seed: Random seed for reproducibility.

    Returns:
        tuple[torch.nn.Module, dict[str, float]]: Trained model and training metrics.
    """
    train_size, val_size = _split_sizes(len(train_labels))
    torch.manual_seed(seed)

    x_tensor = torch.from_numpy(train_features.astype(np.float32))
    y_tensor = torch.from_numpy(train_labels).long()

    dataset = TensorDataset(x_tensor, y_tensor)
    train_dataset, val_dataset = random_split(
        dataset, [train_size, val_size], generator=torch.Generator().manual_seed(seed)
    )

    train_loader = DataLoader(train_dataset, batch_size=batch_size, shuffle=True)
    val_loader = DataLoader(val_dataset, batch_size=batch_size, shuffle=False)

    input_channels = x_tensor.shape[1] if x_tensor.dim() == 4 else 1
    model = CNN(input_channels=input_channels, output_size=10)

    criterion = nn.CrossEntropyLoss()
    optimizer = optim.Adam(model.parameters(), lr=learning_rate)

    train_loss = train_accuracy = val_loss = val_accuracy = 0.0
    for epoch in range(num_epochs):
        train_loss, train_accuracy = _run_epoch(model, train_loader, criterion, optimizer)
        val_loss, val_accuracy = _run_epoch(model, val_loader, criterion)
        logger.info(
            "Epoch %s/%s Train Loss: %.4f Train Acc: %.4f Val Loss: %.4f Val Acc: %.4f",
            epoch + 1,
            num_epochs,
            train_loss,
            train_accuracy,
            val_loss,
            val_accuracy,
        )

    model.eval()
    save_model(DigitClassifier(model), model_path)

    return model, {
        "train_loss": train_loss,
        "train_accuracy": train_accuracy,
        "val_loss": val_loss,
        "val_accuracy": val_accuracy,
    }
