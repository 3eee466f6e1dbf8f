"""ZenML pipeline wiring data loading, training, and evaluation steps."""

from steps.data_loader import load_data_step
from steps.evaluate import evaluate_step
from steps.training import train_step
from zenml import pipeline


@pipeline  # type: ignore[untyped-decorator]
def training_pipeline(  # noqa: PLR0913
    train_csv: str = "data/mnist_train.csv",
    test_csv: str = "data/mnist_test.csv",
    corrections_csv: str = "",
    model_path: str = "out/digit_cnn.pt",
    num_epochs: int = 3,
    batch_size: int = 64,
    learning_rate: float = 0.001,
    seed: int = 42,
) -> dict[str, float]:
    """Run the training workflow end-to-end.

    Args:
        train_csv: Training samples CSV.
        test_csv: Test samples CSV; empty to split the training set.
        corrections_csv: Optional correction store merged into training.
        model_path: Output path for the trained weights.
        num_epochs: Number of training epochs.
        batch_size: Batch size for training and evaluation.
        learning_rate: Learning rate for the optimizer.
        seed: Random seed for reproducibility.

    Returns:
        dict[str, float]: Training metrics from the training step.
    """
    train_features, train_labels, test_features, test_labels = load_data_step(
        train_csv=train_csv,
        test_csv=test_csv,
        corrections_csv=corrections_csv,
        seed=seed,
    )
    model, metrics = train_step(
        train_features=train_features,
        train_labels=train_labels,
        model_path=model_path,
        num_epochs=num_epochs,
        batch_size=batch_size,
        learning_rate=learning_rate,
        seed=seed,
    )
    _ = evaluate_step(
        model=model,
        test_features=test_features,
        test_labels=test_labels,
        batch_size=batch_size,
    )
    return metrics  # type: ignore[no-any-return]
