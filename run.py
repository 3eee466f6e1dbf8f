"""Entrypoint for running the ZenML training pipeline."""

import argparse

from pipelines.training_pipeline import training_pipeline


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments for the training pipeline.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(description="Train the digit classifier.")
    parser.add_argument("--train-csv", default="data/mnist_train.csv", help="Training samples CSV.")
    parser.add_argument(
        "--test-csv",
        default="data/mnist_test.csv",
        help="Test samples CSV. Pass an empty string to split the training set.",
    )
    parser.add_argument("--corrections-csv", default="", help="Correction store to merge into training.")
    parser.add_argument("--model-path", default="out/digit_cnn.pt", help="Where to write the model.")
    parser.add_argument("--num-epochs", type=int, default=3, help="Number of training epochs.")
    parser.add_argument("--batch-size", type=int, default=64, help="Training batch size.")
    parser.add_argument("--learning-rate", type=float, default=0.001, help="Learning rate.")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility.")
    return parser.parse_args()


def main() -> None:
    """Run the ZenML pipeline end-to-end."""
    args = parse_args()
    training_pipeline(
        train_csv=args.train_csv,
        test_csv=args.test_csv,
        corrections_csv=args.corrections_csv,
        model_path=args.model_path,
        num_epochs=args.num_epochs,
        batch_size=args.batch_size,
        learning_rate=args.learning_rate,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
