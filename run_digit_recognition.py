"""Entrypoint for reading digits from an image file."""

from __future__ import annotations

import argparse

from pipelines.digit_recognition_pipeline import digit_recognition_pipeline


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Recognize handwritten digits in an image.")
    parser.add_argument("image_path", help="Image file to read.")
    parser.add_argument("--model-path", default="out/digit_cnn.pt", help="Trained classifier weights.")
    parser.add_argument(
        "--mode",
        choices=["photo", "scan"],
        default="scan",
        help="'photo' for a single digit, 'scan' to split a row of digits.",
    )
    parser.add_argument("--config", default="", help="Pipeline YAML config (defaults to the bundled one).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    digit_recognition_pipeline(
        image_path=args.image_path,
        model_path=args.model_path,
        mode=args.mode,
        config_path=args.config,
    )


if __name__ == "__main__":
    main()
