"""Digit classifier wrapper around the CNN."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import torch
from model import CNN

from digit_ocr.types import CanonicalSample
from digit_ocr.utils.metrics import compute_metrics

logger = logging.getLogger(__name__)


class DigitClassifier:
    """Predict digit labels for canonical samples.

    Args:
        model: Trained network producing 10 logits per sample.
        device: Torch device used for inference.
    """

    def __init__(self, model: torch.nn.Module, device: str = "cpu") -> None:
        self.device = torch.device(device)
        self.model = model.to(self.device)
        self.model.eval()

    def _batch(self, samples: Sequence[CanonicalSample]) -> torch.Tensor:
        stacked = np.stack([sample.pixels for sample in samples]).astype(np.float32)
        return torch.from_numpy(stacked).unsqueeze(1).to(self.device)

    def classify_many(self, samples: Sequence[CanonicalSample]) -> list[int]:
        if not samples:
            return []
        with torch.no_grad():
            logits = self.model(self._batch(samples))
        return [int(label) for label in torch.argmax(logits, dim=1).cpu().tolist()]

    def classify(self, sample: CanonicalSample) -> int:
        return self.classify_many([sample])[0]

    def accuracy(self, samples: Sequence[CanonicalSample]) -> float:
        """Fraction of labeled samples whose prediction matches their label.

        Unlabeled samples are ignored; 0.0 when none are labeled.
        """
        labeled = [sample for sample in samples if sample.is_labeled]
        if not labeled:
            return 0.0
        predictions = self.classify_many(labeled)
        return compute_metrics(predictions, [sample.label for sample in labeled])["accuracy"]


def save_model(classifier: DigitClassifier, path: str | Path) -> Path:
    """Write the classifier weights to ``path``."""
    model_path = Path(path)
    model_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "state_dict": classifier.model.state_dict(),
        "input_channels": int(getattr(classifier.model, "input_channels", 1)),
        "output_size": int(getattr(classifier.model, "output_size", 10)),
    }
    torch.save(payload, model_path)
    logger.info("Wrote model to %s", model_path)
    return model_path


def load_model(path: str | Path, device: str = "cpu") -> DigitClassifier | None:
    """Load a classifier saved by :func:`save_model`.

    Returns:
        DigitClassifier | None: ``None`` when the file is missing or unreadable.
    """
    model_path = Path(path)
    if not model_path.is_file():
        logger.warning("Model file not found: %s", model_path)
        return None

    try:
        payload = torch.load(model_path, map_location=device, weights_only=True)
        model = CNN(
            input_channels=int(payload.get("input_channels", 1)),
            output_size=int(payload.get("output_size", 10)),
        )
        model.load_state_dict(payload["state_dict"])
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to load model from %s: %s", model_path, exc)
        return None

    return DigitClassifier(model, device=device)
