"""Steps that turn an image file into canonical samples and predictions."""

import numpy as np
from digit_ocr.classifier import load_model
from digit_ocr.config import DEFAULT_CONFIG_PATH, load_config
from digit_ocr.imaging import fit_height, load_grayscale, resize_to
from digit_ocr.pipeline import sample_from_photo, samples_from_scan_image
from digit_ocr.types import UNLABELED, CanonicalSample
from zenml import step
from zenml.logger import get_logger

logger = get_logger(__name__)

IMAGE_MODES = {"photo", "scan"}


@step(enable_cache=False)  # type: ignore[untyped-decorator]
def normalize_image_step(
    image_path: str,
    mode: str = "scan",
    config_path: str = "",
) -> np.ndarray:
    """Decode an image and produce canonical samples.

    ``photo`` treats the image as one digit; ``scan`` splits it into digits
    left to right.

    Returns:
        np.ndarray: Samples shaped ``(N, 28, 28)``.
    """
    if mode not in IMAGE_MODES:
        raise ValueError(f"mode must be one of {sorted(IMAGE_MODES)}, got '{mode}'.")

    config = load_config(config_path or DEFAULT_CONFIG_PATH)
    size = config.canonical.target_size
    gray = load_grayscale(image_path)

    if mode == "photo":
        sample, _ = sample_from_photo(resize_to(gray, size), config)
        samples = [sample]
    else:
        samples, _ = samples_from_scan_image(fit_height(gray, size), config)

    logger.info("Extracted %s sample(s) from %s", len(samples), image_path)
    return np.stack([sample.pixels for sample in samples])


@step(enable_cache=False)  # type: ignore[untyped-decorator]
def classify_samples_step(samples: np.ndarray, model_path: str) -> list[int]:
    """Predict a digit for every sample.

    A missing or unreadable model is not an error: every label is reported
    as -1.
    """
    classifier = load_model(model_path)
    if classifier is None:
        logger.warning("No classifier available; skipping prediction.")
        return [UNLABELED] * len(samples)

    labels = classifier.classify_many([CanonicalSample(pixels) for pixels in samples])
    logger.info("Predicted digits: %s", "".join(str(label) for label in labels))
    return labels
