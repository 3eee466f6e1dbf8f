"""ZenML pipeline that reads digits from an image."""

from steps.recognize import classify_samples_step, normalize_image_step
from zenml import pipeline


@pipeline  # type: ignore[untyped-decorator]
def digit_recognition_pipeline(
    image_path: str,
    model_path: str = "out/digit_cnn.pt",
    mode: str = "scan",
    config_path: str = "",
) -> list[int]:
    """Normalize ``image_path`` into canonical samples and classify them."""
    samples = normalize_image_step(image_path=image_path, mode=mode, config_path=config_path)
    return classify_samples_step(samples=samples, model_path=model_path)  # type: ignore[no-any-return]
