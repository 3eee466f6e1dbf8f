import numpy as np
import torch

from digit_ocr.classifier import DigitClassifier, load_model, save_model
from digit_ocr.types import UNLABELED, CanonicalSample
from model import CNN


def _samples(count=4):
    rng = np.random.default_rng(1)
    return [CanonicalSample(rng.random((28, 28)), label=i % 10) for i in range(count)]


def _classifier():
    torch.manual_seed(0)
    return DigitClassifier(CNN())


def test_cnn_accepts_flat_and_unbatched_channel_inputs():
    model = CNN().eval()
    batch = torch.rand(2, 1, 28, 28)
    with torch.no_grad():
        expected = model(batch)
        torch.testing.assert_close(model(batch.view(2, 784)), expected)
        torch.testing.assert_close(model(batch.view(2, 28, 28)), expected)
    assert expected.shape == (2, 10)


def test_classify_returns_a_digit():
    label = _classifier().classify(_samples(1)[0])
    assert isinstance(label, int)
    assert 0 <= label <= 9


def test_classify_many_empty():
    assert _classifier().classify_many([]) == []


def test_accuracy_is_a_fraction():
    accuracy = _classifier().accuracy(_samples(10))
    assert 0.0 <= accuracy <= 1.0


def test_save_and_load_preserve_predictions(tmp_path):
    classifier = _classifier()
    path = save_model(classifier, tmp_path / "out" / "model.pt")

    loaded = load_model(path)

    assert loaded is not None
    samples = _samples(6)
    assert loaded.classify_many(samples) == classifier.classify_many(samples)


def test_missing_model_loads_as_none(tmp_path):
    assert load_model(tmp_path / "missing.pt") is None


def test_unreadable_model_loads_as_none(tmp_path):
    path = tmp_path / "broken.pt"
    path.write_bytes(b"not a checkpoint")
    assert load_model(path) is None


def test_accuracy_ignores_unlabeled_samples():
    classifier = _classifier()
    drawn, corrected = _samples(2)
    corrected.label = classifier.classify(corrected)
    drawn.label = UNLABELED

    assert classifier.accuracy([corrected, drawn]) == 1.0
    assert classifier.accuracy([drawn]) == 0.0
