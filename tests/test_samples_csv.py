import numpy as np
import pytest

from digit_ocr.data import CorrectionStore, read_samples, samples_to_arrays
from digit_ocr.types import CanonicalSample


def _digit_one():
    pixels = np.zeros((28, 28))
    pixels[4:24, 13:15] = 1.0
    return pixels


def _write_rows(path, rows):
    path.write_text("\n".join(",".join(str(v) for v in row) for row in rows) + "\n", encoding="utf-8")


def test_correction_store_round_trip(tmp_path):
    store = CorrectionStore(tmp_path / "nested" / "corrections.csv")
    store.append(_digit_one(), 1)
    store.append(np.zeros((28, 28)), 0)

    samples = store.load()

    assert [sample.label for sample in samples] == [1, 0]
    np.testing.assert_array_equal(samples[0].pixels, _digit_one())
    assert not samples[1].pixels.any()


def test_correction_row_layout(tmp_path):
    store = CorrectionStore(tmp_path / "corrections.csv")
    store.append(_digit_one(), 7)

    values = (tmp_path / "corrections.csv").read_text(encoding="utf-8").strip().split(",")

    assert len(values) == 785
    assert values[0] == "7"
    assert values[1 + 4 * 28 + 13] == "255"
    assert values[1] == "0"


def test_missing_correction_store_is_empty(tmp_path):
    assert CorrectionStore(tmp_path / "none.csv").load() == []


@pytest.mark.parametrize("label", [-1, 10])
def test_correction_label_must_be_a_digit(tmp_path, label):
    with pytest.raises(ValueError):
        CorrectionStore(tmp_path / "c.csv").append(_digit_one(), label)


def test_correction_must_be_canonical_size(tmp_path):
    with pytest.raises(ValueError):
        CorrectionStore(tmp_path / "c.csv").append(np.zeros((28, 27)), 3)


def test_sample_to_row_matches_store_layout():
    row = CanonicalSample(_digit_one(), 1).to_row()
    assert row[0] == 1
    assert len(row) == 785
    assert sum(row[1:]) == 40 * 255


def test_read_samples_scales_bytes(tmp_path):
    path = tmp_path / "mnist.csv"
    _write_rows(path, [[5] + [0] * 783 + [255], [3] + [128] * 784])

    samples = read_samples(path)

    assert [sample.label for sample in samples] == [5, 3]
    assert samples[0].pixels[27, 27] == 1.0
    assert samples[1].pixels[0, 0] == pytest.approx(128 / 255)


def test_read_samples_respects_max_samples(tmp_path):
    path = tmp_path / "mnist.csv"
    _write_rows(path, [[digit] + [0] * 784 for digit in range(5)])
    assert len(read_samples(path, max_samples=2)) == 2


def test_malformed_row_reports_location(tmp_path):
    path = tmp_path / "mnist.csv"
    _write_rows(path, [[1] + [0] * 784, [2] + [0] * 10])

    with pytest.raises(ValueError, match="mnist.csv:2"):
        read_samples(path)


def test_missing_sample_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_samples(tmp_path / "missing.csv")


def test_samples_to_arrays_shapes():
    features, labels = samples_to_arrays([CanonicalSample(_digit_one(), 1)] * 3)
    assert features.shape == (3, 1, 28, 28)
    assert features.dtype == np.float32
    np.testing.assert_array_equal(labels, [1, 1, 1])

    empty_features, empty_labels = samples_to_arrays([])
    assert empty_features.shape == (0, 1, 28, 28)
    assert empty_labels.shape == (0,)


def test_stored_row_matches_sample_row(tmp_path):
    store = CorrectionStore(tmp_path / "corrections.csv")
    store.append(_digit_one(), 4)

    stored = (tmp_path / "corrections.csv").read_text(encoding="utf-8").strip()

    assert stored == ",".join(str(v) for v in CanonicalSample(_digit_one(), 4).to_row())
