"""Pytest configuration and fixtures."""
from pathlib import Path

import numpy as np
import pytest

from sgd_logreg.entities import LabeledDataset


def _blobs(rng: np.random.Generator, n_per_class: int) -> LabeledDataset:
    negative = rng.normal(-1.0, 0.5, size=(3, n_per_class))
    positive = rng.normal(1.0, 0.5, size=(3, n_per_class))
    features = np.hstack([negative, positive])
    features = np.vstack([features, np.ones((1, features.shape[1]))])
    labels = np.array([-1] * n_per_class + [1] * n_per_class)
    order = rng.permutation(labels.shape[0])
    return LabeledDataset(features[:, order], labels[order])


@pytest.fixture
def separable_dataset():
    """Four 2-D samples split by a hyperplane through the origin."""
    features = np.array([
        [-2.0, -1.0, 1.0, 2.0],
        [-1.0, -2.0, 2.0, 1.0],
    ])
    return LabeledDataset(features, np.array([-1, -1, 1, 1]))


@pytest.fixture
def blob_split():
    """Train/test sets drawn from two well separated Gaussian clusters."""
    rng = np.random.default_rng(2024)
    return _blobs(rng, 30), _blobs(rng, 20)


def write_digit_csv(path: Path, digits, pixels: int = 4, header: bool = True, seed: int = 0) -> Path:
    rng = np.random.default_rng(seed)
    lines = []
    if header:
        lines.append(",".join(["label"] + [f"pixel{i}" for i in range(pixels)]))
    for digit in digits:
        # odd digits are brighter
        base = 40 + 40 * (digit % 2)
        values = rng.integers(base, base + 30, size=pixels)
        lines.append(",".join([str(digit)] + [str(int(v)) for v in values]))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def digit_csv_writer():
    """Factory writing a digit CSV: label column followed by pixel columns."""
    return write_digit_csv


@pytest.fixture
def digit_tables(tmp_path):
    """Small train/test digit CSVs covering the 0v1 and 3v5 pairs."""
    digits = [0, 1, 3, 5, 7] * 6
    train = write_digit_csv(tmp_path / "train.csv", digits, seed=1)
    test = write_digit_csv(tmp_path / "test.csv", digits[:15], header=False, seed=2)
    return train, test
