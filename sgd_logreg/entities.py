"""Shared dataclasses used across training, prediction and evaluation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .errors import DimensionMismatch, InvalidArgument, InvalidLabel

# A dense float64 vector of length D ("theta").
WeightVector = np.ndarray


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class LabeledDataset:
    """A D x N feature matrix paired with N labels in {-1, +1}.

    Column ``j`` of ``features`` is the feature vector of sample ``j``. Any
    bias term must already be present as one of the D rows; nothing in this
    package appends an intercept on its own.

    Both arrays are copied on construction and flagged read-only, so a
    dataset can be shared between concurrent training runs.
    """

    features: np.ndarray
    labels: np.ndarray

    def __post_init__(self) -> None:
        features = np.array(self.features, dtype=np.float64, copy=True)
        labels = None
        if np.ndim(self.labels) > 0:
            labels = np.array(self.labels, copy=True).reshape(-1)

        if features.ndim != 2:
            raise DimensionMismatch(
                f"features must be a 2-D (D x N) matrix, received {features.ndim}-D input",
                hint="Stack one sample per column.",
            )
        n_features, n_samples = features.shape
        if n_features < 1 or n_samples < 1:
            raise DimensionMismatch(
                f"features must have at least one row and one column, received shape {features.shape}"
            )
        if labels is None or labels.shape[0] != n_samples:
            received = 0 if labels is None else labels.shape[0]
            raise DimensionMismatch(
                f"label count {received} does not match feature column count {n_samples}",
                hint="Each column of the feature matrix needs exactly one label.",
            )
        if not np.isin(labels, (-1, 1)).all():
            bad = sorted({str(value) for value in labels[~np.isin(labels, (-1, 1))].tolist()})
            raise InvalidLabel(f"labels must be -1 or +1, found {', '.join(bad[:5])}")

        object.__setattr__(self, "features", _read_only(features))
        object.__setattr__(self, "labels", _read_only(labels.astype(np.int64)))

    @property
    def n_features(self) -> int:
        return int(self.features.shape[0])

    @property
    def n_samples(self) -> int:
        return int(self.features.shape[1])

    def __len__(self) -> int:
        return self.n_samples

    def head(self, count: int) -> "LabeledDataset":
        """Return the first ``count`` samples in stored column order."""
        if not 1 <= count <= self.n_samples:
            raise InvalidArgument(
                f"count must be within [1, {self.n_samples}], received {count!r}"
            )
        return LabeledDataset(self.features[:, :count], self.labels[:count])

    def subset_for_fraction(self, fraction: float) -> "LabeledDataset":
        """Return the leading ``round(N * fraction)`` samples (at least one)."""
        if not 0 < fraction <= 1:
            raise InvalidArgument(f"fraction must be within (0, 1], received {fraction!r}")
        count = max(1, int(round(self.n_samples * fraction)))
        return self.head(count)


@dataclass(slots=True)
class TrainingResult:
    """Outcome of a single SGD training run."""

    theta: WeightVector
    epochs: int
    converged: bool
    last_delta: float
    epoch_accuracies: List[float] = field(default_factory=list)


@dataclass(slots=True)
class RunResult:
    """Weights and accuracies of one train-then-evaluate cycle."""

    theta: WeightVector
    train_accuracy: float
    test_accuracy: float

    @property
    def accuracies(self) -> Tuple[float, float]:
        return self.train_accuracy, self.test_accuracy


@dataclass(slots=True)
class SweepPoint:
    """Mean accuracies for one grid value across its repetitions."""

    value: float
    mean_train_accuracy: float
    mean_test_accuracy: float
    repetitions: int
    train_accuracies: List[float] = field(default_factory=list)
    test_accuracies: List[float] = field(default_factory=list)
    n_train_samples: Optional[int] = None

    @property
    def accuracies(self) -> Tuple[float, float]:
        return self.mean_train_accuracy, self.mean_test_accuracy

    def to_mapping(self) -> dict:
        payload = {
            "value": self.value,
            "mean_train_accuracy": self.mean_train_accuracy,
            "mean_test_accuracy": self.mean_test_accuracy,
            "repetitions": self.repetitions,
            "train_accuracies": list(self.train_accuracies),
            "test_accuracies": list(self.test_accuracies),
        }
        if self.n_train_samples is not None:
            payload["n_train_samples"] = self.n_train_samples
        return payload
