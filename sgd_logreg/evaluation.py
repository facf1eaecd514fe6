"""Accuracy metric and the single train-then-evaluate cycle."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from .config import TrainingConfig
from .entities import LabeledDataset, RunResult
from .errors import DimensionMismatch, InvalidArgument
from .prediction import predict
from .training import RandomSource, SGDTrainer

LOGGER = logging.getLogger(__name__)


def accuracy(true_labels: Sequence[int], predicted_labels: Sequence[int]) -> float:
    """Fraction of index-aligned positions where the two label vectors agree."""
    truth = np.asarray(true_labels)
    predicted = np.asarray(predicted_labels)
    if truth.ndim != 1 or predicted.ndim != 1:
        raise DimensionMismatch(
            f"label vectors must be 1-D, received {truth.ndim}-D and {predicted.ndim}-D input"
        )
    if truth.shape[0] != predicted.shape[0]:
        raise DimensionMismatch(
            f"cannot compare {truth.shape[0]} true labels with {predicted.shape[0]} predictions"
        )
    if truth.shape[0] == 0:
        raise InvalidArgument("accuracy is undefined for empty label vectors")
    return float(np.mean(truth == predicted))


def run_model(
    train_set: LabeledDataset,
    test_set: LabeledDataset,
    alpha: float,
    rng: RandomSource = None,
    *,
    config: Optional[TrainingConfig] = None,
) -> RunResult:
    """Train on ``train_set`` then score the weights on both sets."""
    if train_set.n_features != test_set.n_features:
        raise DimensionMismatch(
            f"train set has {train_set.n_features} features but test set has {test_set.n_features}"
        )
    result = SGDTrainer(config).fit(train_set, alpha, rng=rng)
    train_accuracy = accuracy(train_set.labels, predict(result.theta, train_set))
    test_accuracy = accuracy(test_set.labels, predict(result.theta, test_set))
    LOGGER.debug(
        "alpha=%s n_train=%s epochs=%s train_accuracy=%.4f test_accuracy=%.4f",
        alpha,
        train_set.n_samples,
        result.epochs,
        train_accuracy,
        test_accuracy,
    )
    return RunResult(theta=result.theta, train_accuracy=train_accuracy, test_accuracy=test_accuracy)


__all__ = ["accuracy", "run_model"]
