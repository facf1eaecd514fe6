"""Per-sample SGD training for a logistic-regression classifier with +/-1 labels."""
from __future__ import annotations

import logging
from typing import List, Optional, Union

import numpy as np

from .config import TrainingConfig
from .entities import LabeledDataset, TrainingResult, WeightVector
from .errors import InvalidArgument
from .prediction import predict

LOGGER = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, np.random.SeedSequence, int, None]

# Sentinel baselines; their gap guarantees the first loop check fails.
_INITIAL_OLD = 100.0
_INITIAL_NEW = 200.0


class SGDTrainer:
    """Fit weight vectors with plain stochastic gradient descent.

    Each epoch visits the samples in a fresh random order and applies the
    single-sample gradient of the logistic negative log-likelihood::

        theta += alpha * y * x / (1 + exp(y * theta.x))

    Within an epoch, the scan stops early once every weight has moved less
    than ``convergence_threshold`` away from its value at the start of the
    epoch. Note the comparison is against the epoch-start snapshot, not the
    previous sample. The outer loop stops when a whole epoch moved the weights
    by at most the threshold, or after ``max_epochs`` epochs. Running out of
    epochs is not an error; the current weights are returned.
    """

    def __init__(self, config: Optional[TrainingConfig] = None) -> None:
        self._config = config or TrainingConfig()

    @property
    def config(self) -> TrainingConfig:
        return self._config

    def fit(
        self,
        dataset: LabeledDataset,
        alpha: Optional[float] = None,
        *,
        rng: RandomSource = None,
    ) -> TrainingResult:
        config = self._config
        alpha = config.alpha if alpha is None else alpha
        if not alpha > 0:
            raise InvalidArgument(f"alpha must be positive, received {alpha!r}")

        generator = np.random.default_rng(rng)
        features = dataset.features
        labels = dataset.labels
        threshold = config.convergence_threshold
        n_features, n_samples = features.shape

        theta = generator.normal(0.0, config.init_std, size=n_features)
        theta_old = np.full(n_features, _INITIAL_OLD)
        theta_new = np.full(n_features, _INITIAL_NEW)
        epoch_accuracies: List[float] = []

        epoch = 0
        delta = float(np.max(np.abs(theta_new - theta_old)))
        with np.errstate(over="ignore"):
            while delta > threshold and epoch < config.max_epochs:
                order = generator.permutation(n_samples)
                theta_old = theta.copy()
                for index in order:
                    x = features[:, index]
                    y = labels[index]
                    # exp overflows to inf, which turns the update into an exact 0
                    z = np.exp(y * np.dot(theta, x))
                    theta = theta + alpha * (y * x) / (1.0 + z)
                    if np.all(np.abs(theta - theta_old) < threshold):
                        break
                theta_new = theta.copy()
                delta = float(np.max(np.abs(theta_new - theta_old)))

                if config.track_accuracy:
                    train_accuracy = float(np.mean(predict(theta, features) == labels))
                    epoch_accuracies.append(train_accuracy)
                    LOGGER.debug(
                        "Epoch %s delta=%.6g train_accuracy=%.4f", epoch + 1, delta, train_accuracy
                    )
                else:
                    LOGGER.debug("Epoch %s delta=%.6g", epoch + 1, delta)
                epoch += 1

        converged = delta <= threshold
        if not converged:
            LOGGER.debug(
                "SGD stopped after %s epochs without converging (delta=%.6g, threshold=%.6g)",
                epoch,
                delta,
                threshold,
            )
        return TrainingResult(
            theta=theta,
            epochs=epoch,
            converged=converged,
            last_delta=delta,
            epoch_accuracies=epoch_accuracies,
        )


def fit(
    dataset: LabeledDataset,
    alpha: float,
    convergence_threshold: float = 0.0005,
    max_epochs: int = 50,
    *,
    rng: RandomSource = None,
    init_std: float = 0.5,
    track_accuracy: bool = False,
) -> TrainingResult:
    """Train on ``dataset`` and return the weights with convergence details."""
    config = TrainingConfig(
        alpha=alpha,
        convergence_threshold=convergence_threshold,
        max_epochs=max_epochs,
        init_std=init_std,
        track_accuracy=track_accuracy,
    )
    return SGDTrainer(config).fit(dataset, rng=rng)


def train(
    dataset: LabeledDataset,
    alpha: float,
    convergence_threshold: float = 0.0005,
    max_epochs: int = 50,
    *,
    rng: RandomSource = None,
) -> WeightVector:
    """Train on ``dataset`` and return the weight vector."""
    return fit(dataset, alpha, convergence_threshold, max_epochs, rng=rng).theta


__all__ = ["RandomSource", "SGDTrainer", "fit", "train"]
