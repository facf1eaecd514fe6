"""Learning-rate and sample-size sweeps over repeated training runs.

Every (grid value, repetition) pair gets its own generator spawned from a
single root :class:`numpy.random.SeedSequence`, in grid order. Results are
therefore the same whether the runs execute serially or on a thread pool.
A sweep object keeps its root sequence, so each successive call on it draws
fresh children and never replays the streams of an earlier call.
"""
from __future__ import annotations

import logging
import statistics
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import SweepConfig, TrainingConfig
from .entities import LabeledDataset, RunResult, SweepPoint
from .errors import InvalidArgument
from .evaluation import run_model

LOGGER = logging.getLogger(__name__)

SeedLike = Union[int, np.random.SeedSequence, None]


def spawn_generators(seed: SeedLike, count: int) -> List[np.random.Generator]:
    """Derive ``count`` independent generators from ``seed``."""
    root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    return [np.random.default_rng(child) for child in root.spawn(count)]


@dataclass(slots=True)
class _Task:
    value: float
    repetition: int
    train_set: LabeledDataset
    alpha: float


def _validate_grid(name: str, values: Sequence[float], repetitions: int) -> Tuple[float, ...]:
    grid = tuple(float(value) for value in values)
    if not grid:
        raise InvalidArgument(f"{name} must not be empty", hint=f"Pass at least one value in {name}.")
    if len(set(grid)) != len(grid):
        raise InvalidArgument(f"{name} must not contain duplicates, received {list(grid)}")
    if repetitions < 1:
        raise InvalidArgument(f"repetitions must be at least 1, received {repetitions!r}")
    return grid


class HyperParameterSweep:
    """Repeat train/evaluate cycles across a grid and average the accuracies."""

    def __init__(
        self,
        training: Optional[TrainingConfig] = None,
        *,
        seed: SeedLike = None,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            raise InvalidArgument(f"workers must be at least 1, received {workers!r}")
        self._training = training or TrainingConfig()
        if not isinstance(seed, np.random.SeedSequence):
            seed = np.random.SeedSequence(seed)
        self._seed_sequence = seed
        self._workers = workers

    @classmethod
    def from_config(
        cls, training: TrainingConfig, sweep: SweepConfig, *, seed: SeedLike = None
    ) -> "HyperParameterSweep":
        return cls(training, seed=seed, workers=sweep.workers)

    def learning_rates(
        self,
        train_set: LabeledDataset,
        test_set: LabeledDataset,
        alphas: Sequence[float],
        repetitions: int,
    ) -> Dict[float, SweepPoint]:
        grid = _validate_grid("alphas", alphas, repetitions)
        for alpha in grid:
            if not alpha > 0:
                raise InvalidArgument(f"alpha must be positive, received {alpha!r}")
        tasks = [
            _Task(value=alpha, repetition=rep, train_set=train_set, alpha=alpha)
            for alpha in grid
            for rep in range(repetitions)
        ]
        LOGGER.info(
            "Sweeping %s learning rates x %s repetitions on %s samples",
            len(grid),
            repetitions,
            train_set.n_samples,
        )
        return self._aggregate(grid, tasks, self._execute(tasks, test_set))

    def sample_sizes(
        self,
        train_set: LabeledDataset,
        test_set: LabeledDataset,
        alpha: float,
        fractions: Sequence[float],
        repetitions: int,
    ) -> Dict[float, SweepPoint]:
        grid = _validate_grid("fractions", fractions, repetitions)
        if not alpha > 0:
            raise InvalidArgument(f"alpha must be positive, received {alpha!r}")
        subsets = {fraction: train_set.subset_for_fraction(fraction) for fraction in grid}
        tasks = [
            _Task(value=fraction, repetition=rep, train_set=subsets[fraction], alpha=alpha)
            for fraction in grid
            for rep in range(repetitions)
        ]
        LOGGER.info(
            "Sweeping %s sample-size fractions x %s repetitions at alpha=%s",
            len(grid),
            repetitions,
            alpha,
        )
        points = self._aggregate(grid, tasks, self._execute(tasks, test_set))
        for fraction, point in points.items():
            point.n_train_samples = subsets[fraction].n_samples
        return points

    def _execute(self, tasks: List[_Task], test_set: LabeledDataset) -> List[RunResult]:
        generators = spawn_generators(self._seed_sequence, len(tasks))

        def run(task: _Task, rng: np.random.Generator) -> RunResult:
            LOGGER.debug("Running value=%s repetition=%s", task.value, task.repetition)
            return run_model(task.train_set, test_set, task.alpha, rng, config=self._training)

        if self._workers == 1:
            return [run(task, rng) for task, rng in zip(tasks, generators)]
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            return list(pool.map(run, tasks, generators))

    @staticmethod
    def _aggregate(
        grid: Sequence[float], tasks: List[_Task], results: List[RunResult]
    ) -> Dict[float, SweepPoint]:
        train_scores: Dict[float, List[float]] = {value: [] for value in grid}
        test_scores: Dict[float, List[float]] = {value: [] for value in grid}
        for task, result in zip(tasks, results):
            train_scores[task.value].append(result.train_accuracy)
            test_scores[task.value].append(result.test_accuracy)

        points: Dict[float, SweepPoint] = {}
        for value in grid:
            point = SweepPoint(
                value=value,
                mean_train_accuracy=statistics.fmean(train_scores[value]),
                mean_test_accuracy=statistics.fmean(test_scores[value]),
                repetitions=len(train_scores[value]),
                train_accuracies=train_scores[value],
                test_accuracies=test_scores[value],
            )
            LOGGER.info(
                "value=%s mean_train_accuracy=%.4f mean_test_accuracy=%.4f",
                value,
                point.mean_train_accuracy,
                point.mean_test_accuracy,
            )
            points[value] = point
        return points


def sweep_learning_rates(
    train_set: LabeledDataset,
    test_set: LabeledDataset,
    alphas: Sequence[float],
    repetitions: int,
    *,
    seed: SeedLike = None,
    workers: int = 1,
    config: Optional[TrainingConfig] = None,
) -> Dict[float, SweepPoint]:
    """Mean train/test accuracy per learning rate."""
    sweep = HyperParameterSweep(config, seed=seed, workers=workers)
    return sweep.learning_rates(train_set, test_set, alphas, repetitions)


def sweep_sample_sizes(
    train_set: LabeledDataset,
    test_set: LabeledDataset,
    alpha: float,
    fractions: Sequence[float],
    repetitions: int,
    *,
    seed: SeedLike = None,
    workers: int = 1,
    config: Optional[TrainingConfig] = None,
) -> Dict[float, SweepPoint]:
    """Mean train/test accuracy per training-set fraction.

    The subset for fraction ``f`` is the first ``round(N * f)`` training
    columns in stored order; every run is scored on the full test set.
    """
    sweep = HyperParameterSweep(config, seed=seed, workers=workers)
    return sweep.sample_sizes(train_set, test_set, alpha, fractions, repetitions)


__all__ = [
    "HyperParameterSweep",
    "SeedLike",
    "spawn_generators",
    "sweep_learning_rates",
    "sweep_sample_sizes",
]
