"""Configuration schemas for training runs and accuracy sweeps.

Each section is a small dataclass that validates itself on construction so
that a bad value injected from a JSON file or the command line fails before
any training starts.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidArgument

LOGGER = logging.getLogger(__name__)

DEFAULT_ALPHAS: Tuple[float, ...] = (0.0001, 0.001, 0.01, 0.05, 0.1, 0.5, 1.0)
DEFAULT_FRACTIONS: Tuple[float, ...] = (0.01, 0.05, 0.1, 0.25, 0.5, 0.75, 1.0)


def _ensure_positive(name: str, value: float) -> float:
    if not value > 0:
        raise InvalidArgument(f"{name} must be positive, received {value!r}")
    return value


def _ensure_non_negative(name: str, value: float) -> float:
    if not value >= 0:
        raise InvalidArgument(f"{name} must be >= 0, received {value!r}")
    return value


def _ensure_fraction(name: str, value: float) -> float:
    if not 0 < value <= 1:
        raise InvalidArgument(f"{name} must be within (0, 1], received {value!r}")
    return value


def _ensure_not_empty(name: str, values: Sequence) -> Sequence:
    if not values:
        raise InvalidArgument(f"{name} must not be empty")
    return values


def _known_fields(config_cls: type, section: str, values: Mapping[str, object]) -> Dict[str, object]:
    names = {item.name for item in fields(config_cls)}
    known: Dict[str, object] = {}
    for key, value in dict(values).items():
        if key in names:
            known[key] = value
        else:
            LOGGER.warning("Ignoring unknown %s config key: %s", section, key)
    return known


@dataclass
class TrainingConfig:
    """Hyperparameters of a single SGD training run."""

    alpha: float = 0.05
    convergence_threshold: float = 0.0005
    max_epochs: int = 50
    init_std: float = 0.5
    track_accuracy: bool = False

    def __post_init__(self) -> None:
        LOGGER.debug("Validating training config: %s", self)
        _ensure_positive("alpha", self.alpha)
        _ensure_non_negative("convergence_threshold", self.convergence_threshold)
        _ensure_positive("max_epochs", self.max_epochs)
        _ensure_non_negative("init_std", self.init_std)

    def to_mapping(self) -> Dict[str, object]:
        return {
            "alpha": self.alpha,
            "convergence_threshold": self.convergence_threshold,
            "max_epochs": self.max_epochs,
            "init_std": self.init_std,
            "track_accuracy": self.track_accuracy,
        }


@dataclass
class SweepConfig:
    """Learning-rate and sample-size grids with their repetition count."""

    alphas: Tuple[float, ...] = DEFAULT_ALPHAS
    fractions: Tuple[float, ...] = DEFAULT_FRACTIONS
    repetitions: int = 5
    workers: int = 1

    def __post_init__(self) -> None:
        LOGGER.debug("Validating sweep config: %s", self)
        self.alphas = tuple(float(value) for value in self.alphas)
        self.fractions = tuple(float(value) for value in self.fractions)
        _ensure_not_empty("alphas", self.alphas)
        _ensure_not_empty("fractions", self.fractions)
        for value in self.alphas:
            _ensure_positive("alpha", value)
        for value in self.fractions:
            _ensure_fraction("fraction", value)
        _ensure_positive("repetitions", self.repetitions)
        _ensure_positive("workers", self.workers)

    def to_mapping(self) -> Dict[str, object]:
        return {
            "alphas": list(self.alphas),
            "fractions": list(self.fractions),
            "repetitions": self.repetitions,
            "workers": self.workers,
        }


@dataclass
class ExperimentConfig:
    """Aggregate configuration for the class-pair experiments."""

    training: TrainingConfig = field(default_factory=TrainingConfig)
    sweep: SweepConfig = field(default_factory=SweepConfig)
    class_pairs: List[Tuple[int, int]] = field(default_factory=lambda: [(0, 1), (3, 5)])
    seed: Optional[int] = 42
    report_path: Path = field(default_factory=lambda: Path("reports/accuracy_sweeps.json"))

    def __post_init__(self) -> None:
        self.class_pairs = [tuple(int(digit) for digit in pair) for pair in self.class_pairs]
        for pair in self.class_pairs:
            if len(pair) != 2 or pair[0] == pair[1]:
                raise InvalidArgument(f"class pair must name two distinct digits, received {pair!r}")
        self.report_path = Path(self.report_path)

    def to_mapping(self) -> Dict[str, object]:
        return {
            "training": self.training.to_mapping(),
            "sweep": self.sweep.to_mapping(),
            "class_pairs": [list(pair) for pair in self.class_pairs],
            "seed": self.seed,
            "report_path": str(self.report_path),
        }

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "ExperimentConfig":
        known = {"training", "sweep", "class_pairs", "seed", "report_path"}
        for key in mapping:
            if key not in known:
                LOGGER.warning("Ignoring unknown config key: %s", key)
        kwargs: Dict[str, object] = {}
        if "training" in mapping:
            kwargs["training"] = TrainingConfig(**_known_fields(TrainingConfig, "training", mapping["training"]))
        if "sweep" in mapping:
            kwargs["sweep"] = SweepConfig(**_known_fields(SweepConfig, "sweep", mapping["sweep"]))
        for key in ("class_pairs", "seed", "report_path"):
            if key in mapping:
                kwargs[key] = mapping[key]
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: Path) -> "ExperimentConfig":
        LOGGER.info("Loading experiment configuration from %s", path)
        return cls.from_mapping(json.loads(Path(path).read_text(encoding="utf-8")))

    def dump_json(self, path: Path) -> None:
        LOGGER.info("Writing experiment configuration to %s", path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_mapping(), indent=2, sort_keys=True), encoding="utf-8")


@dataclass(slots=True)
class Settings:
    """Process-level settings read from the environment."""

    LOG_LEVEL: str = "INFO"
    SEED: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        seed = os.getenv("SGD_LOGREG_SEED")
        return cls(
            LOG_LEVEL=os.getenv("SGD_LOGREG_LOG_LEVEL", "INFO").upper(),
            SEED=int(seed) if seed else None,
        )


# Global settings instance used by the command line entry point
settings = Settings.from_env()


def get_settings() -> Settings:
    """Return the global settings instance."""

    return settings
