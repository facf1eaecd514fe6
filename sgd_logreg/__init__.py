"""Binary logistic-regression classifiers trained with per-sample SGD."""

from .config import ExperimentConfig, Settings, SweepConfig, TrainingConfig, get_settings
from .datasets import CLASS_PAIRS, load_class_pairs, load_digit_table, make_class_pair
from .entities import LabeledDataset, RunResult, SweepPoint, TrainingResult, WeightVector
from .errors import DataLoadError, DimensionMismatch, InvalidArgument, InvalidLabel, SGDLogRegError
from .evaluation import accuracy, run_model
from .prediction import predict
from .reporting import format_table, write_report
from .sweeps import HyperParameterSweep, spawn_generators, sweep_learning_rates, sweep_sample_sizes
from .training import SGDTrainer, fit, train

__all__ = [
    "CLASS_PAIRS",
    "DataLoadError",
    "DimensionMismatch",
    "ExperimentConfig",
    "HyperParameterSweep",
    "InvalidArgument",
    "InvalidLabel",
    "LabeledDataset",
    "RunResult",
    "SGDLogRegError",
    "SGDTrainer",
    "Settings",
    "SweepConfig",
    "SweepPoint",
    "TrainingConfig",
    "TrainingResult",
    "WeightVector",
    "accuracy",
    "fit",
    "format_table",
    "get_settings",
    "load_class_pairs",
    "load_digit_table",
    "make_class_pair",
    "predict",
    "run_model",
    "spawn_generators",
    "sweep_learning_rates",
    "sweep_sample_sizes",
    "train",
    "write_report",
]
