"""Command line entry point running the class-pair accuracy sweeps.

Usage (from the project root):

    python -m sgd_logreg data/mnist_train.csv data/mnist_test.csv \
        --repetitions 5 --workers 4 --report reports/accuracy_sweeps.json
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from loguru import logger

from .config import ExperimentConfig, SweepConfig, TrainingConfig, get_settings
from .datasets import load_class_pairs, pair_name
from .errors import SGDLogRegError
from .reporting import format_table, write_report
from .sweeps import HyperParameterSweep


def _float_list(raw: str) -> List[float]:
    try:
        return [float(item) for item in raw.split(",") if item.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers, received {raw!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sgd-logreg",
        description="Sweep learning rate and training-set size for SGD logistic regression on digit pairs.",
    )
    parser.add_argument("train_csv", type=Path, help="Training digit table (label, pixels...).")
    parser.add_argument("test_csv", type=Path, help="Test digit table (label, pixels...).")
    parser.add_argument("--config", type=Path, default=None, help="Experiment configuration JSON.")
    parser.add_argument("--seed", type=int, default=None, help="Root seed for all runs.")
    parser.add_argument("--alpha", type=float, default=None, help="Learning rate for the sample-size sweep.")
    parser.add_argument("--alphas", type=_float_list, default=None, help="Comma-separated learning rates.")
    parser.add_argument("--fractions", type=_float_list, default=None, help="Comma-separated sample fractions.")
    parser.add_argument("--repetitions", type=int, default=None, help="Runs averaged per grid value.")
    parser.add_argument("--workers", type=int, default=None, help="Threads used to run a sweep.")
    parser.add_argument("--report", type=Path, default=None, help="Where to write the JSON report.")
    return parser


def resolve_config(args: argparse.Namespace) -> ExperimentConfig:
    """Merge the optional JSON config, environment settings and flags."""
    config = ExperimentConfig.from_json(args.config) if args.config else ExperimentConfig()
    settings = get_settings()

    training = config.training.to_mapping()
    if args.alpha is not None:
        training["alpha"] = args.alpha

    sweep = config.sweep.to_mapping()
    for key in ("alphas", "fractions", "repetitions", "workers"):
        value = getattr(args, key)
        if value is not None:
            sweep[key] = value

    seed = config.seed
    if settings.SEED is not None:
        seed = settings.SEED
    if args.seed is not None:
        seed = args.seed

    return ExperimentConfig(
        training=TrainingConfig(**training),
        sweep=SweepConfig(**sweep),
        class_pairs=config.class_pairs,
        seed=seed,
        report_path=args.report or config.report_path,
    )


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def run_experiments(
    config: ExperimentConfig, train_csv: Path, test_csv: Path
) -> Dict[str, Dict[str, object]]:
    pairs = {pair_name(pair): pair for pair in config.class_pairs}
    datasets = load_class_pairs(train_csv, test_csv, pairs)
    sweep = HyperParameterSweep.from_config(config.training, config.sweep, seed=config.seed)

    results: Dict[str, Dict[str, object]] = {}
    for name, (train_set, test_set) in datasets.items():
        logger.info(f"Running learning-rate sweep for {name}")
        by_alpha = sweep.learning_rates(
            train_set, test_set, config.sweep.alphas, config.sweep.repetitions
        )
        logger.info(f"Running sample-size sweep for {name} at alpha={config.training.alpha}")
        by_fraction = sweep.sample_sizes(
            train_set,
            test_set,
            config.training.alpha,
            config.sweep.fractions,
            config.sweep.repetitions,
        )
        print(f"\n[{name}] accuracy by learning rate")
        print(format_table(by_alpha, "alpha"))
        print(f"\n[{name}] accuracy by training fraction (alpha={config.training.alpha:g})")
        print(format_table(by_fraction, "fraction"))
        results[name] = {"learning_rate": by_alpha, "sample_size": by_fraction}
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().LOG_LEVEL)

    try:
        config = resolve_config(args)
        results = run_experiments(config, args.train_csv, args.test_csv)
    except SGDLogRegError as exc:
        logger.error(f"Experiment failed: {exc}")
        return 1

    path = write_report(config.report_path, results, config.to_mapping())
    logger.info(f"Wrote accuracy report to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
