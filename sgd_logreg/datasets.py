"""
Digit table ingestion and class-pair partitioning.

Handles:
- Reading a labeled digit table (CSV, label column first, then pixels)
- Scaling pixel intensities to [0, 1]
- Carving a two-digit sub-problem and relabeling it to -1/+1
- Appending the constant bias row the classifiers rely on
"""
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
import pandas as pd
from loguru import logger

from .entities import LabeledDataset
from .errors import DataLoadError

# name -> (negative digit, positive digit)
CLASS_PAIRS: Dict[str, Tuple[int, int]] = {
    "0v1": (0, 1),
    "3v5": (3, 5),
}


def pair_name(pair: Tuple[int, int]) -> str:
    return f"{pair[0]}v{pair[1]}"


def load_digit_table(path: Union[str, Path]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Load a digit table from CSV.

    Args:
        path: CSV file whose first column is the digit and whose remaining
            columns are pixel intensities. A header row is detected and
            skipped.

    Returns:
        Tuple of (images N x P float64 scaled to [0, 1], digits N int64)
    """
    path = Path(path)
    if not path.is_file():
        raise DataLoadError(f"Digit table not found: {path}")

    try:
        frame = pd.read_csv(path, header=None, low_memory=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Failed to parse digit table {path}", hint=str(exc)) from exc

    numeric = frame.apply(pd.to_numeric, errors="coerce")
    if len(numeric) and numeric.iloc[0].isna().any():
        logger.debug(f"Skipping header row of {path.name}")
        numeric = numeric.iloc[1:]

    if numeric.empty or numeric.shape[1] < 2:
        raise DataLoadError(
            f"Digit table {path} has no samples",
            hint="Expected one row per image: label followed by pixel values.",
        )
    if numeric.isna().any().any():
        raise DataLoadError(f"Digit table {path} contains non-numeric or missing values")

    values = numeric.to_numpy(dtype=np.float64)
    digits = values[:, 0].astype(np.int64)
    images = values[:, 1:]

    peak = images.max()
    if peak > 1.0:
        images = images / 255.0 if peak <= 255.0 else images / peak

    logger.info(f"Loaded {images.shape[0]} images with {images.shape[1]} pixels from {path.name}")
    return images, digits


def make_class_pair(
    images: np.ndarray,
    digits: np.ndarray,
    negative: int,
    positive: int,
    *,
    add_bias: bool = True,
) -> LabeledDataset:
    """
    Build the binary sub-problem ``negative`` vs ``positive``.

    Args:
        images: N x P pixel matrix, one image per row
        digits: N digit labels
        negative: Digit relabeled to -1
        positive: Digit relabeled to +1
        add_bias: Append a constant row of ones as the bias feature

    Returns:
        LabeledDataset with features laid out one sample per column, rows kept
        in their original order
    """
    images = np.asarray(images, dtype=np.float64)
    digits = np.asarray(digits).reshape(-1)
    if images.ndim != 2 or images.shape[0] != digits.shape[0]:
        raise DataLoadError(
            f"images of shape {images.shape} do not line up with {digits.shape[0]} digit labels"
        )

    mask = (digits == negative) | (digits == positive)
    if not mask.any():
        raise DataLoadError(f"No samples found for digits {negative} and {positive}")

    selected = images[mask]
    labels = np.where(digits[mask] == positive, 1, -1)
    features = selected.T
    if add_bias:
        features = np.vstack([features, np.ones((1, features.shape[1]))])

    counts = {negative: int(np.sum(labels == -1)), positive: int(np.sum(labels == 1))}
    logger.info(f"Class pair {negative}v{positive}: {counts[negative]} vs {counts[positive]} samples")
    return LabeledDataset(features, labels)


def load_class_pairs(
    train_path: Union[str, Path],
    test_path: Union[str, Path],
    pairs: Optional[Dict[str, Tuple[int, int]]] = None,
) -> Dict[str, Tuple[LabeledDataset, LabeledDataset]]:
    """
    Load train/test tables once and build every requested class pair.

    Returns:
        Mapping of pair name to (train set, test set)
    """
    pairs = pairs or CLASS_PAIRS
    train_images, train_digits = load_digit_table(train_path)
    test_images, test_digits = load_digit_table(test_path)
    return {
        name: (
            make_class_pair(train_images, train_digits, negative, positive),
            make_class_pair(test_images, test_digits, negative, positive),
        )
        for name, (negative, positive) in pairs.items()
    }
