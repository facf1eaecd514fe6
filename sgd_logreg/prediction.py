"""Sign predictions from a trained weight vector."""
from __future__ import annotations

from typing import Union

import numpy as np

from .entities import LabeledDataset, WeightVector
from .errors import DimensionMismatch


def predict(theta: WeightVector, data: Union[LabeledDataset, np.ndarray]) -> np.ndarray:
    """Return a +/-1 label for every column of ``data``.

    A raw score of exactly zero is mapped to +1.
    """
    matrix = data.features if isinstance(data, LabeledDataset) else np.asarray(data, dtype=np.float64)
    weights = np.asarray(theta, dtype=np.float64).reshape(-1)
    if matrix.ndim != 2:
        raise DimensionMismatch(f"data must be a 2-D (D x M) matrix, received {matrix.ndim}-D input")
    if weights.shape[0] != matrix.shape[0]:
        raise DimensionMismatch(
            f"theta has {weights.shape[0]} weights but data has {matrix.shape[0]} feature rows"
        )
    scores = weights @ matrix
    return np.where(scores < 0, -1, 1).astype(np.int64)


__all__ = ["predict"]
