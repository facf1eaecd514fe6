"""Error hierarchy for the SGD logistic-regression toolkit.

Precondition violations are raised immediately so that no training run or
sweep ever proceeds on inconsistent inputs. Callers that only care about the
broad category can catch :class:`SGDLogRegError`; the argument-shaped errors
also derive from :class:`ValueError`.
"""

from __future__ import annotations

import textwrap
from typing import Optional


class SGDLogRegError(RuntimeError):
    """Base error for all classifier training and evaluation failures."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        final_message = message
        if hint:
            final_message = f"{message}\n{self._format_hint(hint)}"
        super().__init__(final_message)
        self.message = message
        self.hint = hint

    @staticmethod
    def _format_hint(hint: str) -> str:
        return textwrap.indent(f"Hint: {hint}", prefix="  ")


class DimensionMismatch(SGDLogRegError, ValueError):
    """Raised when matrix, label and weight shapes disagree."""


class InvalidLabel(SGDLogRegError, ValueError):
    """Raised when a label vector contains values other than -1 and +1."""


class InvalidArgument(SGDLogRegError, ValueError):
    """Raised for out-of-range hyperparameters or empty grids."""


class DataLoadError(SGDLogRegError):
    """Raised when a digit table cannot be read or yields no samples."""


__all__ = [
    "SGDLogRegError",
    "DimensionMismatch",
    "InvalidLabel",
    "InvalidArgument",
    "DataLoadError",
]
