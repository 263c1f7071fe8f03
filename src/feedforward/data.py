"""Array coercion and dataset splitting helpers."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from ._validation import require_unit_interval
from .errors import DimensionMismatchError

ArrayLike = Union[Sequence[float], Sequence[Sequence[float]], np.ndarray]


def as_vector(values: ArrayLike, name: str = "input") -> np.ndarray:
    """Return ``values`` as a 1-D float array, rejecting any other rank."""

    try:
        array = np.asarray(values, dtype=float)
    except ValueError as exc:
        raise DimensionMismatchError(f"{name} is not a rectangular numeric array") from exc
    if array.ndim != 1:
        raise DimensionMismatchError(f"{name} must be a vector, got shape {array.shape}")
    return array


def as_matrix(values: ArrayLike, name: str = "inputs") -> np.ndarray:
    """Return ``values`` as a 2-D float array with one row per sample."""

    try:
        array = np.asarray(values, dtype=float)
    except ValueError as exc:
        raise DimensionMismatchError(f"{name} is not a rectangular numeric array") from exc
    if array.ndim != 2:
        raise DimensionMismatchError(
            f"{name} must be a 2-D array of shape (samples, features), got shape {array.shape}"
        )
    return array


def check_paired(inputs: np.ndarray, targets: np.ndarray, what: str = "Input/target") -> None:
    """Require one target row per input row."""

    if len(inputs) != len(targets):
        raise DimensionMismatchError(
            f"{what} count mismatch: inputs={len(inputs)}, targets={len(targets)}"
        )


def train_validation_split(
    features: ArrayLike,
    labels: ArrayLike,
    validation_split: float,
    *,
    seed: Optional[int] = None,
    shuffle: bool = True,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Hold out a fraction of the samples for validation.

    Returns ``(x_train, y_train, x_val, y_val)``. ``floor(n * validation_split)``
    samples are held out, at least one when the split is positive and more
    than one sample exists; the training part always keeps at least one. With
    ``validation_split == 0`` the validation arrays are empty.
    """

    require_unit_interval(validation_split, "validation_split")
    x = as_matrix(features, "features")
    y = as_matrix(labels, "labels")
    check_paired(x, y, "Feature/label")

    n = len(x)
    val_count = int(n * validation_split)
    if validation_split > 0 and n > 1:
        val_count = min(max(val_count, 1), n - 1)

    order = np.random.default_rng(seed).permutation(n) if shuffle else np.arange(n)
    train_idx, val_idx = order[: n - val_count], order[n - val_count :]
    return x[train_idx], y[train_idx], x[val_idx], y[val_idx]


__all__ = ["as_vector", "as_matrix", "check_paired", "train_validation_split"]
