"""Loss functions comparing a predicted vector with a target vector."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence, Union

import numpy as np

from .errors import DimensionMismatchError

VectorLike = Union[Sequence[float], np.ndarray]


class LossFunction(ABC):
    """Scalar loss for one sample plus its gradient w.r.t. the prediction."""

    name: str = "loss"

    @abstractmethod
    def compute(self, predicted: VectorLike, target: VectorLike) -> float:
        """Return the loss for a single prediction."""

    @abstractmethod
    def gradient(self, predicted: VectorLike, target: VectorLike) -> np.ndarray:
        """Return ``dL/d predicted``, shaped like ``predicted``."""

    def __call__(self, predicted: VectorLike, target: VectorLike) -> float:
        return self.compute(predicted, target)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    @staticmethod
    def _pair(predicted: VectorLike, target: VectorLike) -> tuple[np.ndarray, np.ndarray]:
        p = np.asarray(predicted, dtype=float).reshape(-1)
        t = np.asarray(target, dtype=float).reshape(-1)
        if p.shape != t.shape:
            raise DimensionMismatchError(
                f"Array size mismatch: predicted={p.size}, target={t.size}"
            )
        if p.size == 0:
            raise DimensionMismatchError("Cannot compute a loss over empty vectors")
        return p, t


class MSELoss(LossFunction):
    """Half mean squared error.

    ``L = 0.5 * sum((t - p)^2) / n`` so that the gradient is simply
    ``(p - t) / n``.
    """

    name = "mse"

    def compute(self, predicted: VectorLike, target: VectorLike) -> float:
        p, t = self._pair(predicted, target)
        error = t - p
        return float(0.5 * np.dot(error, error) / p.size)

    def gradient(self, predicted: VectorLike, target: VectorLike) -> np.ndarray:
        p, t = self._pair(predicted, target)
        return (p - t) / p.size


class CrossEntropyLoss(LossFunction):
    """Categorical cross-entropy ``-sum(t * log p) / n`` on probabilities.

    Predictions are clipped to ``[eps, 1 - eps]`` in both the loss and the
    gradient so that neither ``log(0)`` nor division by zero can occur.
    """

    name = "cross_entropy"
    eps: float = 1e-7

    def _clip(self, p: np.ndarray) -> np.ndarray:
        return np.clip(p, self.eps, 1.0 - self.eps)

    def compute(self, predicted: VectorLike, target: VectorLike) -> float:
        p, t = self._pair(predicted, target)
        return float(-np.dot(t, np.log(self._clip(p))) / p.size)

    def gradient(self, predicted: VectorLike, target: VectorLike) -> np.ndarray:
        p, t = self._pair(predicted, target)
        return -(t / self._clip(p)) / p.size


def get_loss(loss: str | LossFunction) -> LossFunction:
    """Resolve ``"mse"`` or ``"cross_entropy"`` to a loss instance."""

    if isinstance(loss, LossFunction):
        return loss
    key = loss.lower().replace("-", "_") if isinstance(loss, str) else loss
    if key in {"mse", "mean_squared_error"}:
        return MSELoss()
    if key in {"cross_entropy", "crossentropy", "ce"}:
        return CrossEntropyLoss()
    raise ValueError(f"Unknown loss function {loss!r}; expected 'mse' or 'cross_entropy'")


__all__ = ["LossFunction", "MSELoss", "CrossEntropyLoss", "get_loss"]
