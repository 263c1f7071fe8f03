"""Activation functions applied elementwise by dense layers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Type, Union

import numpy as np

ArrayLike = Union[float, np.ndarray]

# exp(-x) overflows float64 just past |x| = 709
SIGMOID_CLAMP = 700.0


def _as_result(values: np.ndarray) -> ArrayLike:
    if values.ndim == 0:
        return float(values)
    return values


class ActivationFunction(ABC):
    """Scalar nonlinearity together with its derivative.

    ``activate`` and ``derivative`` accept either a Python float or a numpy
    array. Arrays are processed elementwise and returned as arrays; scalars
    come back as ``float``.

    ``derivative_from_output`` tells the caller which value ``derivative``
    expects. When ``True`` (sigmoid, tanh) pass the activated output, which
    avoids recomputing the exponential. When ``False`` (relu, linear) pass the
    pre-activation weighted sum.
    """

    name: str = "activation"
    derivative_from_output: bool = False

    @abstractmethod
    def activate(self, x: ArrayLike) -> ArrayLike:
        """Apply the nonlinearity."""

    @abstractmethod
    def derivative(self, value: ArrayLike) -> ArrayLike:
        """Return ``dy/dz`` evaluated from the value selected by ``derivative_from_output``."""

    def __call__(self, x: ArrayLike) -> ArrayLike:
        return self.activate(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class LinearActivation(ActivationFunction):
    """Identity; used for regression outputs."""

    name = "linear"

    def activate(self, x: ArrayLike) -> ArrayLike:
        return _as_result(np.asarray(x, dtype=float).copy())

    def derivative(self, value: ArrayLike) -> ArrayLike:
        return _as_result(np.ones_like(np.asarray(value, dtype=float)))


class ReLUActivation(ActivationFunction):
    """``max(0, x)``. The derivative at exactly zero is taken to be 0."""

    name = "relu"

    def activate(self, x: ArrayLike) -> ArrayLike:
        return _as_result(np.maximum(np.asarray(x, dtype=float), 0.0))

    def derivative(self, value: ArrayLike) -> ArrayLike:
        return _as_result((np.asarray(value, dtype=float) > 0.0).astype(float))


class SigmoidActivation(ActivationFunction):
    """Logistic function saturating to exactly 0 or 1 outside ``[-700, 700]``."""

    name = "sigmoid"
    derivative_from_output = True

    def activate(self, x: ArrayLike) -> ArrayLike:
        z = np.asarray(x, dtype=float)
        clamped = np.clip(z, -SIGMOID_CLAMP, SIGMOID_CLAMP)
        out = 1.0 / (1.0 + np.exp(-clamped))
        out = np.where(z < -SIGMOID_CLAMP, 0.0, out)
        out = np.where(z > SIGMOID_CLAMP, 1.0, out)
        return _as_result(out)

    def derivative(self, value: ArrayLike) -> ArrayLike:
        s = np.asarray(value, dtype=float)
        return _as_result(s * (1.0 - s))


class TanhActivation(ActivationFunction):
    """Hyperbolic tangent, zero-centred in ``(-1, 1)``."""

    name = "tanh"
    derivative_from_output = True

    def activate(self, x: ArrayLike) -> ArrayLike:
        return _as_result(np.tanh(np.asarray(x, dtype=float)))

    def derivative(self, value: ArrayLike) -> ArrayLike:
        t = np.asarray(value, dtype=float)
        return _as_result(1.0 - t * t)


_ACTIVATIONS: Dict[str, Type[ActivationFunction]] = {
    "linear": LinearActivation,
    "identity": LinearActivation,
    "relu": ReLUActivation,
    "sigmoid": SigmoidActivation,
    "tanh": TanhActivation,
}


def get_activation(activation: str | ActivationFunction) -> ActivationFunction:
    """Resolve an activation name such as ``"sigmoid"`` to an instance.

    Instances are returned unchanged.
    """

    if isinstance(activation, ActivationFunction):
        return activation
    try:
        return _ACTIVATIONS[activation.lower()]()
    except (KeyError, AttributeError):
        options = ", ".join(sorted(_ACTIVATIONS))
        raise ValueError(f"Unknown activation {activation!r}; expected one of: {options}") from None


__all__ = [
    "ActivationFunction",
    "LinearActivation",
    "ReLUActivation",
    "SigmoidActivation",
    "TanhActivation",
    "get_activation",
]
