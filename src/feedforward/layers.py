"""Layer abstraction and the fully connected layer.

A layer's ``forward`` returns an :class:`ActivationRecord` holding everything
its ``backward`` needs (input, weighted sum, output). The record is passed back
explicitly, so there is no hidden per-layer cache. It is also single-use: a
second backward over the same record, or handing a record to a layer that did
not produce it, raises :class:`~feedforward.errors.NetworkStateError`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ._validation import require_positive, require_positive_int
from .activations import ActivationFunction, get_activation
from .data import ArrayLike, as_vector
from .errors import DimensionMismatchError, NetworkStateError
from .initializers import WeightInitializer, XavierInitializer


@dataclass(slots=True)
class ActivationRecord:
    """Values captured by one forward call, consumed by one backward call."""

    inputs: np.ndarray
    weighted_sum: np.ndarray
    outputs: np.ndarray
    layer: "Layer" = field(repr=False, compare=False)
    consumed: bool = False


class _FixedParameters(WeightInitializer):
    """Hands out copies of pre-built parameters."""

    name = "fixed"

    def __init__(self, weights: np.ndarray, biases: np.ndarray) -> None:
        super().__init__(seed=0)
        self._weights = weights
        self._biases = biases

    def _sample_weights(self, num_inputs: int, num_outputs: int) -> np.ndarray:
        return self._weights.copy()

    def initialize_biases(self, num_outputs: int) -> np.ndarray:
        return self._biases.copy()


def _read_only(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class Layer(ABC):
    """A network stage mapping ``input_size`` values to ``output_size`` values."""

    def __init__(self, input_size: int, output_size: int) -> None:
        require_positive_int(input_size, "input_size")
        require_positive_int(output_size, "output_size")
        self._input_size = input_size
        self._output_size = output_size

    @property
    def input_size(self) -> int:
        return self._input_size

    @property
    def output_size(self) -> int:
        return self._output_size

    @abstractmethod
    def forward(self, inputs: ArrayLike) -> ActivationRecord:
        """Evaluate the layer and capture what backward will need."""

    @abstractmethod
    def backward(
        self,
        record: ActivationRecord,
        output_gradient: ArrayLike,
        learning_rate: float,
    ) -> np.ndarray:
        """Propagate ``dL/d output`` through the layer, updating its parameters.

        Returns ``dL/d input`` for the preceding layer.
        """

    def predict(self, inputs: ArrayLike) -> np.ndarray:
        """Evaluate the layer without producing a record for backward."""

        return self.forward(inputs).outputs

    @property
    def weights(self) -> Optional[np.ndarray]:
        return None

    @property
    def biases(self) -> Optional[np.ndarray]:
        return None

    @property
    def parameter_count(self) -> int:
        return 0

    def _check_input(self, inputs: ArrayLike) -> np.ndarray:
        x = as_vector(inputs, "input")
        if x.shape[0] != self._input_size:
            raise DimensionMismatchError(
                f"Input size mismatch: expected {self._input_size}, got {x.shape[0]}"
            )
        return x

    def _claim(self, record: ActivationRecord) -> None:
        if not isinstance(record, ActivationRecord):
            raise NetworkStateError("backward requires the ActivationRecord returned by forward")
        if record.layer is not self:
            raise NetworkStateError("Activation record was produced by a different layer")
        if record.consumed:
            raise NetworkStateError("Activation record has already been consumed by backward")
        record.consumed = True


class DenseLayer(Layer):
    """Fully connected layer ``a = activation(W @ x + b)``.

    Parameters
    ----------
    input_size, output_size:
        Layer widths. ``W`` has shape ``(output_size, input_size)``.
    activation:
        An :class:`ActivationFunction` or a name accepted by
        :func:`~feedforward.activations.get_activation`.
    initializer:
        Strategy producing the initial weights and biases. Defaults to an
        unseeded uniform Xavier initializer.
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        activation: str | ActivationFunction = "sigmoid",
        initializer: Optional[WeightInitializer] = None,
    ) -> None:
        super().__init__(input_size, output_size)
        self.activation = get_activation(activation)
        initializer = initializer if initializer is not None else XavierInitializer()
        self._weights = np.array(initializer.initialize_weights(input_size, output_size), dtype=float)
        self._biases = np.array(initializer.initialize_biases(output_size), dtype=float)
        self._weight_gradients = np.zeros((output_size, input_size))
        self._bias_gradients = np.zeros(output_size)

    @classmethod
    def from_parameters(
        cls,
        weights: ArrayLike,
        biases: ArrayLike,
        activation: str | ActivationFunction = "sigmoid",
    ) -> "DenseLayer":
        """Build a layer around existing parameters instead of sampling them."""

        w = np.array(weights, dtype=float)
        b = np.array(biases, dtype=float)
        if w.ndim != 2:
            raise DimensionMismatchError(f"weights must be a 2-D matrix, got shape {w.shape}")
        if b.shape != (w.shape[0],):
            raise DimensionMismatchError(
                f"biases must have length {w.shape[0]} to match the weights, got shape {b.shape}"
            )
        return cls(w.shape[1], w.shape[0], activation, _FixedParameters(w, b))

    def forward(self, inputs: ArrayLike) -> ActivationRecord:
        x = self._check_input(inputs)
        z = self._weights @ x + self._biases
        a = np.asarray(self.activation.activate(z), dtype=float)
        return ActivationRecord(inputs=x.copy(), weighted_sum=z, outputs=a, layer=self)

    def predict(self, inputs: ArrayLike) -> np.ndarray:
        x = self._check_input(inputs)
        return np.asarray(self.activation.activate(self._weights @ x + self._biases), dtype=float)

    def backward(
        self,
        record: ActivationRecord,
        output_gradient: ArrayLike,
        learning_rate: float,
    ) -> np.ndarray:
        grad = as_vector(output_gradient, "output_gradient")
        if grad.shape[0] != self.output_size:
            raise DimensionMismatchError(
                f"Gradient size mismatch: expected {self.output_size}, got {grad.shape[0]}"
            )
        require_positive(learning_rate, "learning_rate")
        self._claim(record)

        if self.activation.derivative_from_output:
            local = self.activation.derivative(record.outputs)
        else:
            local = self.activation.derivative(record.weighted_sum)
        delta = grad * np.asarray(local, dtype=float)

        self._bias_gradients[:] = delta
        self._weight_gradients[:] = np.outer(delta, record.inputs)
        # propagated with the pre-update weights
        input_gradient = delta @ self._weights

        self._weights -= learning_rate * self._weight_gradients
        self._biases -= learning_rate * self._bias_gradients
        return input_gradient

    @property
    def weights(self) -> np.ndarray:
        """Read-only view of the ``(output_size, input_size)`` weight matrix."""

        return _read_only(self._weights)

    @property
    def biases(self) -> np.ndarray:
        return _read_only(self._biases)

    @property
    def weight_gradients(self) -> np.ndarray:
        """Gradients computed by the most recent backward call."""

        return _read_only(self._weight_gradients)

    @property
    def bias_gradients(self) -> np.ndarray:
        return _read_only(self._bias_gradients)

    @property
    def parameter_count(self) -> int:
        return self._weights.size + self._biases.size

    def __repr__(self) -> str:
        return (
            f"DenseLayer(in={self.input_size}, out={self.output_size}, "
            f"activation={self.activation.name})"
        )


__all__ = ["ActivationRecord", "Layer", "DenseLayer"]
