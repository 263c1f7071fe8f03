"""Sequential feed-forward network composed of :class:`~feedforward.layers.Layer` objects."""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .config import NetworkConfig
from .data import ArrayLike, as_matrix, as_vector, check_paired
from .errors import DimensionMismatchError, NetworkStateError
from .layers import ActivationRecord, Layer

logger = logging.getLogger(__name__)


class NeuralNetwork:
    """An ordered stack of layers trained with per-example gradient descent.

    Layers are evaluated in insertion order. :meth:`add_layer` enforces that
    each layer's ``input_size`` equals its predecessor's ``output_size``.

    :meth:`forward` keeps the activation records of the pass it just ran; the
    next :meth:`backward` consumes them and applies one SGD step to every layer
    using ``config.learning_rate``. Calling :meth:`backward` without a fresh
    forward pass raises :class:`NetworkStateError`. :meth:`predict`,
    :meth:`evaluate` and :meth:`trace` never record anything, so they can be
    interleaved freely.

    The network is not thread-safe; train independent instances concurrently
    instead of sharing one.
    """

    def __init__(self, config: Optional[NetworkConfig] = None, layers: Iterable[Layer] = ()) -> None:
        self.config = config if config is not None else NetworkConfig()
        self._layers: List[Layer] = []
        self._training_loss_history: List[float] = []
        self._validation_loss_history: List[float] = []
        self._pending: Optional[List[ActivationRecord]] = None
        for layer in layers:
            self.add_layer(layer)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------
    def add_layer(self, layer: Layer) -> None:
        """Append ``layer``, rejecting it if its input width does not match."""

        if self._layers:
            previous = self._layers[-1]
            if previous.output_size != layer.input_size:
                raise DimensionMismatchError(
                    "Layer dimension mismatch: previous output="
                    f"{previous.output_size}, current input={layer.input_size}"
                )
        self._layers.append(layer)
        self._pending = None
        logger.debug("Added layer %d: %r", len(self._layers) - 1, layer)

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return tuple(self._layers)

    @property
    def layer_count(self) -> int:
        return len(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(tuple(self._layers))

    def __getitem__(self, index: int) -> Layer:
        return self._layers[index]

    @property
    def input_size(self) -> int:
        self._require_layers()
        return self._layers[0].input_size

    @property
    def output_size(self) -> int:
        self._require_layers()
        return self._layers[-1].output_size

    @property
    def parameter_count(self) -> int:
        return sum(layer.parameter_count for layer in self._layers)

    # ------------------------------------------------------------------
    # Forward / backward
    # ------------------------------------------------------------------
    def forward(self, inputs: ArrayLike) -> np.ndarray:
        """Run a recorded forward pass and return the network output."""

        self._require_layers()
        records: List[ActivationRecord] = []
        activation = as_vector(inputs, "input")
        for layer in self._layers:
            record = layer.forward(activation)
            records.append(record)
            activation = record.outputs
        self._pending = records
        return activation.copy()

    def backward(self, loss_gradient: ArrayLike) -> np.ndarray:
        """Back-propagate ``dL/d output`` through the last forward pass.

        Every layer updates its parameters with ``config.learning_rate``.
        Returns the gradient with respect to the network input.
        """

        self._require_layers()
        records = self._pending
        if records is None:
            raise NetworkStateError("backward called without a preceding forward pass")
        self._pending = None

        gradient = as_vector(loss_gradient, "loss_gradient")
        learning_rate = self.config.learning_rate
        for layer, record in zip(reversed(self._layers), reversed(records)):
            gradient = layer.backward(record, gradient, learning_rate)
        return gradient

    # ------------------------------------------------------------------
    # Training steps
    # ------------------------------------------------------------------
    def train_on_example(self, inputs: ArrayLike, target: ArrayLike) -> float:
        """Forward, loss, backward on one sample. Returns the sample loss."""

        predicted = self.forward(inputs)
        loss_function = self.config.loss_function
        try:
            loss = loss_function.compute(predicted, target)
            loss_gradient = loss_function.gradient(predicted, target)
        except DimensionMismatchError:
            self._pending = None
            raise
        self.backward(loss_gradient)
        return loss

    def train_on_batch(self, inputs: ArrayLike, targets: ArrayLike) -> float:
        """Train on each sample of the batch in turn and return the mean loss.

        Parameters are updated after *every* sample; gradients are not averaged
        over the batch before a single update.
        """

        x = as_matrix(inputs, "inputs")
        y = as_matrix(targets, "targets")
        check_paired(x, y)
        if len(x) == 0:
            raise ValueError("Cannot train on an empty batch")
        total = 0.0
        for sample, target in zip(x, y):
            total += self.train_on_example(sample, target)
        return total / len(x)

    # ------------------------------------------------------------------
    # Inference
    # ------------------------------------------------------------------
    def predict(self, inputs: ArrayLike) -> np.ndarray:
        """Predict one sample (1-D input) or a batch (2-D input, one row each)."""

        self._require_layers()
        array = np.asarray(inputs, dtype=float)
        if array.ndim == 2:
            return np.array([self._predict_one(row) for row in array]).reshape(len(array), self.output_size)
        return self._predict_one(as_vector(array, "input"))

    def evaluate(self, inputs: ArrayLike, targets: ArrayLike) -> float:
        """Average loss over a dataset. Parameters are left untouched."""

        x = as_matrix(inputs, "inputs")
        y = as_matrix(targets, "targets")
        check_paired(x, y)
        if len(x) == 0:
            raise ValueError("Cannot evaluate an empty dataset")
        loss_function = self.config.loss_function
        total = 0.0
        for sample, target in zip(x, y):
            total += loss_function.compute(self.predict(sample), target)
        return total / len(x)

    def trace(self, inputs: ArrayLike) -> List[np.ndarray]:
        """Return the output of every layer for one input, without recording."""

        self._require_layers()
        outputs: List[np.ndarray] = []
        activation = as_vector(inputs, "input")
        for layer in self._layers:
            activation = layer.predict(activation)
            outputs.append(activation)
        return outputs

    def _predict_one(self, sample: np.ndarray) -> np.ndarray:
        activation = sample
        for layer in self._layers:
            activation = layer.predict(activation)
        return activation

    # ------------------------------------------------------------------
    # Loss history
    # ------------------------------------------------------------------
    @property
    def training_loss_history(self) -> Tuple[float, ...]:
        return tuple(self._training_loss_history)

    @property
    def validation_loss_history(self) -> Tuple[float, ...]:
        return tuple(self._validation_loss_history)

    def record_training_loss(self, loss: float) -> None:
        self._training_loss_history.append(float(loss))

    def record_validation_loss(self, loss: float) -> None:
        self._validation_loss_history.append(float(loss))

    def clear_history(self) -> None:
        self._training_loss_history.clear()
        self._validation_loss_history.clear()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def summary(self) -> str:
        """Human readable architecture listing with parameter counts."""

        lines = [f"NeuralNetwork ({self.config})"]
        for index, layer in enumerate(self._layers):
            weights = layer.input_size * layer.output_size if layer.weights is not None else 0
            biases = layer.output_size if layer.biases is not None else 0
            lines.append(
                f"  Layer {index}: {layer!r}  params={layer.parameter_count} "
                f"(weights={weights}, biases={biases})"
            )
        lines.append(f"Total parameters: {self.parameter_count}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        widths = " -> ".join(
            [str(self._layers[0].input_size)] + [str(layer.output_size) for layer in self._layers]
        ) if self._layers else "empty"
        return f"NeuralNetwork({widths}, loss={self.config.loss_function.name})"

    def _require_layers(self) -> None:
        if not self._layers:
            raise NetworkStateError("Network has no layers")


__all__ = ["NeuralNetwork"]
