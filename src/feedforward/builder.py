"""Fluent construction of :class:`~feedforward.network.NeuralNetwork` instances."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from ._validation import require_positive_int
from .activations import ActivationFunction
from .config import NetworkConfig
from .errors import NetworkStateError
from .initializers import WeightInitializer, XavierInitializer, get_initializer
from .layers import DenseLayer
from .losses import LossFunction
from .network import NeuralNetwork

logger = logging.getLogger(__name__)


class NetworkBuilder:
    """Chainable helper that assembles dense layers and the network config.

    Example
    -------
    >>> network = (
    ...     NetworkBuilder(seed=7)
    ...     .add_input_layer(2)
    ...     .add_dense_layer(4, "sigmoid")
    ...     .add_output_layer(1, "sigmoid")
    ...     .set_learning_rate(0.5)
    ...     .build()
    ... )

    Layers that do not receive an explicit initializer share the builder's
    default one, a uniform :class:`XavierInitializer` drawing from a generator
    seeded with ``seed``.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.config = NetworkConfig()
        self._network = NeuralNetwork(self.config)
        self._rng = np.random.default_rng(seed)
        self._default_initializer: WeightInitializer = XavierInitializer(rng=self._rng)
        self._last_size: Optional[int] = None

    def add_input_layer(self, size: int) -> "NetworkBuilder":
        """Declare the input width. Must precede every dense layer."""

        require_positive_int(size, "size")
        self._last_size = size
        return self

    def add_dense_layer(
        self,
        size: int,
        activation: str | ActivationFunction = "sigmoid",
        initializer: Optional[str | WeightInitializer] = None,
    ) -> "NetworkBuilder":
        if self._last_size is None:
            raise NetworkStateError("add_input_layer must be called before adding dense layers")
        require_positive_int(size, "size")
        if initializer is None:
            initializer = self._default_initializer
        else:
            initializer = get_initializer(initializer, rng=self._rng)
        self._network.add_layer(DenseLayer(self._last_size, size, activation, initializer))
        self._last_size = size
        return self

    def add_output_layer(
        self,
        size: int,
        activation: str | ActivationFunction = "sigmoid",
        initializer: Optional[str | WeightInitializer] = None,
    ) -> "NetworkBuilder":
        return self.add_dense_layer(size, activation, initializer)

    def set_learning_rate(self, learning_rate: float) -> "NetworkBuilder":
        self.config.learning_rate = learning_rate
        return self

    def set_epochs(self, epochs: int) -> "NetworkBuilder":
        self.config.epochs = epochs
        return self

    def set_batch_size(self, batch_size: int) -> "NetworkBuilder":
        self.config.batch_size = batch_size
        return self

    def set_loss_function(self, loss_function: str | LossFunction) -> "NetworkBuilder":
        self.config.loss_function = loss_function
        return self

    def set_weight_initializer(self, initializer: str | WeightInitializer) -> "NetworkBuilder":
        """Replace the default initializer used by layers added afterwards."""

        self._default_initializer = get_initializer(initializer, rng=self._rng)
        return self

    def set_early_stopping(self, enabled: bool) -> "NetworkBuilder":
        self.config.use_early_stopping = enabled
        return self

    def set_early_stopping_params(self, patience: int, min_delta: float) -> "NetworkBuilder":
        """Set patience and tolerance, enabling early stopping."""

        self.config.early_stopping_patience = patience
        self.config.early_stopping_min_delta = min_delta
        self.config.use_early_stopping = True
        return self

    def set_validation_split(self, validation_split: float) -> "NetworkBuilder":
        self.config.validation_split = validation_split
        return self

    def set_verbose(self, verbose: bool) -> "NetworkBuilder":
        self.config.verbose = verbose
        return self

    def build(self) -> NeuralNetwork:
        if self._network.layer_count == 0:
            raise NetworkStateError("Network must have at least one layer")
        logger.debug("Built %r", self._network)
        return self._network


def create_simple_network(
    input_size: int,
    hidden_size: int,
    output_size: int,
    *,
    seed: Optional[int] = None,
) -> NeuralNetwork:
    """One sigmoid hidden layer, sigmoid output, MSE, lr 0.01, 100 epochs, batch 32."""

    return (
        NetworkBuilder(seed=seed)
        .add_input_layer(input_size)
        .add_dense_layer(hidden_size, "sigmoid")
        .add_output_layer(output_size, "sigmoid")
        .set_learning_rate(0.01)
        .set_epochs(100)
        .set_batch_size(32)
        .set_loss_function("mse")
        .build()
    )


def create_deep_network(
    input_size: int,
    hidden_sizes: Sequence[int],
    output_size: int,
    activation: str | ActivationFunction = "sigmoid",
    *,
    seed: Optional[int] = None,
) -> NeuralNetwork:
    """Stack one dense layer per entry of ``hidden_sizes`` plus an output layer.

    Every layer, the output included, uses ``activation``.
    """

    builder = NetworkBuilder(seed=seed).add_input_layer(input_size)
    for hidden_size in hidden_sizes:
        builder.add_dense_layer(hidden_size, activation)
    builder.add_output_layer(output_size, activation)
    return builder.build()


__all__ = ["NetworkBuilder", "create_simple_network", "create_deep_network"]
