"""Feed-forward neural networks trained with per-example back-propagation.

The package provides:
- activation functions, weight initializers and loss functions,
- dense layers composed into a :class:`NeuralNetwork`,
- a fluent :class:`NetworkBuilder`, and
- an epoch/batch :class:`Trainer` with validation, early stopping and monitoring.
"""

from .activations import (
    ActivationFunction,
    LinearActivation,
    ReLUActivation,
    SigmoidActivation,
    TanhActivation,
    get_activation,
)
from .builder import NetworkBuilder, create_deep_network, create_simple_network
from .config import NetworkConfig
from .data import train_validation_split
from .errors import DimensionMismatchError, NetworkStateError
from .initializers import (
    HeInitializer,
    RandomUniformInitializer,
    WeightInitializer,
    XavierInitializer,
    get_initializer,
)
from .layers import ActivationRecord, DenseLayer, Layer
from .losses import CrossEntropyLoss, LossFunction, MSELoss, get_loss
from .network import NeuralNetwork
from .training import Trainer, TrainingConfig, TrainingHistory, TrainingMonitor

__version__ = "0.1.0"

__all__ = [
    "ActivationFunction",
    "LinearActivation",
    "ReLUActivation",
    "SigmoidActivation",
    "TanhActivation",
    "get_activation",
    "WeightInitializer",
    "RandomUniformInitializer",
    "XavierInitializer",
    "HeInitializer",
    "get_initializer",
    "LossFunction",
    "MSELoss",
    "CrossEntropyLoss",
    "get_loss",
    "Layer",
    "DenseLayer",
    "ActivationRecord",
    "NetworkConfig",
    "NeuralNetwork",
    "NetworkBuilder",
    "create_simple_network",
    "create_deep_network",
    "Trainer",
    "TrainingConfig",
    "TrainingHistory",
    "TrainingMonitor",
    "train_validation_split",
    "DimensionMismatchError",
    "NetworkStateError",
]
