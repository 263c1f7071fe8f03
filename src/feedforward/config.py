"""Configuration dataclass for :class:`~feedforward.network.NeuralNetwork`."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from ._validation import (
    require_non_negative,
    require_positive,
    require_positive_int,
    require_unit_interval,
)
from .losses import LossFunction, MSELoss, get_loss

_NETWORK_CHECKS: Dict[str, Callable[[Any, str], None]] = {
    "learning_rate": require_positive,
    "epochs": require_positive_int,
    "batch_size": require_positive_int,
    "early_stopping_patience": require_positive_int,
    "early_stopping_min_delta": require_non_negative,
    "validation_split": require_unit_interval,
}


@dataclass(slots=True)
class NetworkConfig:
    """Hyperparameters a network is constructed with.

    Every field is validated whenever it is assigned, both in ``__init__`` and
    afterwards, so an invalid value never reaches training.

    Parameters
    ----------
    learning_rate:
        Step size of every gradient-descent update applied by
        :meth:`NeuralNetwork.backward`. Must be positive.
    epochs:
        Maximum number of training epochs. Must be positive.
    batch_size:
        Samples per batch. Clipped to the dataset size by the trainer.
    loss_function:
        A :class:`~feedforward.losses.LossFunction` or its name (``"mse"``,
        ``"cross_entropy"``).
    use_early_stopping:
        Stop once validation loss stops improving.
    early_stopping_patience:
        Epochs without improvement tolerated before stopping.
    early_stopping_min_delta:
        Minimum decrease in validation loss that counts as an improvement.
    validation_split:
        Fraction of the data a caller should hold out for validation, in
        ``[0, 1)``. Consumed by :func:`~feedforward.data.train_validation_split`;
        the trainer itself does not split.
    verbose:
        Report progress while training.
    """

    learning_rate: float = 0.01
    epochs: int = 100
    batch_size: int = 32
    loss_function: LossFunction = field(default_factory=MSELoss)
    use_early_stopping: bool = False
    early_stopping_patience: int = 10
    early_stopping_min_delta: float = 0.001
    validation_split: float = 0.0
    verbose: bool = True

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "loss_function":
            value = get_loss(value)
        check = _NETWORK_CHECKS.get(name)
        if check is not None:
            check(value, name)
        object.__setattr__(self, name, value)

    def __str__(self) -> str:
        return (
            f"NetworkConfig[lr={self.learning_rate:.4f}, epochs={self.epochs}, "
            f"batch_size={self.batch_size}, loss={self.loss_function.name}]"
        )


__all__ = ["NetworkConfig"]
