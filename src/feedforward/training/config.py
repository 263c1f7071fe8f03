"""Configuration of the epoch/batch training loop."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict

from .._validation import require_non_negative, require_positive, require_positive_int
from ..config import NetworkConfig

_TRAINING_CHECKS: Dict[str, Callable[[Any, str], None]] = {
    "learning_rate": require_positive,
    "epochs": require_positive_int,
    "batch_size": require_positive_int,
    "early_stopping_patience": require_positive_int,
    "early_stopping_min_delta": require_non_negative,
    "print_every_n_epochs": require_positive_int,
}


@dataclass(slots=True)
class TrainingConfig:
    """Settings read by :class:`~feedforward.training.trainer.Trainer`.

    ``learning_rate`` is informational: updates always use the network's
    ``NetworkConfig.learning_rate``, and the trainer warns when the two differ.
    ``batch_size`` is clipped to the dataset size. ``print_every_n_epochs``
    only controls how often progress is logged.
    """

    learning_rate: float = 0.01
    epochs: int = 100
    batch_size: int = 32
    shuffle: bool = True
    use_early_stopping: bool = False
    early_stopping_patience: int = 10
    early_stopping_min_delta: float = 0.001
    verbose: bool = True
    print_every_n_epochs: int = 1

    def __setattr__(self, name: str, value: Any) -> None:
        check = _TRAINING_CHECKS.get(name)
        if check is not None:
            check(value, name)
        object.__setattr__(self, name, value)

    @classmethod
    def from_network_config(cls, config: NetworkConfig, **overrides: Any) -> "TrainingConfig":
        """Copy the shared fields of ``config``; ``overrides`` win."""

        shared = {
            "learning_rate": config.learning_rate,
            "epochs": config.epochs,
            "batch_size": config.batch_size,
            "use_early_stopping": config.use_early_stopping,
            "early_stopping_patience": config.early_stopping_patience,
            "early_stopping_min_delta": config.early_stopping_min_delta,
            "verbose": config.verbose,
        }
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown TrainingConfig fields: {', '.join(sorted(unknown))}")
        shared.update(overrides)
        return cls(**shared)

    def __str__(self) -> str:
        return (
            f"TrainingConfig[epochs={self.epochs}, batch_size={self.batch_size}, "
            f"shuffle={self.shuffle}, early_stopping={self.use_early_stopping}]"
        )


__all__ = ["TrainingConfig"]
