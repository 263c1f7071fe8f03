"""Training loop, its configuration and run-time observers."""

from .config import TrainingConfig
from .history import TrainingHistory
from .monitor import TrainingMonitor
from .trainer import Trainer

__all__ = [
    "Trainer",
    "TrainingConfig",
    "TrainingHistory",
    "TrainingMonitor",
]
