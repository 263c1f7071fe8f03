"""Per-epoch record of a training run."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TrainingHistory:
    """Losses collected by :meth:`Trainer.train`, one entry per finished epoch."""

    training_losses: List[float] = field(default_factory=list)
    validation_losses: List[float] = field(default_factory=list)
    stopped_at_epoch: Optional[int] = None
    cancelled_at_epoch: Optional[int] = None

    def record_loss(self, training_loss: float, validation_loss: Optional[float] = None) -> None:
        self.training_losses.append(float(training_loss))
        if validation_loss is not None:
            self.validation_losses.append(float(validation_loss))

    def mark_early_stopping(self, epoch: int) -> None:
        """Record the 1-indexed epoch at which early stopping triggered."""

        if self.stopped_at_epoch is not None:
            raise ValueError(f"Early stopping already recorded at epoch {self.stopped_at_epoch}")
        self.stopped_at_epoch = epoch

    @property
    def total_epochs(self) -> int:
        return len(self.training_losses)

    @property
    def stopped_early(self) -> bool:
        return self.stopped_at_epoch is not None

    @property
    def cancelled(self) -> bool:
        return self.cancelled_at_epoch is not None

    @property
    def final_training_loss(self) -> Optional[float]:
        return self.training_losses[-1] if self.training_losses else None

    @property
    def final_validation_loss(self) -> Optional[float]:
        return self.validation_losses[-1] if self.validation_losses else None

    @property
    def best_training_loss(self) -> Optional[float]:
        return min(self.training_losses) if self.training_losses else None

    @property
    def best_validation_loss(self) -> Optional[float]:
        return min(self.validation_losses) if self.validation_losses else None

    def summary(self) -> str:
        lines = [f"Total epochs: {self.total_epochs}"]
        if self.final_training_loss is not None:
            lines.append(f"Final training loss: {self.final_training_loss:.6f}")
        if self.validation_losses:
            lines.append(f"Final validation loss: {self.final_validation_loss:.6f}")
            lines.append(f"Best validation loss: {self.best_validation_loss:.6f}")
        if self.stopped_early:
            lines.append(f"Stopped early at epoch {self.stopped_at_epoch}")
        if self.cancelled:
            lines.append(f"Cancelled during epoch {self.cancelled_at_epoch}")
        return "\n".join(lines)


__all__ = ["TrainingHistory"]
