"""Sliding-window observer that flags unhealthy loss curves."""
from __future__ import annotations

from collections import deque
import math
from typing import Deque, Optional

from .._validation import require_positive_int
from .history import TrainingHistory


class TrainingMonitor:
    """Keep the last ``window_size`` epoch losses and answer questions about them.

    Parameters
    ----------
    window_size:
        Number of most recent losses retained.
    collapse_threshold:
        A last loss below this value is reported by :meth:`has_collapsed`,
        usually a sign of vanishing gradients or a trivially fitted target.
    divergence_threshold:
        A last loss above this value, or a NaN/infinite one, is reported by
        :meth:`has_diverged`.
    """

    def __init__(
        self,
        window_size: int = 10,
        *,
        collapse_threshold: float = 1e-7,
        divergence_threshold: float = 1e7,
    ) -> None:
        require_positive_int(window_size, "window_size")
        self.window_size = window_size
        self.collapse_threshold = collapse_threshold
        self.divergence_threshold = divergence_threshold
        self._losses: Deque[float] = deque(maxlen=window_size)

    def record_loss(self, loss: float) -> None:
        self._losses.append(float(loss))

    @property
    def recent_losses(self) -> tuple[float, ...]:
        return tuple(self._losses)

    @property
    def last_loss(self) -> Optional[float]:
        return self._losses[-1] if self._losses else None

    def is_converging(self) -> bool:
        """True when the newest loss in the window is below the oldest."""

        if len(self._losses) < 2:
            return False
        return self._losses[-1] < self._losses[0]

    def has_stalled(self, threshold: float = 0.001) -> bool:
        """True once the window is full and its ends differ by less than ``threshold``."""

        if len(self._losses) < self.window_size:
            return False
        return abs(self._losses[0] - self._losses[-1]) < threshold

    def has_collapsed(self) -> bool:
        last = self.last_loss
        return last is not None and last < self.collapse_threshold

    def has_diverged(self) -> bool:
        last = self.last_loss
        if last is None:
            return False
        return not math.isfinite(last) or last > self.divergence_threshold

    @property
    def average_loss(self) -> float:
        if not self._losses:
            return 0.0
        return sum(self._losses) / len(self._losses)

    @property
    def loss_trend(self) -> float:
        """``newest - oldest`` over the window; negative means improving."""

        if len(self._losses) < 2:
            return 0.0
        return self._losses[-1] - self._losses[0]

    def reset(self) -> None:
        self._losses.clear()

    def summary(self, history: TrainingHistory) -> str:
        """Render ``history`` followed by any warnings raised by the window."""

        lines = ["=== Training Summary ===", history.summary()]
        if history.stopped_early:
            lines.append("Stopped early: yes")
        else:
            lines.append("Stopped early: no")
        if self.has_collapsed():
            lines.append("Warning: loss collapsed towards zero (possible vanishing gradient)")
        if self.has_diverged():
            lines.append("Warning: loss diverged (possible exploding gradient)")
        if self.has_stalled():
            lines.append("Warning: training appears to have stalled")
        return "\n".join(lines)


__all__ = ["TrainingMonitor"]
