"""Plotting helpers for training runs."""

from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from ..training.history import TrainingHistory


def plot_loss_history(history: TrainingHistory, ax: Optional[Axes] = None) -> Axes:
    """Plot training (and validation) loss per epoch.

    A dashed vertical line marks the early-stopping epoch when there is one.
    A new figure is created when ``ax`` is not given.
    """

    if ax is None:
        _, ax = plt.subplots()
    epochs = range(1, history.total_epochs + 1)
    ax.plot(epochs, history.training_losses, label="Training loss")
    if history.validation_losses:
        ax.plot(range(1, len(history.validation_losses) + 1), history.validation_losses, label="Validation loss")
    if history.stopped_early:
        ax.axvline(history.stopped_at_epoch, color="grey", linestyle="--", label="Early stop")
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Loss")
    ax.set_title("Loss History")
    ax.legend()
    ax.figure.tight_layout()
    return ax


__all__ = ["plot_loss_history"]
