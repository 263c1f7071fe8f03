"""Optional helpers that pull in heavier dependencies on first use."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from .visualization import plot_loss_history

__all__ = ["plot_loss_history"]


def __getattr__(name: str):  # pragma: no cover - small wrapper
    if name == "plot_loss_history":
        return getattr(import_module("feedforward.utils.visualization"), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
