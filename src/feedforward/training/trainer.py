"""Epoch/batch training loop with optional validation and early stopping."""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import numpy as np
from tqdm.auto import tqdm

from ..data import ArrayLike, as_matrix, check_paired
from ..network import NeuralNetwork
from .config import TrainingConfig
from .history import TrainingHistory
from .monitor import TrainingMonitor

logger = logging.getLogger(__name__)


class Trainer:
    """Drive a :class:`NeuralNetwork` through repeated epochs of mini-batches.

    Parameters
    ----------
    network:
        The network to train. It is updated in place.
    config:
        Loop settings. Defaults to :meth:`TrainingConfig.from_network_config`
        applied to ``network.config``.
    seed, rng:
        Source of the per-epoch shuffles. ``rng`` takes precedence; with
        neither, shuffles are not reproducible.
    monitor:
        Optional :class:`TrainingMonitor` fed with every epoch's training
        loss. A warning is logged whenever it reports divergence.
    """

    def __init__(
        self,
        network: NeuralNetwork,
        config: Optional[TrainingConfig] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        monitor: Optional[TrainingMonitor] = None,
    ) -> None:
        self.network = network
        self.config = config if config is not None else TrainingConfig.from_network_config(network.config)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.monitor = monitor

    def train(
        self,
        train_inputs: ArrayLike,
        train_targets: ArrayLike,
        val_inputs: Optional[ArrayLike] = None,
        val_targets: Optional[ArrayLike] = None,
        *,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> TrainingHistory:
        """Train for up to ``config.epochs`` epochs and return the history.

        ``should_stop`` is polled before every batch. Once it returns ``True``
        the current epoch is abandoned without being recorded, the history's
        ``cancelled_at_epoch`` is set and the method returns. Batches of that
        epoch that already ran have still updated the parameters.
        """

        config = self.config
        x_train = as_matrix(train_inputs, "train_inputs")
        y_train = as_matrix(train_targets, "train_targets")
        check_paired(x_train, y_train, "Training input/target")
        if len(x_train) == 0:
            raise ValueError("Training set is empty")

        if (val_inputs is None) != (val_targets is None):
            raise ValueError("val_inputs and val_targets must be provided together")
        x_val = y_val = None
        if val_inputs is not None:
            x_val = as_matrix(val_inputs, "val_inputs")
            y_val = as_matrix(val_targets, "val_targets")
            check_paired(x_val, y_val, "Validation input/target")
            if len(x_val) == 0:
                raise ValueError("Validation set is empty")

        network_lr = self.network.config.learning_rate
        if not math.isclose(config.learning_rate, network_lr):
            logger.warning(
                "TrainingConfig.learning_rate=%g is ignored; updates use the network's learning_rate=%g",
                config.learning_rate,
                network_lr,
            )

        history = TrainingHistory()
        data_size = len(x_train)
        batch_size = min(config.batch_size, data_size)
        best_val_loss = math.inf
        patience_counter = 0

        with tqdm(
            range(1, config.epochs + 1),
            desc="Training",
            unit="epoch",
            disable=not config.verbose,
            leave=False,
        ) as progress:
            for epoch in progress:
                indices = self.rng.permutation(data_size) if config.shuffle else np.arange(data_size)

                epoch_loss = 0.0
                for start in range(0, data_size, batch_size):
                    if should_stop is not None and should_stop():
                        history.cancelled_at_epoch = epoch
                        logger.info("Training cancelled during epoch %d", epoch)
                        return history
                    batch = indices[start : start + batch_size]
                    batch_loss = self.network.train_on_batch(x_train[batch], y_train[batch])
                    epoch_loss += batch_loss * len(batch)
                epoch_loss /= data_size

                val_loss: Optional[float] = None
                if x_val is not None:
                    val_loss = self.network.evaluate(x_val, y_val)

                history.record_loss(epoch_loss, val_loss)
                self.network.record_training_loss(epoch_loss)
                if val_loss is not None:
                    self.network.record_validation_loss(val_loss)

                if self.monitor is not None:
                    self.monitor.record_loss(epoch_loss)
                    if self.monitor.has_diverged():
                        logger.warning("Training loss diverged at epoch %d: %s", epoch, epoch_loss)

                if val_loss is None:
                    progress.set_postfix(loss=f"{epoch_loss:.6f}")
                else:
                    progress.set_postfix(loss=f"{epoch_loss:.6f}", val_loss=f"{val_loss:.6f}")
                if config.verbose and epoch % config.print_every_n_epochs == 0:
                    self._log_epoch(epoch, epoch_loss, val_loss)

                if config.use_early_stopping and val_loss is not None:
                    if val_loss < best_val_loss - config.early_stopping_min_delta:
                        best_val_loss = val_loss
                        patience_counter = 0
                    else:
                        patience_counter += 1
                        if patience_counter >= config.early_stopping_patience:
                            logger.info("Early stopping at epoch %d", epoch)
                            history.mark_early_stopping(epoch)
                            break

        return history

    def _log_epoch(self, epoch: int, loss: float, val_loss: Optional[float]) -> None:
        if val_loss is None:
            logger.info("Epoch %d/%d - Loss: %.6f", epoch, self.config.epochs, loss)
        else:
            logger.info(
                "Epoch %d/%d - Loss: %.6f - Val Loss: %.6f",
                epoch,
                self.config.epochs,
                loss,
                val_loss,
            )


__all__ = ["Trainer"]
