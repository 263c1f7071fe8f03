#!/usr/bin/env python3
"""Train a 2-H-1 sigmoid network on XOR and print its truth table."""
from __future__ import annotations

import argparse
import logging

import numpy as np

from feedforward import NetworkBuilder, Trainer, TrainingConfig, TrainingMonitor

XOR_INPUTS = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
XOR_TARGETS = np.array([[0.0], [1.0], [1.0], [0.0]])


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--epochs", type=int, default=5000)
    p.add_argument("--learning-rate", type=float, default=0.5)
    p.add_argument("--hidden", type=int, default=4)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--print-every", type=int, default=1000)
    p.add_argument("--plot", type=str, default=None, help="Save the loss curve to this image path")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    network = (
        NetworkBuilder(seed=args.seed)
        .add_input_layer(2)
        .add_dense_layer(args.hidden, "sigmoid")
        .add_output_layer(1, "sigmoid")
        .set_learning_rate(args.learning_rate)
        .set_epochs(args.epochs)
        .set_batch_size(4)
        .set_loss_function("mse")
        .set_verbose(False)
        .build()
    )
    print(network.summary())

    config = TrainingConfig.from_network_config(
        network.config,
        print_every_n_epochs=max(args.print_every, 1),
        verbose=args.print_every > 0,
    )
    monitor = TrainingMonitor()
    history = Trainer(network, config, seed=args.seed, monitor=monitor).train(XOR_INPUTS, XOR_TARGETS)

    print("x1  x2  target  output")
    for inputs, target in zip(XOR_INPUTS, XOR_TARGETS):
        output = float(network.predict(inputs)[0])
        print(f"{inputs[0]:.0f}   {inputs[1]:.0f}   {target[0]:.0f}       {output:.4f}")
    print(f"MSE: {network.evaluate(XOR_INPUTS, XOR_TARGETS):.6f}")
    print(monitor.summary(history))

    if args.plot:
        import matplotlib

        matplotlib.use("Agg")
        from feedforward.utils import plot_loss_history

        ax = plot_loss_history(history)
        ax.figure.savefig(args.plot)
        print(f"Saved loss curve to {args.plot}")


if __name__ == "__main__":
    main()
