"""Weight initialisation strategies for dense layers."""
from __future__ import annotations

from abc import ABC, abstractmethod
import math
from typing import Optional

import numpy as np

from ._validation import require_finite, require_positive_int


class WeightInitializer(ABC):
    """Produce the initial weight matrix and bias vector of a layer.

    Parameters
    ----------
    seed:
        Seed for a private ``numpy.random.Generator``. Two initializers built
        with the same seed produce identical parameters for identical calls.
    rng:
        An existing generator to draw from instead. Takes precedence over
        ``seed``. Without either, a fresh generator seeded from OS entropy is
        used.
    """

    name: str = "initializer"

    def __init__(self, *, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def initialize_weights(self, num_inputs: int, num_outputs: int) -> np.ndarray:
        """Return a ``(num_outputs, num_inputs)`` weight matrix."""

        require_positive_int(num_inputs, "num_inputs")
        require_positive_int(num_outputs, "num_outputs")
        return self._sample_weights(num_inputs, num_outputs)

    def initialize_biases(self, num_outputs: int) -> np.ndarray:
        """Return a bias vector of length ``num_outputs``. Zeros unless overridden."""

        require_positive_int(num_outputs, "num_outputs")
        return np.zeros(num_outputs)

    @abstractmethod
    def _sample_weights(self, num_inputs: int, num_outputs: int) -> np.ndarray:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RandomUniformInitializer(WeightInitializer):
    """Weights and biases drawn uniformly from ``[low, high)``."""

    name = "random_uniform"

    def __init__(
        self,
        low: float = -1.0,
        high: float = 1.0,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        require_finite(low, "low")
        require_finite(high, "high")
        if not low < high:
            raise ValueError(f"low must be smaller than high, got: [{low}, {high}]")
        super().__init__(seed=seed, rng=rng)
        self.low = float(low)
        self.high = float(high)

    def _sample_weights(self, num_inputs: int, num_outputs: int) -> np.ndarray:
        return self.rng.uniform(self.low, self.high, size=(num_outputs, num_inputs))

    def initialize_biases(self, num_outputs: int) -> np.ndarray:
        require_positive_int(num_outputs, "num_outputs")
        return self.rng.uniform(self.low, self.high, size=num_outputs)

    def __repr__(self) -> str:
        return f"RandomUniformInitializer(low={self.low:.2f}, high={self.high:.2f})"


class XavierInitializer(WeightInitializer):
    """Glorot initialisation, suited to sigmoid and tanh layers.

    Uniform over ``±sqrt(6 / (n_in + n_out))`` by default, or Gaussian with
    standard deviation ``sqrt(2 / (n_in + n_out))`` when ``gaussian`` is set.
    """

    name = "xavier"

    def __init__(
        self,
        gaussian: bool = False,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(seed=seed, rng=rng)
        self.gaussian = gaussian

    def _sample_weights(self, num_inputs: int, num_outputs: int) -> np.ndarray:
        fan_sum = num_inputs + num_outputs
        shape = (num_outputs, num_inputs)
        if self.gaussian:
            return self.rng.normal(0.0, math.sqrt(2.0 / fan_sum), size=shape)
        limit = math.sqrt(6.0 / fan_sum)
        return self.rng.uniform(-limit, limit, size=shape)

    def __repr__(self) -> str:
        return f"XavierInitializer(gaussian={self.gaussian})"


class HeInitializer(WeightInitializer):
    """Kaiming initialisation for ReLU layers: ``N(0, sqrt(2 / n_in))``."""

    name = "he"

    def _sample_weights(self, num_inputs: int, num_outputs: int) -> np.ndarray:
        return self.rng.normal(0.0, math.sqrt(2.0 / num_inputs), size=(num_outputs, num_inputs))


def get_initializer(
    initializer: str | WeightInitializer,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> WeightInitializer:
    """Resolve ``"xavier"``, ``"xavier_normal"``, ``"he"`` or ``"random_uniform"``.

    Instances are returned unchanged and the seed is ignored for them.
    """

    if isinstance(initializer, WeightInitializer):
        return initializer
    key = initializer.lower() if isinstance(initializer, str) else initializer
    if key in {"xavier", "glorot", "xavier_uniform"}:
        return XavierInitializer(seed=seed, rng=rng)
    if key in {"xavier_normal", "glorot_normal"}:
        return XavierInitializer(gaussian=True, seed=seed, rng=rng)
    if key in {"he", "kaiming"}:
        return HeInitializer(seed=seed, rng=rng)
    if key in {"random_uniform", "uniform"}:
        return RandomUniformInitializer(seed=seed, rng=rng)
    raise ValueError(
        f"Unknown initializer {initializer!r}; expected one of: he, random_uniform, xavier, xavier_normal"
    )


__all__ = [
    "WeightInitializer",
    "RandomUniformInitializer",
    "XavierInitializer",
    "HeInitializer",
    "get_initializer",
]
