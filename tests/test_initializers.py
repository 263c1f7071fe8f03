import math

import numpy as np
import pytest

from feedforward.initializers import (
    HeInitializer,
    RandomUniformInitializer,
    XavierInitializer,
    get_initializer,
)


def test_weight_matrix_has_output_by_input_shape() -> None:
    for initializer in (XavierInitializer(seed=0), HeInitializer(seed=0), RandomUniformInitializer(seed=0)):
        weights = initializer.initialize_weights(3, 5)
        assert weights.shape == (5, 3)
        assert initializer.initialize_biases(5).shape == (5,)


def test_xavier_uniform_stays_within_limit() -> None:
    weights = XavierInitializer(seed=1).initialize_weights(20, 30)
    limit = math.sqrt(6.0 / 50)
    assert np.all(np.abs(weights) <= limit)
    np.testing.assert_array_equal(XavierInitializer(seed=1).initialize_biases(30), np.zeros(30))


def test_xavier_normal_and_he_have_expected_spread() -> None:
    xavier = XavierInitializer(gaussian=True, seed=2).initialize_weights(200, 200)
    he = HeInitializer(seed=3).initialize_weights(200, 300)

    assert xavier.std() == pytest.approx(math.sqrt(2.0 / 400), rel=0.05)
    assert he.std() == pytest.approx(math.sqrt(2.0 / 200), rel=0.05)


def test_same_seed_gives_identical_parameters() -> None:
    first = XavierInitializer(seed=7).initialize_weights(4, 4)
    second = XavierInitializer(seed=7).initialize_weights(4, 4)
    third = XavierInitializer(seed=8).initialize_weights(4, 4)

    np.testing.assert_array_equal(first, second)
    assert not np.array_equal(first, third)


def test_random_uniform_bounds_and_biases() -> None:
    initializer = RandomUniformInitializer(-0.5, 0.25, seed=4)
    weights = initializer.initialize_weights(10, 10)
    biases = initializer.initialize_biases(10)

    assert weights.min() >= -0.5 and weights.max() < 0.25
    assert biases.min() >= -0.5 and biases.max() < 0.25
    assert np.any(biases != 0.0)
    with pytest.raises(ValueError):
        RandomUniformInitializer(1.0, 1.0)


def test_non_positive_sizes_are_rejected() -> None:
    with pytest.raises(ValueError):
        XavierInitializer().initialize_weights(0, 3)
    with pytest.raises(ValueError):
        HeInitializer().initialize_biases(-1)


def test_get_initializer_resolves_names() -> None:
    assert isinstance(get_initializer("he", seed=0), HeInitializer)
    normal = get_initializer("xavier_normal", seed=0)
    assert isinstance(normal, XavierInitializer) and normal.gaussian
    custom = RandomUniformInitializer()
    assert get_initializer(custom) is custom
    with pytest.raises(ValueError):
        get_initializer("orthogonal")
