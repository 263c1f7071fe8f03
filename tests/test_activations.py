import numpy as np
import pytest

from feedforward.activations import (
    LinearActivation,
    ReLUActivation,
    SigmoidActivation,
    TanhActivation,
    get_activation,
)


def _random_points(count: int = 200, seed: int = 0) -> np.ndarray:
    return np.random.default_rng(seed).uniform(-10.0, 10.0, size=count)


def test_sigmoid_derivative_from_output_matches_closed_form() -> None:
    sigmoid = SigmoidActivation()
    z = _random_points()
    expected = np.exp(-z) / (1.0 + np.exp(-z)) ** 2

    assert sigmoid.derivative_from_output
    np.testing.assert_allclose(sigmoid.derivative(sigmoid.activate(z)), expected, rtol=1e-9, atol=1e-12)


def test_tanh_derivative_from_output_matches_closed_form() -> None:
    tanh = TanhActivation()
    z = _random_points(seed=1)
    expected = 1.0 / np.cosh(z) ** 2

    assert tanh.derivative_from_output
    np.testing.assert_allclose(tanh.derivative(tanh.activate(z)), expected, rtol=1e-7, atol=1e-12)


def test_sigmoid_saturates_outside_clamp() -> None:
    sigmoid = SigmoidActivation()
    assert sigmoid.activate(-800.0) == 0.0
    assert sigmoid.activate(800.0) == 1.0
    assert sigmoid.activate(0.0) == pytest.approx(0.5)
    values = sigmoid.activate(np.array([-1e6, 1e6]))
    np.testing.assert_array_equal(values, [0.0, 1.0])


def test_scalar_input_returns_float() -> None:
    assert isinstance(SigmoidActivation().activate(0.3), float)
    assert isinstance(ReLUActivation().derivative(2.0), float)


def test_relu_and_linear_use_pre_activation() -> None:
    relu = ReLUActivation()
    linear = LinearActivation()
    z = np.array([-2.0, 0.0, 3.0])

    np.testing.assert_array_equal(relu.activate(z), [0.0, 0.0, 3.0])
    np.testing.assert_array_equal(relu.derivative(z), [0.0, 0.0, 1.0])
    np.testing.assert_array_equal(linear.activate(z), z)
    np.testing.assert_array_equal(linear.derivative(z), [1.0, 1.0, 1.0])
    assert not relu.derivative_from_output
    assert not linear.derivative_from_output


def test_activate_does_not_alias_input() -> None:
    z = np.array([1.0, 2.0])
    out = LinearActivation().activate(z)
    out[0] = 10.0
    assert z[0] == 1.0


def test_get_activation_resolves_names() -> None:
    assert isinstance(get_activation("sigmoid"), SigmoidActivation)
    assert isinstance(get_activation("TANH"), TanhActivation)
    assert isinstance(get_activation("identity"), LinearActivation)
    relu = ReLUActivation()
    assert get_activation(relu) is relu
    with pytest.raises(ValueError):
        get_activation("softplus")
