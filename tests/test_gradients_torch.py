import numpy as np
import pytest

torch = pytest.importorskip("torch")

from feedforward.config import NetworkConfig
from feedforward.layers import DenseLayer
from feedforward.network import NeuralNetwork


def _make_parameters(seed: int = 0):
    rng = np.random.default_rng(seed)
    return (
        rng.normal(size=(5, 3)),
        rng.normal(size=5),
        rng.normal(size=(2, 5)),
        rng.normal(size=2),
    )


@pytest.mark.parametrize(
    "hidden, output, torch_hidden, torch_output",
    [
        ("sigmoid", "sigmoid", torch.sigmoid, torch.sigmoid),
        ("tanh", "linear", torch.tanh, lambda z: z),
        ("relu", "sigmoid", torch.relu, torch.sigmoid),
    ],
)
def test_backward_matches_autograd(hidden, output, torch_hidden, torch_output) -> None:
    w1, b1, w2, b2 = _make_parameters()
    x = np.array([0.3, -1.2, 0.8])
    target = np.array([0.25, 0.75])

    network = NeuralNetwork(NetworkConfig(learning_rate=1e-3))
    network.add_layer(DenseLayer.from_parameters(w1, b1, hidden))
    network.add_layer(DenseLayer.from_parameters(w2, b2, output))
    predicted = network.forward(x)
    loss_gradient = network.config.loss_function.gradient(predicted, target)
    input_gradient = network.backward(loss_gradient)

    tw1 = torch.tensor(w1, dtype=torch.float64, requires_grad=True)
    tb1 = torch.tensor(b1, dtype=torch.float64, requires_grad=True)
    tw2 = torch.tensor(w2, dtype=torch.float64, requires_grad=True)
    tb2 = torch.tensor(b2, dtype=torch.float64, requires_grad=True)
    tx = torch.tensor(x, dtype=torch.float64, requires_grad=True)
    tt = torch.tensor(target, dtype=torch.float64)
    tp = torch_output(tw2 @ torch_hidden(tw1 @ tx + tb1) + tb2)
    loss = 0.5 * ((tt - tp) ** 2).sum() / tp.numel()
    loss.backward()

    np.testing.assert_allclose(predicted, tp.detach().numpy(), rtol=1e-10)
    np.testing.assert_allclose(network[0].weight_gradients, tw1.grad.numpy(), rtol=1e-8, atol=1e-12)
    np.testing.assert_allclose(network[0].bias_gradients, tb1.grad.numpy(), rtol=1e-8, atol=1e-12)
    np.testing.assert_allclose(network[1].weight_gradients, tw2.grad.numpy(), rtol=1e-8, atol=1e-12)
    np.testing.assert_allclose(network[1].bias_gradients, tb2.grad.numpy(), rtol=1e-8, atol=1e-12)
    np.testing.assert_allclose(input_gradient, tx.grad.numpy(), rtol=1e-8, atol=1e-12)


def test_cross_entropy_gradient_matches_autograd() -> None:
    w1, b1, _, _ = _make_parameters(seed=4)
    x = np.array([0.1, 0.4, -0.5])
    target = np.array([0.0, 1.0, 0.0, 0.0, 0.0])

    network = NeuralNetwork(NetworkConfig(learning_rate=1e-3, loss_function="cross_entropy"))
    network.add_layer(DenseLayer.from_parameters(w1, b1, "sigmoid"))
    predicted = network.forward(x)
    network.backward(network.config.loss_function.gradient(predicted, target))

    tw1 = torch.tensor(w1, dtype=torch.float64, requires_grad=True)
    tb1 = torch.tensor(b1, dtype=torch.float64, requires_grad=True)
    tp = torch.sigmoid(tw1 @ torch.tensor(x, dtype=torch.float64) + tb1)
    loss = -(torch.tensor(target, dtype=torch.float64) * torch.log(tp)).sum() / tp.numel()
    loss.backward()

    np.testing.assert_allclose(network[0].weight_gradients, tw1.grad.numpy(), rtol=1e-8, atol=1e-12)
    np.testing.assert_allclose(network[0].bias_gradients, tb1.grad.numpy(), rtol=1e-8, atol=1e-12)
