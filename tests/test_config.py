import pytest

from feedforward.config import NetworkConfig
from feedforward.losses import CrossEntropyLoss, MSELoss
from feedforward.training import TrainingConfig


def test_network_config_defaults() -> None:
    config = NetworkConfig()
    assert config.learning_rate == 0.01
    assert config.epochs == 100
    assert config.batch_size == 32
    assert isinstance(config.loss_function, MSELoss)
    assert config.use_early_stopping is False
    assert config.early_stopping_patience == 10
    assert config.early_stopping_min_delta == 0.001
    assert config.validation_split == 0.0
    assert config.verbose is True
    assert str(config) == "NetworkConfig[lr=0.0100, epochs=100, batch_size=32, loss=mse]"


@pytest.mark.parametrize(
    "field, value",
    [
        ("learning_rate", 0.0),
        ("learning_rate", -1.0),
        ("epochs", 0),
        ("epochs", 2.5),
        ("batch_size", 0),
        ("early_stopping_patience", 0),
        ("early_stopping_min_delta", -0.1),
        ("validation_split", 1.0),
        ("validation_split", -0.2),
    ],
)
def test_network_config_rejects_invalid_values(field, value) -> None:
    with pytest.raises(ValueError, match=field):
        NetworkConfig(**{field: value})
    config = NetworkConfig()
    with pytest.raises(ValueError):
        setattr(config, field, value)


def test_loss_function_accepts_names() -> None:
    config = NetworkConfig(loss_function="cross_entropy")
    assert isinstance(config.loss_function, CrossEntropyLoss)
    config.loss_function = "mse"
    assert isinstance(config.loss_function, MSELoss)
    with pytest.raises(ValueError):
        config.loss_function = "hinge"


def test_training_config_defaults_and_validation() -> None:
    config = TrainingConfig()
    assert config.shuffle is True
    assert config.print_every_n_epochs == 1
    with pytest.raises(ValueError):
        TrainingConfig(print_every_n_epochs=0)
    with pytest.raises(ValueError):
        config.batch_size = -4


def test_training_config_from_network_config() -> None:
    network_config = NetworkConfig(learning_rate=0.3, epochs=7, batch_size=2, use_early_stopping=True)
    config = TrainingConfig.from_network_config(network_config, shuffle=False, epochs=9)

    assert config.learning_rate == 0.3
    assert config.epochs == 9
    assert config.batch_size == 2
    assert config.use_early_stopping is True
    assert config.shuffle is False
    with pytest.raises(TypeError):
        TrainingConfig.from_network_config(network_config, momentum=0.9)
