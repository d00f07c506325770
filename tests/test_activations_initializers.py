import numpy as np
import pytest

from dbnlayers.activations import Activation, Identity, Sigmoid, get_activation
from dbnlayers.initializers import INITIALIZERS, Initializer, Zeros, get_initializer


@pytest.mark.parametrize('name', ['sigmoid', 'tanh', 'relu', 'identity'])
def test_derivative_of_output_matches_finite_differences(rng, name):
    activation = get_activation(name)
    # Keep away from the relu kink
    x = rng.uniform(0.1, 2., (3, 4)) * rng.choice([-1., 1.], (3, 4))
    eps = 1e-6

    numerical = (activation.apply(x + eps) - activation.apply(x - eps)) / (2 * eps)

    np.testing.assert_allclose(activation.derivative(activation.apply(x)), numerical, atol=1e-6)


def test_sigmoid_is_stable_for_large_inputs():
    out = Sigmoid().apply(np.array([-1000., 0., 1000.]))

    np.testing.assert_allclose(out, [0., 0.5, 1.])
    assert np.all(np.isfinite(out))


def test_softmax_normalizes_each_sample(rng):
    softmax = get_activation('softmax')
    x = rng.standard_normal((2, 3, 2, 2))

    out = softmax.apply(x)

    np.testing.assert_allclose(out.sum(axis=(1, 2, 3)), [1., 1.])
    np.testing.assert_array_equal(softmax.derivative(out), np.ones_like(out))


def test_get_activation():
    assert isinstance(get_activation('SIGMOID'), Sigmoid)
    assert isinstance(get_activation('linear'), Identity)
    identity = Identity()
    assert get_activation(identity) is identity
    assert str(get_activation('tanh')) == 'TANH'

    with pytest.raises(ValueError):
        get_activation('swish')


def test_custom_activation_strategy(rng):
    class Square(Activation):
        name = 'square'

        def apply(self, x):
            return x ** 2

        def derivative(self, output):
            return 2. * np.sqrt(output)

    assert str(get_activation(Square())) == 'SQUARE'


@pytest.mark.parametrize('name', sorted(INITIALIZERS))
def test_initializers_fill_the_requested_shape(name):
    initializer = get_initializer(name, rng=np.random.default_rng(0))

    values = initializer.initialize((4, 3, 2, 2), 48, 32)

    assert values.shape == (4, 3, 2, 2)
    assert np.all(np.isfinite(values))


def test_scaled_initializers_follow_fan_in():
    rng = np.random.default_rng(0)
    small = get_initializer('lecun', rng=rng).initialize((20000,), 400, 10)
    large = get_initializer('lecun', rng=rng).initialize((20000,), 4, 10)

    assert np.std(small) == pytest.approx(np.sqrt(1. / 400), rel=0.05)
    assert np.std(large) == pytest.approx(np.sqrt(1. / 4), rel=0.05)

    limit = np.sqrt(6. / 30)
    uniform = get_initializer('xavier_uniform', rng=rng).initialize((1000,), 10, 20)
    assert np.all(np.abs(uniform) <= limit)


def test_get_initializer_unknown_name_falls_back(capsys):
    initializer = get_initializer('orthogonal')

    assert initializer.name == 'small_gaussian'
    assert "Unknown initializer 'orthogonal'" in capsys.readouterr().out


def test_get_initializer_passes_through_instances():
    zeros = Zeros()

    assert get_initializer(zeros) is zeros
    assert isinstance(get_initializer('ZEROS'), Initializer)
    with pytest.raises(ValueError):
        get_initializer(3)
