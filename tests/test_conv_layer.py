import numpy as np
import pytest

from dbnlayers import ConvLayer, DynConvLayer, InvalidShapeError


def test_static_layer_is_initialized_in_constructor():
    layer = ConvLayer(1, 12, 12, 4, 8, 8, activation='tanh')

    assert layer.initialized
    assert layer.weights.shape == (4, 1, 5, 5)
    assert layer.to_short_string() == "Conv: 1x12x12 -> (4x5x5) -> TANH -> 4x8x8"
    assert layer.activate_hidden(np.zeros((1, 12, 12))).shape == (4, 8, 8)


def test_static_layer_traits_are_not_dynamic():
    static = ConvLayer(1, 6, 6, 2, 4, 4).traits()
    dynamic = DynConvLayer().traits()

    assert not static.is_dynamic
    assert dynamic.is_dynamic
    assert static.is_conv and static.sgd_supported


def test_static_layer_cannot_be_resized():
    layer = ConvLayer(1, 6, 6, 2, 4, 4)

    with pytest.raises(InvalidShapeError):
        layer.init_layer(1, 8, 8, 2, 4, 4)

    # Same shape re-initializes the values
    layer.init_layer(1, 6, 6, 2, 4, 4)
    assert layer.weights.shape == (2, 1, 3, 3)


def test_dyn_init_gives_same_shape(rng):
    static = ConvLayer(3, 9, 7, 2, 5, 5, rng=rng)
    dyn = static.dyn_init(DynConvLayer())

    assert dyn.weights.shape == static.weights.shape
    assert dyn.input_size() == static.input_size()
    assert dyn.output_size() == static.output_size()

    dyn.weights = static.weights.copy()
    dyn.biases = static.biases.copy()
    v = rng.standard_normal(static.input_shape())
    np.testing.assert_allclose(dyn.activate_hidden(v), static.activate_hidden(v))
