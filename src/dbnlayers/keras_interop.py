"""
Exchange weights with tf.keras layers, mostly to cross-check the numpy layers
against Keras on the same parameters.

Keras keeps convolution kernels as (filter_height, filter_width, in, out)
and works on channels-last images; the layers here use (out, in,
filter_height, filter_width) and channels-first images.
"""
import numpy as np
import tensorflow as tf

from .activations import get_activation

_KERAS_NAMES = {'identity': 'linear'}
_SUPPORTED = ('sigmoid', 'tanh', 'relu', 'linear')


def _get_activation_name(activation_func):
    if hasattr(activation_func, '__name__'):
        return activation_func.__name__
    elif hasattr(activation_func, 'name'):
        return activation_func.name
    else:
        return str(activation_func).split('.')[-1].split(' ')[0]


def _keras_activation_name(layer):
    name = _KERAS_NAMES.get(layer.activation.name, layer.activation.name)
    if name not in _SUPPORTED:
        raise ValueError(f"Activation '{layer.activation}' has no Keras equivalent. Supported: {_SUPPORTED}")
    return name


def _split_weights(keras_layer, num_outputs):
    weights = keras_layer.get_weights()
    if not weights:
        raise ValueError(f"Keras layer {keras_layer.name} has no weights. Build it first.")
    kernel = np.asarray(weights[0], dtype=float)
    bias = np.asarray(weights[1], dtype=float) if len(weights) > 1 else np.zeros(num_outputs)
    return kernel, bias


def load_conv_weights(layer, keras_conv, input_height, input_width):
    """
    Initialize a DynConvLayer/ConvLayer from a built Keras Conv2D.

    Only what the numpy layer can express is accepted: valid padding,
    stride 1, no dilation.
    """
    if not isinstance(keras_conv, tf.keras.layers.Conv2D):
        raise ValueError(f"Expected a tf.keras.layers.Conv2D, got {type(keras_conv).__name__}")
    if keras_conv.padding != 'valid':
        raise ValueError(f"Only 'valid' padding is supported, got '{keras_conv.padding}'")
    if tuple(keras_conv.strides) != (1, 1) or tuple(keras_conv.dilation_rate) != (1, 1):
        raise ValueError(f"Only stride 1 without dilation is supported, got strides={keras_conv.strides} "
                         f"dilation_rate={keras_conv.dilation_rate}")

    activation = _get_activation_name(keras_conv.activation)
    if activation not in _SUPPORTED:
        raise ValueError(f"Unsupported Keras activation '{activation}'. Supported: {_SUPPORTED}")

    print(f"Loading Keras {type(keras_conv).__name__} '{keras_conv.name}' into {type(layer).__name__}")

    kernel, bias = _split_weights(keras_conv, keras_conv.filters)
    f_h, f_w, nc, k = kernel.shape
    print(f"  Conv kernel shape: {kernel.shape}, bias shape: {bias.shape}")

    activation = get_activation(activation)
    layer.init_layer(nc, input_height, input_width, k, input_height - f_h + 1, input_width - f_w + 1)
    layer.activation = activation
    layer.weights = kernel.transpose(3, 2, 0, 1).copy()
    layer.biases = bias.copy()

    print(f"  Loaded: {layer.to_short_string()}")
    return layer


def load_dense_weights(layer, keras_dense):
    if not isinstance(keras_dense, tf.keras.layers.Dense):
        raise ValueError(f"Expected a tf.keras.layers.Dense, got {type(keras_dense).__name__}")

    activation = _get_activation_name(keras_dense.activation)
    if activation not in _SUPPORTED + ('softmax',):
        raise ValueError(f"Unsupported Keras activation '{activation}'")

    print(f"Loading Keras {type(keras_dense).__name__} '{keras_dense.name}' into {type(layer).__name__}")

    kernel, bias = _split_weights(keras_dense, keras_dense.units)
    print(f"  Dense weights shape: {kernel.shape}")

    activation = get_activation(activation)
    layer.init_layer(kernel.shape[0], kernel.shape[1])
    layer.activation = activation
    layer.weights = kernel.copy()
    layer.biases = bias.copy()
    return layer


def to_keras_conv2d(layer):
    """Build a channels-last Keras Conv2D carrying the weights of a convolutional layer."""
    layer._check_initialized()
    keras_conv = tf.keras.layers.Conv2D(
        filters=layer.k,
        kernel_size=(layer.nw1, layer.nw2),
        strides=(1, 1),
        padding='valid',
        activation=_keras_activation_name(layer),
    )
    keras_conv.build((None, layer.nv1, layer.nv2, layer.nc))
    keras_conv.set_weights([layer.weights.transpose(2, 3, 1, 0), layer.biases])
    return keras_conv
