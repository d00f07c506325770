"""
Converters from foreign input representations to the canonical single-sample
input of a layer (layer.input_shape()).

A converter is a function (layer, value) -> np.ndarray. Converters are looked
up by the type of the value, walking its MRO, so a converter registered for a
base class also serves its subclasses.
"""
import numpy as np

from .errors import ShapeMismatchError

_CONVERTERS = {}


def _to_numpy(x):
    """Convert TensorFlow tensor or other array-like to NumPy array"""
    if hasattr(x, 'numpy'):
        return np.asarray(x.numpy(), dtype=float)
    return np.asarray(x, dtype=float)


def reshape_converter(layer, value):
    """Any representation holding exactly input_size() values, e.g. a flat vector."""
    x = _to_numpy(value)
    expected = layer.input_shape()

    if x.shape == expected:
        return x

    if x.size != layer.input_size():
        raise ShapeMismatchError(f"{type(layer).__name__} input", expected, x.shape)

    return x.reshape(expected)


def sequence_converter(layer, value):
    """Lists/tuples of per-channel (or per-row) arrays."""
    return reshape_converter(layer, np.stack([_to_numpy(v) for v in value]) if value else [])


def register_converter(value_type, converter):
    _CONVERTERS[value_type] = converter


def get_converter(value_type):
    for klass in value_type.__mro__:
        if klass in _CONVERTERS:
            return _CONVERTERS[klass]
    return reshape_converter


def convert_one(layer, value):
    return get_converter(type(value))(layer, value)


register_converter(np.ndarray, reshape_converter)
register_converter(list, sequence_converter)
register_converter(tuple, sequence_converter)
