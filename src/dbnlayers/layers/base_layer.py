from dataclasses import dataclass

import numpy as np

from ..activations import get_activation
from ..context import SGDContext
from ..converters import convert_one
from ..errors import MissingBackupError, ShapeMismatchError, UninitializedLayerError
from ..initializers import get_initializer


@dataclass(frozen=True)
class ParameterSnapshot:
    weights: np.ndarray
    biases: np.ndarray


class Layer:
    """
    Protocol shared by every layer driven by a network container.

    Single-sample tensors have no batch axis; batch tensors carry it first.
    """
    def __init__(self):
        self.initialized = False

    def input_shape(self):
        raise NotImplementedError

    def output_shape(self):
        raise NotImplementedError

    def input_size(self):
        return int(np.prod(self.input_shape()))

    def output_size(self):
        return int(np.prod(self.output_shape()))

    def parameters(self):
        return 0

    def traits(self):
        raise NotImplementedError

    def to_short_string(self):
        raise NotImplementedError

    def __str__(self):
        return self.to_short_string()

    def activate_hidden(self, v, output=None):
        raise NotImplementedError

    def batch_activate_hidden(self, v, output=None):
        raise NotImplementedError

    def activate_one(self, v):
        return self.activate_hidden(v)

    def activate_many(self, inputs):
        return [self.activate_hidden(v) for v in inputs]

    def prepare_input(self):
        """Return a zero tensor with the expected single-sample input shape."""
        self._check_initialized()
        return np.zeros(self.input_shape())

    def prepare_one_output(self):
        self._check_initialized()
        return np.zeros(self.output_shape())

    def prepare_output(self, samples):
        return [self.prepare_one_output() for _ in range(samples)]

    def create_sgd_context(self, batch_size):
        self._check_initialized()
        return SGDContext.zeros(batch_size, self.input_shape(), self.output_shape())

    def adapt_errors(self, context):
        pass

    def backward_batch(self, context, output=None):
        raise NotImplementedError

    def compute_gradients(self, context):
        pass

    def _check_initialized(self):
        if not self.initialized:
            raise UninitializedLayerError(type(self).__name__)

    def _check_shape(self, what, tensor, expected):
        if tuple(tensor.shape) != tuple(expected):
            raise ShapeMismatchError(f"{type(self).__name__} {what}", expected, tensor.shape)

    def _check_batch(self, what, tensor, expected_one):
        if tensor.ndim != len(expected_one) + 1 or tuple(tensor.shape[1:]) != tuple(expected_one):
            expected = ('N',) + tuple(expected_one)
            raise ShapeMismatchError(f"{type(self).__name__} {what}", expected, tensor.shape)

    def _store(self, output, values):
        if output is None:
            return values
        self._check_shape('output', output, values.shape)
        output[...] = values
        return output


class NeuralLayer(Layer):
    """
    Base of the layers holding weights and biases:
    output = activation(linear(input) + biases)
    """
    def __init__(self, activation='sigmoid', w_initializer='lecun', b_initializer='zeros', rng=None):
        super().__init__()
        self.activation = get_activation(activation)
        self.w_initializer = get_initializer(w_initializer, rng=rng)
        self.b_initializer = get_initializer(b_initializer, rng=rng)

        self.weights = None
        self.biases = None
        self.backup = None

    def _linear(self, x):
        """Batched linear step including the biases."""
        raise NotImplementedError

    def _initialize_parameters(self, weight_shape, bias_shape):
        fan_in, fan_out = self.input_size(), self.output_size()
        self.weights = np.asarray(self.w_initializer.initialize(weight_shape, fan_in, fan_out), dtype=float)
        self.biases = np.asarray(self.b_initializer.initialize(bias_shape, fan_in, fan_out), dtype=float)
        self.backup = None

    def activate_hidden(self, v, output=None):
        self._check_initialized()

        if not isinstance(v, np.ndarray) or v.shape != self.input_shape():
            v = convert_one(self, v)

        result = self.activation.apply(self._linear(v[np.newaxis]))[0]
        return self._store(output, result)

    def batch_activate_hidden(self, v, output=None):
        self._check_initialized()
        v = np.asarray(v, dtype=float)
        self._check_batch('batch input', v, self.input_shape())

        return self._store(output, self.activation.apply(self._linear(v)))

    def create_sgd_context(self, batch_size):
        self._check_initialized()
        return SGDContext.zeros(batch_size, self.input_shape(), self.output_shape(),
                                weight_shape=self.weights.shape, bias_shape=self.biases.shape)

    def adapt_errors(self, context):
        self._check_initialized()
        self._check_shape('errors', context.errors, context.output.shape)
        context.errors = self.activation.derivative(context.output) * context.errors

    def backup_weights(self):
        self._check_initialized()
        self.backup = ParameterSnapshot(weights=self.weights.copy(), biases=self.biases.copy())

    def restore_weights(self):
        if self.backup is None:
            raise MissingBackupError(type(self).__name__)
        self.weights = self.backup.weights.copy()
        self.biases = self.backup.biases.copy()
