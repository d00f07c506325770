import numpy as np

from ..errors import InvalidShapeError
from ..traits import LayerKind, LayerTraits
from .base_layer import NeuralLayer


class DenseLayer(NeuralLayer):
    """
    Fully connected layer, sized at runtime by init_layer.

    self.weights: (num_visible, num_hidden)
    self.biases: (num_hidden,)
    """
    def __init__(self, activation='sigmoid', w_initializer='lecun', b_initializer='zeros', rng=None):
        super().__init__(activation=activation, w_initializer=w_initializer,
                         b_initializer=b_initializer, rng=rng)
        self.num_visible = 0
        self.num_hidden = 0

    def init_layer(self, num_visible, num_hidden):
        for name, value in (('num_visible', num_visible), ('num_hidden', num_hidden)):
            if int(value) != value or value <= 0:
                raise InvalidShapeError(f"{type(self).__name__}: {name} must be a positive integer, got {value}")

        if self.initialized and (self.num_visible, self.num_hidden) != (num_visible, num_hidden):
            print(f"Warning: Re-initializing {type(self).__name__} with {num_visible} -> {num_hidden} "
                  f"(was {self.num_visible} -> {self.num_hidden})")

        self.num_visible = int(num_visible)
        self.num_hidden = int(num_hidden)

        self._initialize_parameters((self.num_visible, self.num_hidden), (self.num_hidden,))
        self.initialized = True

    def input_shape(self):
        return (self.num_visible,)

    def output_shape(self):
        return (self.num_hidden,)

    def parameters(self):
        return self.num_visible * self.num_hidden

    def traits(self):
        return LayerTraits.for_kind(LayerKind.DENSE, dynamic=True, sgd_supported=True)

    def to_short_string(self):
        return f"Dense(dyn): {self.num_visible} -> {self.activation} -> {self.num_hidden}"

    def batch_activate_hidden(self, v, output=None):
        v = np.asarray(v, dtype=float)
        # Flatten (N, C, H, W) outputs of a convolution or pooling layer
        if v.ndim > 2:
            v = v.reshape(v.shape[0], -1)
        return super().batch_activate_hidden(v, output=output)

    def _linear(self, x):
        # Output = Input @ Weights + Biases
        return np.dot(x, self.weights) + self.biases

    def backward_batch(self, context, output=None):
        # dL/dI = dL/dO @ W^T
        self._check_initialized()
        self._check_batch('errors', context.errors, self.output_shape())
        return self._store(output, np.dot(context.errors, self.weights.T))

    def compute_gradients(self, context):
        self._check_initialized()
        inputs = context.input.reshape(context.input.shape[0], -1)
        self._check_batch('context input', inputs, self.input_shape())
        self._check_batch('errors', context.errors, self.output_shape())

        # dL/dW = X^T @ dL/dO
        context.w_grad = np.dot(inputs.T, context.errors)
        # dL/dB = sum(dL/dO) over the batch dimension
        context.b_grad = np.sum(context.errors, axis=0)
