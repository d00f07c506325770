import numpy as np


class Activation:
    """
    Element-wise nonlinearity applied after the linear step of a layer.

    derivative() receives the activated output, not the pre-activation,
    because that is what the training context keeps around.
    """
    name = None

    def apply(self, x):
        raise NotImplementedError

    def derivative(self, output):
        raise NotImplementedError

    def __str__(self):
        return self.name.upper()

    def __repr__(self):
        return f"{type(self).__name__}()"


class Sigmoid(Activation):
    name = 'sigmoid'

    def apply(self, x):
        # Split on sign to avoid overflow in exp
        out = np.empty_like(x, dtype=float)
        pos = x >= 0
        out[pos] = 1. / (1. + np.exp(-x[pos]))
        exp_x = np.exp(x[~pos])
        out[~pos] = exp_x / (1. + exp_x)
        return out

    def derivative(self, output):
        return output * (1. - output)


class Tanh(Activation):
    name = 'tanh'

    def apply(self, x):
        return np.tanh(x)

    def derivative(self, output):
        # tanh'(x) = 1 - tanh²(x)
        return 1. - output ** 2


class ReLU(Activation):
    name = 'relu'

    def apply(self, x):
        return np.maximum(0, x)

    def derivative(self, output):
        # 1 if x > 0, and 0 if x <= 0.
        return (output > 0).astype(float)


class Identity(Activation):
    name = 'identity'

    def apply(self, x):
        return np.array(x, dtype=float, copy=True)

    def derivative(self, output):
        return np.ones_like(output, dtype=float)


class Softmax(Activation):
    """
    Softmax over all the values of one sample (every axis except the batch one).

    The derivative is the identity: the cross-entropy loss is expected to have
    already folded the softmax Jacobian into the errors.
    """
    name = 'softmax'

    def apply(self, x):
        if x.ndim <= 1:
            exp_values = np.exp(x - np.max(x))
            return exp_values / np.sum(exp_values)

        axes = tuple(range(1, x.ndim))
        exp_values = np.exp(x - np.max(x, axis=axes, keepdims=True))
        return exp_values / np.sum(exp_values, axis=axes, keepdims=True)

    def derivative(self, output):
        return np.ones_like(output, dtype=float)


ACTIVATIONS = {
    'sigmoid': Sigmoid,
    'tanh': Tanh,
    'relu': ReLU,
    'identity': Identity,
    'linear': Identity,
    'softmax': Softmax,
}


def get_activation(activation):
    if isinstance(activation, Activation):
        return activation

    if isinstance(activation, str):
        key = activation.lower()
        if key in ACTIVATIONS:
            return ACTIVATIONS[key]()

    raise ValueError(f"Unknown activation '{activation}'. Choose one of {sorted(ACTIVATIONS)} or pass an Activation.")
