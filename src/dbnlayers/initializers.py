import numpy as np


class Initializer:
    """
    Fills a freshly allocated parameter tensor.

    fan_in / fan_out are the input_size() and output_size() of the layer
    being initialized.
    """
    name = None

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def initialize(self, shape, fan_in, fan_out):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}()"


class Zeros(Initializer):
    name = 'zeros'

    def initialize(self, shape, fan_in, fan_out):
        return np.zeros(shape)


class Gaussian(Initializer):
    name = 'gaussian'

    def initialize(self, shape, fan_in, fan_out):
        return self.rng.standard_normal(shape)


class SmallGaussian(Initializer):
    name = 'small_gaussian'

    def initialize(self, shape, fan_in, fan_out):
        return self.rng.standard_normal(shape) * 0.01


class Uniform(Initializer):
    name = 'uniform'

    def initialize(self, shape, fan_in, fan_out):
        return self.rng.uniform(-0.05, 0.05, shape)


class LeCun(Initializer):
    name = 'lecun'

    def initialize(self, shape, fan_in, fan_out):
        return self.rng.standard_normal(shape) * np.sqrt(1. / fan_in)


class Xavier(Initializer):
    name = 'xavier'

    def initialize(self, shape, fan_in, fan_out):
        return self.rng.standard_normal(shape) * np.sqrt(2. / (fan_in + fan_out))


class XavierUniform(Initializer):
    name = 'xavier_uniform'

    def initialize(self, shape, fan_in, fan_out):
        limit = np.sqrt(6. / (fan_in + fan_out))
        return self.rng.uniform(-limit, limit, shape)


class He(Initializer):
    name = 'he'

    def initialize(self, shape, fan_in, fan_out):
        return self.rng.standard_normal(shape) * np.sqrt(2. / fan_in)


class HeUniform(Initializer):
    name = 'he_uniform'

    def initialize(self, shape, fan_in, fan_out):
        limit = np.sqrt(6. / fan_in)
        return self.rng.uniform(-limit, limit, shape)


INITIALIZERS = {
    'zeros': Zeros,
    'gaussian': Gaussian,
    'small_gaussian': SmallGaussian,
    'uniform': Uniform,
    'lecun': LeCun,
    'xavier': Xavier,
    'xavier_uniform': XavierUniform,
    'he': He,
    'he_uniform': HeUniform,
}


def get_initializer(initializer, rng=None):
    if isinstance(initializer, Initializer):
        return initializer

    if not isinstance(initializer, str):
        raise ValueError(f"initializer must be a name or an Initializer, got {type(initializer).__name__}")

    key = initializer.lower()
    if key not in INITIALIZERS:
        print(f"Warning: Unknown initializer '{initializer}'. Using small random numbers.")
        key = 'small_gaussian'

    return INITIALIZERS[key](rng=rng)
