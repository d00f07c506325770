import numpy as np

from .. import ops
from ..errors import InvalidShapeError
from ..traits import LayerKind, LayerTraits
from .base_layer import NeuralLayer


class DynConvLayer(NeuralLayer):
    """
    Convolutional layer whose dimensions are given at runtime by init_layer.

    Valid convolution with stride 1, so the filters are
    (nv1 - nh1 + 1) x (nv2 - nh2 + 1).

    self.weights: (k, nc, nw1, nw2)
    self.biases: (k,)
    """
    short_name = 'Conv(dyn)'

    def __init__(self, activation='sigmoid', w_initializer='lecun', b_initializer='zeros', rng=None):
        super().__init__(activation=activation, w_initializer=w_initializer,
                         b_initializer=b_initializer, rng=rng)
        self.nc = 0    # input channels
        self.nv1 = 0   # input height
        self.nv2 = 0   # input width
        self.k = 0     # filters
        self.nh1 = 0   # output height
        self.nh2 = 0   # output width
        self.nw1 = 0   # filter height
        self.nw2 = 0   # filter width

    def init_layer(self, nc, nv1, nv2, k, nh1, nh2):
        dims = {'nc': nc, 'nv1': nv1, 'nv2': nv2, 'k': k, 'nh1': nh1, 'nh2': nh2}
        for name, value in dims.items():
            if int(value) != value or value <= 0:
                raise InvalidShapeError(f"{type(self).__name__}: {name} must be a positive integer, got {value}")
        if nh1 > nv1 or nh2 > nv2:
            raise InvalidShapeError(
                f"{type(self).__name__}: output {nh1}x{nh2} larger than input {nv1}x{nv2}")

        dims = {name: int(value) for name, value in dims.items()}
        if self.initialized and dims != self._dims():
            print(f"Warning: Re-initializing {type(self).__name__} from "
                  f"{self._describe_shape()} to {dims['nc']}x{dims['nv1']}x{dims['nv2']} -> "
                  f"{dims['k']}x{dims['nh1']}x{dims['nh2']}")

        self.nc, self.nv1, self.nv2 = dims['nc'], dims['nv1'], dims['nv2']
        self.k, self.nh1, self.nh2 = dims['k'], dims['nh1'], dims['nh2']
        self.nw1 = self.nv1 - self.nh1 + 1
        self.nw2 = self.nv2 - self.nh2 + 1

        self._initialize_parameters((self.k, self.nc, self.nw1, self.nw2), (self.k,))
        self.initialized = True

    def _dims(self):
        return {'nc': self.nc, 'nv1': self.nv1, 'nv2': self.nv2, 'k': self.k, 'nh1': self.nh1, 'nh2': self.nh2}

    def _describe_shape(self):
        return f"{self.nc}x{self.nv1}x{self.nv2} -> {self.k}x{self.nh1}x{self.nh2}"

    def input_shape(self):
        return (self.nc, self.nv1, self.nv2)

    def output_shape(self):
        return (self.k, self.nh1, self.nh2)

    def input_size(self):
        return self.nc * self.nv1 * self.nv2

    def output_size(self):
        return self.k * self.nh1 * self.nh2

    def parameters(self):
        # Biases are not counted
        return self.k * self.nw1 * self.nw2

    def traits(self):
        return LayerTraits.for_kind(LayerKind.CONV, dynamic=True, sgd_supported=True)

    def to_short_string(self):
        return (f"{self.short_name}: {self.nc}x{self.nv1}x{self.nv2} -> ({self.k}x{self.nw1}x{self.nw2}) "
                f"-> {self.activation} -> {self.k}x{self.nh1}x{self.nh2}")

    def _linear(self, x):
        out = ops.conv_4d_valid_flipped(x, self.weights)
        b_rep = ops.rep_l(ops.rep(self.biases, self.nh1, self.nh2), out.shape[0])
        return b_rep + out

    def backward_batch(self, context, output=None):
        """Errors w.r.t. the input of the layer, (N, nc, nv1, nv2)."""
        self._check_initialized()
        self._check_batch('errors', context.errors, self.output_shape())

        return self._store(output, ops.conv_4d_full_flipped(context.errors, self.weights))

    def compute_gradients(self, context):
        self._check_initialized()
        self._check_batch('context input', context.input, self.input_shape())
        self._check_batch('errors', context.errors, self.output_shape())

        context.w_grad = ops.conv_4d_valid_filter_flipped(context.input, context.errors)
        # Sum over the batch, mean over the output positions of each filter
        context.b_grad = np.mean(np.sum(context.errors, axis=0), axis=(1, 2))
