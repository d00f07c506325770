import numpy as np

from .. import ops
from ..converters import convert_one
from ..errors import InvalidShapeError
from ..traits import LayerKind, LayerTraits
from .base_layer import Layer


class PoolingLayer(Layer):
    """Non-overlapping max/average pooling over (channels, height, width) inputs."""
    def __init__(self, pool_size=(2, 2), mode='max'):
        super().__init__()
        if not isinstance(pool_size, tuple) or len(pool_size) != 2:
            raise ValueError("pool_size must be a tuple of 2 integers (height, width)")
        if min(pool_size) <= 0:
            raise ValueError(f"pool_size must be positive, got {pool_size}")

        self.pool_h, self.pool_w = pool_size
        self.mode = mode.lower()
        if self.mode not in ('max', 'average'):
            raise ValueError(f"Unsupported pooling mode: {self.mode}. Choose 'max' or 'average'.")

        self.nc = 0
        self.nv1 = 0
        self.nv2 = 0

    def init_layer(self, nc, nv1, nv2):
        for name, value in (('nc', nc), ('nv1', nv1), ('nv2', nv2)):
            if int(value) != value or value <= 0:
                raise InvalidShapeError(f"{type(self).__name__}: {name} must be a positive integer, got {value}")
        if nv1 < self.pool_h or nv2 < self.pool_w:
            raise InvalidShapeError(
                f"{type(self).__name__}: input {nv1}x{nv2} smaller than pool {self.pool_h}x{self.pool_w}")

        self.nc, self.nv1, self.nv2 = int(nc), int(nv1), int(nv2)
        self.initialized = True

    def input_shape(self):
        return (self.nc, self.nv1, self.nv2)

    def output_shape(self):
        return (self.nc, self.nv1 // self.pool_h, self.nv2 // self.pool_w)

    def traits(self):
        return LayerTraits.for_kind(LayerKind.POOLING, dynamic=True, sgd_supported=True)

    def to_short_string(self):
        name = 'MP(2d)' if self.mode == 'max' else 'AVGP(2d)'
        c, o_h, o_w = self.output_shape()
        return f"{name}: {self.nc}x{self.nv1}x{self.nv2} -> ({self.pool_h}x{self.pool_w}) -> {c}x{o_h}x{o_w}"

    def _pool(self, x):
        windows = ops.pool_windows(x, self.pool_h, self.pool_w)
        if self.mode == 'max':
            return windows.max(axis=-1)
        return windows.mean(axis=-1)

    def activate_hidden(self, v, output=None):
        self._check_initialized()
        if not isinstance(v, np.ndarray) or v.shape != self.input_shape():
            v = convert_one(self, v)
        return self._store(output, self._pool(v))

    def batch_activate_hidden(self, v, output=None):
        self._check_initialized()
        v = np.asarray(v, dtype=float)
        self._check_batch('batch input', v, self.input_shape())
        return self._store(output, self._pool(v))

    def backward_batch(self, context, output=None):
        """Errors w.r.t. the input, (N, nc, nv1, nv2)."""
        self._check_initialized()
        self._check_batch('context input', context.input, self.input_shape())
        self._check_batch('errors', context.errors, self.output_shape())

        n = context.input.shape[0]
        _, o_h, o_w = self.output_shape()
        window_size = self.pool_h * self.pool_w

        if self.mode == 'max':
            # Gradient only to the (first) max position of each window
            windows = ops.pool_windows(context.input, self.pool_h, self.pool_w)
            mask = np.zeros_like(windows)
            np.put_along_axis(mask, np.argmax(windows, axis=-1)[..., np.newaxis], 1., axis=-1)
            d_windows = mask * context.errors[..., np.newaxis]
        else:
            # Distribute gradient equally to all elements in the window
            d_windows = np.repeat(context.errors[..., np.newaxis] / window_size, window_size, axis=-1)

        blocks = d_windows.reshape((n, self.nc, o_h, o_w, self.pool_h, self.pool_w))
        blocks = np.moveaxis(blocks, -2, -3).reshape((n, self.nc, o_h * self.pool_h, o_w * self.pool_w))

        d_input = np.zeros((n,) + self.input_shape())
        d_input[:, :, :o_h * self.pool_h, :o_w * self.pool_w] = blocks
        return self._store(output, d_input)
