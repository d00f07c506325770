from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class SGDContext:
    """
    Scratch tensors of one training pass through one layer.

    Owned by the caller; layers only read and write its fields.
        input:  (batch, *layer input shape)   forward input
        output: (batch, *layer output shape)  activated forward output
        errors: (batch, *layer output shape)  error signal w.r.t. the output
        w_grad: like the layer weights (None for layers without weights)
        b_grad: like the layer biases (None for layers without biases)
    """
    input: np.ndarray
    output: np.ndarray
    errors: np.ndarray
    w_grad: Optional[np.ndarray] = None
    b_grad: Optional[np.ndarray] = None

    @classmethod
    def zeros(cls, batch_size, input_shape, output_shape, weight_shape=None, bias_shape=None):
        batch_size = int(batch_size)
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        return cls(
            input=np.zeros((batch_size,) + tuple(input_shape)),
            output=np.zeros((batch_size,) + tuple(output_shape)),
            errors=np.zeros((batch_size,) + tuple(output_shape)),
            w_grad=np.zeros(weight_shape) if weight_shape is not None else None,
            b_grad=np.zeros(bias_shape) if bias_shape is not None else None,
        )

    @property
    def batch_size(self):
        return self.input.shape[0]
