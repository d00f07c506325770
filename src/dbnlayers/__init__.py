from .activations import Activation, get_activation
from .context import SGDContext
from .errors import (
    InvalidShapeError,
    LayerError,
    MissingBackupError,
    ShapeMismatchError,
    UninitializedLayerError,
    UnsupportedChannelCountError,
)
from .initializers import Initializer, get_initializer
from .layers import ConvLayer, DenseLayer, DynConvLayer, Layer, PatchesLayer, PoolingLayer
from .traits import LayerKind, LayerTraits

__version__ = '0.1.0'

__all__ = [
    'Activation', 'get_activation',
    'Initializer', 'get_initializer',
    'SGDContext',
    'LayerKind', 'LayerTraits',
    'Layer', 'DynConvLayer', 'ConvLayer', 'DenseLayer', 'PoolingLayer', 'PatchesLayer',
    'LayerError', 'InvalidShapeError', 'ShapeMismatchError', 'UninitializedLayerError',
    'MissingBackupError', 'UnsupportedChannelCountError',
]
