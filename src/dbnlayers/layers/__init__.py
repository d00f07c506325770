from .base_layer import Layer, NeuralLayer, ParameterSnapshot
from .dyn_conv_layer import DynConvLayer
from .conv_layer import ConvLayer
from .dense_layer import DenseLayer
from .pooling_layer import PoolingLayer
from .patches_layer import PatchesLayer

__all__ = ['Layer', 'NeuralLayer', 'ParameterSnapshot', 'DynConvLayer', 'ConvLayer', 'DenseLayer', 'PoolingLayer', 'PatchesLayer']
