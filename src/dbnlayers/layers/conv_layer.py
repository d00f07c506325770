from ..errors import InvalidShapeError
from ..traits import LayerKind, LayerTraits
from .dyn_conv_layer import DynConvLayer


class ConvLayer(DynConvLayer):
    """Convolutional layer with its shape fixed at construction."""
    short_name = 'Conv'

    def __init__(self, nc, nv1, nv2, k, nh1, nh2, activation='sigmoid', w_initializer='lecun',
                 b_initializer='zeros', rng=None):
        super().__init__(activation=activation, w_initializer=w_initializer,
                         b_initializer=b_initializer, rng=rng)
        super().init_layer(nc, nv1, nv2, k, nh1, nh2)

    def init_layer(self, nc, nv1, nv2, k, nh1, nh2):
        if self._dims() != {'nc': nc, 'nv1': nv1, 'nv2': nv2, 'k': k, 'nh1': nh1, 'nh2': nh2}:
            raise InvalidShapeError(f"{type(self).__name__} has a fixed shape ({self._describe_shape()}); use DynConvLayer to resize.")
        super().init_layer(nc, nv1, nv2, k, nh1, nh2)

    def traits(self):
        return LayerTraits.for_kind(LayerKind.CONV, dynamic=False, sgd_supported=True)

    def dyn_init(self, dyn):
        """Initialize the dynamic layer dyn with the shape of this layer."""
        dyn.init_layer(self.nc, self.nv1, self.nv2, self.k, self.nh1, self.nh2)
        return dyn
