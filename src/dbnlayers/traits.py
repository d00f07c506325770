from dataclasses import dataclass
from enum import Enum


class LayerKind(Enum):
    DENSE = 'dense'
    CONV = 'conv'
    DECONV = 'deconv'
    RBM = 'rbm'
    POOLING = 'pooling'
    UNPOOLING = 'unpooling'
    TRANSFORM = 'transform'
    PATCHES = 'patches'


@dataclass(frozen=True)
class LayerTraits:
    """
    Capabilities of a layer, read by the container to decide how to drive it
    (pretraining, SGD, reshaping between layers...).
    """
    kind: LayerKind
    is_neural: bool = False
    is_dense: bool = False
    is_conv: bool = False
    is_deconv: bool = False
    is_standard: bool = False
    is_rbm: bool = False
    is_pooling: bool = False
    is_unpooling: bool = False
    is_transform: bool = False
    is_patches: bool = False
    is_dynamic: bool = False
    pretrain_last: bool = False
    sgd_supported: bool = False

    @classmethod
    def for_kind(cls, kind, dynamic=False, **flags):
        """Build the traits of a layer of the given kind with the matching is_* flag set."""
        kind_flags = {
            LayerKind.DENSE: {'is_neural': True, 'is_dense': True, 'is_standard': True},
            LayerKind.CONV: {'is_neural': True, 'is_conv': True, 'is_standard': True},
            LayerKind.DECONV: {'is_neural': True, 'is_deconv': True, 'is_standard': True},
            LayerKind.RBM: {'is_rbm': True},
            LayerKind.POOLING: {'is_pooling': True},
            LayerKind.UNPOOLING: {'is_unpooling': True},
            LayerKind.TRANSFORM: {'is_transform': True},
            LayerKind.PATCHES: {'is_patches': True},
        }[kind]
        merged = dict(kind_flags, is_dynamic=dynamic)
        merged.update(flags)
        return cls(kind=kind, **merged)
