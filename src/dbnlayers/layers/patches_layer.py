from ..converters import _to_numpy
from ..errors import InvalidShapeError, LayerError, ShapeMismatchError, UnsupportedChannelCountError
from ..traits import LayerKind, LayerTraits
from .base_layer import Layer


class PatchesLayer(Layer):
    """
    Cuts a single-channel image into (1, height, width) patches.

    The window moves by v_stride rows and h_stride columns, in row-major
    order. Positions where the window would leave the image are skipped
    (no padding). Stateless: the output of one image is a list of patches
    whose length depends on the image size.

    Input-only: it sits first in a stack, so there is no input tensor to
    prepare and no error to propagate backward.
    """
    def __init__(self, width, height, v_stride=1, h_stride=1):
        super().__init__()
        for name, value in (('width', width), ('height', height), ('v_stride', v_stride), ('h_stride', h_stride)):
            if int(value) != value or value <= 0:
                raise InvalidShapeError(f"{type(self).__name__}: {name} must be a positive integer, got {value}")

        self.width = int(width)
        self.height = int(height)
        self.v_stride = int(v_stride)
        self.h_stride = int(h_stride)
        self.initialized = True

    def output_shape(self):
        return (1, self.height, self.width)

    def output_size(self):
        return self.width * self.height

    def traits(self):
        return LayerTraits.for_kind(LayerKind.PATCHES, sgd_supported=True)

    def to_short_string(self):
        return f"Patches -> ({self.height}:{self.v_stride}x{self.width}:{self.h_stride})"

    def activate_hidden(self, v, output=None):
        image = _to_numpy(v)
        if image.ndim != 3:
            raise ShapeMismatchError(f"{type(self).__name__} input", ('1', 'H', 'W'), image.shape)
        if image.shape[0] != 1:
            raise UnsupportedChannelCountError(
                f"{type(self).__name__} only supports one channel, got {image.shape[0]}")

        _, i_h, i_w = image.shape
        patches = []
        for y in range(0, i_h - self.height + 1, self.v_stride):
            for x in range(0, i_w - self.width + 1, self.h_stride):
                patches.append(image[:, y:y + self.height, x:x + self.width].copy())

        if output is None:
            return patches
        output[:] = patches
        return output

    def batch_activate_hidden(self, v, output=None):
        if output is None:
            return self.activate_many(v)
        if len(output) != len(v):
            raise ShapeMismatchError(f"{type(self).__name__} output", (len(v),), (len(output),))
        return [self.activate_hidden(image, out) for image, out in zip(v, output)]

    def prepare_output(self, samples):
        return [[] for _ in range(samples)]

    def prepare_one_output(self):
        return []

    def _input_only(self, operation):
        return LayerError(f"{type(self).__name__} is an input-only layer and does not support {operation}")

    def prepare_input(self):
        raise self._input_only('prepare_input')

    def create_sgd_context(self, batch_size):
        raise self._input_only('create_sgd_context')

    def backward_batch(self, context, output=None):
        raise self._input_only('backward_batch')
