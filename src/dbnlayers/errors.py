class LayerError(Exception):
    pass


class InvalidShapeError(LayerError, ValueError):
    pass


class ShapeMismatchError(LayerError, ValueError):
    def __init__(self, what, expected, got):
        self.expected = tuple(expected)
        self.got = tuple(got)
        super().__init__(f"{what} shape mismatch. Expected {self.expected}, got {self.got}.")


class UninitializedLayerError(LayerError, RuntimeError):
    def __init__(self, layer_name):
        super().__init__(f"{layer_name} used before init_layer was called.")


class MissingBackupError(LayerError, RuntimeError):
    def __init__(self, layer_name):
        super().__init__(f"{layer_name} has no backup to restore. Call backup_weights first.")


class UnsupportedChannelCountError(LayerError, ValueError):
    pass
