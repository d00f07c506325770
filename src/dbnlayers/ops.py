"""
numpy implementations of the 4D convolutions used by the convolutional layers.

All three kernels share the flipped-kernel convention: the forward pass is a
cross-correlation, the full convolution is its exact adjoint, and the filter
convolution yields the matching weight gradient.

Shapes:
    x: (batch, channels, height, width)
    w: (filters, channels, filter_height, filter_width)
    e: (batch, filters, out_height, out_width)
"""
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view


def conv_4d_valid_flipped(x, w):
    _, _, f_h, f_w = w.shape
    # (batch, channels, out_h, out_w, f_h, f_w)
    windows = sliding_window_view(x, (f_h, f_w), axis=(2, 3))
    return np.einsum('ncijpq,kcpq->nkij', windows, w, optimize=True)


def conv_4d_full_flipped(e, w):
    _, _, f_h, f_w = w.shape
    e_padded = np.pad(e, ((0, 0), (0, 0), (f_h - 1, f_h - 1), (f_w - 1, f_w - 1)), mode='constant')
    windows = sliding_window_view(e_padded, (f_h, f_w), axis=(2, 3))
    w_rot = w[:, :, ::-1, ::-1]
    return np.einsum('nkyxpq,kcpq->ncyx', windows, w_rot, optimize=True)


def conv_4d_valid_filter_flipped(x, e):
    _, _, o_h, o_w = e.shape
    # (batch, channels, f_h, f_w, out_h, out_w)
    windows = sliding_window_view(x, (o_h, o_w), axis=(2, 3))
    return np.einsum('ncpqij,nkij->kcpq', windows, e, optimize=True)


def rep(b, h, w):
    """Replicate a (K,) vector over a (h, w) grid -> (K, h, w)."""
    return np.broadcast_to(b[:, None, None], (b.shape[0], h, w)).copy()


def rep_l(x, n):
    """Replicate x n times along a new leading axis."""
    return np.broadcast_to(x, (n,) + x.shape).copy()


def pool_windows(x, p_h, p_w):
    """
    Non-overlapping (p_h, p_w) windows over the two trailing axes.
    Trailing rows/columns that do not fill a window are dropped.
    Returns shape (..., out_h, out_w, p_h * p_w).
    """
    o_h = x.shape[-2] // p_h
    o_w = x.shape[-1] // p_w
    cropped = x[..., :o_h * p_h, :o_w * p_w]
    lead = cropped.shape[:-2]
    blocks = cropped.reshape(lead + (o_h, p_h, o_w, p_w))
    blocks = np.moveaxis(blocks, -3, -2)
    return blocks.reshape(lead + (o_h, o_w, p_h * p_w))
