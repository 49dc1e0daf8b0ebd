from typing import Optional
import numpy as np

from .surface import ChannelType


def weighted_sum(a, b, w1, w2, channel: ChannelType):
    """
    Per channel `a * w1 + b * w2`, computed in the channel's float type and
    converted back to `channel` with clamping.

    Works on single pixels as well as on whole blocks, weights broadcast
    against the pixel arrays.
    """
    a = channel.to_float(a)
    b = channel.to_float(b)
    w1 = np.asarray(w1, dtype = np.float32)
    w2 = np.asarray(w2, dtype = np.float32)
    return channel.from_float_clamped(a * w1 + b * w2)


def blend(existing, overlay, coverage, channel: Optional[ChannelType] = None):
    """
    Mix `overlay` into `existing` weighted by `coverage`:
    `existing * (1 - coverage) + overlay * coverage`.

    Args:
        existing: Current pixel value(s) of the surface.
        overlay: Color to draw, broadcastable against `existing`.
        coverage: Glyph coverage, a scalar or an array broadcastable against
            `existing`. Not clamped, callers pass rasterizer output in [0, 1].
        channel: Channel type of the result. Defaults to the dtype of `existing`.

    Returns:
        Blended pixel(s) in the channel type.
    """
    if channel is None:
        channel = ChannelType(np.asarray(existing).dtype)
    coverage = np.asarray(coverage, dtype = np.float32)
    return weighted_sum(existing, overlay, np.float32(1.0) - coverage, coverage, channel)
