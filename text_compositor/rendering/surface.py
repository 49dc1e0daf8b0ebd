from typing import Protocol, Union, runtime_checkable
import numpy as np


class ChannelType:
    """
    Conversion between a channel dtype and the float32 blending domain.

    Integer channels are clipped to the dtype's range and truncated toward zero
    when converted back. Float channels pass through unclamped.
    Channels wider than 16 bit integers or 32 bit floats blend in float64.
    """

    def __init__(self, dtype):
        self.dtype = np.dtype(dtype)
        if not (np.issubdtype(self.dtype, np.integer) or np.issubdtype(self.dtype, np.floating)):
            raise ValueError(f'Unsupported channel type: {self.dtype}')
        self.is_integer = np.issubdtype(self.dtype, np.integer)
        if self.is_integer:
            self.float_type = np.float32 if self.dtype.itemsize <= 2 else np.float64
        else:
            self.float_type = np.float32 if self.dtype.itemsize <= 4 else np.float64

    def to_float(self, values) -> np.ndarray:
        return np.asarray(values, dtype = self.float_type)

    def from_float_clamped(self, values) -> np.ndarray:
        values = np.asarray(values)
        if self.is_integer:
            info = np.iinfo(self.dtype)
            values = np.clip(values, info.min, info.max)
        return values.astype(self.dtype)

    def __eq__(self, other):
        if not isinstance(other, ChannelType):
            return NotImplemented
        return self.dtype == other.dtype

    def __repr__(self):
        return f'ChannelType({self.dtype})'


@runtime_checkable
class Surface(Protocol):
    """Mutable 2-D pixel buffer text is composited onto."""

    channel: ChannelType

    def width(self) -> int: ...

    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int): ...

    def set_pixel(self, x: int, y: int, pixel) -> None: ...

    def copy(self) -> 'Surface': ...


class ArraySurface:
    """
    Surface backed by a numpy array of shape (H, W) or (H, W, C).

    The array is used in place, writes through `set_pixel` are visible to
    whoever else holds it.
    """

    def __init__(self, array: np.ndarray):
        if not isinstance(array, np.ndarray):
            raise ValueError(f'Expected a numpy array, got {type(array).__name__}')
        if array.ndim not in (2, 3):
            raise ValueError(f'Expected an array of shape (H, W) or (H, W, C), got {array.shape}')
        self.array = array
        self.channel = ChannelType(array.dtype)

    @classmethod
    def new(cls, width: int, height: int, pixel, dtype = np.uint8) -> 'ArraySurface':
        pixel = np.asarray(pixel, dtype = dtype)
        array = np.empty((height, width) + pixel.shape, dtype = dtype)
        array[...] = pixel
        return cls(array)

    @property
    def channels(self) -> int:
        return 1 if self.array.ndim == 2 else self.array.shape[2]

    def width(self) -> int:
        return self.array.shape[1]

    def height(self) -> int:
        return self.array.shape[0]

    def get_pixel(self, x: int, y: int):
        return self.array[y, x].copy()

    def set_pixel(self, x: int, y: int, pixel):
        self.array[y, x] = pixel

    def copy(self) -> 'ArraySurface':
        return ArraySurface(self.array.copy())

    def __repr__(self):
        return f'ArraySurface(width={self.width()}, height={self.height()}, channels={self.channels}, dtype={self.channel.dtype})'


def as_surface(image: Union[Surface, np.ndarray]) -> Surface:
    if isinstance(image, np.ndarray):
        return ArraySurface(image)
    return image
