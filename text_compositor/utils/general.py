from typing import Tuple, Optional
import numpy as np
from PIL import Image


def replace_prefix(s: str, old: str, new: str):
    if s.startswith(old):
        s = new + s[len(old):]
    return s

def hex2rgb(h: str) -> Tuple[int, int, int]:
    h = h.lstrip('#')
    if len(h) != 6:
        raise ValueError(f'Invalid hex color: {h}')
    return tuple(int(h[i:i+2], 16) for i in (0, 2, 4))

def load_image(img: Image.Image) -> Tuple[np.ndarray, Optional[Image.Image]]:
    if img.mode == 'RGBA':
        # from https://stackoverflow.com/questions/9166400/convert-rgba-png-to-rgb-with-pil
        img.load()  # needed for split()
        background = Image.new('RGB', img.size, (255, 255, 255))
        alpha_ch = img.split()[3]
        background.paste(img, mask = alpha_ch)
        return np.array(background), alpha_ch
    elif img.mode == 'P':
        img = img.convert('RGBA')
        img.load()
        background = Image.new('RGB', img.size, (255, 255, 255))
        alpha_ch = img.split()[3]
        background.paste(img, mask = alpha_ch)
        return np.array(background), alpha_ch
    elif img.mode in ('L', 'I;16'):
        return np.array(img), None
    else:
        return np.array(img.convert('RGB')), None

def dump_image(img: np.ndarray, alpha_ch: Image.Image = None) -> Image.Image:
    if alpha_ch is not None:
        if img.ndim == 3 and img.shape[2] != 4:
            img = np.concatenate([img.astype(np.uint8), np.array(alpha_ch).astype(np.uint8)[..., None]], axis = 2)
    elif img.dtype != np.uint16:
        img = img.astype(np.uint8)
    return Image.fromarray(img)


class Rect(object):
    """
    Axis aligned integer rectangle.

    `right` and `bottom` are exclusive, i.e. `right == left + width`.
    """
    def __init__(self, left: int, top: int, width: int, height: int):
        self._left = int(left)
        self._top = int(top)
        self._width = int(width)
        self._height = int(height)

    @classmethod
    def from_image(cls, img: np.ndarray) -> 'Rect':
        return cls(0, 0, img.shape[1], img.shape[0])

    def left(self) -> int:
        return self._left

    def top(self) -> int:
        return self._top

    def width(self) -> int:
        return self._width

    def height(self) -> int:
        return self._height

    def right(self) -> int:
        return self._left + self._width

    def bottom(self) -> int:
        return self._top + self._height

    def __eq__(self, other):
        if not isinstance(other, Rect):
            return NotImplemented
        return (self._left, self._top, self._width, self._height) == (other._left, other._top, other._width, other._height)

    def __repr__(self):
        return f'Rect(left={self._left}, top={self._top}, width={self._width}, height={self._height})'
