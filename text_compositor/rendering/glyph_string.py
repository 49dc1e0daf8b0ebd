from typing import List, Sequence
import numpy as np

from .font import Font, Glyph, Point, Scale
from .position import Position, find_text_area_coordinates
from .text_render import Image, composite_glyphs_mut
from ..utils import Rect, get_logger

logger = get_logger('render')


class GlyphString:
    """
    An arrangement of glyphs which can be drawn onto an image.
    The string knows its size according to scale and font metrics.
    """

    def __init__(self, scale: Scale, font: Font, text: str):
        v_metrics = font.v_metrics(scale)
        offset = Point(0.0, v_metrics.ascent)
        self._init_glyphs(font.layout(text, scale, offset))
        logger.debug(f'Laid out {text!r}: {len(self.glyphs)} glyphs, {self._width}x{self._height}')

    @classmethod
    def from_glyphs(cls, glyphs: Sequence[Glyph]) -> 'GlyphString':
        """Wraps glyphs that were already laid out on a baseline at the font's ascent."""
        string = cls.__new__(cls)
        string._init_glyphs(glyphs)
        return string

    def _init_glyphs(self, glyphs: Sequence[Glyph]):
        self.glyphs: List[Glyph] = list(glyphs)
        self._width = self._calc_width()
        self._height = self._calc_height()

    def _calc_width(self) -> int:
        # float32 accumulation, the +2 absorbs subpixel rounding
        total = np.float32(0.0)
        for glyph in self.glyphs:
            total = np.float32(total + np.float32(glyph.advance_width))
        return 2 + max(0, int(total))

    def _calc_height(self) -> int:
        if not self.glyphs:
            return 0
        first = self.glyphs[0]
        v_metrics = first.font.v_metrics(first.scale)
        height = (np.float32(v_metrics.ascent) - np.float32(v_metrics.descent)) * np.float32(1.1)
        return max(0, int(height))

    def width(self) -> int:
        """Horizontal space this string needs when drawn."""
        return self._width

    def height(self) -> int:
        """Vertical space this string needs when drawn."""
        return self._height

    def draw_mut(self, image: Image, color, x: int, y: int):
        """
        Draws this string onto `image` at `(x, y)` in place, behaves like
        `draw_text_mut`. For an out of place version use `draw`.
        """
        composite_glyphs_mut(image, color, x, y, self.glyphs)

    def draw(self, image: Image, color, x: int, y: int) -> Image:
        """Draws this string onto a copy of `image` at `(x, y)` and returns the copy."""
        out = image.copy()
        self.draw_mut(out, color, x, y)
        return out

    def draw_positioned_mut(self, image: Image, color, position: Position, rectangle: Rect):
        """
        Draws this string onto `image` inside `rectangle` at `position`.

        Finds the top left corner (x, y) of the text area such that it lies on
        the edge given by `position` inside of `rectangle`, dividing the space
        not used by the text according to the relative position, then draws
        the text there:

            +-----------------------------------------+  = image bounds
            |                                         |
            |     +-----------------------------+     |  = rectangle bounds
            |     |                             |     |
            |     |     +-----------------+     |     |  = text area <- y
            |     |     |Some example text|     |     |
            |     |     +-----------------+     |     |
            |     |                             |     |
            |     +-----------------------------+     |
            |                                         |
            +-----------------------------------------+
                        ^
                        |
                        x
        """
        x, y = find_text_area_coordinates(position, rectangle, self.width(), self.height())
        logger.debug(f'Anchored {position.anchor.value} text area at ({x}, {y})')
        self.draw_mut(image, color, x, y)

    def draw_positioned(self, image: Image, color, position: Position, rectangle: Rect) -> Image:
        out = image.copy()
        self.draw_positioned_mut(out, color, position, rectangle)
        return out

    def __len__(self):
        return len(self.glyphs)

    def __repr__(self):
        return f'GlyphString(glyphs={len(self.glyphs)}, width={self._width}, height={self._height})'


class GlyphStrings:
    """
    Several `GlyphString`s drawn left to right as one block, each in its own
    color. Does not own the strings.
    """

    def __init__(self, glyph_strings: Sequence[GlyphString]):
        self.glyph_strings = glyph_strings

    def width(self) -> int:
        return sum(string.width() for string in self.glyph_strings)

    def height(self) -> int:
        return max((string.height() for string in self.glyph_strings), default = 0)

    def draw_positioned_mut(self, image: Image, colors: Sequence, position: Position, rectangle: Rect):
        """
        Anchors the whole block inside `rectangle`, then draws each string
        after the previous one. Strings without a matching color (or colors
        without a string) are left out.
        """
        x, y = find_text_area_coordinates(position, rectangle, self.width(), self.height())
        if len(colors) != len(self.glyph_strings):
            logger.debug(f'{len(self.glyph_strings)} strings but {len(colors)} colors, drawing {min(len(colors), len(self.glyph_strings))}')
        for string, color in zip(self.glyph_strings, colors):
            string.draw_mut(image, color, x, y)
            x += string.width()

    def draw_positioned(self, image: Image, colors: Sequence, position: Position, rectangle: Rect) -> Image:
        out = image.copy()
        self.draw_positioned_mut(out, colors, position, rectangle)
        return out

    def __len__(self):
        return len(self.glyph_strings)
