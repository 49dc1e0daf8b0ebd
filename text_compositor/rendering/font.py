import math
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional, Protocol, Tuple
import numpy as np
import freetype

from ..utils import get_logger

logger = get_logger('font')


class Scale(NamedTuple):
    """Font scale in pixels, `y` is the pixel height of ascent - descent."""
    x: float
    y: float

    @classmethod
    def uniform(cls, s: float) -> 'Scale':
        return cls(float(s), float(s))


class Point(NamedTuple):
    x: float
    y: float


class VMetrics(NamedTuple):
    ascent: float
    descent: float
    line_gap: float


class PixelBox(NamedTuple):
    """Half open pixel box `[min_x, max_x) x [min_y, max_y)`."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


class Glyph:
    """
    One positioned and rasterized character.

    `bbox` is relative to the layout origin of the run the glyph belongs to.
    Glyphs without visible pixels (spaces etc) have neither bbox nor coverage
    but still advance the pen.
    """

    def __init__(self, advance_width: float, scale: Scale, font: 'Font',
                 bbox: Optional[PixelBox] = None, coverage: Optional[np.ndarray] = None):
        if (bbox is None) != (coverage is None):
            raise ValueError('bbox and coverage must be given together')
        if coverage is not None:
            coverage = np.asarray(coverage, dtype = np.float32)
            if coverage.shape != (bbox.height, bbox.width):
                raise ValueError(f'Coverage of shape {coverage.shape} does not match bbox {bbox}')
        self.advance_width = advance_width
        self.scale = scale
        self.font = font
        self.bbox = bbox
        self.coverage = coverage

    def pixel_bounding_box(self) -> Optional[PixelBox]:
        return self.bbox

    def iter_coverage(self) -> Iterator[Tuple[int, int, float]]:
        """Yields `(x, y, coverage)` for every pixel of the local box."""
        if self.coverage is None:
            return
        rows, cols = self.coverage.shape
        for y in range(rows):
            for x in range(cols):
                yield x, y, self.coverage[y, x]

    def __repr__(self):
        return f'Glyph(advance_width={self.advance_width}, bbox={self.bbox})'


class Font(Protocol):
    def v_metrics(self, scale: Scale) -> VMetrics: ...

    def layout(self, text: str, scale: Scale, origin: Point) -> List[Glyph]: ...


font_cache = {}
def get_cached_font(path: str) -> freetype.Face:
    path = path.replace('\\', '/')
    if not font_cache.get(path):
        # To circumvent a bug with non ascii paths in windows use memory fonts
        # https://github.com/rougier/freetype-py/issues/157#issuecomment-1683713726
        font_cache[path] = freetype.Face(Path(path).open('rb'))
        logger.info(f'Loaded font {path}')
    return font_cache[path]


class FreetypeFont:
    """`Font` implementation rasterizing through freetype."""

    def __init__(self, face: freetype.Face):
        self.face = face

    @classmethod
    def from_path(cls, path: str) -> 'FreetypeFont':
        return cls(get_cached_font(path))

    def _units_to_pixels(self, scale: Scale) -> Tuple[float, float]:
        height = self.face.ascender - self.face.descender
        return scale.x / height, scale.y / height

    def _set_scale(self, scale: Scale):
        fx, fy = self._units_to_pixels(scale)
        em = self.face.units_per_EM
        # 72 dpi makes one point one pixel
        self.face.set_char_size(width = max(1, round(em * fx * 64)), height = max(1, round(em * fy * 64)), hres = 72, vres = 72)

    def v_metrics(self, scale: Scale) -> VMetrics:
        _, fy = self._units_to_pixels(scale)
        face = self.face
        line_gap = face.height - (face.ascender - face.descender)
        return VMetrics(face.ascender * fy, face.descender * fy, line_gap * fy)

    def layout(self, text: str, scale: Scale, origin: Point) -> List[Glyph]:
        self._set_scale(scale)
        face = self.face
        baseline = math.floor(origin.y)
        pen_x = origin.x
        prev_index = None
        glyphs = []
        for cdpt in text:
            index = face.get_char_index(cdpt)
            if prev_index is not None and face.has_kerning:
                pen_x += face.get_kerning(prev_index, index).x / 64
            face.load_glyph(index, freetype.FT_LOAD_RENDER)
            slot = face.glyph
            bitmap = slot.bitmap
            advance_width = slot.advance.x / 64

            # Spaces and other empty glyphs
            if bitmap.rows * bitmap.width == 0 or len(bitmap.buffer) != bitmap.rows * bitmap.pitch:
                glyphs.append(Glyph(advance_width, scale, self))
            else:
                buffer = np.array(bitmap.buffer, dtype = np.uint8).reshape((bitmap.rows, bitmap.pitch))
                coverage = buffer[:, :bitmap.width].astype(np.float32) / 255.0
                min_x = math.floor(pen_x) + slot.bitmap_left
                min_y = baseline - slot.bitmap_top
                bbox = PixelBox(min_x, min_y, min_x + bitmap.width, min_y + bitmap.rows)
                glyphs.append(Glyph(advance_width, scale, self, bbox, coverage))

            pen_x += advance_width
            prev_index = index
        return glyphs

    def __repr__(self):
        return f'FreetypeFont({self.face.family_name!r})'
