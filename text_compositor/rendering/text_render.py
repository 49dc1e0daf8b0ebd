from typing import Iterable, List, Tuple, Union
import numpy as np

from .blend import blend
from .font import Font, Glyph, Point, Scale
from .surface import ArraySurface, Surface, as_surface
from ..utils import get_logger

logger = get_logger('render')

Image = Union[Surface, np.ndarray]


def layout_glyphs(scale: Scale, font: Font, text: str) -> Tuple[List[Glyph], Tuple[int, int]]:
    """
    Lays out `text` on a baseline at the font's ascent.

    Returns:
        The glyphs which have pixels to draw and the tight size `(w, h)` of
        their union, measured from the layout origin.
    """
    v_metrics = font.v_metrics(scale)
    w, h = 0, 0
    visible = []
    for glyph in font.layout(text, scale, Point(0.0, v_metrics.ascent)):
        bb = glyph.pixel_bounding_box()
        if bb is not None:
            w = max(w, bb.max_x)
            h = max(h, bb.max_y)
            visible.append(glyph)
    return visible, (w, h)


def text_size(scale: Scale, font: Font, text: str) -> Tuple[int, int]:
    """
    Width and height of the pixels `text` covers when rendered with `font` at
    `scale`. Newlines are not supported, split lines manually.
    """
    return layout_glyphs(scale, font, text)[1]


def _composite_block(surface: ArraySurface, color: np.ndarray, place_x: int, place_y: int, glyph: Glyph):
    bb = glyph.bbox
    # Clip paste area to the canvas
    paste_y_start = max(0, place_y)
    paste_x_start = max(0, place_x)
    paste_y_end = min(surface.height(), place_y + bb.height)
    paste_x_end = min(surface.width(), place_x + bb.width)
    if paste_x_end <= paste_x_start or paste_y_end <= paste_y_start:
        return

    coverage = glyph.coverage[paste_y_start - place_y:paste_y_end - place_y,
                              paste_x_start - place_x:paste_x_end - place_x]
    target = surface.array[paste_y_start:paste_y_end, paste_x_start:paste_x_end]
    if target.ndim == 3:
        coverage = coverage[:, :, np.newaxis]
    surface.array[paste_y_start:paste_y_end, paste_x_start:paste_x_end] = blend(target, color, coverage, surface.channel)


def _composite_pixels(surface: Surface, color: np.ndarray, place_x: int, place_y: int, glyph: Glyph):
    image_width = surface.width()
    image_height = surface.height()
    channel = getattr(surface, 'channel', None)
    for gx, gy, gv in glyph.iter_coverage():
        image_x = gx + place_x
        image_y = gy + place_y
        if 0 <= image_x < image_width and 0 <= image_y < image_height:
            pixel = surface.get_pixel(image_x, image_y)
            surface.set_pixel(image_x, image_y, blend(pixel, color, gv, channel))


def composite_glyphs_mut(image: Image, color, x: int, y: int, glyphs: Iterable[Glyph]):
    """
    Blends `color` into `image` in place, weighted by the coverage of each
    glyph, with the layout origin at `(x, y)`. Pixels falling outside of the
    image are skipped.
    """
    surface = as_surface(image)
    color = np.asarray(color)
    for glyph in glyphs:
        bb = glyph.pixel_bounding_box()
        if bb is None:
            continue
        place_x = bb.min_x + x
        place_y = bb.min_y + y
        if isinstance(surface, ArraySurface):
            _composite_block(surface, color, place_x, place_y, glyph)
        else:
            _composite_pixels(surface, color, place_x, place_y, glyph)


def draw_text_mut(image: Image, color, x: int, y: int, scale: Scale, font: Font, text: str):
    """
    Draws colored text on an image in place. `scale` is the font scaling on
    both axes in pixels. Newlines are not supported, split lines manually.
    """
    glyphs, _ = layout_glyphs(scale, font, text)
    if not glyphs:
        logger.debug(f'Nothing to draw for {text!r}')
        return
    composite_glyphs_mut(image, color, x, y, glyphs)


def draw_text(image: Image, color, x: int, y: int, scale: Scale, font: Font, text: str) -> Image:
    """Out of place version of `draw_text_mut`, returns the drawn copy."""
    out = image.copy()
    draw_text_mut(out, color, x, y, scale, font, text)
    return out
