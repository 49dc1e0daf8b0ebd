from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple, Union
import numpy as np

from .blend import blend, weighted_sum
from .font import Font, FreetypeFont, Glyph, PixelBox, Point, Scale, VMetrics, get_cached_font
from .glyph_string import GlyphString, GlyphStrings
from .position import Anchor, EdgePosition, Position, calculate_center, find_text_area_coordinates
from .surface import ArraySurface, ChannelType, Surface, as_surface
from .text_render import composite_glyphs_mut, draw_text, draw_text_mut, layout_glyphs, text_size
from ..utils import Rect, get_logger, hex2rgb

if TYPE_CHECKING:
    from ..config import RenderConfig

logger = get_logger('render')

Color = Union[str, Sequence[int]]


def fit_color(color: Color, img: np.ndarray) -> Union[int, float, Tuple]:
    """
    Converts an 8 bit RGB color (or hex string) to the channel layout and
    depth of `img`. Grayscale images get the channel mean, RGBA images an
    opaque alpha.
    """
    if isinstance(color, str):
        color = hex2rgb(color)
    color = np.asarray(color, dtype = np.float64)
    if img.ndim == 2:
        color = color.mean(keepdims = True)
    elif img.shape[2] == 4 and color.shape[0] == 3:
        color = np.append(color, 255.0)
    elif img.shape[2] != color.shape[0]:
        raise ValueError(f'Color with {color.shape[0]} channels does not fit image of shape {img.shape}')

    if np.issubdtype(img.dtype, np.floating):
        color = color / 255.0
    elif img.dtype == np.uint16:
        color = color * 257.0
    else:
        color = np.round(color)
    if img.ndim == 2:
        return color.item()
    return tuple(color.tolist())


def _get_font(config: 'RenderConfig', font: Optional[Font]) -> Font:
    if font is not None:
        return font
    if not config.font_path:
        raise ValueError('No font given, set render.font_path')
    return FreetypeFont.from_path(config.font_path)


def dispatch(img: np.ndarray, text: str, config: 'RenderConfig', rect: Optional[Rect] = None, font: Optional[Font] = None) -> np.ndarray:
    """
    Renders `text` onto a copy of `img` inside `rect` (the whole image by
    default), with font, size, color and anchor taken from `config`.
    """
    font = _get_font(config, font)
    rect = rect or Rect.from_image(img)
    string = GlyphString(Scale.uniform(config.font_size), font, text)
    logger.debug(f'Rendering {text!r} at {config.anchor.value} in {rect}')
    return string.draw_positioned(img, fit_color(config.font_color_fg, img), config.position, rect)


def dispatch_runs(img: np.ndarray, runs: List[Tuple[str, Color]], config: 'RenderConfig', rect: Optional[Rect] = None, font: Optional[Font] = None) -> np.ndarray:
    """
    Renders `(text, color)` pieces one after another as a single block onto
    a copy of `img`, anchored inside `rect` as configured.
    """
    font = _get_font(config, font)
    rect = rect or Rect.from_image(img)
    scale = Scale.uniform(config.font_size)
    strings = [GlyphString(scale, font, text) for text, _ in runs]
    colors = [fit_color(color, img) for _, color in runs]
    logger.debug(f'Rendering {len(runs)} runs at {config.anchor.value} in {rect}')
    return GlyphStrings(strings).draw_positioned(img, colors, config.position, rect)
