from .utils import Rect, get_logger, init_logging, set_log_level
from .config import Config, LogLevel, RenderConfig, load_config
from .rendering import (
    Anchor,
    ArraySurface,
    ChannelType,
    EdgePosition,
    Font,
    FreetypeFont,
    Glyph,
    GlyphString,
    GlyphStrings,
    PixelBox,
    Point,
    Position,
    Scale,
    Surface,
    VMetrics,
    as_surface,
    blend,
    dispatch,
    dispatch_runs,
    draw_text,
    draw_text_mut,
    find_text_area_coordinates,
    text_size,
)
