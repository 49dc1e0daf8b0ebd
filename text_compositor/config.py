from enum import Enum
from typing import Optional, Tuple

from omegaconf import OmegaConf
from pydantic import BaseModel

from .rendering.position import Anchor, EdgePosition, Position
from .utils import hex2rgb


class LogLevel(str, Enum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"

    def __str__(self):
        return self.value


class RenderConfig(BaseModel):
    font_path: Optional[str] = None
    """Path of the TrueType/OpenType font to render with"""
    font_size: float = 24.0
    """Font scale in pixels, the height of ascent - descent"""
    font_color: Optional[str] = None
    """Text color as hex string without the "#", such as FFFFFF for white. Defaults to black."""
    anchor: Anchor = Anchor.horizontal_center
    """Edge of the target rectangle the text is placed against"""
    edge: float = 50.0
    """Relative position along the anchor edge, 0 is left/top, 100 is right/bottom"""
    vertical_edge: float = 50.0
    """Relative vertical position, only used with the `any` anchor"""
    _font_color_fg = None

    @property
    def font_color_fg(self) -> Tuple[int, int, int]:
        if self._font_color_fg is None:
            if self.font_color:
                try:
                    self._font_color_fg = hex2rgb(self.font_color)
                except ValueError:
                    raise ValueError(f'Invalid font_color value: {self.font_color}. Use a hex value such as FF0000')
            else:
                self._font_color_fg = (0, 0, 0)
        return self._font_color_fg

    @property
    def position(self) -> Position:
        if self.anchor == Anchor.any:
            return Position.any(self.edge, self.vertical_edge)
        return Position(self.anchor, EdgePosition.of(self.edge))


class Config(BaseModel):
    render: RenderConfig = RenderConfig()
    """render configs"""
    log_level: LogLevel = LogLevel.info
    """Logging level of the text-compositor loggers"""


def load_config(path: str) -> Config:
    """Reads a YAML or JSON config file and validates it."""
    conf = OmegaConf.load(path)
    return Config.model_validate(OmegaConf.to_container(conf, resolve = True))
