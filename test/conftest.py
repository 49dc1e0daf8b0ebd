import glob
import math
import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from text_compositor.rendering import Glyph, PixelBox, Point, Scale, VMetrics

SYSTEM_FONT_PATTERNS = [
    '/usr/share/fonts/**/DejaVuSans.ttf',
    '/usr/share/fonts/**/LiberationSans-Regular.ttf',
    '/usr/share/fonts/**/*.ttf',
    '/Library/Fonts/*.ttf',
    'C:/Windows/Fonts/arial.ttf',
]


class BlockFont:
    """
    Monospaced font whose glyphs are solid blocks.

    Every visible character is a `glyph_w` x `glyph_h` block starting one
    pixel right of the pen and sitting on the baseline, whitespace has no
    pixels. Ascent is 3/4 and descent -1/4 of the scale.
    """

    def __init__(self, advance: float = 5.0, glyph_w: int = 3, glyph_h: int = 4, coverage: float = 1.0):
        self.advance = advance
        self.glyph_w = glyph_w
        self.glyph_h = glyph_h
        self.coverage = coverage

    def v_metrics(self, scale: Scale) -> VMetrics:
        return VMetrics(scale.y * 0.75, -scale.y * 0.25, 0.0)

    def layout(self, text: str, scale: Scale, origin: Point):
        baseline = math.floor(origin.y)
        pen_x = origin.x
        glyphs = []
        for c in text:
            if c.isspace():
                glyphs.append(Glyph(self.advance, scale, self))
            else:
                min_x = math.floor(pen_x) + 1
                min_y = baseline - self.glyph_h
                bbox = PixelBox(min_x, min_y, min_x + self.glyph_w, min_y + self.glyph_h)
                coverage = np.full((self.glyph_h, self.glyph_w), self.coverage, dtype = np.float32)
                glyphs.append(Glyph(self.advance, scale, self, bbox, coverage))
            pen_x += self.advance
        return glyphs


def pytest_addoption(parser):
    parser.addoption('--font', action='store', default=None, help='TrueType font used by the freetype tests')

@pytest.fixture
def font():
    return BlockFont()

@pytest.fixture
def scale():
    return Scale.uniform(20)

@pytest.fixture
def canvas():
    return np.full((32, 48, 3), 10, dtype = np.uint8)

@pytest.fixture
def font_path(request):
    path = request.config.getoption('--font')
    if path:
        return path
    for pattern in SYSTEM_FONT_PATTERNS:
        found = sorted(glob.glob(pattern, recursive = True))
        if found:
            return found[0]
    pytest.skip('No TrueType font found, pass one with --font')
