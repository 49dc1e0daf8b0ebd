import os
import sys
import pytest
import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import BlockFont
from text_compositor.rendering import (
    ArraySurface,
    ChannelType,
    Glyph,
    PixelBox,
    Scale,
    as_surface,
    draw_text,
    draw_text_mut,
    layout_glyphs,
    text_size,
)

COLOR = (200, 100, 50)


class ListSurface:
    """Surface without numpy storage, forces the per pixel path."""

    def __init__(self, pixels):
        self.pixels = [[np.array(p, dtype = np.uint8) for p in row] for row in pixels]
        self.channel = ChannelType(np.uint8)

    def width(self):
        return len(self.pixels[0])

    def height(self):
        return len(self.pixels)

    def get_pixel(self, x, y):
        return self.pixels[y][x]

    def set_pixel(self, x, y, pixel):
        self.pixels[y][x] = np.asarray(pixel, dtype = np.uint8)

    def copy(self):
        return ListSurface(self.pixels)

    def to_array(self):
        return np.array(self.pixels, dtype = np.uint8)


def changed_pixels(before, after):
    return np.argwhere((before != after).any(axis = -1))

def test_text_size(font, scale):
    # baseline at 15, blocks 3 wide and 4 high one pixel right of the pen
    assert text_size(scale, font, 'ab') == (9, 15)
    assert text_size(scale, font, 'a b') == (14, 15)
    assert text_size(scale, font, 'a\nb') == (14, 15)

def test_text_size_of_empty_text(font, scale):
    assert text_size(scale, font, '') == (0, 0)
    assert text_size(scale, font, '   ') == (0, 0)

def test_layout_skips_empty_glyphs(font, scale):
    glyphs, size = layout_glyphs(scale, font, 'a b ')
    assert len(glyphs) == 2
    assert [g.pixel_bounding_box().min_x for g in glyphs] == [1, 11]
    assert size == (14, 15)

def test_draw_text_mut(font, scale, canvas):
    before = canvas.copy()
    draw_text_mut(canvas, COLOR, 2, 3, scale, font, 'ab')

    np.testing.assert_array_equal(canvas[14:18, 3:6], np.full((4, 3, 3), COLOR))
    np.testing.assert_array_equal(canvas[14:18, 8:11], np.full((4, 3, 3), COLOR))
    np.testing.assert_array_equal(canvas[14:18, 6:8], before[14:18, 6:8])
    assert len(changed_pixels(before, canvas)) == 24

def test_draw_text_is_out_of_place(font, scale, canvas):
    before = canvas.copy()
    drawn = draw_text(canvas, COLOR, 2, 3, scale, font, 'ab')
    np.testing.assert_array_equal(canvas, before)

    draw_text_mut(canvas, COLOR, 2, 3, scale, font, 'ab')
    np.testing.assert_array_equal(drawn, canvas)

def test_draw_keeps_pixels_outside_footprint(font, scale):
    rng = np.random.default_rng(3)
    image = rng.integers(0, 256, size = (32, 48, 3), dtype = np.uint8)
    drawn = draw_text(image, COLOR, 5, 0, scale, font, 'abc')

    footprint = np.zeros(image.shape[:2], dtype = bool)
    for glyph in layout_glyphs(scale, font, 'abc')[0]:
        bb = glyph.pixel_bounding_box()
        footprint[bb.min_y:bb.max_y, bb.min_x + 5:bb.max_x + 5] = True
    np.testing.assert_array_equal(drawn[~footprint], image[~footprint])
    np.testing.assert_array_equal(drawn[footprint], np.full((footprint.sum(), 3), COLOR))

def test_partial_coverage():
    font = BlockFont(coverage = 0.5)
    canvas = np.full((20, 20, 3), 10, dtype = np.uint8)
    draw_text_mut(canvas, COLOR, 0, 0, Scale.uniform(20), font, 'a')
    np.testing.assert_array_equal(canvas[11, 1], [105, 55, 30])

def test_draw_outside_is_noop(font, scale, canvas):
    before = canvas.copy()
    draw_text_mut(canvas, COLOR, -1000, -1000, scale, font, 'abc')
    draw_text_mut(canvas, COLOR, 1000, 3, scale, font, 'abc')
    draw_text_mut(canvas, COLOR, 0, 1000, scale, font, 'abc')
    np.testing.assert_array_equal(canvas, before)

def test_draw_clips_at_edges(font, scale, canvas):
    before = canvas.copy()
    # first block spans columns -1..1, rows 30..33 of a 32 high canvas
    draw_text_mut(canvas, COLOR, -2, 19, scale, font, 'a')
    changed = changed_pixels(before, canvas)
    assert sorted(map(tuple, changed)) == [(30, 0), (30, 1), (31, 0), (31, 1)]

def test_draw_empty_text(font, scale, canvas):
    before = canvas.copy()
    draw_text_mut(canvas, COLOR, 0, 0, scale, font, '')
    draw_text_mut(canvas, COLOR, 0, 0, scale, font, '  ')
    np.testing.assert_array_equal(canvas, before)

def test_grayscale_and_16bit(font, scale):
    gray = np.zeros((20, 20), dtype = np.uint8)
    draw_text_mut(gray, 255, 0, 0, scale, font, 'a')
    assert gray[11:15, 1:4].min() == 255
    assert gray.sum() == 255 * 12

    deep = np.zeros((20, 20, 3), dtype = np.uint16)
    draw_text_mut(deep, (65535, 0, 1000), 0, 0, scale, font, 'a')
    np.testing.assert_array_equal(deep[11, 1], [65535, 0, 1000])

@pytest.mark.parametrize('x, y', [(2, 3), (-2, 19), (40, -12)])
def test_pixel_path_matches_block_path(x, y):
    font = BlockFont(coverage = 0.3)
    scale = Scale.uniform(20)
    rng = np.random.default_rng(11)
    image = rng.integers(0, 256, size = (32, 48, 3), dtype = np.uint8)

    surface = ListSurface(image)
    drawn = draw_text(surface, COLOR, x, y, scale, font, 'abcdefghi')
    assert isinstance(drawn, ListSurface)
    np.testing.assert_array_equal(surface.to_array(), image)

    expected = draw_text(image, COLOR, x, y, scale, font, 'abcdefghi')
    np.testing.assert_array_equal(drawn.to_array(), expected)

def test_array_surface(font, scale, canvas):
    surface = ArraySurface(canvas)
    assert (surface.width(), surface.height(), surface.channels) == (48, 32, 3)
    assert as_surface(canvas).array is canvas
    assert as_surface(surface) is surface

    drawn = draw_text(surface, COLOR, 2, 3, scale, font, 'ab')
    assert isinstance(drawn, ArraySurface)
    assert drawn.array is not canvas
    np.testing.assert_array_equal(drawn.get_pixel(3, 14), COLOR)
    np.testing.assert_array_equal(surface.get_pixel(3, 14), [10, 10, 10])

    surface.set_pixel(0, 0, (1, 2, 3))
    np.testing.assert_array_equal(canvas[0, 0], [1, 2, 3])

def test_array_surface_new():
    surface = ArraySurface.new(4, 3, (1, 2, 3, 4))
    assert surface.array.shape == (3, 4, 4)
    np.testing.assert_array_equal(surface.get_pixel(3, 2), [1, 2, 3, 4])

def test_array_surface_rejects_bad_arrays():
    with pytest.raises(ValueError):
        ArraySurface(np.zeros(5))
    with pytest.raises(ValueError):
        ArraySurface([[0, 0]])

def test_glyph_coverage():
    glyph = Glyph(4.0, Scale.uniform(10), BlockFont(), PixelBox(0, 0, 2, 3), np.ones((3, 2)))
    assert list(glyph.iter_coverage()) == [(0, 0, 1.0), (1, 0, 1.0), (0, 1, 1.0), (1, 1, 1.0), (0, 2, 1.0), (1, 2, 1.0)]
    assert list(Glyph(4.0, Scale.uniform(10), BlockFont()).iter_coverage()) == []
    with pytest.raises(ValueError):
        Glyph(4.0, Scale.uniform(10), BlockFont(), PixelBox(0, 0, 2, 2), np.ones((3, 2)))
    with pytest.raises(ValueError):
        Glyph(4.0, Scale.uniform(10), BlockFont(), PixelBox(0, 0, 2, 2))
