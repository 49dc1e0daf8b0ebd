"""
Placement of a text area inside a rectangle.

A `Position` pins the text area to one edge (or a line parallel to two
opposing edges) and slides it along that edge by an `EdgePosition`:

    +---------------+  <- horizontal top edge
    |               |
    |---------------|  <- horizontal center edge
    |               |
    +---------------+  <- horizontal bottom edge
    ^       ^       ^
    |       |       |
    vertical left, center and right edges

The space left over by the text area is divided according to the relative
position, so the padding between text area and rectangle is equal in all
directions when the position is centered.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union
import numpy as np

from ..utils import Rect


@dataclass(frozen = True)
class EdgePosition:
    """
    Relative position of a point on an edge, 0 is the start (left or top),
    50 the center and 100 the end (right or bottom). Values outside of
    [0, 100] are allowed and extrapolate, but must be finite.
    """
    value: float

    def __post_init__(self):
        if not math.isfinite(self.value):
            raise ValueError(f'Edge position must be finite, got {self.value}')

    @classmethod
    def of(cls, value: Union['EdgePosition', int, float]) -> 'EdgePosition':
        if isinstance(value, EdgePosition):
            return value
        return cls(float(value))

    @classmethod
    def left(cls) -> 'EdgePosition':
        return cls(0.0)

    @classmethod
    def top(cls) -> 'EdgePosition':
        return cls(0.0)

    @classmethod
    def center(cls) -> 'EdgePosition':
        return cls(50.0)

    @classmethod
    def right(cls) -> 'EdgePosition':
        return cls(100.0)

    @classmethod
    def bottom(cls) -> 'EdgePosition':
        return cls(100.0)


class Anchor(str, Enum):
    horizontal_top = 'horizontal_top'
    horizontal_center = 'horizontal_center'
    horizontal_bottom = 'horizontal_bottom'
    vertical_left = 'vertical_left'
    vertical_center = 'vertical_center'
    vertical_right = 'vertical_right'
    any = 'any'


EdgeLike = Union[EdgePosition, int, float]


@dataclass(frozen = True)
class Position:
    """
    Anchor edge plus the relative offset along it. `Anchor.any` drives both
    axes independently, `edge` horizontally and `vertical_edge` vertically.
    """
    anchor: Anchor
    edge: EdgePosition
    vertical_edge: Optional[EdgePosition] = None

    def __post_init__(self):
        if (self.anchor == Anchor.any) != (self.vertical_edge is not None):
            raise ValueError('vertical_edge is required for, and only for, Anchor.any')

    @classmethod
    def horizontal_top(cls, edge: EdgeLike) -> 'Position':
        return cls(Anchor.horizontal_top, EdgePosition.of(edge))

    @classmethod
    def horizontal_center(cls, edge: EdgeLike) -> 'Position':
        return cls(Anchor.horizontal_center, EdgePosition.of(edge))

    @classmethod
    def horizontal_bottom(cls, edge: EdgeLike) -> 'Position':
        return cls(Anchor.horizontal_bottom, EdgePosition.of(edge))

    @classmethod
    def vertical_left(cls, edge: EdgeLike) -> 'Position':
        return cls(Anchor.vertical_left, EdgePosition.of(edge))

    @classmethod
    def vertical_center(cls, edge: EdgeLike) -> 'Position':
        return cls(Anchor.vertical_center, EdgePosition.of(edge))

    @classmethod
    def vertical_right(cls, edge: EdgeLike) -> 'Position':
        return cls(Anchor.vertical_right, EdgePosition.of(edge))

    @classmethod
    def any(cls, horizontal_edge: EdgeLike, vertical_edge: EdgeLike) -> 'Position':
        return cls(Anchor.any, EdgePosition.of(horizontal_edge), EdgePosition.of(vertical_edge))


def calculate_center(rectangle_size: int, content_size: int, relative_position: EdgePosition) -> int:
    """
    Offset of the content along one axis of the rectangle.

    The space not used by the content is divided according to
    `relative_position`. Arithmetic is signed, content larger than the
    rectangle gets a negative offset and overflows it.
    """
    leftover = np.float32(rectangle_size - content_size)
    return math.floor(leftover * np.float32(relative_position.value) / np.float32(100.0))


def find_text_area_coordinates(position: Position, rectangle: Rect, width: int, height: int) -> Tuple[int, int]:
    """Top left corner of a `width` x `height` text area placed in `rectangle`."""
    anchor = position.anchor
    edge = position.edge
    if anchor == Anchor.horizontal_top:
        return (rectangle.left() + calculate_center(rectangle.width(), width, edge),
                rectangle.top())
    elif anchor == Anchor.horizontal_center:
        return (rectangle.left() + calculate_center(rectangle.width(), width, edge),
                rectangle.top() + (rectangle.height() - height) // 2)
    elif anchor == Anchor.horizontal_bottom:
        return (rectangle.left() + calculate_center(rectangle.width(), width, edge),
                rectangle.bottom() - height)
    elif anchor == Anchor.vertical_left:
        return (rectangle.left(),
                rectangle.top() + calculate_center(rectangle.height(), height, edge))
    elif anchor == Anchor.vertical_center:
        return (rectangle.left() + (rectangle.width() - width) // 2,
                rectangle.top() + calculate_center(rectangle.height(), height, edge))
    elif anchor == Anchor.vertical_right:
        return (rectangle.right() - width,
                rectangle.top() + calculate_center(rectangle.height(), height, edge))
    elif anchor == Anchor.any:
        return (rectangle.left() + calculate_center(rectangle.width(), width, edge),
                rectangle.top() + calculate_center(rectangle.height(), height, position.vertical_edge))
    raise ValueError(f'Unknown anchor: {anchor}')
