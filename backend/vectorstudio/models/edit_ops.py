"""Edit operation models for property-level SVG modification."""

from __future__ import annotations

import enum
from typing import Union

from pydantic import BaseModel


class PropertyKey(str, enum.Enum):
    # Geometry (plain attributes)
    X = "x"
    Y = "y"
    WIDTH = "width"
    HEIGHT = "height"
    RADIUS = "r"
    CORNER_RADIUS = "rx"

    # Paint and typography, written to attribute and inline style
    FILL = "fill"
    FILL_OPACITY = "fill-opacity"
    STROKE = "stroke"
    STROKE_WIDTH = "stroke-width"
    STROKE_OPACITY = "stroke-opacity"
    STROKE_LINECAP = "stroke-linecap"
    STROKE_LINEJOIN = "stroke-linejoin"
    STROKE_DASHARRAY = "stroke-dasharray"
    OPACITY = "opacity"
    FONT_FAMILY = "font-family"
    FONT_SIZE = "font-size"
    FONT_WEIGHT = "font-weight"

    # Transform channels
    ROTATE = "rotate"
    SCALE = "scale"
    SCALE_X = "scaleX"
    SCALE_Y = "scaleY"
    SKEW_X = "skewX"
    SKEW_Y = "skewY"
    FLIP_X = "flipX"
    FLIP_Y = "flipY"

    # Filter chain
    BLUR = "blur"
    GRAYSCALE = "grayscale"
    SEPIA = "sepia"
    INVERT = "invert"
    SATURATE = "saturate"
    HUE_ROTATE = "hueRotate"
    SHADOW = "shadow"
    SHADOW_X = "shadowX"
    SHADOW_Y = "shadowY"
    SHADOW_BLUR = "shadowBlur"
    SHADOW_COLOR = "shadowColor"
    SHADOW_OPACITY = "shadowOpacity"

    BLEND_MODE = "blendMode"
    TEXT_CONTENT = "textContent"


GEOMETRY_KEYS = frozenset({
    PropertyKey.X, PropertyKey.Y, PropertyKey.WIDTH, PropertyKey.HEIGHT,
    PropertyKey.RADIUS, PropertyKey.CORNER_RADIUS,
})

PAINT_KEYS = frozenset({
    PropertyKey.FILL, PropertyKey.FILL_OPACITY, PropertyKey.STROKE,
    PropertyKey.STROKE_WIDTH, PropertyKey.STROKE_OPACITY, PropertyKey.STROKE_LINECAP,
    PropertyKey.STROKE_LINEJOIN, PropertyKey.STROKE_DASHARRAY, PropertyKey.OPACITY,
    PropertyKey.FONT_FAMILY, PropertyKey.FONT_SIZE, PropertyKey.FONT_WEIGHT,
})

TRANSFORM_KEYS = frozenset({
    PropertyKey.ROTATE, PropertyKey.SCALE, PropertyKey.SCALE_X, PropertyKey.SCALE_Y,
    PropertyKey.SKEW_X, PropertyKey.SKEW_Y, PropertyKey.FLIP_X, PropertyKey.FLIP_Y,
})

FILTER_KEYS = frozenset({
    PropertyKey.BLUR, PropertyKey.GRAYSCALE, PropertyKey.SEPIA, PropertyKey.INVERT,
    PropertyKey.SATURATE, PropertyKey.HUE_ROTATE, PropertyKey.SHADOW, PropertyKey.SHADOW_X,
    PropertyKey.SHADOW_Y, PropertyKey.SHADOW_BLUR, PropertyKey.SHADOW_COLOR,
    PropertyKey.SHADOW_OPACITY,
})


class ShapeKind(str, enum.Enum):
    RECT = "rect"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    TRIANGLE = "triangle"
    STAR = "star"
    HEART = "heart"
    ARROW = "arrow"
    BUBBLE = "bubble"
    TEXT = "text"


class AlignEdge(str, enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Handle(str, enum.Enum):
    """The nine transform handles around a selection box."""

    ROTATE = "rotate"
    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"


PropertyValue = Union[bool, float, str]


class PropertyEdit(BaseModel):
    """A single property change on one node."""

    target: str  # Element id, e.g. "rect_0_k3x9a"
    key: PropertyKey
    value: PropertyValue
