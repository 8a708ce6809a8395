"""Derived, read-only views over the document text."""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

# Reserved id of the canvas background rectangle
BACKGROUND_ID = "editor-background"


class NodeKind(str, enum.Enum):
    RECT = "rect"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    LINE = "line"
    POLYLINE = "polyline"
    POLYGON = "polygon"
    PATH = "path"
    TEXT = "text"
    IMAGE = "image"
    GROUP = "g"


PAINTABLE_TAGS: frozenset[str] = frozenset(kind.value for kind in NodeKind)

# Nodes positioned by x/y vs. by cx/cy
XY_TAGS: frozenset[str] = frozenset({"rect", "image", "text", "use"})
CENTER_TAGS: frozenset[str] = frozenset({"circle", "ellipse"})


class ViewBox(BaseModel):
    x: float = 0.0
    y: float = 0.0
    width: float = 100.0
    height: float = 100.0


class BoundingBox(BaseModel):
    """Axis-aligned box of a node's own geometry, transforms not applied."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


class TransformState(BaseModel):
    """The four named transform channels plus flips.

    Scales are stored as magnitudes; flips become sign inversions when the
    state is serialized.
    """

    rotate: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    skew_x: float = 0.0
    skew_y: float = 0.0
    flip_x: bool = False
    flip_y: bool = False

    @property
    def signed_scale(self) -> tuple[float, float]:
        sx = -self.scale_x if self.flip_x else self.scale_x
        sy = -self.scale_y if self.flip_y else self.scale_y
        return (sx, sy)


class FilterState(BaseModel):
    blur: float = 0.0
    grayscale: float = 0.0
    sepia: float = 0.0
    invert: float = 0.0
    saturate: float = 1.0
    hue_rotate: float = 0.0


class ShadowState(BaseModel):
    enabled: bool = False
    x: float = 2.0
    y: float = 2.0
    blur: float = 2.0
    color: str = "#000000"
    opacity: float = 0.5


class GradientStop(BaseModel):
    offset: str
    color: str


class GradientDefinition(BaseModel):
    id: str
    kind: Literal["linear", "radial"] = "linear"
    stops: list[GradientStop] = Field(default_factory=list)


class StyleState(BaseModel):
    """Everything a style panel shows for one node, recomputed on every read."""

    node_id: str
    kind: str
    fill: str = "#000000"
    fill_type: Literal["solid", "linear", "radial"] = "solid"
    gradient_start: str = "#000000"
    gradient_end: str = "#ffffff"
    fill_opacity: str = "1"
    stroke: str = "none"
    stroke_width: str = "1"
    stroke_opacity: str = "1"
    stroke_linecap: str = "butt"
    stroke_linejoin: str = "miter"
    stroke_dasharray: str = "none"
    opacity: str = "1"
    blend_mode: str = "normal"
    font_family: str = "sans-serif"
    font_size: str = "16"
    font_weight: str = "normal"
    text_content: str = ""
    x: str = "0.0"
    y: str = "0.0"
    rx: str = "0"
    filters: FilterState = Field(default_factory=FilterState)
    shadow: ShadowState = Field(default_factory=ShadowState)
    transform: TransformState = Field(default_factory=TransformState)


class LayerInfo(BaseModel):
    id: str
    kind: str
    visible: bool = True


class SceneDocument(BaseModel):
    """Canvas-level summary of a parsed document."""

    viewbox: ViewBox = Field(default_factory=ViewBox)
    width: float = 100.0
    height: float = 100.0
    background: str | None = None
    layers: list[LayerInfo] = Field(default_factory=list)
    gradients: list[GradientDefinition] = Field(default_factory=list)
