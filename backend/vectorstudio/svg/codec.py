"""Converts structured style values to and from attribute and style-string text.

Leaf module: no editor imports. Every numeric parse falls back to a
documented default instead of raising.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

from PIL import ImageColor

from vectorstudio.models.scene import FilterState, ShadowState, TransformState
from vectorstudio.svg.serializer import format_number

logger = logging.getLogger(__name__)

_NUM = r"-?(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?"

_HEX6_RE = re.compile(r"^#[0-9a-f]{6}$", re.IGNORECASE)
_HEX3_RE = re.compile(r"^#[0-9a-f]{3}$", re.IGNORECASE)
_RGB_RE = re.compile(
    rf"^rgba?\(\s*({_NUM})\s*,\s*({_NUM})\s*,\s*({_NUM})\s*(?:,\s*({_NUM})\s*)?\)$",
    re.IGNORECASE,
)
_URL_RE = re.compile(r"""url\(\s*['"]?#([^'")\s]+)['"]?\s*\)""")

# Transform functions, read only from the `transform:` declaration
_ROTATE_RE = re.compile(rf"(?<![\w-])rotate\(\s*({_NUM})\s*(?:deg)?\s*\)")
_SCALE_RE = re.compile(rf"(?<![\w-])scale\(\s*({_NUM})\s*(?:[,\s]\s*({_NUM})\s*)?\)")
_SCALE_X_RE = re.compile(rf"(?<![\w-])scaleX\(\s*({_NUM})\s*\)")
_SCALE_Y_RE = re.compile(rf"(?<![\w-])scaleY\(\s*({_NUM})\s*\)")
_SKEW_X_RE = re.compile(rf"(?<![\w-])skewX\(\s*({_NUM})\s*(?:deg)?\s*\)")
_SKEW_Y_RE = re.compile(rf"(?<![\w-])skewY\(\s*({_NUM})\s*(?:deg)?\s*\)")

# Filter functions, in chain order. (style name, FilterState field, unit)
FILTER_FUNCTIONS: tuple[tuple[str, str, str], ...] = (
    ("blur", "blur", "px"),
    ("grayscale", "grayscale", ""),
    ("sepia", "sepia", ""),
    ("invert", "invert", ""),
    ("saturate", "saturate", ""),
    ("hue-rotate", "hue_rotate", "deg"),
)
_FILTER_ARG_RE = re.compile(rf"^\s*({_NUM})\s*(px|%|deg)?\s*$")
_DROP_SHADOW_RE = re.compile(
    rf"drop-shadow\(\s*({_NUM})(?:px)?\s+({_NUM})(?:px)?"
    rf"(?:\s+({_NUM})(?:px)?)?"
    r"\s*(rgba?\([^)]*\)|#[0-9a-fA-F]{3,8}|[a-zA-Z]+)?\s*\)"
)

NEUTRAL_FILTERS = FilterState()


# ── Numbers & colours ──────────────────────────────────────────────────────


def parse_number(value: object, default: float) -> float:
    """Leading number of ``value`` ("12px" -> 12.0), or ``default``."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return default
    m = re.match(rf"\s*({_NUM})", str(value))
    if not m:
        return default
    try:
        return float(m.group(1))
    except ValueError:
        return default


def parse_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _rgb_to_hex(r: float, g: float, b: float) -> str:
    clamp = lambda c: max(0, min(255, int(round(c))))  # noqa: E731
    return "#{:02x}{:02x}{:02x}".format(clamp(r), clamp(g), clamp(b))


def parse_rgba(color: str) -> tuple[str, float] | None:
    """``rgb()``/``rgba()`` -> (hex, alpha). None for other syntaxes."""
    m = _RGB_RE.match(color.strip())
    if not m:
        return None
    r, g, b = (float(m.group(i)) for i in (1, 2, 3))
    alpha = float(m.group(4)) if m.group(4) is not None else 1.0
    return _rgb_to_hex(r, g, b), alpha


def to_hex(color: str | None) -> str:
    """Canonical ``#rrggbb`` for an editing control.

    ``none``, empty values and gradient references give ``#000000``.
    """
    if not color:
        return "#000000"
    color = color.strip()
    if color == "none" or color.startswith("url("):
        return "#000000"
    if _HEX6_RE.match(color):
        return color.lower()
    if _HEX3_RE.match(color):
        return "#" + "".join(c * 2 for c in color[1:]).lower()
    rgba = parse_rgba(color)
    if rgba is not None:
        return rgba[0]
    try:
        rgb = ImageColor.getrgb(color)
    except ValueError:
        logger.debug("Unrecognised colour %r, using black", color)
        return "#000000"
    return _rgb_to_hex(*rgb[:3])


def url_reference(value: str | None) -> str | None:
    """Id referenced by ``url(#id)``, else None."""
    if not value:
        return None
    m = _URL_RE.search(value)
    return m.group(1) if m else None


# ── Style strings ──────────────────────────────────────────────────────────


def parse_style(style: str | None) -> dict[str, str]:
    """Split an inline style into an ordered ``{property: value}`` mapping."""
    result: dict[str, str] = {}
    if not style:
        return result
    for decl in style.split(";"):
        if ":" not in decl:
            continue
        key, value = decl.split(":", 1)
        key, value = key.strip().lower(), value.strip()
        if key and value:
            result[key] = value
    return result


def format_style(props: dict[str, str]) -> str:
    return " ".join(f"{k}: {v};" for k, v in props.items())


def element_style(el: ET.Element) -> dict[str, str]:
    return parse_style(el.get("style"))


def write_style(el: ET.Element, props: dict[str, str]) -> None:
    """Store ``props`` as the element's inline style; empty removes the attribute."""
    if props:
        el.set("style", format_style(props))
    elif "style" in el.attrib:
        del el.attrib["style"]


def style_value(el: ET.Element, key: str, default: str) -> str:
    """Inline style wins over the plain attribute, which wins over ``default``."""
    props = element_style(el)
    if key in props:
        return props[key]
    value = el.get(key)
    return value if value else default


# ── Transform channels ─────────────────────────────────────────────────────


def parse_transform(style: str | dict[str, str] | None) -> TransformState:
    """Read the transform channels from a style string (or parsed style)."""
    props = style if isinstance(style, dict) else parse_style(style)
    decl = props.get("transform", "")
    if not decl:
        return TransformState()

    rotate = 0.0
    sx = sy = 1.0
    skew_x = skew_y = 0.0

    m = _ROTATE_RE.search(decl)
    if m:
        rotate = parse_number(m.group(1), 0.0)
    m = _SCALE_RE.search(decl)
    if m:
        sx = parse_number(m.group(1), 1.0)
        sy = parse_number(m.group(2), sx) if m.group(2) else sx
    m = _SCALE_X_RE.search(decl)
    if m:
        sx *= parse_number(m.group(1), 1.0)
    m = _SCALE_Y_RE.search(decl)
    if m:
        sy *= parse_number(m.group(1), 1.0)
    m = _SKEW_X_RE.search(decl)
    if m:
        skew_x = parse_number(m.group(1), 0.0)
    m = _SKEW_Y_RE.search(decl)
    if m:
        skew_y = parse_number(m.group(1), 0.0)

    return TransformState(
        rotate=rotate,
        scale_x=abs(sx),
        scale_y=abs(sy),
        skew_x=skew_x,
        skew_y=skew_y,
        flip_x=sx < 0,
        flip_y=sy < 0,
    )


def format_transform(state: TransformState) -> str:
    """Always rotate -> scale -> skewX -> skewY."""
    sx, sy = state.signed_scale
    return (
        f"rotate({format_number(state.rotate)}deg) "
        f"scale({format_number(sx)}, {format_number(sy)}) "
        f"skewX({format_number(state.skew_x)}deg) "
        f"skewY({format_number(state.skew_y)}deg)"
    )


def apply_transform_style(props: dict[str, str], state: TransformState) -> dict[str, str]:
    """Replace any transform declaration wholesale with ``state``."""
    for key in ("transform", "transform-box", "transform-origin"):
        props.pop(key, None)
    props["transform"] = format_transform(state)
    props["transform-box"] = "fill-box"
    props["transform-origin"] = "center"
    return props


# ── Filter chain ───────────────────────────────────────────────────────────


def _filter_argument(name: str, raw: str, default: float) -> float:
    m = _FILTER_ARG_RE.match(raw)
    if not m:
        return default
    value = parse_number(m.group(1), default)
    if m.group(2) == "%" and name != "hue-rotate":
        value /= 100.0
    return value


def parse_filters(style: str | dict[str, str] | None) -> FilterState:
    props = style if isinstance(style, dict) else parse_style(style)
    decl = props.get("filter", "")
    values: dict[str, float] = {}
    for name, field, _ in FILTER_FUNCTIONS:
        default = getattr(NEUTRAL_FILTERS, field)
        m = re.search(rf"(?<![\w-]){re.escape(name)}\(([^)]*)\)", decl)
        values[field] = _filter_argument(name, m.group(1), default) if m else default
    return FilterState(**values)


def parse_shadow(style: str | dict[str, str] | None) -> ShadowState:
    """Read the drop-shadow filter; absent gives the disabled defaults."""
    props = style if isinstance(style, dict) else parse_style(style)
    m = _DROP_SHADOW_RE.search(props.get("filter", ""))
    if not m:
        return ShadowState()

    color, opacity = "#000000", 1.0
    raw_color = m.group(4)
    if raw_color:
        rgba = parse_rgba(raw_color)
        if rgba is not None:
            color, opacity = rgba
        else:
            color = to_hex(raw_color)

    return ShadowState(
        enabled=True,
        x=parse_number(m.group(1), 2.0),
        y=parse_number(m.group(2), 2.0),
        blur=parse_number(m.group(3), 0.0),
        color=color,
        opacity=opacity,
    )


def format_shadow(shadow: ShadowState) -> str:
    r, g, b = ImageColor.getrgb(to_hex(shadow.color))[:3]
    return (
        f"drop-shadow({format_number(shadow.x)}px {format_number(shadow.y)}px "
        f"{format_number(shadow.blur)}px rgba({r},{g},{b},{format_number(shadow.opacity)}))"
    )


def format_filters(filters: FilterState, shadow: ShadowState) -> str:
    """Non-neutral functions in chain order, then the shadow when enabled."""
    parts: list[str] = []
    for name, field, unit in FILTER_FUNCTIONS:
        value = getattr(filters, field)
        if value != getattr(NEUTRAL_FILTERS, field):
            parts.append(f"{name}({format_number(value)}{unit})")
    if shadow.enabled:
        parts.append(format_shadow(shadow))
    return " ".join(parts)


def apply_filter_style(
    props: dict[str, str], filters: FilterState, shadow: ShadowState
) -> dict[str, str]:
    props.pop("filter", None)
    chain = format_filters(filters, shadow)
    if chain:
        props["filter"] = chain
    return props
