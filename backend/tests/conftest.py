"""Shared test fixtures."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from vectorstudio.svg.parser import find_element, parse_document


# A small scene: four layers in paint order box, dot, label, wave

EDITOR_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100" width="100" height="100">
  <rect id="box" x="10" y="10" width="20" height="20" fill="#ff0000" />
  <circle id="dot" cx="50" cy="50" r="10" fill="#00ff00" />
  <text id="label" x="10" y="90" font-size="10">Hello</text>
  <path id="wave" d="M10 60 L40 80" stroke="#000000" />
</svg>'''

# Lucide icon as pasted from the web: no ids on any node
SMILEY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
  <circle cx="8" cy="9" r="1"/>
  <circle cx="16" cy="9" r="1"/>
  <path d="M8 14s1.5 2 4 2 4-2 4-2"/>
</svg>'''

NO_VIEWBOX_SVG = '<svg width="200" height="100"><rect x="1" y="1" width="5" height="5"/><circle cx="5" cy="5" r="2"/></svg>'

PERCENT_SIZE_SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="100%" height="100%"><rect x="1" y="1" width="5" height="5"/></svg>'

DUPLICATE_ID_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 50 50">
  <rect id="a" x="0" y="0" width="5" height="5"/>
  <rect id="a" x="10" y="0" width="5" height="5"/>
</svg>'''

GROUP_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <g id="grp">
    <rect id="inner" x="0" y="0" width="10" height="10"/>
    <circle id="inner-dot" cx="5" cy="5" r="2"/>
  </g>
</svg>'''

BACKGROUND_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100" width="100" height="100">
  <rect id="editor-background" x="-1000" y="-1000" width="2100" height="2100" fill="#ffffff"/>
  <rect id="box" x="10" y="10" width="20" height="20"/>
  <circle id="dot" cx="50" cy="50" r="10"/>
</svg>'''

ALIGN_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100" width="100" height="100">
  <rect id="bar" x="50" y="30" width="20" height="10"/>
  <circle id="ball" cx="10" cy="10" r="5"/>
  <text id="caption" x="5" y="95">Hi</text>
  <polygon id="tri" points="0,0 10,0 5,8"/>
</svg>'''

STYLED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <rect id="fancy" x="10" y="20" width="30" height="40" fill="#ff0000" style="fill: #123456; stroke-width: 3; transform: rotate(30deg) scale(-2, 1) skewX(5deg) skewY(0deg); transform-box: fill-box; transform-origin: center; filter: blur(2px) hue-rotate(90deg) drop-shadow(3px 4px 5px rgba(0,0,0,0.25));"/>
</svg>'''

# Inkscape output carries an id on the root element
ROOT_ID_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" id="svg8" viewBox="0 0 100 100" width="100" height="100">
  <defs id="defs2"/>
  <rect id="rect10" x="10" y="10" width="20" height="20" fill="#ff0000"/>
  <circle id="path12" cx="50" cy="50" r="10" fill="#00ff00"/>
</svg>'''

# Canvas centered on the origin; "cell" is centered on (0, 0)
CENTERED_VIEWBOX_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="-50 -50 100 100" width="100" height="100">
  <rect id="cell" x="-10" y="-10" width="20" height="20"/>
</svg>'''


def node(svg: str, node_id: str) -> ET.Element | None:
    """Parse ``svg`` and return the element with ``node_id``."""
    return find_element(parse_document(svg), node_id)


def child_ids(svg: str) -> list[str | None]:
    """Ids of the root's direct children, in paint order."""
    return [el.get("id") for el in parse_document(svg)]


@pytest.fixture
def editor_svg() -> str:
    return EDITOR_SVG


@pytest.fixture
def smiley_svg() -> str:
    return SMILEY_SVG


@pytest.fixture
def group_svg() -> str:
    return GROUP_SVG


@pytest.fixture
def styled_svg() -> str:
    return STYLED_SVG
