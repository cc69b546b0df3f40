"""Parser for iTerm2 color themes (``.itermcolors``).

An ``.itermcolors`` file is an XML property list whose root dictionary maps
slot names to color dictionaries::

    <plist version="1.0">
    <dict>
        <key>Ansi 0 Color</key>
        <dict>
            <key>Alpha Component</key>
            <real>1</real>
            <key>Blue Component</key>
            <real>0.0</real>
            <key>Color Space</key>
            <string>sRGB</string>
            ...
        </dict>
        ...
    </dict>
    </plist>
"""

import logging
import math
import re
import struct
import xml.etree.ElementTree as ET
from typing import Dict, Iterator, List, Tuple

from ..color import Color
from ..errors import (
    NoRootDict,
    NotCharacterNode,
    ParseFloatError,
    UnknownColorComponent,
    XMLParseError,
)
from ..scheme import ColorScheme

logger = logging.getLogger(__name__)

ITERM_SLOTS: Dict[str, str] = {
    "Ansi 0 Color": "black",
    "Ansi 1 Color": "red",
    "Ansi 2 Color": "green",
    "Ansi 3 Color": "yellow",
    "Ansi 4 Color": "blue",
    "Ansi 5 Color": "magenta",
    "Ansi 6 Color": "cyan",
    "Ansi 7 Color": "white",
    "Ansi 8 Color": "bright_black",
    "Ansi 9 Color": "bright_red",
    "Ansi 10 Color": "bright_green",
    "Ansi 11 Color": "bright_yellow",
    "Ansi 12 Color": "bright_blue",
    "Ansi 13 Color": "bright_magenta",
    "Ansi 14 Color": "bright_cyan",
    "Ansi 15 Color": "bright_white",
    "Background Color": "background",
    "Foreground Color": "foreground",
    "Cursor Color": "cursor",
    "Cursor Text Color": "cursor_text",
}

RGB_COMPONENTS: Dict[str, str] = {
    "Red Component": "red",
    "Green Component": "green",
    "Blue Component": "blue",
}

IGNORED_COMPONENTS = frozenset({"Alpha Component", "Color Space"})

# Decimal or exponent notation, inf and nan; no underscores or padding.
REAL_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def parse_iterm(content: str) -> ColorScheme:
    """Build a color scheme from an iTerm2 property list.

    Unknown slot names are skipped: iTerm files carry many settings beyond
    the palette. Unknown keys inside a color dictionary are an error.

    Raises:
        XMLParseError: If the document is not well-formed
        NoRootDict: If the plist has no top-level ``<dict>``
        NotCharacterNode: If a key or value node carries no text
        UnknownColorComponent: If a color dictionary has an unexpected key
        ParseFloatError: If a component value is not a real number
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise XMLParseError(str(e)) from e

    root_dict = root.find("dict")
    if root_dict is None:
        raise NoRootDict()

    slots: Dict[str, Color] = {}
    for key, value in _pairs(root_dict):
        color_name = extract_text(key)
        slot = ITERM_SLOTS.get(color_name)
        if slot is None:
            logger.debug(f"Skipping unrecognized iTerm key: {color_name}")
            continue
        if value.tag != "dict":
            logger.debug(f"Skipping {color_name}: value is <{value.tag}>, not <dict>")
            continue
        slots[slot] = _parse_color_dict(value)

    return ColorScheme(**slots)


def extract_text(element: ET.Element) -> str:
    """Return the text that leads an element's content.

    Raises:
        NotCharacterNode: If the element starts with a child element or is empty
    """
    if element.text is None:
        raise NotCharacterNode(element.tag)
    return element.text


def _parse_color_dict(element: ET.Element) -> Color:
    # Pairs may look like <key/><real/><key/><string/><key/><real/>; the
    # <string/> pair is the color space and is skipped by name.
    components = {"red": 0, "green": 0, "blue": 0}
    for key, value in _pairs(element):
        component_name = extract_text(key)
        channel = RGB_COMPONENTS.get(component_name)
        if channel is not None:
            components[channel] = _extract_real_color(value)
        elif component_name not in IGNORED_COMPONENTS:
            raise UnknownColorComponent(component_name)
    return Color(**components)


def _extract_real_color(element: ET.Element) -> int:
    text = extract_text(element)
    if not REAL_PATTERN.fullmatch(text):
        raise ParseFloatError(text)
    return _real_to_byte(_to_single(float(text)))


def _to_single(value: float) -> float:
    """Round a float to IEEE 754 single precision."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _real_to_byte(value: float) -> int:
    """Scale a [0.0, 1.0] component to a byte, truncating and saturating.

    The product is computed in single precision, so ``0.1333333333`` maps
    to 34 rather than 33.
    """
    scaled = _to_single(value * 255.0)
    if math.isnan(scaled):
        return 0
    return int(min(max(scaled, 0.0), 255.0))


def _pairs(element: ET.Element) -> Iterator[Tuple[ET.Element, ET.Element]]:
    """Yield consecutive (key, value) element children; an odd trailer is dropped."""
    children: List[ET.Element] = list(element)
    for index in range(0, len(children) - 1, 2):
        yield children[index], children[index + 1]
