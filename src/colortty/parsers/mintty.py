"""Parser for Mintty color themes (``.minttyrc``)."""

from typing import Dict

from ..color import Color
from ..errors import InvalidLineFormat, UnknownColorName
from ..scheme import ColorScheme

MINTTY_SLOTS: Dict[str, str] = {
    "ForegroundColour": "foreground",
    "BackgroundColour": "background",
    "Black": "black",
    "Red": "red",
    "Green": "green",
    "Yellow": "yellow",
    "Blue": "blue",
    "Magenta": "magenta",
    "Cyan": "cyan",
    "White": "white",
    "BoldBlack": "bright_black",
    "BoldRed": "bright_red",
    "BoldGreen": "bright_green",
    "BoldYellow": "bright_yellow",
    "BoldBlue": "bright_blue",
    "BoldMagenta": "bright_magenta",
    "BoldCyan": "bright_cyan",
    "BoldWhite": "bright_white",
}


def parse_mintty(content: str) -> ColorScheme:
    """Build a color scheme from ``Name=R,G,B`` lines.

    Every non-blank line must name a known slot. A key given twice keeps
    its last value.

    Raises:
        InvalidLineFormat: If a line has no ``=``
        UnknownColorName: If a key is not one of the 18 Mintty color names
        InvalidColorFormat: If a value is not an ``R,G,B`` triple
        ParseIntError: If a component is not an unsigned byte
    """
    slots: Dict[str, Color] = {}
    for line in content.splitlines():
        if not line.strip():
            continue
        components = line.split("=", 1)
        if len(components) != 2:
            raise InvalidLineFormat(line)
        name, value = components
        slot = MINTTY_SLOTS.get(name)
        if slot is None:
            raise UnknownColorName(name)
        slots[slot] = Color.from_mintty_color(value)
    return ColorScheme(**slots)
