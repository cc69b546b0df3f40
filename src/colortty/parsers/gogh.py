"""Parser for Gogh color themes (``.sh``)."""

import re
from typing import Dict

from ..color import Color
from ..scheme import ColorScheme

# Matches export XXX="#rrggbb"
EXPORT_PATTERN = re.compile(r'export ([A-Z0-9_]+)="(#[0-9a-fA-F]{6})"')

GOGH_SLOTS: Dict[str, str] = {
    "FOREGROUND_COLOR": "foreground",
    "BACKGROUND_COLOR": "background",
    "COLOR_01": "black",
    "COLOR_02": "red",
    "COLOR_03": "green",
    "COLOR_04": "yellow",
    "COLOR_05": "blue",
    "COLOR_06": "magenta",
    "COLOR_07": "cyan",
    "COLOR_08": "white",
    "COLOR_09": "bright_black",
    "COLOR_10": "bright_red",
    "COLOR_11": "bright_green",
    "COLOR_12": "bright_yellow",
    "COLOR_13": "bright_blue",
    "COLOR_14": "bright_magenta",
    "COLOR_15": "bright_cyan",
    "COLOR_16": "bright_white",
}


def parse_gogh(content: str) -> ColorScheme:
    """Build a color scheme from the ``export`` lines of a Gogh script.

    Gogh scripts export plenty of unrelated variables, so lines that do not
    match or name an unknown variable are skipped.
    """
    slots: Dict[str, Color] = {}
    for line in content.splitlines():
        match = EXPORT_PATTERN.search(line)
        if match is None:
            continue
        name, value = match.groups()
        slot = GOGH_SLOTS.get(name)
        if slot is None:
            continue
        slots[slot] = Color.from_gogh_color(value)
    return ColorScheme(**slots)
