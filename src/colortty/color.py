"""RGB color value type with format-specific decoders and encoders."""

import re
from dataclasses import dataclass

from .errors import InvalidColorFormat, ParseIntError

_DECIMAL_BYTE = re.compile(r"\+?[0-9]+")
_HEX_BYTE = re.compile(r"[0-9a-fA-F]{2}")


def _parse_int(value: str) -> int:
    """Parse a decimal unsigned byte."""
    if not _DECIMAL_BYTE.fullmatch(value):
        raise ParseIntError(value)
    number = int(value)
    if number > 255:
        raise ParseIntError(value)
    return number


def _parse_hex(value: str) -> int:
    """Parse a two-digit hexadecimal byte."""
    if not _HEX_BYTE.fullmatch(value):
        raise ParseIntError(value)
    return int(value, 16)


@dataclass(frozen=True)
class Color:
    """A 24-bit RGB color. Alpha is never retained."""

    red: int = 0
    green: int = 0
    blue: int = 0

    def __post_init__(self):
        for component in (self.red, self.green, self.blue):
            if not 0 <= component <= 255:
                raise ValueError(f"Color component out of range: {component}")

    @classmethod
    def from_mintty_color(cls, s: str) -> "Color":
        """Decode a Mintty ``R,G,B`` triple.

        Args:
            s: Three comma-separated decimal integers, e.g. ``"12,3,255"``

        Returns:
            Color instance

        Raises:
            InvalidColorFormat: If there are not exactly three components
            ParseIntError: If a component is not an unsigned byte
        """
        rgb = s.split(",")
        if len(rgb) != 3:
            raise InvalidColorFormat(s)
        red, green, blue = (_parse_int(component) for component in rgb)
        return cls(red, green, blue)

    @classmethod
    def from_gogh_color(cls, s: str) -> "Color":
        """Decode a Gogh ``#RRGGBB`` string.

        Raises:
            InvalidColorFormat: If the string is not ``#`` plus six characters
            ParseIntError: If a byte pair is not hexadecimal
        """
        if len(s) != 7 or not s.startswith("#"):
            raise InvalidColorFormat(s)
        return cls(_parse_hex(s[1:3]), _parse_hex(s[3:5]), _parse_hex(s[5:7]))

    def to_hex(self) -> str:
        """Render as ``0xrrggbb``."""
        return f"0x{self.red:02x}{self.green:02x}{self.blue:02x}"

    def to_24bit_be(self) -> str:
        """Escape sequence setting this color as the terminal background."""
        return f"\x1b[48;2;{self.red};{self.green};{self.blue}m"

    def to_24bit_preview(self) -> str:
        """A swatch glyph drawn in this color."""
        return f"\x1b[38;2;{self.red};{self.green};{self.blue}m●"
