"""Input format parsers.

Each format maps to one pure function turning the text of a theme file into
a :class:`~colortty.scheme.ColorScheme`.
"""

from enum import Enum
from typing import Callable, Dict, Optional

from ..scheme import ColorScheme
from .gogh import parse_gogh
from .iterm import parse_iterm
from .mintty import parse_mintty


class ColorSchemeFormat(str, Enum):
    """Supported input formats"""
    ITERM = "iterm"
    MINTTY = "mintty"
    GOGH = "gogh"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @classmethod
    def from_string(cls, s: str) -> Optional["ColorSchemeFormat"]:
        """Look up a format by its command line name."""
        try:
            return cls(s)
        except ValueError:
            return None

    @classmethod
    def from_filename(cls, filename: str) -> Optional["ColorSchemeFormat"]:
        """Guess a format from a file name extension."""
        for scheme_format, extension in _EXTENSIONS.items():
            if filename.endswith(extension):
                return scheme_format
        return None

    def parse(self, content: str) -> ColorScheme:
        """Parse theme text in this format."""
        return _PARSERS[self](content)


_EXTENSIONS = {
    ColorSchemeFormat.ITERM: ".itermcolors",
    ColorSchemeFormat.MINTTY: ".minttyrc",
    ColorSchemeFormat.GOGH: ".sh",
}

_PARSERS: Dict[ColorSchemeFormat, Callable[[str], ColorScheme]] = {
    ColorSchemeFormat.ITERM: parse_iterm,
    ColorSchemeFormat.MINTTY: parse_mintty,
    ColorSchemeFormat.GOGH: parse_gogh,
}


def parse_color_scheme(content: str, scheme_format: ColorSchemeFormat) -> ColorScheme:
    """Parse ``content`` with the parser for ``scheme_format``."""
    return ColorSchemeFormat(scheme_format).parse(content)


__all__ = [
    "ColorSchemeFormat",
    "parse_color_scheme",
    "parse_gogh",
    "parse_iterm",
    "parse_mintty",
]
