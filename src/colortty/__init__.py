"""colortty - convert terminal color schemes into alacritty configuration."""

__version__ = "0.4.0"

from .color import Color
from .errors import ColorttyError, ParseError
from .parsers import ColorSchemeFormat, parse_color_scheme
from .provider import Provider
from .scheme import ColorScheme, OutputFormat

__all__ = [
    "Color",
    "ColorScheme",
    "ColorSchemeFormat",
    "ColorttyError",
    "OutputFormat",
    "ParseError",
    "Provider",
    "parse_color_scheme",
    "__version__",
]
