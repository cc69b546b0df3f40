"""Canonical color scheme model and its renderers.

A :class:`ColorScheme` holds the fixed 20-slot palette every input format is
normalized into. It renders to the Alacritty configuration syntax (TOML, or
the legacy YAML layout) and to a one-line terminal preview.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .color import Color

# Order of the eight ANSI colors; bright slots carry a ``bright_`` prefix.
ANSI_NAMES: Tuple[str, ...] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)

NORMAL_SLOTS: Tuple[str, ...] = ANSI_NAMES
BRIGHT_SLOTS: Tuple[str, ...] = tuple(f"bright_{name}" for name in ANSI_NAMES)

RESET = "\x1b[0m"


class OutputFormat(str, Enum):
    """Supported output documents"""
    TOML = "toml"
    YAML = "yaml"


@dataclass(frozen=True)
class ColorScheme:
    """A terminal palette: primary colors, optional cursor colors, 16 ANSI colors."""

    foreground: Color = field(default_factory=Color)
    background: Color = field(default_factory=Color)
    cursor_text: Optional[Color] = None
    cursor: Optional[Color] = None

    black: Color = field(default_factory=Color)
    red: Color = field(default_factory=Color)
    green: Color = field(default_factory=Color)
    yellow: Color = field(default_factory=Color)
    blue: Color = field(default_factory=Color)
    magenta: Color = field(default_factory=Color)
    cyan: Color = field(default_factory=Color)
    white: Color = field(default_factory=Color)

    bright_black: Color = field(default_factory=Color)
    bright_red: Color = field(default_factory=Color)
    bright_green: Color = field(default_factory=Color)
    bright_yellow: Color = field(default_factory=Color)
    bright_blue: Color = field(default_factory=Color)
    bright_magenta: Color = field(default_factory=Color)
    bright_cyan: Color = field(default_factory=Color)
    bright_white: Color = field(default_factory=Color)

    @property
    def normal_colors(self) -> Tuple[Color, ...]:
        return tuple(getattr(self, slot) for slot in NORMAL_SLOTS)

    @property
    def bright_colors(self) -> Tuple[Color, ...]:
        return tuple(getattr(self, slot) for slot in BRIGHT_SLOTS)

    def render(self, output_format: OutputFormat = OutputFormat.TOML) -> str:
        """Render the scheme in the requested output format."""
        if OutputFormat(output_format) is OutputFormat.YAML:
            return self.to_yaml()
        return self.to_toml()

    def to_toml(self) -> str:
        """Render a color theme for ``alacritty.toml``."""
        cursor_block = ""
        if self.cursor_text is not None and self.cursor is not None:
            cursor_block = (
                "\n"
                "# Cursor colors\n"
                "[colors.cursor]\n"
                f"text =   '{self.cursor_text.to_hex()}'\n"
                f"cursor = '{self.cursor.to_hex()}'\n"
            )

        return (
            "\n"
            "# Default colors\n"
            "[colors.primary]\n"
            f"background = '{self.background.to_hex()}'\n"
            f"foreground = '{self.foreground.to_hex()}'\n"
            f"{cursor_block}"
            "\n"
            "# Normal colors\n"
            "[colors.normal]\n"
            f"{_toml_palette(self.normal_colors)}"
            "\n"
            "# Bright colors\n"
            "[colors.bright]\n"
            f"{_toml_palette(self.bright_colors)}"
        )

    def to_yaml(self) -> str:
        """Render a color theme for the legacy ``alacritty.yml``."""
        cursor_block = ""
        if self.cursor_text is not None and self.cursor is not None:
            cursor_block = (
                "\n"
                "  # Cursor colors\n"
                "  cursor:\n"
                f"    text:   '{self.cursor_text.to_hex()}'\n"
                f"    cursor: '{self.cursor.to_hex()}'\n"
            )

        return (
            "colors:\n"
            "  # Default colors\n"
            "  primary:\n"
            f"    background: '{self.background.to_hex()}'\n"
            f"    foreground: '{self.foreground.to_hex()}'\n"
            f"{cursor_block}"
            "\n"
            "  # Normal colors\n"
            "  normal:\n"
            f"{_yaml_palette(self.normal_colors)}"
            "\n"
            "  # Bright colors\n"
            "  bright:\n"
            f"{_yaml_palette(self.bright_colors)}"
        )

    def to_preview(self) -> str:
        """Show all colors in one line."""
        parts = [
            self.background.to_24bit_be(),
            " ",
            self.foreground.to_24bit_preview(),
            "  ",
        ]
        parts.extend(color.to_24bit_preview() for color in self.normal_colors)
        parts.append("  ")
        parts.extend(color.to_24bit_preview() for color in self.bright_colors)
        parts.append(" ")
        parts.append(RESET)
        return "".join(parts)


def _toml_palette(colors: Tuple[Color, ...]) -> str:
    # "magenta" is the longest key; values line up one column after it.
    return "".join(
        f"{name + ' =':<10}'{color.to_hex()}'\n"
        for name, color in zip(ANSI_NAMES, colors)
    )


def _yaml_palette(colors: Tuple[Color, ...]) -> str:
    return "".join(
        f"    {name + ':':<9}'{color.to_hex()}'\n"
        for name, color in zip(ANSI_NAMES, colors)
    )
