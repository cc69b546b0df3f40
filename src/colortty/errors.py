"""Exception hierarchy for colortty.

Every failure raised by the parsers, the catalog client, the scheme cache
and the CLI helpers derives from :class:`ColorttyError`, so the command
line boundary can report any of them with a single ``except`` clause.
"""


class ColorttyError(Exception):
    """Base exception for colortty operations."""
    pass


# -- Parse errors

class ParseError(ColorttyError):
    """A color scheme source could not be parsed."""
    pass


class ParseIntError(ParseError):
    """A color component is not a valid unsigned byte."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"failed to parse int: {value!r}")


class ParseFloatError(ParseError):
    """A real-valued color component could not be parsed."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"failed to parse float: {value!r}")


class InvalidColorFormat(ParseError):
    """A color representation has the wrong shape."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid color representation: {value}")


class InvalidLineFormat(ParseError):
    """A line is not of the form ``Name=Value``."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"invalid line: {line}")


class UnknownColorName(ParseError):
    """A Mintty key does not name a palette slot."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown color name: {name}")


class XMLParseError(ParseError):
    """The iTerm document is not well-formed XML."""

    def __init__(self, detail: str = ""):
        message = "invalid XML"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NoRootDict(ParseError):
    """The iTerm document has no top-level dictionary."""

    def __init__(self):
        super().__init__("root dict was not found")


class NotCharacterNode(ParseError):
    """An XML node that must carry text does not."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"cannot extract text from: <{tag}>")


class UnknownColorComponent(ParseError):
    """An iTerm color dictionary holds an unrecognized component key."""

    def __init__(self, component: str):
        self.component = component
        super().__init__(f"unknown color component: {component}")


# -- Transport errors

class ProviderError(ColorttyError):
    """A remote catalog operation failed."""
    pass


class HttpGetError(ProviderError):
    """An HTTP GET failed or returned a non-success status."""
    pass


class ParseJsonError(ProviderError):
    """A catalog listing is not the expected JSON document."""
    pass


# -- File system errors

class CacheError(ColorttyError):
    """The local scheme cache could not be used."""
    pass


class CreateCacheDirError(CacheError):
    """The cache directory could not be created."""
    pass


class ReadCacheDirError(CacheError):
    """The cache directory could not be listed."""
    pass


class CacheReadError(CacheError):
    """A cached scheme file could not be read."""
    pass


class CacheWriteError(CacheError):
    """A scheme file could not be written to the cache."""
    pass


# -- Usage errors

class UsageError(ColorttyError):
    """The command line request cannot be satisfied."""
    pass


class MissingSource(UsageError):
    def __init__(self):
        super().__init__("source is not specified")


class MissingInputFormat(UsageError):
    def __init__(self):
        super().__init__("input format is not specified and failed to guess")


class ReadSourceError(UsageError):
    """The conversion source could not be read."""
    pass


class UnknownProvider(UsageError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown color scheme provider: {name}")


class MissingName(UsageError):
    def __init__(self):
        super().__init__("missing color scheme name")


class ConfigError(ColorttyError):
    """The configuration file is unreadable or invalid."""
    pass
