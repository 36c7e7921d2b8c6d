"""
posixargs option identifiers.

Overview
- OptionStyle: SHORT (POSIX-style, e.g. `-a`, `-bc`) or LONG (GNU-style, e.g. `--foo`, `--bar=baz`).
- OptionIdentifier: a single validated option name (one character for short,
  a non-empty word without '=' for long). Immutable, hashable, compared by style+payload.
- optid("-h") / optid("--help"): build one identifier from its rendered form.
- optids("-h, --help"): build a list of identifiers from a comma-separated string.

Rendering
- str(identifier) → "-c" / "--word"
- identifier.render(dashes=False) → "c" / "word"
"""
from enum import StrEnum

from rich.text import Text

from .utils import *


class OptionStyle(StrEnum):
    SHORT = "short"
    LONG = "long"


class OptionIdentifier(metaclass=ValueType):
    """
    a single option name, short (one character) or long (a word).

    construction
    - OptionIdentifier(OptionStyle.SHORT, "h")
    - OptionIdentifier(OptionStyle.LONG, "help")

    errors
    - TypeError: style is not an OptionStyle, or payload is not a string.
    - ValueError: short payload is not exactly one character; long payload is
      empty or contains '='.
    """
    __introspectable__ = ("style", "payload")

    def __init__(self, style, payload, /):
        if not isinstance(style, OptionStyle):
            raise TypeError(f"{type(self).__typename__} style must be an OptionStyle")
        if not isinstance(payload, str):
            raise TypeError(f"{type(self).__typename__} payload must be a string")

        if style is OptionStyle.SHORT:
            if len(payload) != 1:
                raise ValueError("short-style option identifier must be exactly one character")
        else:
            if not payload:
                raise ValueError("long-style option identifier must not be empty")
            if "=" in payload:
                raise ValueError("long-style option identifier must not contain an equals character ('=')")

        self._style = style
        self._payload = payload

    @property
    def is_short(self):
        return self._style is OptionStyle.SHORT

    @property
    def is_long(self):
        return self._style is OptionStyle.LONG

    @property
    def char(self):
        if not self.is_short:
            raise ValueError("option identifier style is long")
        return self._payload

    @property
    def word(self):
        if not self.is_long:
            raise ValueError("option identifier style is short")
        return self._payload

    def render(self, *, dashes=True):
        if not dashes:
            return self._payload
        return ("-" if self.is_short else "--") + self._payload

    def __str__(self):
        return self.render()

    def __rich__(self):
        return Text(self.render(), style="bold cyan")


def optid(source, /):
    """
    build one identifier from its rendered form.

    >>> optid("-h")
    OptionIdentifier(style=<OptionStyle.SHORT: 'short'>, payload='h')
    >>> str(optid("--help"))
    '--help'
    """
    if not isinstance(source, str):
        raise TypeError("optid() argument must be a string")

    source = source.lstrip()

    if not source.startswith("-"):
        raise ValueError("optid() argument must start with a dash character ('-')")

    if source.startswith("--"):
        return OptionIdentifier(OptionStyle.LONG, source[2:])

    if len(source) != 2:
        raise ValueError("optid() argument starting with just one dash must be exactly 2 characters")

    return OptionIdentifier(OptionStyle.SHORT, source[1])


def optids(source, /):
    """
    build a list of identifiers from a comma-separated string, e.g. "-h, --help".
    """
    if not isinstance(source, str):
        raise TypeError("optids() argument must be a string")

    identifiers = []

    for segment in source.split(","):
        segment = segment.strip()
        if not segment.startswith("-"):
            raise ValueError("optids() identifiers must be preceded with a dash character ('-')")
        if not segment.startswith("--") and len(segment) != 2:
            raise ValueError("optids() identifiers preceded with just one dash must be exactly 1 character")
        identifiers.append(optid(segment))

    return identifiers


__all__ = (
    "OptionStyle",
    "OptionIdentifier",
    "optid",
    "optids",
)
