"""
Cali faults (parse failures) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing failure.
- ParseFailure: base exception that carries message + options and knows how to
  render itself in a friendly, lowercased and actionable way (rich protocol).
- report(): print any fault to a console (stderr by default).

UX goals
- Position-first messages: every parse message includes the ordinal position of
  the offending token (“at second position”) so users can learn by trying.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- ArgumentParser.parse() raises ParseFailure subclasses; parsing stops at the first one.
- invoke(..., shell=True) renders the fault via report() and exits with status 1.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

stderr = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - tokens (1111x): UNRECOGNIZED_TOKEN, DUPLICATE_DEFINITION, MISSING_VALUE
    - values (1112x): INVALID_VALUE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    UNRECOGNIZED_TOKEN          = 11111
    DUPLICATE_DEFINITION        = 11115
    MISSING_VALUE               = 11117
    INVALID_VALUE               = 11123

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseFailure(Exception):
    """
    base class of every failure raised while registering or parsing flags.

    the message is the exception text; everything else (code, title, hint,
    token, flag, index, prog, fancy, colorful) lives in read-only options.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = getattr(main, "__prog__", self.options.get("prog") or os.path.basename(sys.argv[0]))

        header = Text.assemble(
            "[ ",
            text(prog, styler("prog-name")),
            " — ",
            text(self.code.normalize() if self.code else "", styler("code")),
            " | ",
            text(self.options.get("title", type(self).__name__).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        parts = [message]
        if self.hint:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedTokenError(ParseFailure): ...
class MissingValueError(ParseFailure): ...
class DuplicateDefinitionError(ParseFailure): ...
class ValueConversionError(ParseFailure): ...


def report(fault, /, *, console=Unset, **options):
    """
    print a fault with the given rendering options.

    contract
    - fault must be a ParseFailure; options (fancy, colorful, prog, ...) are
      merged over the fault's own options before rendering.
    - console defaults to the module-level stderr console.
    """
    if not isinstance(fault, ParseFailure):
        raise TypeError("report() argument must be a parse failure")
    coalesce(console, stderr).print(fault.__replace__(**options) if options else fault)


__all__ = (
    "FaultCode",
    "ParseFailure",
    "UnrecognizedTokenError",
    "MissingValueError",
    "DuplicateDefinitionError",
    "ValueConversionError",
    "report",
)
