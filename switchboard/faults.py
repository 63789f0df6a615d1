"""
Switchboard faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the parser
  can raise. Codes are grouped by domain to keep logs/searches predictable.
- ParserError: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way through rich.
- report(): front-end entry point to print a fault (and optionally exit).

Taxonomy (all fatal to the current parse call)
- MissingRequiredOptionError: a required option matched no token.
- RepeatedOptionError: an option declared on_multiple="raise" matched twice or more.
- WrongArgumentCountError: a matched option found fewer parameters than its minimum.
- UnregisteredTypeError: an option's type has no registered handler (setup defect).
- ConversionError: a type handler rejected a raw parameter.

Integration
- The parser only raises; it never prints nor exits.
- CLI front-ends catch ParserError and call report(error, ...).
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes raised by the parser (stable identifiers).

    grouping (by high-level domain)
    - validation (2110x): whole-input checks run before any extraction
      • MISSING_REQUIRED_OPTION, REPEATED_OPTION
    - extraction (2120x): per-match failures while reading parameters
      • WRONG_ARGUMENT_COUNT, CONVERSION_FAILURE
    - configuration (2130x): programmer/setup defects
      • UNREGISTERED_TYPE
    """
    # --- validation errors (2110x) ---
    MISSING_REQUIRED_OPTION = 21101
    REPEATED_OPTION         = 21102

    # --- extraction errors (2120x) ---
    WRONG_ARGUMENT_COUNT    = 21201
    CONVERSION_FAILURE      = 21202

    # --- configuration errors (2130x) ---
    UNREGISTERED_TYPE       = 21301

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules.get("__main__"), "__codes__", {}).get(self, self.value))


class ParserError(Exception):
    """
    base type of every failure raised while preprocessing, validating or
    extracting option values.

    carries
    - message: one-sentence, lowercased explanation.
    - options: read-only mapping with at least 'title', 'code' and 'hint',
      plus domain context (option, token, found, expected...).
    """
    code = Unset
    title = "parse error"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s message must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "title": type(self).title,
            "code": type(self).code,
            "hint": "",
        } | options)

    def __str__(self):
        return self.message

    @property
    def option(self):
        """The option definition involved, if any."""
        return self.options.get("option")

    def __rich__(self):
        main = sys.modules.get("__main__")

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
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "switchboard")), styler("prog-name"))
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
            " | ",
            text(str(self.options["title"]).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if self.options["hint"]:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replica = type(self).__new__(type(self))
        ParserError.__init__(replica, self.message, **{**self.options, **overrides})
        replica.__cause__ = self.__cause__
        return replica


class MissingRequiredOptionError(ParserError):
    code = FaultCode.MISSING_REQUIRED_OPTION
    title = "missing required option"


class RepeatedOptionError(ParserError):
    code = FaultCode.REPEATED_OPTION
    title = "repeated option"

    @property
    def count(self):
        return self.options.get("count")


class WrongArgumentCountError(ParserError):
    """
    raised when a matched option found fewer parameters than its arity's minimum.

    found is the number of parameters actually collected; expected is the
    option's (minimum, optional) arity pair.
    """
    code = FaultCode.WRONG_ARGUMENT_COUNT
    title = "wrong number of arguments"

    @property
    def found(self):
        return self.options["found"]

    @property
    def expected(self):
        return self.options["expected"]


class UnregisteredTypeError(ParserError, LookupError):
    code = FaultCode.UNREGISTERED_TYPE
    title = "unregistered type"

    @property
    def type(self):
        return self.options.get("type")


class ConversionError(ParserError, ValueError):
    code = FaultCode.CONVERSION_FAILURE
    title = "invalid parameter"

    @property
    def token(self):
        return self.options.get("token")


def report(fault, /, *, fancy=False, colorful=True, exit=False):
    """
    print a fault to the standard error console.

    contract
    - fault must be a ParserError; it is rendered through its __rich__ method
      with the given runtime options merged in.
    - exit=True terminates the process with status 1 after printing.
    """
    if not isinstance(fault, ParserError):
        raise TypeError("report() argument must be a parser error")
    console.print(fault.__replace__(fancy=bool(fancy), colorful=bool(colorful)))
    if exit:
        sys.exit(1)


__all__ = (
    # Enumerations
    "FaultCode",

    # Errors
    "ParserError",
    "MissingRequiredOptionError",
    "RepeatedOptionError",
    "WrongArgumentCountError",
    "UnregisteredTypeError",
    "ConversionError",

    # Functions
    "report",
)
