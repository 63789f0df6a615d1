"""
Switchboard help rendering.

Builds a rich table describing an option collection from the options' read
accessors only (names, arity, type, default, required, description). It
never parses anything; command front-ends print it next to their usage line.

Palette keys
- title, option-name, positional-name, parameter, type, default, required,
  description, table-border

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
import sys
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .options import *
from .utils import *


def _metavar(option):
    """
    Render the parameter column: "<ARG>" per mandatory parameter, "[<ARG>]"
    per optional one, "[<ARG> ...]" for an unbounded tail.
    """
    if option.flag:
        return ""
    label = "<%s>" % getattr(option.type, "__name__", "ARG").upper()
    arity = option.arity
    parts = [label] * arity.minimum
    if arity.unlimited:
        parts.append("[%s ...]" % label)
    else:
        parts.extend(["[%s]" % label] * arity.optional)
    return " ".join(parts)


def render(options, /, *, title=Unset, colorful=True):
    """
    Return a rich Table with one row per option.

    Parameters
    - options: iterable of Option.
    - title: optional table title (defaults to "options").
    - colorful: when False, the table is rendered without styles.
    """
    styles = defaultdict(str, {
        "title": "bold #FFFFFF",
        "option-name": "bold #00E6FF",  # CYAN for named options
        "positional-name": "bold #22C55E",  # GREEN for positionals
        "parameter": "bold #FFD600",  # AMBER for parameters
        "type": "#36C5F0",
        "default": "#A3A3A3",
        "required": "bold #FF4D94",
        "description": "#9CA3AF",
        "table-border": "#4B5563",
    } | getattr(sys.modules.get("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    table = Table(
        "option", "parameters", "type", "default", "description",
        title=Text(coalesce(title, "options"), styler("title")),
        box=ROUNDED,
        style=styler("table-border"),
        header_style=styler("title"),
    )

    for option in options:
        if not isinstance(option, Option):
            raise TypeError("render() argument must be an iterable of options")

        if option.positional:
            name = Text(option.label, styler("positional-name"))
        else:
            name = Text(", ").join(Text(switch, styler("option-name")) for switch in option.names)
        if option.required:
            name = Text.assemble(name, Text(" *", styler("required")))

        if option.flag:
            default = ""
        elif (explicit := option.explicit_default) is not Unset:
            default = repr(explicit)
        else:
            default = ""

        description = option.description or ""
        if isinstance(description, Text) and not colorful:
            description = description.plain

        table.add_row(
            name,
            Text(_metavar(option), styler("parameter")),
            Text(getattr(option.type, "__name__", repr(option.type)), styler("type")),
            Text(default, styler("default")),
            description if isinstance(description, Text) else Text(description, styler("description")),
        )

    return table


def show(options, /, *, title=Unset, colorful=True, console=Unset):
    """Print the table returned by render() (to standard output by default)."""
    coalesce(console, Console()).print(render(options, title=title, colorful=colorful))


__all__ = (
    "render",
    "show",
)
