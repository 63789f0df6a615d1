r"""
Switchboard token grammar.

Every pattern is meant for re.fullmatch against a single token.

- SHORT_SWITCH:            "-x"  (one unicode letter)
- LONG_SWITCH:             "--name", "--long-name" (unicode letters and digits,
                           segments joined by single hyphens, no underscores)
- SWITCH:                  either of the above
- MULTIPLE_SHORT_SWITCHES: "-abc" (two or more letters after one hyphen)
- SWITCH_PARAM_EQUALS:     "<switch>=<anything>" (parameters may be empty)
- ARGUMENT_SEPARATOR:      "--"

Inline parameters that read as a switch, combined switches or the separator
(see is_reserved) keep their token unsplit.

Tokens such as "-5", "-" or "---" are not switches, so negative numbers and
the conventional stdin marker can be passed as parameters.
"""
import re

SHORT_SWITCH = re.compile(r"-[^\W\d_]")
LONG_SWITCH = re.compile(r"--[^\W\d_][^\W_]*(?:-[^\W_]+)*")
SWITCH = re.compile(r"(?:%s)|(?:%s)" % (SHORT_SWITCH.pattern, LONG_SWITCH.pattern))
MULTIPLE_SHORT_SWITCHES = re.compile(r"-(?P<letters>[^\W\d_]{2,})")
SWITCH_PARAM_EQUALS = re.compile(r"(?P<switch>%s)=(?P<parameters>.*)" % SWITCH.pattern, re.DOTALL)
ARGUMENT_SEPARATOR = "--"


def is_switch(token, /):
    """Return True when the token reads as an option switch."""
    return isinstance(token, str) and SWITCH.fullmatch(token) is not None


def is_separator(token, /):
    return token == ARGUMENT_SEPARATOR


def is_boundary(token, /):
    """
    Return True when the token ends an option's parameter list: a missing
    token, another switch, or the argument separator.
    """
    return token is None or is_switch(token) or is_separator(token)


def is_reserved(token, /):
    """
    Return True when preprocessing or matching would give the token a meaning
    of its own: a switch, combined short switches, a switch with inline
    parameters, or the argument separator.
    """
    if not isinstance(token, str):
        return False
    return (
        is_switch(token)
        or is_separator(token)
        or MULTIPLE_SHORT_SWITCHES.fullmatch(token) is not None
        or SWITCH_PARAM_EQUALS.fullmatch(token) is not None
    )


__all__ = (
    # Patterns
    "SHORT_SWITCH",
    "LONG_SWITCH",
    "SWITCH",
    "MULTIPLE_SHORT_SWITCHES",
    "SWITCH_PARAM_EQUALS",
    "ARGUMENT_SEPARATOR",

    # Predicates
    "is_switch",
    "is_separator",
    "is_boundary",
    "is_reserved",
)
