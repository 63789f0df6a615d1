"""
Switchboard type registry.

A TypeRegistry maps a type tag (usually a class) to the function that turns
one raw command line string into a value of that type, and optionally to a
supplier of the type-level default value.

The module-level `registry` comes pre-populated with the built-in handlers
and is what options and parsers use unless they are given another one:

    >>> registry.lookup(int)("42")
    42

Registering a custom type (last registration for a tag wins):

    >>> @registry.register(Version)
    ... def parse_version(string):
    ...     return Version(*map(int, string.split(".")))

Built-in handlers never perform I/O: Path only wraps the string, and URI
only checks its syntax.
"""
import datetime
import decimal
import fractions
import pathlib
import sys
from collections import namedtuple
from urllib.parse import urlsplit

from .faults import *
from .utils import *

Entry = namedtuple("Entry", ("function", "default"))


class Symbol(str):
    """
    Tag for interned identifier-like strings.

    Parameters of this type are interned, so equal symbols are the same object.
    """
    __slots__ = ()
    _table = {}

    def __new__(cls, string=""):
        string = str(string)
        try:
            return cls._table[string]
        except KeyError:
            return cls._table.setdefault(string, super().__new__(cls, sys.intern(string)))


class URI:
    """Tag for URI parameters; values are urllib.parse.SplitResult tuples."""


class TypeRegistry:
    """
    Mapping from type tags to (coercion function, default supplier) entries.

    Registration is expected to happen at startup, before any concurrent
    parsing begins; the registry performs no locking of its own.
    """

    def __init__(self, entries=(), /):
        self._table = dict(entries)

    def register(self, tags, function=Unset, /, *, default=Unset):
        """
        Associate one or more type tags with a coercion function.

        Forms
        - registry.register(tag_or_tags, function, default=supplier)
        - @registry.register(tag_or_tags, default=supplier)

        Parameters
        - tags: a single tag, or a tuple/list/set/frozenset of tags.
        - function: callable taking one string and returning the typed value.
        - default: zero-argument callable producing the type-level default.

        Returns
        - the function itself (so the decorator form leaves it usable).
        """
        if function is Unset:
            @rename("register")
            def wrapper(function, /):
                return self.register(tags, function, default=default)
            return wrapper

        if not callable(function):
            raise TypeError("register() function must be callable")
        if default is not Unset and not callable(default):
            raise TypeError("register() 'default' must be a zero-argument callable")

        if not isinstance(tags, tuple | list | set | frozenset):
            tags = (tags,)
        if not tags:
            raise ValueError("register() requires at least one type tag")

        for tag in tags:
            self._table[tag] = Entry(function, default)
        return function

    accept = register

    def lookup(self, tag, /):
        """
        Return the coercion function registered for the tag.

        Raises UnregisteredTypeError when nothing is registered; this is a
        configuration defect, not a user input error.
        """
        try:
            return self._table[tag].function
        except KeyError:
            raise UnregisteredTypeError(
                "type %s does not have an associated handler" % _describe(tag),
                type=tag,
                hint="register a handler for it before parsing (registry.register(type, function))"
            ) from None
        except TypeError:
            raise TypeError("type tags must be hashable") from None

    __getitem__ = lookup

    def default(self, tag, /):
        """Return the type-level default for the tag, or None when it has none."""
        try:
            supplier = self._table[tag].default
        except KeyError:
            raise UnregisteredTypeError(
                "type %s does not have an associated handler" % _describe(tag),
                type=tag,
                hint="register a handler for it before parsing (registry.register(type, function))"
            ) from None
        return supplier() if supplier is not Unset else None

    def all(self):
        """Return every registered tag, sorted by name."""
        return sorted(self._table, key=_describe)

    @property
    def registered(self):
        return self.all()

    def copy(self):
        return type(self)(self._table)

    def __contains__(self, tag, /):
        try:
            return tag in self._table
        except TypeError:
            return False

    def __iter__(self):
        for tag, entry in self._table.items():
            yield tag, entry.function

    def __len__(self):
        return len(self._table)

    def __repr__(self):
        return "type-registry(%s)" % ", ".join(map(_describe, self.all()))


def _describe(tag):
    return getattr(tag, "__qualname__", None) or repr(tag)


def _uri(string):
    result = urlsplit(string)
    if not result.scheme and not result.path and not result.netloc:
        raise ValueError("%r is not a valid uri" % string)
    # validates the port component (raises ValueError when out of range)
    result.port  # NOQA: B-018
    return result


registry = TypeRegistry()
"""Process-wide registry with the built-in handlers."""

registry.register(str, str, default=str)
registry.register(int, int)
registry.register(float, float)
registry.register(fractions.Fraction, fractions.Fraction)
registry.register(complex, complex)
registry.register(decimal.Decimal, decimal.Decimal)
registry.register(datetime.datetime, datetime.datetime.fromisoformat)
registry.register(datetime.date, datetime.date.fromisoformat)
registry.register(datetime.time, datetime.time.fromisoformat)
registry.register(Symbol, Symbol)
registry.register((pathlib.Path, pathlib.PurePath), pathlib.Path)
registry.register(URI, _uri)


__all__ = (
    # Types
    "TypeRegistry",
    "Entry",

    # Tags
    "Symbol",
    "URI",

    # Constants
    "registry",
)
