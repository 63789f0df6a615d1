r"""
Switchboard option definitions.

Overview
- Option: an immutable description of one command line option: the key its
  value is stored under, the switches that select it, its parameter type and
  arity, its default, whether it is required, what happens when it is given
  more than once, and an optional custom handler.
- Multiplicity: the repetition policy (overwrite, append, collect, raise).
- Handler: explicit wrapper around a custom handler function.
- option(): shape-classifying factory mirroring the free-form declaration style:
    option("file", "-F", "--file", "log file", {"arity": (1, 0), "required": True})

Metadata (sanitized on construction)
- key: any hashable value; used as the key of the parsed values mapping.
- names: switches like "-x" or "--long-name"; unique. When none are given the
  option gets "--<key>" (underscores become hyphens). positional=True instead
  gives an option with no names that matches every bare token.
- description: Unset | str | Text, non-empty when provided (None otherwise).
- type: registry tag used to convert raw parameters (defaults to str).
- arity: Arity, int or (minimum, optional) pair; flags when omitted.
- default: any value; when omitted the registry decides (see resolve_default).
- required: bool.
- on_multiple: Multiplicity or its string value.
- handler: callable or Handler; replaces the default value assignment.

Example
    >>> verbose = Option("verbose", "-v")
    >>> verbose.flag, verbose.names
    (True, ('-v',))
"""
import builtins
from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import final

from rich.text import Text

from .arity import *
from .faults import *
from .patterns import *
from .types import registry as default_registry
from .utils import *


class Multiplicity(StrEnum):
    """What happens when an option is matched more than once in one parse."""
    OVERWRITE = "overwrite"
    APPEND = "append"
    COLLECT = "collect"
    RAISE = "raise"


@final
class Handler:
    """
    Custom handler of an option.

    When an option has a handler, the parser hands it the values mapping
    (and the converted parameters, unless the option is a flag) instead of
    storing anything itself.
    """
    __slots__ = ("_function",)

    def __init__(self, function, /):
        if isinstance(function, Handler):
            function = function.function
        if not callable(function):
            raise TypeError("handler must be callable")
        self._function = function

    @property
    def function(self):
        return self._function

    def invoke(self, values, parameters=Unset, /):
        if parameters is Unset:
            return self._function(values)
        return self._function(values, parameters)

    def __eq__(self, other, /):
        if not isinstance(other, Handler):
            return NotImplemented
        return self._function == other._function

    def __hash__(self):
        return hash(self._function)

    def __repr__(self):
        return "handler(%s)" % getattr(self._function, "__qualname__", repr(self._function))


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize option metadata in place.

    Raises
    - TypeError: wrong kinds of values (unhashable key/type, non-string names,
      non-callable handler, names on a positional option...).
    - ValueError: well-typed but invalid values (malformed or duplicated names,
      empty description, unknown multiplicity).
    """
    try:
        hash(metadata["key"])
    except TypeError:
        raise TypeError("option key must be hashable") from None

    names = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError("option names must be strings")
        elif not SWITCH.fullmatch(name):
            raise ValueError("option name %r must look like '-x' or '--long-name'" % name)
        elif name in names:
            raise ValueError("option names cannot contain duplicates")
        names.append(name)

    if metadata["positional"]:
        if names:
            raise TypeError("positional option cannot specify names")
    elif not names:
        # derive the switch from the key: "dry_run" -> "--dry-run"
        derived = "--" + str(metadata["key"]).replace("_", "-")
        if not LONG_SWITCH.fullmatch(derived):
            raise ValueError(
                "cannot derive a switch from key %r; give names explicitly or use positional=True" % (metadata["key"],)
            )
        names.append(derived)
    metadata["names"] = tuple(names)

    if not isinstance(description := metadata["description"], str | Text | Unset):
        raise TypeError("option 'description' must be a string")
    elif isinstance(description, str) and not (description := description.strip()):
        raise ValueError("option 'description' cannot be empty")
    metadata["description"] = coalesce(description)

    try:
        hash(metadata["type"])
    except TypeError:
        raise TypeError("option 'type' must be hashable") from None

    metadata["arity"] = FLAG if metadata["arity"] is Unset else Arity.coerce(metadata["arity"])

    if not isinstance(metadata["required"], bool):
        raise TypeError("option 'required' must be a boolean")

    try:
        metadata["on_multiple"] = Multiplicity(metadata["on_multiple"])
    except ValueError:
        raise ValueError(
            "option 'on_multiple' must be one of %s" % ", ".join(map(repr, map(str, Multiplicity)))
        ) from None

    match handler := metadata["handler"]:
        case UnsetType() | None:
            metadata["handler"] = None
        case Handler():
            pass
        case _ if callable(handler):
            metadata["handler"] = Handler(handler)
        case _:
            raise TypeError("option 'handler' must be callable")


class Option(StorageGuard):
    """
    Immutable definition of a single command line option.

    Properties
    - key, names, description, type, arity, required, on_multiple, handler,
      positional: sanitized metadata (read-only).
    - default: explicit default, or the one resolve_default() computes.
    - flag: the option takes no parameters.
    - accumulates: repeated matches are concatenated (append/collect).
    """

    __introspectable__ = (
        "key",
        "names",
        "description",
        "type",
        "arity",
        "default",
        "required",
        "on_multiple",
        "handler",
        "positional",
    )

    key = view("key")
    names = view("names")
    description = view("description")
    type = view("type")
    arity = view("arity")
    required = view("required")
    on_multiple = view("on_multiple")
    handler = view("handler")
    positional = view("positional")

    def __new__(
            cls,
            key,
            /,
            *names,
            description=Unset,
            type=str,
            arity=Unset,
            default=Unset,
            required=False,
            on_multiple=Multiplicity.OVERWRITE,
            handler=Unset,
            positional=False
    ):
        metadata = {
            "key": key,
            "names": names,
            "description": description,
            "type": type,
            "arity": arity,
            "default": default,
            "required": required,
            "on_multiple": on_multiple,
            "handler": handler,
            "positional": bool(positional),
        }
        _sanitize_metadata(cls, metadata)

        with super().__new__(cls) as self:
            for name, object in metadata.items():
                setattr(self, "-" + name, object)
        return self

    @property
    def flag(self):
        return self.arity.zero

    @property
    def accumulates(self):
        return self.on_multiple in (Multiplicity.APPEND, Multiplicity.COLLECT)

    @property
    def default(self):
        return self.resolve_default()

    @property
    def explicit_default(self):
        """The default given at construction, or Unset."""
        return object.__getattribute__(self, "-default")

    def resolve_default(self, registry=default_registry, /):
        """
        Return the value seeded into the parsed values before matching.

        Order of precedence
        - the explicit default, when one was given (plain lists, dicts and
          sets are shallow-copied so each parse starts from the declared items);
        - False for flags;
        - an empty list for accumulating options;
        - the registry's default for the option's type (None when it has none).
        """
        if (default := self.explicit_default) is not Unset:
            if type(default) in (list, dict, set):
                return type(default)(default)
            return default
        if self.flag:
            return False
        if self.accumulates:
            return []
        return registry.default(self.type)

    def matches(self, token, /):
        """
        Return True when the token selects this option.

        Named options match their switches exactly; positional options match
        any bare token (neither a switch nor the argument separator).
        """
        if not isinstance(token, str):
            return False
        if self.positional:
            return not is_switch(token) and not is_separator(token)
        return token in object.__getattribute__(self, "-names")

    def convert_parameters(self, *strings, registry=default_registry):
        """
        Convert raw parameters with the type's registered function, in order.

        Raises
        - UnregisteredTypeError: the option's type has no handler.
        - ConversionError: the handler rejected one of the strings.
        """
        function = registry.lookup(self.type)
        converted = []
        for string in strings:
            try:
                converted.append(function(string))
            except (ValueError, TypeError, ArithmeticError) as exception:
                raise ConversionError(
                    "invalid %s parameter %r for option %s" % (
                        getattr(self.type, "__qualname__", repr(self.type)), string, self.label
                    ),
                    option=self,
                    token=string,
                    type=self.type,
                    hint="check the value given to %s" % self.label
                ) from exception
        return converted

    @property
    def label(self):
        """Human-readable name used in fault messages."""
        if self.positional:
            return "<%s>" % (self.key,)
        return " | ".join(map(repr, self.names))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            # the resolved default may need a registry lookup; show what was declared
            yield name, self.explicit_default if name == "default" else getattr(self, name)

    def __repr__(self):
        return "option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


def option(key, /, *shapes):
    """
    Build an Option by classifying each argument by its shape.

    Shapes (order does not matter)
    - a string starting with "-": a switch name.
    - any other string: the description (at most one).
    - a list/tuple: flattened, each element classified the same way.
    - a class: the type.
    - a mapping: configuration; recognized keys are arity, default,
      required, on_multiple, positional and type.
    - any other callable: the custom handler.

    Example
        >>> option("file", "-F", {"arity": (1, 0), "required": True}).arity
        arity(minimum=1, optional=0)
    """
    names = []
    fields = {}

    def assign(field, value):
        if field in fields:
            raise TypeError("option() got more than one %s" % field)
        fields[field] = value

    def classify(shape):
        match shape:
            case str() if shape.startswith("-"):
                names.append(shape)
            case str() | Text():
                assign("description", shape)
            case builtins.type():
                assign("type", shape)
            case Mapping():
                if unknown := set(shape) - {"arity", "default", "required", "on_multiple", "positional", "type"}:
                    raise TypeError("option() got unknown configuration %s" % ", ".join(sorted(map(repr, unknown))))
                for field, value in shape.items():
                    assign(field, value)
            case Sequence():
                for item in shape:
                    classify(item)
            case Handler():
                assign("handler", shape)
            case _ if callable(shape):
                assign("handler", shape)
            case _:
                raise TypeError("option() cannot classify argument %r" % (shape,))

    for shape in shapes:
        classify(shape)

    return Option(key, *names, **fields)


__all__ = (
    # Classes
    "Option",
    "Multiplicity",
    "Handler",

    # Factories
    "option",
)
