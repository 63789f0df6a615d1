"""
Switchboard parser: turns a raw argument list into a mapping of option values.

phases
- preprocess (runs even without options)
  • split combined short switches:  -abc           → -a -b -c
  • normalize inline parameters:    --switch=a,b   → --switch a b
                                    --switch=a,    → --switch a
                                    --switch=,b    → --switch '' b
                                    --switch=      → --switch
                                    --switch=-v    → left as is
  • drop None entries.
  • validate the whole input: required options present, options declared
    on_multiple="raise" given at most once.
- seed defaults: every option's key gets its default before matching.
- extract (one left-to-right pass)
  • each token is matched against every option (all matching options fire).
  • flags store True; other options read a parameter window bounded by their
    arity and stopped early by a switch, the argument separator or the end.
  • indices of matched switches and their parameters are only marked; the
    argument list is compacted once, after the pass.

tokens at or after the first argument separator ("--") are left untouched.

Example
    >>> tokens = ["-F", "log.txt", "--verbose", "arg1", "arg2"]
    >>> Parser(tokens, [Option("file", "-F", arity=(1, 0), required=True), Option("verbose")]).parse()
    {'file': 'log.txt', 'verbose': True}
    >>> tokens
    ['arg1', 'arg2']
"""
import shlex
import sys
from collections.abc import Iterable, MutableSequence

from .faults import *
from .options import *
from .patterns import *
from .types import registry as default_registry
from .utils import *


def _split_parameters(string):
    # trailing empty segments are dropped, leading and inner ones are kept
    parameters = string.split(",")
    while parameters and not parameters[-1]:
        parameters.pop()
    return parameters


def _listify(object):
    if object is None:
        return []
    if isinstance(object, list | tuple):
        return list(object)
    return [object]


class Parser:
    """
    Parse an argument list against an ordered collection of options.

    The argument list is mutated in place: recognized switches and their
    parameters are removed, everything else stays in its original order.
    Options earlier in the collection are matched first.

    A parser holds no state between calls; parse() may be called again after
    the argument list or options change.
    """

    def __init__(self, tokens, options=(), /, *, registry=default_registry):
        if not isinstance(tokens, MutableSequence) or isinstance(tokens, str):
            raise TypeError("Parser() tokens must be a mutable sequence of strings")
        if not isinstance(options, Iterable):
            raise TypeError("Parser() options must be an iterable of options")
        options = tuple(options)
        for option in options:
            if not isinstance(option, Option):
                raise TypeError("Parser() options must be an iterable of options")
        self.tokens = tokens
        self.options = options
        self.registry = registry

    def __repr__(self):
        return "parser(tokens=%r, options=%d)" % (self.tokens, len(self.options))

    def parse(self):
        """
        Preprocess the argument list, extract every option's value and remove
        what was consumed.

        Returns
        - dict mapping each option key to its parsed (or default) value.

        Raises
        - MissingRequiredOptionError, RepeatedOptionError: before any extraction.
        - WrongArgumentCountError: a matched option has too few parameters.
        - ConversionError, UnregisteredTypeError: a parameter cannot be converted.

        On failure nothing is removed from the argument list (it stays preprocessed).
        """
        self.preprocess()
        deleted = set()
        values = self._parse_values(deleted)
        self._delete(deleted)
        return values

    def preprocess(self):
        """Normalize the argument list in place and validate it; returns it."""
        self._split_multiple_short_switches()
        self._normalize_parameters()
        self._compact()
        self._check_for_errors()
        return self.tokens

    def _limit(self):
        # index of the first argument separator (or the length of the list)
        for index, token in enumerate(self.tokens):
            if is_separator(token):
                return index
        return len(self.tokens)

    def _split_multiple_short_switches(self):
        limit = self._limit()
        tokens = []
        for token in self.tokens[:limit]:
            if isinstance(token, str) and (match := MULTIPLE_SHORT_SWITCHES.fullmatch(token)):
                tokens.extend("-" + letter for letter in match["letters"])
            else:
                tokens.append(token)
        self.tokens[:limit] = tokens

    def _normalize_parameters(self):
        limit = self._limit()
        tokens = []
        for token in self.tokens[:limit]:
            if isinstance(token, str) and (match := SWITCH_PARAM_EQUALS.fullmatch(token)):
                parameters = _split_parameters(match["parameters"])
                # a parameter that reads as a switch or separator keeps the token whole
                if any(map(is_reserved, parameters)):
                    tokens.append(token)
                    continue
                tokens.append(match["switch"])
                tokens.extend(parameters)
            else:
                tokens.append(token)
        self.tokens[:limit] = tokens

    def _compact(self):
        for token in self.tokens:
            if token is not None and not isinstance(token, str):
                raise TypeError("Parser() tokens must be strings, not %s" % type(token).__name__)
        self.tokens[:] = [token for token in self.tokens if token is not None]

    def _check_for_errors(self):
        self._ensure_required_options_are_present()
        self._raise_on_multiple_options()

    def _ensure_required_options_are_present(self):
        tokens = self.tokens[:self._limit()]
        for option in self.options:
            if option.required and not any(map(option.matches, tokens)):
                raise MissingRequiredOptionError(
                    "required option %s was not given" % option.label,
                    option=option,
                    hint="add %s to the command line" % (
                        option.names[0] if option.names else "a %s argument" % option.label
                    )
                )

    def _raise_on_multiple_options(self):
        tokens = self.tokens[:self._limit()]
        for option in self.options:
            if option.on_multiple is not Multiplicity.RAISE:
                continue
            if (count := sum(map(option.matches, tokens))) > 1:
                raise RepeatedOptionError(
                    "option %s was given %d times but is allowed only once" % (option.label, count),
                    option=option,
                    count=count,
                    hint="keep a single occurrence of %s" % option.label
                )

    def _parse_values(self, deleted):
        values = {}
        for option in self.options:
            if option.key not in values:
                values[option.key] = option.resolve_default(self.registry)

        for index in range(self._limit()):
            # already consumed as a parameter of an earlier option
            if index in deleted:
                continue
            token = self.tokens[index]
            for option in self.options:
                if not option.matches(token):
                    continue
                if option.flag:
                    self._found_flag(option, values)
                    deleted.add(index)
                else:
                    parameters = self._extract_parameters(option, index)
                    deleted.update(range(index, index + len(parameters) + 1))
                    self._found_parameters(option, parameters, values)
        return values

    def _extract_parameters(self, option, index):
        """
        Read the parameters following the switch at the given index.

        Scanning stops at the end of the list, at another switch, at the
        argument separator, or once the option's arity total is reached.
        """
        arity = option.arity
        limit = self._limit()
        end = limit if arity.unlimited else min(limit, index + 1 + arity.total)
        parameters = []
        for token in self.tokens[index + 1:end]:
            if is_boundary(token):
                break
            parameters.append(token)

        if (found := len(parameters)) < arity.minimum:
            raise WrongArgumentCountError(
                "option %s at %s position takes %s but %d %s found" % (
                    option.label,
                    ordinal(index + 1),
                    _expectation(arity),
                    found,
                    "was" if found == 1 else "were"
                ),
                option=option,
                index=index,
                found=found,
                expected=option.arity,
                hint="give %s at least %s after the switch" % (option.label, _count(arity.minimum))
            )
        return parameters

    def _found_flag(self, option, values):
        if option.handler is not None:
            option.handler.invoke(values)
        else:
            values[option.key] = True

    def _found_parameters(self, option, parameters, values):
        parameters = option.convert_parameters(*parameters, registry=self.registry)
        if option.handler is not None:
            option.handler.invoke(values, parameters)
            return
        # an option given without parameters keeps its current value
        if not parameters:
            return
        value = parameters[0] if option.arity.total == 1 else parameters
        if option.accumulates:
            value = [*_listify(values.get(option.key)), *_listify(value)]
        values[option.key] = value

    def _delete(self, deleted):
        self.tokens[:] = [token for index, token in enumerate(self.tokens) if index not in deleted]


def _count(count, noun="parameter"):
    return "%d %s" % (count, noun if count == 1 else pluralize(noun))


def _expectation(arity):
    if arity.unlimited:
        return "at least " + _count(arity.minimum)
    if arity.optional == 0:
        return _count(arity.minimum)
    return "%d to %s" % (arity.minimum, _count(arity.total))


def parse(prompt=Unset, options=(), /, *, registry=default_registry):
    """
    Convenience front door around Parser.

    Parameters
    - prompt:
      • Unset: a copy of sys.argv[1:] is parsed.
      • str: split with shlex.split.
      • list: parsed (and mutated) in place.
      • other iterables of strings: copied into a list.
    - options: iterable of Option.
    - registry: TypeRegistry used to convert parameters.

    Returns
    - (values, leftovers): the parsed mapping and the remaining tokens.
    """
    if prompt is Unset:
        tokens = sys.argv[1:]
    elif isinstance(prompt, str):
        tokens = shlex.split(prompt)
    elif isinstance(prompt, list):
        tokens = prompt
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
    else:
        raise TypeError("parse() prompt must be a string or an iterable of strings")

    values = Parser(tokens, options, registry=registry).parse()
    return values, tokens


__all__ = (
    "Parser",
    "parse",
)
