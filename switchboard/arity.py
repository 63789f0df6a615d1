"""
Switchboard arity (parameter-count contract of an option).

An Arity is the pair (minimum, optional):
- minimum: how many parameters an option must take (non-negative).
- optional: how many more it may take; a negative value means "as many as
  the command line provides" (unbounded).

Arity is an immutable tuple, so equality, hashing and ordering are those of
the pair, and it compares equal to a plain tuple:

    >>> Arity(1, 3) == (1, 3)
    True
    >>> str(Arity(1, -1))
    '1 +∞'
"""
import operator


class Arity(tuple):
    """
    Immutable (minimum, optional) parameter counts.

    Predicates
    - only(n):  bounded, no optional slots and exactly n mandatory ones.
    - zero:     only(0), i.e. the option is a flag (alias: none).
    - unlimited: optional < 0.
    - bound:    not unlimited.

    Values
    - total: minimum + optional when bound, None otherwise.
    """
    __slots__ = ()

    def __new__(cls, minimum=0, optional=0, /):
        if isinstance(minimum, bool) or not isinstance(minimum, int):
            raise TypeError("arity 'minimum' must be an integer")
        if isinstance(optional, bool) or not isinstance(optional, int):
            raise TypeError("arity 'optional' must be an integer")
        if minimum < 0:
            raise ValueError("arity 'minimum' cannot be negative")
        return super().__new__(cls, (minimum, optional))

    minimum = property(operator.itemgetter(0), doc="The number of mandatory parameters.")
    optional = property(operator.itemgetter(1), doc="The number of optional parameters (negative if unbounded).")
    required = minimum

    @classmethod
    def coerce(cls, object, /):
        """
        Build an Arity from an Arity, an int n (meaning exactly n) or a
        (minimum, optional) pair.
        """
        match object:
            case Arity():
                return object
            case bool():
                raise TypeError("arity must be an Arity, an integer or a (minimum, optional) pair")
            case int():
                return cls(object)
            case (minimum, optional):
                return cls(minimum, optional)
            case _:
                raise TypeError("arity must be an Arity, an integer or a (minimum, optional) pair")

    def only(self, n, /):
        return self.bound and self.optional == 0 and self.minimum == n

    @property
    def zero(self):
        return self.only(0)

    none = zero

    @property
    def unlimited(self):
        return self.optional < 0

    @property
    def bound(self):
        return not self.unlimited

    @property
    def total(self):
        return self.minimum + self.optional if self.bound else None

    def __str__(self):
        return "%d +%s" % (self.minimum, "∞" if self.unlimited else self.optional)

    def __repr__(self):
        return "arity(minimum=%r, optional=%r)" % self

    def __getnewargs__(self):
        return tuple(self)


FLAG = Arity()
"""The zero arity: options with it take no parameters."""


__all__ = (
    "Arity",
    "FLAG",
)
