"""
Type registry behavioral tests.

Scope
- Validate registration forms (function, decorator, several tags, overwrite).
- Validate lookup failures (UnregisteredTypeError) and type-level defaults.
- Validate every built-in handler, including rejection of malformed input.

Conventions
- Test method names follow CamelCase per project convention.
- Custom registrations happen on private TypeRegistry instances or on
  copies, never on the process-wide registry.
"""

from __future__ import annotations

import datetime
import decimal
import fractions
import pathlib
import unittest
from unittest import TestCase

from switchboard import TypeRegistry, UnregisteredTypeError, registry, Symbol, URI, FaultCode


class Version(tuple):
    pass


class TestTypeRegistry(TestCase):
    """Behavioral tests for TypeRegistry instances."""

    def setUp(self):
        self.registry = TypeRegistry()

    def testRegisterFunctionForm(self):
        function = self.registry.register(Version, lambda string: Version(map(int, string.split("."))))
        self.assertTrue(callable(function))
        self.assertIn(Version, self.registry)
        self.assertEqual(self.registry.lookup(Version)("1.2.3"), (1, 2, 3))

    def testRegisterDecoratorForm(self):
        @self.registry.register(Version)
        def parse_version(string):
            return Version(map(int, string.split(".")))

        self.assertIs(self.registry[Version], parse_version)
        self.assertEqual(parse_version("4.5"), (4, 5))

    def testRegisterSeveralTags(self):
        self.registry.register((int, float), float)
        self.assertIs(self.registry.lookup(int), float)
        self.assertIs(self.registry.lookup(float), float)

    def testLastRegistrationWins(self):
        self.registry.register(int, int)
        self.registry.register(int, lambda string: int(string, 16))
        self.assertEqual(self.registry.lookup(int)("ff"), 255)

    def testRegisterRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            self.registry.register(int, 42)
        with self.assertRaises(TypeError):
            self.registry.register(int, int, default=0)

    def testRegisterRejectsEmptyTags(self):
        with self.assertRaises(ValueError):
            self.registry.register((), int)

    def testLookupUnregistered(self):
        with self.assertRaises(UnregisteredTypeError) as context:
            self.registry.lookup(Version)
        self.assertIs(context.exception.type, Version)
        self.assertEqual(context.exception.options["code"], FaultCode.UNREGISTERED_TYPE)
        self.assertIsInstance(context.exception, LookupError)

    def testDefaults(self):
        self.registry.register(str, str, default=str)
        self.registry.register(int, int)
        self.assertEqual(self.registry.default(str), "")
        self.assertIsNone(self.registry.default(int))
        with self.assertRaises(UnregisteredTypeError):
            self.registry.default(Version)

    def testIntrospection(self):
        self.registry.register((int, float), float)
        self.assertEqual(self.registry.all(), [float, int])
        self.assertEqual(self.registry.registered, [float, int])
        self.assertEqual(dict(self.registry), {int: float, float: float})
        self.assertEqual(len(self.registry), 2)

    def testCopyIsIndependent(self):
        self.registry.register(int, int)
        copied = self.registry.copy()
        copied.register(Version, Version)
        self.assertIn(Version, copied)
        self.assertNotIn(Version, self.registry)

    def testUnhashableTagsAreNotContained(self):
        self.assertNotIn([], self.registry)


class TestBuiltinHandlers(TestCase):
    """Behavioral tests for the handlers registered at import time."""

    def testString(self):
        self.assertEqual(registry.lookup(str)("text"), "text")
        self.assertEqual(registry.default(str), "")

    def testNumbers(self):
        self.assertEqual(registry.lookup(int)("42"), 42)
        self.assertEqual(registry.lookup(float)("2.5"), 2.5)
        self.assertEqual(registry.lookup(fractions.Fraction)("3/4"), fractions.Fraction(3, 4))
        self.assertEqual(registry.lookup(complex)("1+2j"), complex(1, 2))
        self.assertEqual(registry.lookup(decimal.Decimal)("0.1"), decimal.Decimal("0.1"))

    def testMalformedNumbersRaise(self):
        with self.assertRaises(ValueError):
            registry.lookup(int)("4x2")
        with self.assertRaises(ArithmeticError):
            registry.lookup(decimal.Decimal)("abc")

    def testCalendar(self):
        self.assertEqual(registry.lookup(datetime.date)("2024-02-29"), datetime.date(2024, 2, 29))
        self.assertEqual(
            registry.lookup(datetime.datetime)("2024-02-29T10:30:00"),
            datetime.datetime(2024, 2, 29, 10, 30)
        )
        self.assertEqual(registry.lookup(datetime.time)("10:30"), datetime.time(10, 30))
        with self.assertRaises(ValueError):
            registry.lookup(datetime.date)("2023-02-29")

    def testSymbolIsInterned(self):
        first = registry.lookup(Symbol)("".join(["na", "me"]))
        second = registry.lookup(Symbol)("name")
        self.assertIsInstance(first, Symbol)
        self.assertEqual(first, "name")
        self.assertIs(first, second)

    def testPathDoesNotTouchFilesystem(self):
        path = registry.lookup(pathlib.Path)("does/not/exist.txt")
        self.assertEqual(path, pathlib.Path("does/not/exist.txt"))
        self.assertIs(registry.lookup(pathlib.PurePath), registry.lookup(pathlib.Path))

    def testUri(self):
        uri = registry.lookup(URI)("https://example.org:8080/path?q=1")
        self.assertEqual(uri.scheme, "https")
        self.assertEqual(uri.hostname, "example.org")
        self.assertEqual(uri.port, 8080)
        self.assertIsNone(registry.default(URI))

    def testMalformedUriRaises(self):
        with self.assertRaises(ValueError):
            registry.lookup(URI)("http://[::1")
        with self.assertRaises(ValueError):
            registry.lookup(URI)("http://example.org:99999")
        with self.assertRaises(ValueError):
            registry.lookup(URI)("")


if __name__ == "__main__":
    unittest.main()
