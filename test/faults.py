"""
Fault behavioral tests.

Scope
- Validate the fault hierarchy (codes, titles, domain context, builtin bases).
- Validate rich rendering, including host overrides read from __main__.
- Validate report() printing and exiting.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with a Console writing to an in-memory buffer.
"""

from __future__ import annotations

import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from switchboard import (
    ConversionError,
    FaultCode,
    MissingRequiredOptionError,
    Option,
    Parser,
    ParserError,
    WrongArgumentCountError,
    report,
)
from switchboard import faults


def capture(renderable):
    console = Console(file=io.StringIO(), width=160, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def missing_file():
    try:
        Parser(["-v"], [Option("file", "-F", arity=1, required=True)]).parse()
    except MissingRequiredOptionError as error:
        return error
    raise AssertionError("the parse was expected to fail")


class TestFaultHierarchy(TestCase):
    """Codes, titles and context carried by faults."""

    def testCodes(self):
        self.assertEqual(FaultCode.MISSING_REQUIRED_OPTION, 21101)
        self.assertEqual(FaultCode.REPEATED_OPTION, 21102)
        self.assertEqual(FaultCode.WRONG_ARGUMENT_COUNT, 21201)
        self.assertEqual(FaultCode.CONVERSION_FAILURE, 21202)
        self.assertEqual(FaultCode.UNREGISTERED_TYPE, 21301)

    def testNormalize(self):
        self.assertEqual(FaultCode.REPEATED_OPTION.normalize(), "21102")
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__codes__", {FaultCode.REPEATED_OPTION: "E-REPEAT"}, create=True):
            self.assertEqual(FaultCode.REPEATED_OPTION.normalize(), "E-REPEAT")
            self.assertEqual(FaultCode.MISSING_REQUIRED_OPTION.normalize(), "21101")

    def testOptions(self):
        error = missing_file()
        self.assertIsInstance(error, ParserError)
        self.assertEqual(error.options["title"], "missing required option")
        self.assertEqual(error.options["code"], FaultCode.MISSING_REQUIRED_OPTION)
        self.assertTrue(error.options["hint"])
        self.assertEqual(error.option.key, "file")
        self.assertEqual(str(error), error.message)
        with self.assertRaises(TypeError):
            error.options["hint"] = "changed"

    def testBuiltinBases(self):
        self.assertTrue(issubclass(ConversionError, ValueError))
        self.assertTrue(issubclass(faults.UnregisteredTypeError, LookupError))

    def testMessageMustBeAString(self):
        with self.assertRaises(TypeError):
            ParserError(42)

    def testReplace(self):
        try:
            Option("level", "-l", type=int, arity=1).convert_parameters("high")
        except ConversionError as error:
            replica = error.__replace__(fancy=True)
        self.assertIsInstance(replica, ConversionError)
        self.assertTrue(replica.options["fancy"])
        self.assertEqual(replica.token, "high")
        self.assertIsInstance(replica.__cause__, ValueError)

    def testWrongArgumentCountContext(self):
        error = WrongArgumentCountError("too few", found=1, expected=(2, 0))
        self.assertEqual(error.found, 1)
        self.assertEqual(error.expected, (2, 0))
        self.assertEqual(error.options["code"], FaultCode.WRONG_ARGUMENT_COUNT)


class TestFaultRendering(TestCase):
    """Rendering through rich."""

    def testPlainRendering(self):
        output = capture(missing_file())
        self.assertIn("[ switchboard — 21101 | Missing Required Option ]", output)
        self.assertIn("required option '-F' was not given", output)
        self.assertIn("→ add -F to the command line", output)

    def testFancyRendering(self):
        output = capture(missing_file().__replace__(fancy=True))
        self.assertIn("Missing Required Option", output)
        self.assertIn("╭", output)

    def testHostProgramName(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__prog__", "tool", create=True):
            output = capture(missing_file())
        self.assertIn("[ tool — 21101", output)

    def testUncodedFault(self):
        self.assertIn("[ switchboard — - | Parse Error ]", capture(ParserError("something failed")))


class TestReport(TestCase):
    """Printing faults to the standard error console."""

    def setUp(self):
        self.console = Console(file=io.StringIO(), width=160, color_system=None)
        patcher = mock.patch.object(faults, "console", self.console)
        patcher.start()
        self.addCleanup(patcher.stop)

    def testPrints(self):
        report(missing_file(), colorful=False)
        self.assertIn("Missing Required Option", self.console.file.getvalue())

    def testExits(self):
        with self.assertRaises(SystemExit) as context:
            report(missing_file(), exit=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("21101", self.console.file.getvalue())

    def testRejectsOtherExceptions(self):
        with self.assertRaises(TypeError):
            report(ValueError("not a parser error"))


if __name__ == "__main__":
    unittest.main()
