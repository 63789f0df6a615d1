"""
Tests for the internal helpers shared across the package.

This module verifies:
- The Unset sentinel (singleton identity, falsy semantics, copying, pickling, finality).
- coalesce() only replacing Unset.
- StorageGuard write-once backing storage and view() read-only properties.
- pluralize() and ordinal() wording used in fault messages.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from switchboard.utils import *


class Record(StorageGuard):
    items = view("items")
    table = view("table")

    def __new__(cls, items, table):
        with super().__new__(cls) as self:
            setattr(self, "-items", items)
            setattr(self, "-table", table)
        return self


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the module singleton on every call.
        """
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPickle(self) -> None:
        """
        Copies and pickled round-trips resolve back to the singleton.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnions(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(None, str | Unset)

    def testFinal(self) -> None:
        """
        The sentinel type cannot be subclassed.
        """
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class StorageGuardTest(TestCase):
    """
    Test suite for write-once backing storage.
    """

    def testViewsConvertContainers(self) -> None:
        record = Record(["a", "b"], {"key": "value"})
        self.assertEqual(record.items, ("a", "b"))
        self.assertIsInstance(record.table, MappingProxyType)

    def testBackingStorageIsHidden(self) -> None:
        record = Record([], {})
        with self.assertRaises(AttributeError):
            getattr(record, "-items")

    def testBackingStorageIsReadOnly(self) -> None:
        record = Record([], {})
        with self.assertRaises(AttributeError):
            setattr(record, "-items", ["changed"])
        with self.assertRaises(AttributeError):
            del record.items
        self.assertEqual(record.items, ())


class WordingTest(TestCase):

    def testPluralize(self) -> None:
        self.assertEqual(pluralize("parameter"), "parameters")
        self.assertEqual(pluralize("switch"), "switches")
        self.assertEqual(pluralize("required option"), "required options")
        self.assertEqual(pluralize("Entry"), "Entries")

    def testOrdinal(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(112), "112th")


if __name__ == "__main__":
    unittest.main()
