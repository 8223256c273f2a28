"""
Tests for the shared helpers.

This module verifies:
- The `Unset` sentinel (singleton identity, falsiness, finality).
- coalesce() replacing only the sentinel.
- rename() in both call forms.
- mirror() exposing read-only views.
- ordinal() labels used by fault messages.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from runfile.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), rename(), mirror() and ordinal().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))

    def testRename(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")

        @rename("decorated")
        def other():
            pass

        self.assertEqual(other.__qualname__, "decorated")

        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testMirror(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._tags = {"x"}

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testOrdinal(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(112), "112th")


if __name__ == "__main__":
    unittest.main()
