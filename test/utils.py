"""
Tests for the utilities shared by every posixargs layer.

This module verifies:
- The Unset sentinel (singleton identity, falsy semantics, finality).
- coalesce(), rename(), mirror(), pluralize(), quote() and duplicates().
- ValueType value objects (read-only fields, structural equality, repr, match).
"""
import copy
import unittest
from unittest import TestCase

from posixargs.utils import *


class Point(metaclass=ValueType):
    __introspectable__ = ("x", "tags")

    def __init__(self, x, tags=()):
        self._x = x
        self._tags = list(tags)


class TestUnset(TestCase):
    """Test suite for the `Unset` sentinel."""

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testUnionWithType(self) -> None:
        """
        `str | Unset` builds a union usable with isinstance().
        """
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class TestHelpers(TestCase):
    """Behavioral tests for the small helper functions."""

    def testCoalesceReplacesUnsetOnly(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))

    def testRename(self):
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            rename(42)

    def testRenameRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename("name")(42)

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testPluralize(self):
        self.assertEqual(pluralize("argument"), "arguments")
        self.assertEqual(pluralize("entry"), "entries")
        self.assertEqual(pluralize("box"), "boxes")
        self.assertEqual(pluralize("command option"), "command options")
        self.assertEqual(pluralize("Value"), "Values")

    def testQuoteEscapes(self):
        self.assertEqual(quote("tab"), '"tab"')
        self.assertEqual(quote('say "hi"'), '"say \\"hi\\""')

    def testDuplicatesYieldsPairsInOrder(self):
        self.assertEqual(list(duplicates(["a", "b", "a", "b"])), [(0, 2, "a"), (1, 3, "b")])
        self.assertEqual(list(duplicates(["a", "b"])), [])

    def testDuplicatesWithKey(self):
        pairs = duplicates(["a", "A"], key=lambda a, b: a.lower() == b.lower())
        self.assertEqual(list(pairs), [(0, 1, "a")])


class TestValueType(TestCase):
    """Behavioral tests for ValueType value objects."""

    def testFieldsAreReadOnly(self):
        point = Point(1)
        with self.assertRaises(AttributeError):
            point.x = 2

    def testSequenceFieldsAreFrozen(self):
        self.assertEqual(Point(1, ["a"]).tags, ("a",))

    def testStructuralEquality(self):
        self.assertEqual(Point(1, ["a"]), Point(1, ("a",)))
        self.assertNotEqual(Point(1), Point(2))
        self.assertEqual(hash(Point(1, ["a"])), hash(Point(1, ["a"])))
        self.assertEqual(len({Point(1), Point(1)}), 1)

    def testEqualityRequiresSameType(self):
        class OtherPoint(metaclass=ValueType):
            __introspectable__ = ("x", "tags")

            def __init__(self, x):
                self._x = x
                self._tags = ()

        self.assertNotEqual(Point(1), OtherPoint(1))

    def testRepr(self):
        self.assertEqual(repr(Point(1)), "Point(x=1, tags=())")

    def testMatchArgs(self):
        match Point(1, ["a"]):
            case Point(x, tags):
                self.assertEqual((x, tags), (1, ("a",)))
            case _:
                self.fail("Point did not match positionally")

    def testTypename(self):
        self.assertEqual(Point.__typename__, "point")


if __name__ == '__main__':
    unittest.main()
