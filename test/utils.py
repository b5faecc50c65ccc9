"""
Tests for the internal helpers.

This module verifies semantic guarantees of the `Unset` sentinel and of the
small helpers built around it:
- Singleton identity, falsy semantics and representation of `Unset`.
- Copying, deep copying and pickling preserve identity.
- Finality (type cannot be subclassed) and PEP 604 unions.
- coalesce/rename/mirror/pluralize contracts.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from rich.console import Console

from lineargs.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(self.unset, UnsetType())
        self.assertIs(self.unset, Unset)

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")
        self.assertEqual(str(Unset), "Unset")

    def testRichConsolePrint(self) -> None:
        """
        Console.print(...) renders 'Unset' without ANSI when color is disabled.
        """
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(Unset)
        self.assertEqual(capture.get().strip(), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(copy.deepcopy([Unset])[0], Unset)

    def testPicklePreservesIdentity(self) -> None:
        for protocol in range(pickle.HIGHEST_PROTOCOL + 1):
            with self.subTest(protocol=protocol):
                self.assertIs(pickle.loads(pickle.dumps(Unset, protocol=protocol)), Unset)

    def testFinal(self) -> None:
        """
        The sentinel type cannot be subclassed.
        """
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass

    def testUnion(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", Unset | str)
        self.assertNotIsInstance(5, str | Unset)


class HelpersTest(TestCase):
    """
    Test suite for coalesce, rename, mirror and pluralize.
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(None, "fallback"))

    def testRenameDirect(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecorator(self) -> None:
        @rename("decorated")
        def function():
            pass

        self.assertEqual(function.__name__, "decorated")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(5, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 5)
        with self.assertRaises(TypeError):
            rename(5)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            mapping = mirror("mapping")
            members = mirror("members")
            label = mirror("label")

            def __init__(self):
                self._items = [1, 2]
                self._mapping = {"a": 1}
                self._members = {1}
                self._label = "label"

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.mapping, MappingProxyType)
        self.assertEqual(holder.members, frozenset({1}))
        self.assertEqual(holder.label, "label")
        self.assertEqual(Holder.items.fget.__name__, "items")
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testMirrorRequiresString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(5)

    def testPluralize(self) -> None:
        self.assertEqual(pluralize("value", 1), "value")
        self.assertEqual(pluralize("value", 2), "values")
        self.assertEqual(pluralize("value", 0), "values")
        self.assertEqual(pluralize("choice", 3), "choices")
        self.assertEqual(pluralize("match", 2), "matches")
        self.assertEqual(pluralize("entry", 2), "entries")
        self.assertEqual(pluralize("day", 2), "days")


if __name__ == "__main__":
    unittest.main()
