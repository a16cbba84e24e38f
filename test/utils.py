"""
Utilities module behavioral tests (Unset, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from terranaut.utils import Unset, UnsetType, coalesce, rename, mirror


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy([Unset])[0], Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("name", Unset | str))
        self.assertFalse(isinstance(None, str | Unset))

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testDirectForm(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecoratorForm(self):
        @rename("__repr__")
        def function():
            pass
        self.assertEqual(function.__name__, "__repr__")

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(42, "named")
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):
    """Behavioral tests for mirror()."""

    def setUp(self):
        class Holder:
            flags = mirror("flags")
            name = mirror("name")

            def __init__(self):
                self._flags = {"targets": ["module.a"]}
                self._name = "holder"

        self.holder = Holder()

    def testContainersAreCopied(self):
        flags = self.holder.flags
        flags["targets"].append("module.b")
        self.assertEqual(self.holder.flags, {"targets": ["module.a"]})

    def testScalarsReturnedAsIs(self):
        self.assertEqual(self.holder.name, "holder")

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            self.holder.name = "other"


if __name__ == "__main__":
    unittest.main()
