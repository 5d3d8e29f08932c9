"""
Utilities behavioral tests (Unset, coalesce, rename, mirror, ordinal, records).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import importlib.util
import unittest
from unittest import TestCase

from cali.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal, RecordType


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsey(self):
        self.assertFalse(Unset)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self):
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType):  # NOQA: F-841
                pass


class TestHelpers(TestCase):
    """Behavioral tests for coalesce, rename and mirror."""

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertIsNone(coalesce(Unset))

    def testRenameFunctionForm(self):
        def work():
            pass

        rename(work, "do_work")
        self.assertEqual((work.__name__, work.__qualname__), ("do_work", "do_work"))

    def testRenameDecoratorForm(self):
        @rename("do_work")
        def work():
            pass

        self.assertEqual(work.__name__, "do_work")

    def testRenameArity(self):
        with self.assertRaises(TypeError):
            rename()

    def testMirrorIsReadOnlyCopy(self):
        class Box:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        box = Box()
        self.assertEqual(box.items, (1, 2))
        with self.assertRaises(AttributeError):
            box.items = ()  # NOQA: read-only on purpose


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal()."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(24), "24th")

    def testTeens(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(112), "112th")


class TestRecordType(TestCase):
    """Behavioral tests for the RecordType metaclass."""

    def setUp(self) -> None:
        class PointRecord(metaclass=RecordType):
            __introspectable__ = ("x", "y", "label")
            __comparable__ = ("x", "y")

            def __new__(cls, x, y, label=""):
                self = super().__new__(cls)
                self._x, self._y, self._label = x, y, label
                return self

        self.PointRecord = PointRecord

    def testTypename(self):
        self.assertEqual(self.PointRecord.__typename__, "point-record")

    def testRepr(self):
        self.assertEqual(repr(self.PointRecord(1, 2, "a")), "point-record(x=1, y=2, label='a')")

    def testComparableFieldsOnly(self):
        self.assertEqual(self.PointRecord(1, 2, "a"), self.PointRecord(1, 2, "b"))
        self.assertNotEqual(self.PointRecord(1, 2), self.PointRecord(2, 1))
        self.assertEqual(hash(self.PointRecord(1, 2, "a")), hash(self.PointRecord(1, 2, "b")))

    def testReadOnlyFields(self):
        with self.assertRaises(AttributeError):
            self.PointRecord(1, 2).x = 3

    def testUnsealedByDefault(self):
        class Child(self.PointRecord):
            pass

        self.assertEqual(Child.__typename__, "child")


class TestPackageImport(TestCase):
    """The utilities module and the package import cleanly."""

    def testUtilsExecutesStandalone(self):
        spec = importlib.util.find_spec("cali.utils")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        self.assertIs(module.RecordType.__displayable__, module.Unset)
        self.assertIs(module.RecordType.__comparable__, module.Unset)

    def testPackageExportsParser(self):
        cali = importlib.import_module("cali")
        self.assertTrue(callable(cali.ArgumentParser))
        self.assertIs(cali.utils.Unset, Unset)


if __name__ == "__main__":
    unittest.main()
