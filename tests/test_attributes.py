# License: BSD 3 clause
"""
Tests for attribute types, attributes and headers.
"""

import unittest

from arfftools.data.attributes import (
    NUMERIC,
    STRING,
    ArffAttribute,
    ArffHeader,
    DateType,
    NominalType,
    NumericType,
    RelationalType,
    StringType,
)


class TestAttributeTypes(unittest.TestCase):
    """Test class for attribute type tests."""

    def test_rendering(self):
        self.assertEqual(str(NUMERIC), "numeric")
        self.assertEqual(str(STRING), "string")
        self.assertEqual(str(NominalType(["v1", "v 2", "?"])), "{v1,'v 2','?'}")
        self.assertEqual(str(NominalType([])), "{}")
        self.assertEqual(str(DateType()), "date")
        self.assertEqual(str(DateType("yyyy-MM-dd")), "date yyyy-MM-dd")
        self.assertEqual(str(DateType("yyyy-MM-dd HH:mm")), "date 'yyyy-MM-dd HH:mm'")
        self.assertEqual(str(DateType("yyyy-MM-dd'T'HH")), r"date 'yyyy-MM-dd\'T\'HH'")
        self.assertEqual(str(RelationalType([ArffAttribute("a", NUMERIC)])), "relational")

    def test_structural_equality(self):
        self.assertEqual(NUMERIC, NumericType())
        self.assertEqual(STRING, StringType())
        self.assertNotEqual(NUMERIC, STRING)
        self.assertEqual(NominalType(["a", "b"]), NominalType(("a", "b")))
        self.assertNotEqual(NominalType(["a", "b"]), NominalType(["b", "a"]))
        self.assertEqual(DateType(), DateType("yyyy-MM-dd'T'HH:mm:ss"))
        self.assertNotEqual(DateType(), DateType("yyyy"))
        self.assertEqual(RelationalType([ArffAttribute("a", NUMERIC)]),
                         RelationalType([ArffAttribute("a", NUMERIC)]))
        self.assertNotEqual(RelationalType([ArffAttribute("a", NUMERIC)]),
                            RelationalType([ArffAttribute("a", STRING)]))

    def test_hashing(self):
        types = {NUMERIC, NumericType(), NominalType(["a"]), NominalType(["a"]), DateType()}
        self.assertEqual(len(types), 3)

    def test_nominal_values(self):
        nominal = NominalType(["a", "b", "a"])
        self.assertEqual(nominal.values, ("a", "b", "a"))
        self.assertEqual(nominal.index_of("a"), 0)
        self.assertEqual(nominal.index_of("b"), 1)
        self.assertIsNone(nominal.index_of("c"))
        self.assertIsNone(nominal.index_of("A"))

    def test_nominal_values_must_be_strings(self):
        with self.assertRaises(TypeError):
            NominalType(["a", 1])

    def test_unsupported_date_format(self):
        with self.assertRaises(ValueError):
            DateType("yyyy-MM-dd z")

    def test_relational_children_must_be_attributes(self):
        with self.assertRaises(TypeError):
            RelationalType(["a"])

    def test_repr(self):
        self.assertEqual(repr(NominalType(["a"])), "NominalType(['a'])")
        self.assertEqual(repr(DateType("yyyy")), "DateType('yyyy')")
        self.assertEqual(repr(NUMERIC), "NumericType()")


class TestArffAttribute(unittest.TestCase):
    """Test class for attribute tests."""

    def test_rendering(self):
        self.assertEqual(str(ArffAttribute("a1", NUMERIC)), "@attribute a1 numeric")
        self.assertEqual(str(ArffAttribute("my attr", STRING)), "@attribute 'my attr' string")
        self.assertEqual(str(ArffAttribute("class", NominalType(["yes", "no"]))),
                         "@attribute class {yes,no}")

    def test_equality_and_hashing(self):
        self.assertEqual(ArffAttribute("a", NUMERIC), ArffAttribute("a", NumericType()))
        self.assertNotEqual(ArffAttribute("a", NUMERIC), ArffAttribute("b", NUMERIC))
        self.assertNotEqual(ArffAttribute("a", NUMERIC), ArffAttribute("a", STRING))
        self.assertNotEqual(ArffAttribute("a", NUMERIC), "a")
        self.assertEqual(len({ArffAttribute("a", NUMERIC), ArffAttribute("a", NUMERIC)}), 1)

    def test_type_checks(self):
        with self.assertRaises(TypeError):
            ArffAttribute(1, NUMERIC)
        with self.assertRaises(TypeError):
            ArffAttribute("a", "numeric")

    def test_attributes_are_immutable(self):
        attribute = ArffAttribute("a", NUMERIC)
        with self.assertRaises(AttributeError):
            attribute.name = "b"


class TestArffHeader(unittest.TestCase):
    """Test class for header tests."""

    def test_header(self):
        attributes = [ArffAttribute("a", NUMERIC), ArffAttribute("b", STRING)]
        header = ArffHeader("relation", attributes)
        self.assertEqual(header.relation_name, "relation")
        self.assertEqual(header.attributes, tuple(attributes))
        self.assertEqual(len(header), 2)
        self.assertEqual(header, ArffHeader("relation", tuple(attributes)))
        self.assertNotEqual(header, ArffHeader("other", attributes))
        self.assertEqual(hash(header), hash(ArffHeader("relation", attributes)))

    def test_header_needs_attributes(self):
        with self.assertRaises(ValueError):
            ArffHeader("relation", [])

    def test_header_type_checks(self):
        with self.assertRaises(TypeError):
            ArffHeader(None, [ArffAttribute("a", NUMERIC)])
        with self.assertRaises(TypeError):
            ArffHeader("relation", ["a"])
