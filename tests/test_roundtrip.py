# License: BSD 3 clause
"""
Tests that documents written by ``ArffWriter`` are read back unchanged by
``ArffReader``.
"""

import datetime
import io
import math
import unittest

from arfftools.data.attributes import (
    NUMERIC,
    STRING,
    ArffAttribute,
    ArffHeader,
    DateType,
    NominalType,
    RelationalType,
)
from arfftools.data.readers import read_arff
from arfftools.data.writers import ArffWriter, write_arff
from arfftools.utils.testing import (
    assert_instances_equal,
    read_arff_string,
    values_only,
)


def write_string(relation_name, attributes, instances, sparse=False, weights=None):
    """Write a document to a string, with optional per-instance weights."""
    buffer = io.StringIO()
    if weights is None:
        weights = [None] * len(instances)
    with ArffWriter(buffer) as writer:
        writer.write_header(ArffHeader(relation_name, attributes))
        for instance, weight in zip(instances, weights):
            writer.write_instance(instance, sparse=sparse, weight=weight)
    return buffer.getvalue()


class TestRoundTrip(unittest.TestCase):
    """Test class for writing and reading back documents."""

    def check_roundtrip(self, attributes, instances, sparse=False, weights=None):
        text = write_string("relation", attributes, instances, sparse=sparse, weights=weights)
        header, weighted_instances = read_arff_string(text)
        self.assertEqual(header, ArffHeader("relation", attributes))
        self.assertEqual(len(weighted_instances), len(instances))
        for (actual, _), expected in zip(weighted_instances, instances):
            assert_instances_equal(self, actual, expected)
        return text, weighted_instances

    def test_iris_example(self):
        attributes = [ArffAttribute("sepallength", NUMERIC),
                      ArffAttribute("class", NominalType(["a", "b"]))]
        text, _ = self.check_roundtrip(attributes, [[5.1, 0]])
        self.assertTrue(text.endswith("@data\n5.1,a\n"))

    def test_dense_values(self):
        attributes = [
            ArffAttribute("number", NUMERIC),
            ArffAttribute("text", STRING),
            ArffAttribute("label", NominalType(["x y", "'z'", "%", "{}"])),
            ArffAttribute("when", DateType()),
            ArffAttribute("day", DateType("dd.MM.yyyy")),
            ArffAttribute("stamp", DateType("yyyy-MM-dd HH:mm:ss.SSS")),
        ]
        instances = [
            [-6.54, "hello, world", 0, datetime.datetime(2016, 6, 11, 19, 30, 5),
             datetime.datetime(2016, 6, 11), datetime.datetime(2001, 2, 3, 4, 5, 6, 789000)],
            [42.0, "it's 100% \"quoted\"\r\n\t\\", 1, None, None, None],
            [None, None, 2, datetime.datetime(1970, 1, 1), datetime.datetime(1999, 12, 31),
             datetime.datetime(2020, 2, 29, 23, 59, 59)],
            [1e-300, "\x1e", 3, None, None, None],
        ]
        self.check_roundtrip(attributes, instances)

    def test_special_numbers(self):
        attributes = [ArffAttribute("x", NUMERIC)]
        instances = [[math.nan], [math.inf], [-math.inf], [0.1 + 0.2], [-0.0], [1e20]]
        self.check_roundtrip(attributes, instances)

    def test_negative_zero_keeps_its_sign(self):
        attributes = [ArffAttribute("x", NUMERIC)]
        for sparse in (False, True):
            with self.subTest(sparse=sparse):
                _, weighted_instances = self.check_roundtrip(attributes, [[-0.0]], sparse=sparse)
                self.assertEqual(math.copysign(1.0, weighted_instances[0][0][0]), -1.0)

    def test_missing_value_marker_is_distinct_from_quoted_question_mark(self):
        attributes = [ArffAttribute("s", STRING), ArffAttribute("n", NominalType(["?", "!"]))]
        instances = [["?", 0], [None, None], ["??", 1]]
        text, _ = self.check_roundtrip(attributes, instances)
        self.assertIn("'?','?'\n?,?\n??,!\n", text)

    def test_empty_nominal_list(self):
        attributes = [ArffAttribute("nothing", NominalType([])), ArffAttribute("x", NUMERIC)]
        text, _ = self.check_roundtrip(attributes, [[None, 1.0]])
        self.assertIn("@attribute nothing {}\n", text)

    def test_sparse_and_dense_are_equivalent(self):
        attributes = [
            ArffAttribute("a", NUMERIC),
            ArffAttribute("b", NominalType(["zero", "one"])),
            ArffAttribute("c", STRING),
            ArffAttribute("d", NUMERIC),
        ]
        instances = [[0.0, 0, "", 0.0], [1.5, 1, "x", 0.0], [None, None, None, None],
                     [0.0, 0, None, -2.0]]
        dense_text, dense = self.check_roundtrip(attributes, instances)
        sparse_text, sparse = self.check_roundtrip(attributes, instances, sparse=True)
        self.assertNotEqual(dense_text, sparse_text)
        for dense_instance, sparse_instance in zip(values_only(dense), values_only(sparse)):
            assert_instances_equal(self, sparse_instance, dense_instance)

    def test_weights(self):
        attributes = [ArffAttribute("x", NUMERIC)]
        instances = [[1.0], [2.0], [3.0]]
        weights = [None, 0.5, 0.0]
        _, weighted_instances = self.check_roundtrip(attributes, instances, weights=weights)
        self.assertEqual([weight for _, weight in weighted_instances], weights)
        _, weighted_instances = self.check_roundtrip(attributes, instances, sparse=True,
                                                     weights=weights)
        self.assertEqual([weight for _, weight in weighted_instances], weights)

    def test_nested_relational_values(self):
        inner = RelationalType([ArffAttribute("label", NominalType(["v1", "v2"])),
                                ArffAttribute("text", STRING)])
        middle = RelationalType([ArffAttribute("x", NUMERIC), ArffAttribute("inner", inner)])
        attributes = [ArffAttribute("outer", RelationalType([ArffAttribute("middle", middle),
                                                             ArffAttribute("y", NUMERIC)])),
                      ArffAttribute("z", STRING)]
        instances = [
            [[[[[1.0, [[0, "a 'b'"], [1, "c\nd"]]],
                [2.0, []],
                [None, None]], 3.0],
              [[], None]], "end"],
            [None, "?"],
            [[], ""],
        ]
        self.check_roundtrip(attributes, instances)
        self.check_roundtrip(attributes, instances, sparse=True)

    def test_unusual_names(self):
        attributes = [ArffAttribute(" spaced name ", NUMERIC), ArffAttribute("@data", STRING),
                      ArffAttribute("été", NUMERIC)]
        text = write_string("rel %1", attributes, [[1.0, "a", 2.0]])
        header, weighted_instances = read_arff_string(text)
        self.assertEqual(header.relation_name, "rel %1")
        self.assertEqual([attribute.name for attribute in header.attributes],
                         [" spaced name ", "@data", "été"])
        self.assertEqual(values_only(weighted_instances), [[1.0, "a", 2.0]])

    def test_zero_attributes_are_rejected(self):
        with self.assertRaises(ValueError):
            ArffHeader("relation", [])

    def test_write_and_read_binary_stream(self):
        buffer = io.BytesIO()
        attributes = [ArffAttribute("word", STRING)]
        write_arff(buffer, "words", attributes, [["naïve"], ["über"]],
                   encoding="utf-16")
        buffer.seek(0)
        header, instances = read_arff(buffer, encoding="utf-16")
        self.assertEqual(header.relation_name, "words")
        self.assertEqual(instances, [["naïve"], ["über"]])
