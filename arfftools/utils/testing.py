# License: BSD 3 clause
"""
Utility functions to make arfftools testing simpler.
"""
import io
import os
from pathlib import Path
from typing import Tuple

from arfftools.data.attributes import ArffHeader
from arfftools.data.readers import ArffReader
from arfftools.types import Instance, PathOrStr

if env_test_dir := os.getenv("TESTDIR"):
    tests_dir = Path(env_test_dir) / "tests"
else:
    tests_dir = Path(__file__).resolve().parent.parent.parent / "tests"
other_dir = tests_dir / "other"
output_dir = tests_dir / "output"


def unlink(file_path: PathOrStr):
    """
    Remove a file path if it exists.

    Parameters
    ----------
    file_path : :class:`arfftools.types.PathOrStr`
        File path to remove.

    """
    file_path = Path(file_path)
    if file_path.exists():
        file_path.unlink()


def read_arff_string(text: str) -> Tuple[ArffHeader, list]:
    """
    Read the header and all weighted instances of an in-memory ARFF document.

    Parameters
    ----------
    text : str
        The ARFF document.

    Returns
    -------
    header : :class:`arfftools.data.attributes.ArffHeader`
        The parsed header.

    instances : List[Tuple[:class:`arfftools.types.Instance`, Optional[float]]]
        Every instance in the document along with its weight.

    """
    with ArffReader(io.StringIO(text)) as reader:
        header = reader.read_header()
        weighted_instances = []
        while True:
            weighted_instance = reader.read_instance()
            if weighted_instance is None:
                break
            weighted_instances.append(weighted_instance)
    return header, weighted_instances


def values_only(weighted_instances) -> list:
    """Drop the weights from a list of ``(values, weight)`` pairs."""
    return [values for values, _ in weighted_instances]


def assert_instances_equal(testcase, actual: Instance, expected: Instance):
    """
    Assert two instances are equal, treating ``NaN`` as equal to ``NaN``.

    Nested relational values are compared recursively.
    """
    testcase.assertEqual(len(actual), len(expected))
    for actual_value, expected_value in zip(actual, expected):
        if isinstance(expected_value, list):
            testcase.assertIsInstance(actual_value, list)
            testcase.assertEqual(len(actual_value), len(expected_value))
            for actual_row, expected_row in zip(actual_value, expected_value):
                assert_instances_equal(testcase, actual_row, expected_row)
        elif isinstance(expected_value, float) and expected_value != expected_value:
            testcase.assertTrue(actual_value != actual_value)
        else:
            testcase.assertEqual(actual_value, expected_value)
            testcase.assertEqual(type(actual_value), type(expected_value))
