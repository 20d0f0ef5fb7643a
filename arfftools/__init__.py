# License: BSD 3 clause
"""
This package provides a streaming reader and writer for ARFF (Attribute-
Relation File Format) documents, the text format used by Weka to store
relations of typed attributes, along with helpers to convert ARFF data
to and from ``pandas`` data frames.
"""

from .data import (
    NUMERIC,
    STRING,
    ArffAttribute,
    ArffError,
    ArffFormatError,
    ArffHeader,
    ArffReader,
    ArffUsageError,
    ArffWriter,
    DateType,
    NominalType,
    RelationalType,
    dataframe_to_arff,
    instances_to_dataframe,
    read_arff,
    write_arff,
)
from .version import __version__

__all__ = ['ArffAttribute', 'ArffHeader', 'NominalType', 'DateType',
           'RelationalType', 'NUMERIC', 'STRING', 'ArffError',
           'ArffFormatError', 'ArffUsageError', 'ArffReader', 'read_arff',
           'ArffWriter', 'write_arff', 'instances_to_dataframe',
           'dataframe_to_arff', '__version__']
