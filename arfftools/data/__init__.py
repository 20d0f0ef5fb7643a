# License: BSD 3 clause
"""
Handles reading and writing ARFF documents and converting them to and
from ``pandas`` data frames.
"""

from .attributes import (
    NUMERIC,
    STRING,
    ArffAttribute,
    ArffHeader,
    AttributeType,
    DateType,
    NominalType,
    NumericType,
    RelationalType,
    StringType,
)
from .conversion import dataframe_to_arff, instances_to_dataframe
from .errors import ArffError, ArffFormatError, ArffUsageError
from .readers import ArffReader, read_arff
from .writers import ArffWriter, WriterState, write_arff

__all__ = ['ArffAttribute', 'ArffHeader', 'AttributeType', 'NumericType',
           'StringType', 'NominalType', 'DateType', 'RelationalType',
           'NUMERIC', 'STRING', 'ArffError', 'ArffFormatError',
           'ArffUsageError', 'ArffReader', 'read_arff', 'ArffWriter',
           'WriterState', 'write_arff', 'instances_to_dataframe',
           'dataframe_to_arff']
