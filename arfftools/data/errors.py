# License: BSD 3 clause
"""
Exceptions raised by the ARFF readers and writers.
"""
from typing import Optional


class ArffError(Exception):
    """Base class for all ARFF reading and writing errors."""


class ArffFormatError(ArffError, ValueError):
    """
    Raised when an ARFF document is malformed.

    Parameters
    ----------
    message : str
        Description of the problem.

    line : Optional[int], default=None
        1-based line of the offending token, if known.

    column : Optional[int], default=None
        1-based column of the offending token, if known.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super(ArffFormatError, self).__init__(message)


class ArffUsageError(ArffError, RuntimeError):
    """Raised when a reader or writer is used out of order or after closing."""
