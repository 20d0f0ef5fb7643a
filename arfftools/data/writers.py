# License: BSD 3 clause
"""
This module handles writing ARFF documents.

An :class:`ArffWriter` enforces the order of an ARFF document: first the
relation name, then the attribute declarations, then the instances.
Comments can be written at any point.

>>> import io
>>> from arfftools.data.attributes import NUMERIC, ArffAttribute, NominalType
>>> from arfftools.data.writers import ArffWriter
>>> buffer = io.StringIO()
>>> with ArffWriter(buffer) as writer:
...     writer.write_relation_name("iris")
...     writer.write_attribute(ArffAttribute("sepallength", NUMERIC))
...     writer.write_attribute(ArffAttribute("class", NominalType(["a", "b"])))
...     writer.write_instance([5.1, 0])
>>> print(buffer.getvalue())
@relation iris
<BLANKLINE>
@attribute sepallength numeric
@attribute class {a,b}
<BLANKLINE>
@data
5.1,a
<BLANKLINE>
"""

import codecs
import io
import logging
import math
import numbers
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from arfftools.data.attributes import ArffAttribute, ArffHeader, RelationalType
from arfftools.data.codec import encode_instance, format_number
from arfftools.data.errors import ArffUsageError
from arfftools.data.tokenizer import quote_and_escape, split_lines
from arfftools.types import ArffValue, PathOrBuffer
from arfftools.utils.constants import (
    DATA_KEYWORD,
    DEFAULT_WRITE_ENCODING,
    END_KEYWORD,
    RELATION_KEYWORD,
)


class WriterState(Enum):
    """The sections of an ARFF document an :class:`ArffWriter` has written so far."""

    START = 0
    RELATION_WRITTEN = 1
    ATTRIBUTES_WRITTEN = 2
    DATA_WRITTEN = 3


class ArffWriter(object):
    """
    Write an ARFF document section by section.

    Parameters
    ----------
    path_or_buffer : :class:`arfftools.types.PathOrBuffer`
        A path to the ARFF file to create (an existing file is truncated),
        or an open text or binary stream. Files opened from a path are
        closed by :meth:`close`; streams passed in are only flushed.

    encoding : str, default="utf-8"
        The character encoding to use. Ignored for text streams.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.
    """

    def __init__(self, path_or_buffer: PathOrBuffer,
                 encoding: str = DEFAULT_WRITE_ENCODING,
                 logger: Optional[logging.Logger] = None):
        super(ArffWriter, self).__init__()
        self.path_or_buffer = path_or_buffer
        self.encoding = encoding
        self.logger = logger if logger else logging.getLogger(__name__)
        self._stream, self._owns_stream = self._open(path_or_buffer, encoding)
        self._state = WriterState.START
        self._attributes: List[ArffAttribute] = []
        self._closed = False

    def _open(self, path_or_buffer: PathOrBuffer, encoding: str):
        """Return a text stream for the output and whether this writer owns it."""
        if isinstance(path_or_buffer, (str, Path)):
            self.logger.debug(f"Opening {path_or_buffer} for writing.")
            return open(path_or_buffer, "w", encoding=encoding, newline=""), True

        if not hasattr(path_or_buffer, "write"):
            raise TypeError("Expected a path or a writable stream, "
                            f"got {type(path_or_buffer).__name__}.")

        if _is_text_stream(path_or_buffer):
            return path_or_buffer, False
        return codecs.getwriter(encoding)(path_or_buffer), False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def attributes(self) -> Sequence[ArffAttribute]:
        """The attributes written so far."""
        return tuple(self._attributes)

    def _check_open(self):
        if self._closed:
            raise ArffUsageError("I/O operation on a closed ArffWriter.")

    def _transition(self, allowed_states, new_state: WriterState, message: str) -> None:
        """
        Move to ``new_state`` if the writer is in one of ``allowed_states``.

        Raises
        ------
        ArffUsageError
            If the writer is closed or in any other state.
        """
        self._check_open()
        if self._state not in allowed_states:
            raise ArffUsageError(message)
        self._state = new_state

    def write_relation_name(self, relation_name: str) -> None:
        """
        Write the ``@relation`` declaration.

        This must be the first declaration and can only be written once.
        """
        if not isinstance(relation_name, str):
            raise TypeError(f"Relation name must be a string, got {relation_name!r}.")
        self._transition({WriterState.START}, WriterState.RELATION_WRITTEN,
                         "The relation name must be the first data in the file and must "
                         "appear exactly once.")
        self._stream.write(f"{RELATION_KEYWORD} {quote_and_escape(relation_name)}\n\n")

    def write_attribute(self, attribute: ArffAttribute) -> None:
        """
        Write an ``@attribute`` declaration.

        Attributes must be written after the relation name and before any
        instances. Relational attributes are written with their nested
        declarations, indented by two spaces per level.
        """
        if not isinstance(attribute, ArffAttribute):
            raise TypeError(f"Expected an ArffAttribute, got {attribute!r}.")
        self._transition({WriterState.RELATION_WRITTEN, WriterState.ATTRIBUTES_WRITTEN},
                         WriterState.ATTRIBUTES_WRITTEN,
                         "All attributes must be written after the relation name and "
                         "before any instances.")
        self._write_attribute(attribute, 0)
        self._attributes.append(attribute)

    def _write_attribute(self, attribute: ArffAttribute, indent: int) -> None:
        padding = " " * indent
        self._stream.write(f"{padding}{attribute}\n")
        if isinstance(attribute.type, RelationalType):
            for child in attribute.type.attributes:
                self._write_attribute(child, indent + 2)
            self._stream.write(f"{padding}{END_KEYWORD} {quote_and_escape(attribute.name)}\n")

    def write_header(self, header: ArffHeader) -> None:
        """Write the relation name and all attributes of ``header``."""
        if not isinstance(header, ArffHeader):
            raise TypeError(f"Expected an ArffHeader, got {header!r}.")
        self.write_relation_name(header.relation_name)
        for attribute in header.attributes:
            self.write_attribute(attribute)

    def write_instance(self, instance: Sequence[ArffValue],
                       sparse: bool = False,
                       weight: Optional[float] = None) -> None:
        """
        Write one instance.

        The ``@data`` declaration is written before the first instance.

        Parameters
        ----------
        instance : Sequence[:class:`arfftools.types.ArffValue`]
            One value per attribute written so far.

        sparse : bool, default=False
            Write the instance in the sparse ``{index value,...}`` layout.

        weight : Optional[float], default=None
            A non-negative instance weight.

        Raises
        ------
        ArffUsageError
            If no attributes have been written yet or the writer is closed.

        TypeError
            If a value does not match its attribute type.

        ValueError
            If the instance length does not match the attributes, a nominal
            index is out of range or the weight is negative.
        """
        self._check_open()
        if self._state not in (WriterState.ATTRIBUTES_WRITTEN, WriterState.DATA_WRITTEN):
            raise ArffUsageError("The relation name and at least one attribute must have "
                                 "been written before any instances can be written.")

        line = encode_instance(instance, self._attributes, sparse=sparse)
        if weight is not None:
            if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
                raise TypeError(f"Instance weight must be a number, got {weight!r}.")
            if math.isnan(weight) or weight < 0:
                raise ValueError(f"Instance weight must be non-negative, got {weight!r}.")
            line += ",{" + format_number(weight) + "}"

        if self._state is WriterState.ATTRIBUTES_WRITTEN:
            self._transition({WriterState.ATTRIBUTES_WRITTEN}, WriterState.DATA_WRITTEN,
                             "The data section has already been started.")
            self._stream.write(f"\n{DATA_KEYWORD}\n")
            self.logger.debug(f"Started data section after {len(self._attributes)} attributes.")

        self._stream.write(line + "\n")

    def write_instances(self, instances: Iterable[Sequence[ArffValue]],
                        sparse: bool = False) -> None:
        """Write several unweighted instances."""
        for instance in instances:
            self.write_instance(instance, sparse=sparse)

    def write_comment(self, comment: str) -> None:
        """
        Write a comment, one ``%`` line per line of ``comment``.

        Comments can be written at any point of the document.
        """
        self._check_open()
        if not isinstance(comment, str):
            raise TypeError(f"Comment must be a string, got {comment!r}.")
        for line in split_lines(comment):
            self._stream.write(f"% {line}\n")

    def flush(self) -> None:
        self._check_open()
        self._stream.flush()

    def close(self) -> None:
        """Flush and release the underlying stream. Calling this more than once has no effect."""
        if self._closed:
            return
        self._stream.flush()
        if self._owns_stream:
            self._stream.close()
            self.logger.debug(f"Closed {self.path_or_buffer}.")
        self._stream = None
        self._attributes = []
        self._closed = True


def _is_text_stream(stream) -> bool:
    """Guess whether ``stream`` accepts ``str`` (rather than ``bytes``)."""
    if isinstance(stream, io.TextIOBase):
        return True
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return False
    return "b" not in getattr(stream, "mode", "")


def write_arff(path_or_buffer: PathOrBuffer,
               relation_name: str,
               attributes: Iterable[ArffAttribute],
               instances: Iterable[Sequence[ArffValue]],
               sparse: bool = False,
               encoding: str = DEFAULT_WRITE_ENCODING,
               logger: Optional[logging.Logger] = None) -> None:
    """
    Write a whole ARFF document.

    Parameters
    ----------
    path_or_buffer : :class:`arfftools.types.PathOrBuffer`
        A path to the ARFF file to create, or an open text or binary stream.

    relation_name : str
        The name of the relation.

    attributes : Iterable[:class:`arfftools.data.attributes.ArffAttribute`]
        The attributes, in order.

    instances : Iterable[Sequence[:class:`arfftools.types.ArffValue`]]
        The instances to write.

    sparse : bool, default=False
        Write every instance in the sparse layout.

    encoding : str, default="utf-8"
        The character encoding to use.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.
    """
    with ArffWriter(path_or_buffer, encoding=encoding, logger=logger) as writer:
        writer.write_header(ArffHeader(relation_name, attributes))
        writer.write_instances(instances, sparse=sparse)
