# License: BSD 3 clause
"""
This module handles reading ARFF documents.

An :class:`ArffReader` first reads the header (relation name and attribute
declarations) and then the instances of the data section, either one at a
time or all at once:

>>> from arfftools.data.readers import ArffReader
>>> with ArffReader("iris.arff") as reader:  # doctest: +SKIP
...     header = reader.read_header()
...     for values in reader.read_instances():
...         print(values)

Instances are lists with one value per attribute. The Python type of each
value depends on the attribute type: ``float`` (numeric), ``str``
(string), ``int`` (nominal, an index into the declared values),
``datetime.datetime`` (date) or a list of instances (relational). Missing
values are ``None``.

Notes about Encodings
---------------------
Files are decoded as UTF-8 by default; a UTF-8 byte order mark is skipped
if present. If ``encoding=None`` is passed, the whole input is read and
its encoding is detected with ``bs4.UnicodeDammit``, trying UTF-8 first
and Windows-1252 second.
"""

import codecs
import io
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from bs4 import UnicodeDammit

from arfftools.data.attributes import (
    NUMERIC,
    STRING,
    ArffAttribute,
    ArffHeader,
    DateType,
    NominalType,
    RelationalType,
)
from arfftools.data.codec import read_instance
from arfftools.data.errors import ArffFormatError, ArffUsageError
from arfftools.data.tokenizer import Tokenizer
from arfftools.types import Instance, InstanceGenerator, PathOrBuffer, WeightedInstance
from arfftools.utils.constants import (
    ATTRIBUTE_KEYWORD,
    DATA_KEYWORD,
    DATE_TYPE_KEYWORD,
    DEFAULT_READ_ENCODING,
    DETECTABLE_ENCODINGS,
    END_KEYWORD,
    NUMERIC_TYPE_KEYWORDS,
    RELATION_KEYWORD,
    RELATIONAL_TYPE_KEYWORD,
    STRING_TYPE_KEYWORD,
)


def decode_bytes(raw: bytes, logger: Optional[logging.Logger] = None) -> str:
    """
    Decode raw bytes, detecting their encoding.

    Parameters
    ----------
    raw : bytes
        The raw document.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.

    Returns
    -------
    str
        The decoded document.

    Raises
    ------
    ArffFormatError
        If none of the candidate encodings can decode the bytes.
    """
    logger = logger if logger else logging.getLogger(__name__)
    dammit = UnicodeDammit(raw, DETECTABLE_ENCODINGS)
    if dammit.unicode_markup is None:
        raise ArffFormatError("Unable to detect the character encoding of the input.")
    if dammit.original_encoding not in (None, "ascii", "utf-8"):
        logger.warning(f"Input is not UTF-8; decoded it as {dammit.original_encoding}.")
    return dammit.unicode_markup


class ArffReader(object):
    """
    Read the header and instances of an ARFF document.

    Parameters
    ----------
    path_or_buffer : :class:`arfftools.types.PathOrBuffer`
        A path to an ARFF file, or an open text or binary stream. Files
        opened from a path are closed by :meth:`close`; streams passed in
        are left open.

    encoding : Optional[str], default="utf-8-sig"
        The character encoding of the input. Ignored for text streams.
        ``None`` detects the encoding.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.
    """

    def __init__(self, path_or_buffer: PathOrBuffer,
                 encoding: Optional[str] = DEFAULT_READ_ENCODING,
                 logger: Optional[logging.Logger] = None):
        super(ArffReader, self).__init__()
        self.path_or_buffer = path_or_buffer
        self.encoding = encoding
        self.logger = logger if logger else logging.getLogger(__name__)
        self._stream, self._owns_stream = self._open(path_or_buffer, encoding)
        self._tokenizer: Optional[Tokenizer] = Tokenizer(self._stream)
        self._header: Optional[ArffHeader] = None
        self._closed = False

    def _open(self, path_or_buffer: PathOrBuffer, encoding: Optional[str]):
        """Return a text stream for the input and whether this reader owns it."""
        if isinstance(path_or_buffer, (str, Path)):
            self.logger.debug(f"Opening {path_or_buffer} for reading.")
            if encoding is None:
                with open(path_or_buffer, "rb") as raw_file:
                    return io.StringIO(decode_bytes(raw_file.read(), self.logger)), True
            return open(path_or_buffer, encoding=encoding, newline=""), True

        if not hasattr(path_or_buffer, "read"):
            raise TypeError("Expected a path or a readable stream, "
                            f"got {type(path_or_buffer).__name__}.")

        if isinstance(path_or_buffer.read(0), bytes):
            if encoding is None:
                return io.StringIO(decode_bytes(path_or_buffer.read(), self.logger)), False
            return codecs.getreader(encoding)(path_or_buffer), False
        return path_or_buffer, False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __iter__(self) -> InstanceGenerator:
        return self.read_instances()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def header(self) -> Optional[ArffHeader]:
        """The header, once it has been read by :meth:`read_header`."""
        return self._header

    def _check_open(self):
        if self._closed:
            raise ArffUsageError("I/O operation on a closed ArffReader.")

    def read_header(self) -> ArffHeader:
        """
        Read the relation name and attribute declarations.

        This must be called exactly once, before any instances are read.

        Returns
        -------
        :class:`arfftools.data.attributes.ArffHeader`
            The header of the document.

        Raises
        ------
        ArffUsageError
            If the header has already been read or the reader is closed.

        ArffFormatError
            If the header is malformed.
        """
        self._check_open()
        if self._header is not None:
            raise ArffUsageError("The header has already been read by a previous call "
                                 "of read_header().")

        tokenizer = self._tokenizer
        tokenizer.expect_keyword(RELATION_KEYWORD)
        relation_name = tokenizer.next_value("relation name").text
        tokenizer.expect_end_of_line()

        attributes = []
        while True:
            tokenizer.skip_blank_lines()
            token = tokenizer.next_unquoted(f'"{ATTRIBUTE_KEYWORD}" or "{DATA_KEYWORD}"')
            keyword = token.text.lower()
            if keyword == ATTRIBUTE_KEYWORD:
                attributes.append(self._read_attribute())
            elif keyword == DATA_KEYWORD:
                tokenizer.expect_end_of_line()
                break
            else:
                raise tokenizer.error(f'Unexpected token "{token.text}". Expected '
                                      f'"{ATTRIBUTE_KEYWORD}" or "{DATA_KEYWORD}".', token)

        if not attributes:
            raise tokenizer.error(f'Expected at least one "{ATTRIBUTE_KEYWORD}".', token)

        self._header = ArffHeader(relation_name, attributes)
        self.logger.debug(f"Read header of relation '{relation_name}' with "
                          f"{len(attributes)} attributes.")
        return self._header

    def _read_attribute(self) -> ArffAttribute:
        """Read the rest of an ``@attribute`` declaration, including nested ones."""
        tokenizer = self._tokenizer
        name = tokenizer.next_value("attribute name").text
        type_token = tokenizer.next_unquoted("attribute type")
        type_name = type_token.text.lower()

        if type_name in NUMERIC_TYPE_KEYWORDS:
            tokenizer.expect_end_of_line()
            return ArffAttribute(name, NUMERIC)

        if type_name == STRING_TYPE_KEYWORD:
            tokenizer.expect_end_of_line()
            return ArffAttribute(name, STRING)

        if type_name == DATE_TYPE_KEYWORD:
            format_token = tokenizer.next_token()
            if format_token.is_end:
                return ArffAttribute(name, DateType())
            try:
                date_type = DateType(format_token.text)
            except ValueError as exc:
                raise tokenizer.error(f"Invalid date format: {exc}", format_token) from None
            tokenizer.expect_end_of_line()
            return ArffAttribute(name, date_type)

        if type_token.text == "{":
            values = []
            while True:
                token = tokenizer.next_value("nominal value")
                if token.is_symbol("}"):
                    break
                if not token.is_symbol(","):
                    values.append(token.text)
            tokenizer.expect_end_of_line()
            return ArffAttribute(name, NominalType(values))

        if type_name == RELATIONAL_TYPE_KEYWORD:
            tokenizer.expect_end_of_line()
            children = []
            while True:
                tokenizer.skip_blank_lines()
                token = tokenizer.next_unquoted(f'"{ATTRIBUTE_KEYWORD}" or "{END_KEYWORD}"')
                keyword = token.text.lower()
                if keyword == ATTRIBUTE_KEYWORD:
                    children.append(self._read_attribute())
                elif keyword == END_KEYWORD:
                    end_token = tokenizer.next_value(f'"{name}"')
                    if end_token.text != name:
                        raise tokenizer.error(f'Unexpected token "{end_token.text}". '
                                              f'Expected "{name}".', end_token)
                    tokenizer.expect_end_of_line()
                    return ArffAttribute(name, RelationalType(children))
                else:
                    raise tokenizer.error(f'Unexpected token "{token.text}". Expected '
                                          f'"{ATTRIBUTE_KEYWORD}" or "{END_KEYWORD}".', token)

        raise tokenizer.error(f'Unexpected token "{type_token.text}". Expected attribute type.',
                              type_token)

    def read_instance(self) -> Optional[WeightedInstance]:
        """
        Read the next instance along with its weight.

        Returns
        -------
        Optional[:class:`arfftools.types.WeightedInstance`]
            A ``(values, weight)`` tuple, where ``weight`` is ``None`` if
            the instance has no weight, or ``None`` once the end of the
            document has been reached.

        Raises
        ------
        ArffUsageError
            If the header has not been read yet or the reader is closed.

        ArffFormatError
            If the instance is malformed.
        """
        self._check_open()
        if self._header is None:
            raise ArffUsageError("Before any instances can be read, the header needs to be "
                                 "read by a call to read_header().")
        return read_instance(self._tokenizer, self._header.attributes)

    def read_instances(self) -> InstanceGenerator:
        """
        Lazily read the values of all remaining instances.

        Yields
        ------
        :class:`arfftools.types.Instance`
            The values of each instance; weights are dropped.
        """
        while True:
            weighted_instance = self.read_instance()
            if weighted_instance is None:
                return
            yield weighted_instance[0]

    def read_all_instances(self) -> List[Instance]:
        """Read the values of all remaining instances into a list."""
        return list(self.read_instances())

    def close(self) -> None:
        """Release the underlying stream. Calling this more than once has no effect."""
        if self._closed:
            return
        if self._owns_stream:
            self._stream.close()
            self.logger.debug(f"Closed {self.path_or_buffer}.")
        self._stream = None
        self._tokenizer = None
        self._header = None
        self._closed = True


def read_arff(path_or_buffer: PathOrBuffer,
              encoding: Optional[str] = DEFAULT_READ_ENCODING,
              logger: Optional[logging.Logger] = None) -> Tuple[ArffHeader, List[Instance]]:
    """
    Read a whole ARFF document.

    Parameters
    ----------
    path_or_buffer : :class:`arfftools.types.PathOrBuffer`
        A path to an ARFF file, or an open text or binary stream.

    encoding : Optional[str], default="utf-8-sig"
        The character encoding of the input. ``None`` detects the encoding.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.

    Returns
    -------
    header : :class:`arfftools.data.attributes.ArffHeader`
        The header of the document.

    instances : List[:class:`arfftools.types.Instance`]
        The values of all instances; weights are dropped.
    """
    with ArffReader(path_or_buffer, encoding=encoding, logger=logger) as reader:
        header = reader.read_header()
        return header, reader.read_all_instances()
