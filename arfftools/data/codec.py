# License: BSD 3 clause
"""
Conversion between ARFF text and typed instance values.

Decoding works on a :class:`arfftools.data.tokenizer.Tokenizer` positioned
at the start of a data line; encoding produces the text of one data line.
Both directions dispatch on the declared attribute type:

=============  ======================  =====================================
Type           Python value            Text
=============  ======================  =====================================
numeric        ``float``               ``1.5``, ``2``, ``NaN``, ``-Infinity``
string         ``str``                 quoted and escaped when necessary
nominal        ``int`` (value index)   the declared value
date           ``datetime.datetime``   formatted by the attribute's pattern
relational     list of instances       the instances as a quoted document
=============  ======================  =====================================

Missing values are ``None`` and are written as an unquoted ``?``. The quoted
text ``'?'`` is the one-character string ``"?"`` and never a missing value.

Instances can be written densely (one value per attribute) or sparsely
(``{index value,...}``), where numeric zeros and nominal values with index 0
are left out. Relational values are always written densely.
"""

import datetime
import logging
import math
import numbers
import re
from typing import Optional, Sequence

from arfftools.data.attributes import (
    ArffAttribute,
    AttributeType,
    DateType,
    NominalType,
    NumericType,
    RelationalType,
    StringType,
)
from arfftools.data.errors import ArffFormatError
from arfftools.data.tokenizer import Token, Tokenizer, TokenKind, quote_and_escape
from arfftools.types import ArffValue, Instance, WeightedInstance
from arfftools.utils.constants import MISSING_VALUE

logger = logging.getLogger(__name__)

_SPARSE_INDEX_RE = re.compile(r"[0-9]+")
_NUMBER_RE = re.compile(r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|nan|infinity)",
                        re.ASCII | re.IGNORECASE)

# integral floats up to this magnitude are written without a fraction
_MAX_EXACT_INTEGER = 2 ** 53


def parse_number(text: str) -> float:
    """
    Parse a culture-invariant floating point literal.

    Only ASCII digits are accepted. ``NaN``, ``Infinity`` and ``-Infinity``
    are accepted in any case, but abbreviations such as ``inf`` are not.

    Raises
    ------
    ValueError
        If ``text`` is not a number.
    """
    # float() would also accept digit separators, padding and other scripts
    if _NUMBER_RE.fullmatch(text) is None:
        raise ValueError(f"could not convert string to float: {text!r}")
    return float(text)


def format_number(value: float) -> str:
    """
    Format a number so that :func:`parse_number` reads it back unchanged.

    >>> format_number(5.1)
    '5.1'
    >>> format_number(2.0)
    '2'
    >>> format_number(-0.0)
    '-0.0'
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0 and math.copysign(1.0, value) < 0:
        return repr(value)
    if value.is_integer() and abs(value) <= _MAX_EXACT_INTEGER:
        return str(int(value))
    return repr(value)


def parse_value(token: Token, attribute_type: AttributeType) -> ArffValue:
    """
    Decode the value held by ``token`` according to ``attribute_type``.

    Parameters
    ----------
    token : :class:`arfftools.data.tokenizer.Token`
        A quoted or unquoted token.

    attribute_type : :class:`arfftools.data.attributes.AttributeType`
        The declared type of the attribute the value belongs to.

    Returns
    -------
    :class:`arfftools.types.ArffValue`
        The decoded value, or ``None`` if the token is the missing value
        marker.

    Raises
    ------
    ArffFormatError
        If the text cannot be interpreted as a value of the given type.
    """
    if token.is_missing:
        return None

    text = token.text
    if isinstance(attribute_type, NumericType):
        try:
            return parse_number(text)
        except ValueError:
            raise ArffFormatError(f'Unrecognized data value: "{text}"',
                                  token.line, token.column) from None
    elif isinstance(attribute_type, StringType):
        return text
    elif isinstance(attribute_type, NominalType):
        index = attribute_type.index_of(text)
        if index is None:
            raise ArffFormatError(f'Unrecognized data value: "{text}"', token.line, token.column)
        return index
    elif isinstance(attribute_type, DateType):
        try:
            return attribute_type.pattern.parse(text)
        except ValueError:
            raise ArffFormatError(f'Unrecognized data value: "{text}"',
                                  token.line, token.column) from None
    elif isinstance(attribute_type, RelationalType):
        try:
            return decode_relational(text, attribute_type)
        except ArffFormatError as exc:
            raise ArffFormatError(f"Invalid relational value: {exc}",
                                  token.line, token.column) from exc
    else:
        raise TypeError(f"Unsupported attribute type: {attribute_type!r}")


def _sparse_default(attribute_type: AttributeType) -> ArffValue:
    """
    Return the value of an attribute left out of a sparse instance.

    Numeric attributes default to zero and nominal attributes to their first
    declared value. A nominal attribute without declared values has no first
    value, so like all other types it defaults to the missing value.
    """
    if isinstance(attribute_type, NumericType):
        return 0.0
    if isinstance(attribute_type, NominalType) and attribute_type.values:
        return 0
    return None


def _read_dense(tokenizer: Tokenizer, attributes: Sequence[ArffAttribute]) -> Instance:
    instance = []
    for index, attribute in enumerate(attributes):
        if index:
            tokenizer.expect_symbol(",")
        instance.append(parse_value(tokenizer.next_value(), attribute.type))
    return instance


def _read_sparse(tokenizer: Tokenizer, attributes: Sequence[ArffAttribute]) -> Instance:
    instance = [_sparse_default(attribute.type) for attribute in attributes]

    tokenizer.expect_symbol("{")
    token = tokenizer.next_unquoted("index")
    if token.text == "}":
        return instance

    while True:
        if not _SPARSE_INDEX_RE.fullmatch(token.text):
            raise tokenizer.error(f'Unexpected token "{token.text}". Expected index.', token)
        index = int(token.text)
        if index >= len(instance):
            raise tokenizer.error(f'Out-of-range index "{token.text}".', token)

        instance[index] = parse_value(tokenizer.next_value(), attributes[index].type)

        token = tokenizer.next_unquoted('"," or "}"')
        if token.text == "}":
            return instance
        if token.text != ",":
            raise tokenizer.error(f'Unexpected token "{token.text}". Expected "," or "}}".', token)
        token = tokenizer.next_unquoted("index")


def _read_weight(tokenizer: Tokenizer) -> Optional[float]:
    token = tokenizer.next_token()
    if token.is_end:
        return None
    if token.kind is TokenKind.QUOTED:
        raise tokenizer.error(f'Incorrect quoting for token "{token.text}".', token)
    if token.text != ",":
        raise tokenizer.error(f'Unexpected token "{token.text}". '
                              'Expected "," or end-of-line.', token)

    tokenizer.expect_symbol("{")
    weight_token = tokenizer.next_value("instance weight")
    try:
        weight = parse_number(weight_token.text)
    except ValueError:
        raise tokenizer.error(f'Invalid instance weight "{weight_token.text}".',
                              weight_token) from None
    tokenizer.expect_symbol("}")
    tokenizer.expect_end_of_line()
    return weight


def read_instance(tokenizer: Tokenizer,
                  attributes: Sequence[ArffAttribute]) -> Optional[WeightedInstance]:
    """
    Read the next instance and its optional weight.

    Empty lines and comments before the instance are skipped.

    Parameters
    ----------
    tokenizer : :class:`arfftools.data.tokenizer.Tokenizer`
        The tokenizer, positioned in the data section.

    attributes : Sequence[:class:`arfftools.data.attributes.ArffAttribute`]
        The attributes the instance must conform to.

    Returns
    -------
    Optional[:class:`arfftools.types.WeightedInstance`]
        A ``(values, weight)`` tuple where ``weight`` is ``None`` if the
        line has no weight, or ``None`` if there are no more instances.

    Raises
    ------
    ArffFormatError
        If the instance is malformed.
    """
    token = tokenizer.skip_blank_lines()
    if token.kind is TokenKind.END_OF_FILE:
        return None

    if token.is_symbol("{"):
        instance = _read_sparse(tokenizer, attributes)
    else:
        instance = _read_dense(tokenizer, attributes)

    return instance, _read_weight(tokenizer)


def decode_relational(text: str, attribute_type: RelationalType) -> list:
    """
    Decode the text of a relational value into a list of instances.

    Instance weights inside relational values are read but discarded.
    """
    tokenizer = Tokenizer(text)
    instances = []
    while True:
        weighted_instance = read_instance(tokenizer, attribute_type.attributes)
        if weighted_instance is None:
            return instances
        instance, weight = weighted_instance
        if weight is not None:
            logger.debug(f"Discarding weight {weight} of a relational instance.")
        instances.append(instance)


def _incompatible(value, attribute_type: AttributeType) -> TypeError:
    return TypeError(f"Value {value!r} is incompatible with attribute type "
                     f"{attribute_type!r}.")


def format_value(value: ArffValue, attribute_type: AttributeType) -> str:
    """
    Encode a single value according to ``attribute_type``.

    Parameters
    ----------
    value : :class:`arfftools.types.ArffValue`
        The value; ``None`` is written as a missing value.

    attribute_type : :class:`arfftools.data.attributes.AttributeType`
        The declared type of the attribute the value belongs to.

    Returns
    -------
    str
        The text to write.

    Raises
    ------
    TypeError
        If the value does not have the Python type the attribute type requires.

    ValueError
        If a nominal index is out of range.
    """
    if value is None:
        return MISSING_VALUE

    if isinstance(attribute_type, NumericType):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise _incompatible(value, attribute_type)
        return format_number(value)
    elif isinstance(attribute_type, StringType):
        if not isinstance(value, str):
            raise _incompatible(value, attribute_type)
        return quote_and_escape(value)
    elif isinstance(attribute_type, NominalType):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise _incompatible(value, attribute_type)
        if not 0 <= value < len(attribute_type.values):
            raise ValueError(f"Nominal index {value} is out of range for {attribute_type!r}.")
        return quote_and_escape(attribute_type.values[value])
    elif isinstance(attribute_type, DateType):
        if not isinstance(value, datetime.datetime):
            raise _incompatible(value, attribute_type)
        return quote_and_escape(attribute_type.pattern.format(value))
    elif isinstance(attribute_type, RelationalType):
        if not isinstance(value, (list, tuple)):
            raise _incompatible(value, attribute_type)
        return encode_relational(value, attribute_type)
    else:
        raise TypeError(f"Unsupported attribute type: {attribute_type!r}")


def _is_sparse_default(value: ArffValue, attribute_type: AttributeType) -> bool:
    if value is None:
        return False
    if isinstance(attribute_type, NumericType):
        # negative zero is written so that its sign survives
        return value == 0 and math.copysign(1.0, value) > 0
    if isinstance(attribute_type, NominalType):
        return value == 0
    return False


def encode_instance(instance: Sequence[ArffValue],
                    attributes: Sequence[ArffAttribute],
                    sparse: bool = False) -> str:
    """
    Encode the values of one instance (without weight or line terminator).

    Parameters
    ----------
    instance : Sequence[:class:`arfftools.types.ArffValue`]
        One value per attribute.

    attributes : Sequence[:class:`arfftools.data.attributes.ArffAttribute`]
        The attributes the instance conforms to.

    sparse : bool, default=False
        Whether to use the sparse ``{index value,...}`` layout.

    Returns
    -------
    str
        The encoded instance.

    Raises
    ------
    ValueError
        If the instance does not have one value per attribute.
    """
    if len(instance) != len(attributes):
        raise ValueError(f"Instance has {len(instance)} values but {len(attributes)} "
                         "attributes have been declared.")

    if not sparse:
        return ",".join(format_value(value, attribute.type)
                        for value, attribute in zip(instance, attributes))

    pairs = [f"{index} {format_value(value, attribute.type)}"
             for index, (value, attribute) in enumerate(zip(instance, attributes))
             if not _is_sparse_default(value, attribute.type)]
    return "{" + ",".join(pairs) + "}"


def encode_relational(instances: Sequence[Sequence[ArffValue]],
                      attribute_type: RelationalType) -> str:
    """Encode relational instances as a single quoted value, one dense line per instance."""
    lines = [encode_instance(instance, attribute_type.attributes) for instance in instances]
    return quote_and_escape("\n".join(lines))
