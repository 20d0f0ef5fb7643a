# License: BSD 3 clause
"""
Classes describing the header of an ARFF document.

An :class:`ArffHeader` holds the relation name and an ordered list of
:class:`ArffAttribute` instances. Every attribute has a name and one of
five attribute types:

* :data:`NUMERIC` (an instance of :class:`NumericType`)
* :data:`STRING` (an instance of :class:`StringType`)
* :class:`NominalType`, holding the ordered list of allowed values
* :class:`DateType`, holding the date pattern
* :class:`RelationalType`, holding the nested child attributes

All of these are immutable and compare equal when their contents are equal.

>>> from arfftools.data.attributes import NUMERIC, ArffAttribute, NominalType
>>> print(ArffAttribute("class", NominalType(["Iris-setosa", "Iris-virginica"])))
@attribute class {Iris-setosa,Iris-virginica}
"""

from typing import Iterable, Optional, Tuple

from arfftools.data.dates import DatePattern, compile_date_pattern
from arfftools.data.tokenizer import quote_and_escape
from arfftools.utils.constants import DEFAULT_DATE_FORMAT


class AttributeType(object):
    """
    Base class for the attribute types.

    Sub-classes only need to implement ``_key()``, which returns the
    contents that make two types of the same class equal, and ``__str__``,
    which renders the type as it appears in an ``@attribute`` declaration.
    """

    __slots__ = ()

    def _key(self) -> tuple:
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def __repr__(self):
        return f"{type(self).__name__}()"


class NumericType(AttributeType):
    """Numeric attributes; values are ``float``."""

    __slots__ = ()

    def __str__(self):
        return "numeric"


class StringType(AttributeType):
    """String attributes; values are ``str``."""

    __slots__ = ()

    def __str__(self):
        return "string"


class NominalType(AttributeType):
    """
    Nominal attributes; values are ``int`` indices into :attr:`values`.

    Parameters
    ----------
    values : Iterable[str]
        The allowed values, in order. Duplicates are allowed; reading a
        duplicated value yields the index of its first occurrence.

    Raises
    ------
    TypeError
        If any of the values is not a string.
    """

    __slots__ = ("_values", "_indices")

    def __init__(self, values: Iterable[str]):
        values = tuple(values)
        for value in values:
            if not isinstance(value, str):
                raise TypeError(f"Nominal values must be strings, got {value!r}.")
        self._values = values
        self._indices = {}
        for index, value in enumerate(values):
            self._indices.setdefault(value, index)

    @property
    def values(self) -> Tuple[str, ...]:
        return self._values

    def index_of(self, value: str) -> Optional[int]:
        """Return the index of ``value``, or ``None`` if it is not allowed."""
        return self._indices.get(value)

    def _key(self):
        return self._values

    def __repr__(self):
        return f"NominalType({list(self._values)!r})"

    def __str__(self):
        return "{" + ",".join(quote_and_escape(value) for value in self._values) + "}"


class DateType(AttributeType):
    """
    Date attributes; values are ``datetime.datetime``.

    Parameters
    ----------
    date_format : str, default="yyyy-MM-dd'T'HH:mm:ss"
        The ``SimpleDateFormat``-style pattern used to read and write
        values. See :mod:`arfftools.data.dates`.

    Raises
    ------
    ValueError
        If the pattern is not supported.
    """

    __slots__ = ("_date_format", "_pattern")

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT):
        if not isinstance(date_format, str):
            raise TypeError(f"Date format must be a string, got {date_format!r}.")
        self._date_format = date_format
        self._pattern = compile_date_pattern(date_format)

    @property
    def date_format(self) -> str:
        return self._date_format

    @property
    def pattern(self) -> DatePattern:
        return self._pattern

    def _key(self):
        return (self._date_format,)

    def __repr__(self):
        return f"DateType({self._date_format!r})"

    def __str__(self):
        if self._date_format == DEFAULT_DATE_FORMAT:
            return "date"
        return f"date {quote_and_escape(self._date_format)}"


class RelationalType(AttributeType):
    """
    Relational attributes; values are lists of instances typed by :attr:`attributes`.

    Parameters
    ----------
    attributes : Iterable[ArffAttribute]
        The child attributes, in order.
    """

    __slots__ = ("_attributes",)

    def __init__(self, attributes: Iterable["ArffAttribute"]):
        attributes = tuple(attributes)
        for attribute in attributes:
            if not isinstance(attribute, ArffAttribute):
                raise TypeError(f"Relational children must be ArffAttribute instances, "
                                f"got {attribute!r}.")
        self._attributes = attributes

    @property
    def attributes(self) -> Tuple["ArffAttribute", ...]:
        return self._attributes

    def _key(self):
        return self._attributes

    def __repr__(self):
        return f"RelationalType({list(self._attributes)!r})"

    def __str__(self):
        return "relational"


NUMERIC = NumericType()
STRING = StringType()


class ArffAttribute(object):
    """
    A named, typed column of a relation.

    Parameters
    ----------
    name : str
        The attribute name.

    type : AttributeType
        The attribute type.
    """

    __slots__ = ("_name", "_type")

    def __init__(self, name: str, type: AttributeType):
        if not isinstance(name, str):
            raise TypeError(f"Attribute name must be a string, got {name!r}.")
        if not isinstance(type, AttributeType):
            raise TypeError(f"Attribute type must be an AttributeType, got {type!r}.")
        self._name = name
        self._type = type

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> AttributeType:
        return self._type

    def __eq__(self, other):
        if not isinstance(other, ArffAttribute):
            return NotImplemented
        return self._name == other._name and self._type == other._type

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash((self._name, self._type))

    def __repr__(self):
        return f"ArffAttribute({self._name!r}, {self._type!r})"

    def __str__(self):
        return f"@attribute {quote_and_escape(self._name)} {self._type}"


class ArffHeader(object):
    """
    The relation name and attribute declarations of an ARFF document.

    Parameters
    ----------
    relation_name : str
        The name of the relation.

    attributes : Iterable[ArffAttribute]
        The attributes, in order. There must be at least one.

    Raises
    ------
    ValueError
        If no attributes are given.
    """

    __slots__ = ("_relation_name", "_attributes")

    def __init__(self, relation_name: str, attributes: Iterable[ArffAttribute]):
        if not isinstance(relation_name, str):
            raise TypeError(f"Relation name must be a string, got {relation_name!r}.")
        attributes = tuple(attributes)
        if not attributes:
            raise ValueError("A header needs at least one attribute.")
        for attribute in attributes:
            if not isinstance(attribute, ArffAttribute):
                raise TypeError(f"Expected ArffAttribute instances, got {attribute!r}.")
        self._relation_name = relation_name
        self._attributes = attributes

    @property
    def relation_name(self) -> str:
        return self._relation_name

    @property
    def attributes(self) -> Tuple[ArffAttribute, ...]:
        return self._attributes

    def __len__(self):
        return len(self._attributes)

    def __eq__(self, other):
        if not isinstance(other, ArffHeader):
            return NotImplemented
        return (self._relation_name == other._relation_name
                and self._attributes == other._attributes)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash((self._relation_name, self._attributes))

    def __repr__(self):
        return f"ArffHeader({self._relation_name!r}, {list(self._attributes)!r})"
