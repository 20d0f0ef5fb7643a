# License: BSD 3 clause
"""
Conversion between ARFF instances and ``pandas.DataFrame`` objects.

Attribute types map to column dtypes as follows:

=============  ===================================================
Type           Column
=============  ===================================================
numeric        ``float64``; missing values are ``NaN``
string         ``object`` holding ``str``; missing values are ``None``
nominal        ``category`` with the declared values as categories
date           ``datetime64[ns]``; missing values are ``NaT``
relational     ``object`` holding nested ``DataFrame`` objects
=============  ===================================================

Nominal attributes whose declared values contain duplicates cannot be
categorical and become ``object`` columns of labels instead.
Date attributes holding a value outside the range of ``datetime64[ns]``
(roughly the years 1677 to 2262) become ``object`` columns of
``datetime.datetime`` values with ``None`` for missing values.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from arfftools.data.attributes import (
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
from arfftools.types import ArffValue, Instance


def _column(attribute_type: AttributeType, values: List[ArffValue]) -> pd.Series:
    """Convert the values of one attribute to a ``pandas.Series``."""
    if isinstance(attribute_type, NumericType):
        return pd.Series(np.array([np.nan if value is None else value for value in values],
                                  dtype=np.float64))

    if isinstance(attribute_type, StringType):
        return pd.Series(values, dtype=object)

    if isinstance(attribute_type, NominalType):
        labels = attribute_type.values
        if len(set(labels)) == len(labels):
            codes = [-1 if value is None else value for value in values]
            return pd.Series(pd.Categorical.from_codes(codes, categories=list(labels)))
        return pd.Series([None if value is None else labels[value] for value in values],
                         dtype=object)

    if isinstance(attribute_type, DateType):
        dates = pd.Series(values, dtype=object)
        try:
            return pd.to_datetime(dates).astype("datetime64[ns]")
        except pd.errors.OutOfBoundsDatetime:
            return dates

    if isinstance(attribute_type, RelationalType):
        # filled one by one so numpy does not stack equally shaped frames
        frames = np.empty(len(values), dtype=object)
        for index, value in enumerate(values):
            if value is not None:
                frames[index] = _build_frame(attribute_type.attributes, value)
        return pd.Series(frames)

    raise TypeError(f"Unsupported attribute type: {attribute_type!r}")


def _build_frame(attributes: Sequence[ArffAttribute],
                 instances: Sequence[Sequence[ArffValue]]) -> pd.DataFrame:
    for instance in instances:
        if len(instance) != len(attributes):
            raise ValueError(f"Instance has {len(instance)} values but {len(attributes)} "
                             "attributes have been declared.")

    if not attributes:
        return pd.DataFrame(index=pd.RangeIndex(len(instances)))

    columns = []
    for index, attribute in enumerate(attributes):
        column = _column(attribute.type, [instance[index] for instance in instances])
        column.name = attribute.name
        columns.append(column)

    # concat keeps duplicate attribute names as separate columns
    return pd.concat(columns, axis=1)


def instances_to_dataframe(header: ArffHeader,
                           instances: Iterable[Sequence[ArffValue]],
                           weights: Optional[Sequence[Optional[float]]] = None,
                           weight_col: str = "weight") -> pd.DataFrame:
    """
    Convert instances to a data frame with one column per attribute.

    Parameters
    ----------
    header : :class:`arfftools.data.attributes.ArffHeader`
        The header the instances conform to.

    instances : Iterable[Sequence[:class:`arfftools.types.ArffValue`]]
        The instances, as returned by :class:`arfftools.data.readers.ArffReader`.

    weights : Optional[Sequence[Optional[float]]], default=None
        Instance weights, one per instance (``None`` for unweighted ones).
        If given, they are added as an extra ``float64`` column.

    weight_col : str, default="weight"
        The name of the weight column.

    Returns
    -------
    pandas.DataFrame
        The converted instances.

    Raises
    ------
    ValueError
        If an instance does not match the header, the number of weights
        does not match the number of instances, or ``weight_col`` is
        already an attribute name.
    """
    instances = list(instances)
    frame = _build_frame(header.attributes, instances)

    if weights is not None:
        weights = list(weights)
        if len(weights) != len(instances):
            raise ValueError(f"Got {len(weights)} weights for {len(instances)} instances.")
        if weight_col in frame.columns:
            raise ValueError(f"Cannot add weight column '{weight_col}' because an attribute "
                             "with that name already exists.")
        frame[weight_col] = np.array([np.nan if weight is None else weight
                                      for weight in weights], dtype=np.float64)

    return frame


def dataframe_to_arff(df: pd.DataFrame,
                      relation_name: str = "dataframe") -> Tuple[ArffHeader, List[Instance]]:
    """
    Convert a data frame to an ARFF header and instances.

    The attribute type of each column is inferred from its dtype:
    categorical columns become nominal attributes (the categories, as
    strings, are the declared values), boolean and numeric columns become
    numeric attributes, datetime columns and ``object`` columns holding only
    ``datetime.datetime`` values become date attributes with the default
    format and all other columns become string attributes.
    ``NaN``, ``NaT`` and ``None`` become missing values.

    Parameters
    ----------
    df : pandas.DataFrame
        The data frame to convert.

    relation_name : str, default="dataframe"
        The relation name of the returned header.

    Returns
    -------
    header : :class:`arfftools.data.attributes.ArffHeader`
        The inferred header.

    instances : List[:class:`arfftools.types.Instance`]
        One instance per row.

    Raises
    ------
    ValueError
        If the data frame has no columns.
    """
    if df.shape[1] == 0:
        raise ValueError("Cannot convert a data frame without columns.")

    attributes = []
    columns = []
    for name, column in df.items():
        dtype = column.dtype
        missing = column.isna().to_numpy()

        if isinstance(dtype, pd.CategoricalDtype):
            attribute_type = NominalType([str(category) for category in dtype.categories])
            values = [None if code < 0 else code for code in column.cat.codes.tolist()]
        elif pd.api.types.is_bool_dtype(dtype) or pd.api.types.is_numeric_dtype(dtype):
            attribute_type = NUMERIC
            floats = column.to_numpy(dtype=np.float64, na_value=np.nan).tolist()
            values = [None if is_missing else number
                      for number, is_missing in zip(floats, missing)]
        elif pd.api.types.is_datetime64_any_dtype(dtype):
            attribute_type = DateType()
            values = [None if is_missing else timestamp.to_pydatetime()
                      for timestamp, is_missing in zip(column, missing)]
        elif pd.api.types.infer_dtype(column, skipna=True) == "datetime":
            attribute_type = DateType()
            values = [None if is_missing else value
                      for value, is_missing in zip(column, missing)]
        else:
            attribute_type = STRING
            values = [None if is_missing else str(value)
                      for value, is_missing in zip(column, missing)]

        attributes.append(ArffAttribute(str(name), attribute_type))
        columns.append(values)

    instances = [list(row) for row in zip(*columns)]
    return ArffHeader(relation_name, attributes), instances
