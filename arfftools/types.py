# License: BSD 3 clause
"""
Custom type aliases for readability.
"""
from __future__ import annotations

import datetime
from pathlib import Path
from typing import IO, Any, Generator, List, Optional, Tuple, Union

from typing_extensions import TypeAlias

# a string path or Path object
PathOrStr: TypeAlias = Union[Path, str]

# a path, or an already open text or binary stream
PathOrBuffer: TypeAlias = Union[Path, str, IO[Any]]

# a single decoded value; relational values are lists of instances
# and ``None`` marks a missing value
ArffValue: TypeAlias = Union[float, int, str, datetime.datetime, List[Any], None]

# one row of values, one slot per attribute
Instance: TypeAlias = List[ArffValue]

# an instance together with its optional weight
WeightedInstance: TypeAlias = Tuple[Instance, Optional[float]]

# a generator over decoded instances
InstanceGenerator: TypeAlias = Generator[Instance, None, None]
