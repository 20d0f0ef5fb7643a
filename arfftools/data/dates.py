# License: BSD 3 clause
"""
Date patterns for ``date`` attributes.

ARFF date formats use the pattern letters of Java's ``SimpleDateFormat``,
e.g. the default ``yyyy-MM-dd'T'HH:mm:ss``. This module compiles such a
pattern once into a :class:`DatePattern` that can both format and parse
``datetime.datetime`` values. Formatting and parsing are locale
independent: month and day names are always English.

Supported pattern letters:

=======  =====================================  ====================
Letter   Meaning                                Examples
=======  =====================================  ====================
``y``    year (``yy`` is a two-digit year)      ``yyyy`` → 2016
``M``    month; ``MMM``/``MMMM`` for names      ``MM`` → 06, ``MMM`` → Jun
``d``    day of month                           ``dd`` → 09
``E``    day name (ignored when parsing)        ``EEE`` → Sat
``H``    hour of day, 0-23                      ``HH`` → 19
``h``    hour of am/pm, 1-12                    ``hh`` → 07
``a``    am/pm marker                           ``a`` → PM
``m``    minute                                 ``mm`` → 30
``s``    second                                 ``ss`` → 05
``S``    fraction of a second, one digit per    ``SSS`` → 250
         letter (at most six)
=======  =====================================  ====================

Text between single quotes is literal, ``''`` is a single quote and any
other non-letter character stands for itself. Missing fields default to
1900-01-01 00:00:00, as with :func:`datetime.datetime.strptime`.
"""

import datetime
import re
from functools import lru_cache
from typing import List, Tuple

MONTH_NAMES = ["January", "February", "March", "April", "May", "June", "July",
               "August", "September", "October", "November", "December"]
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
             "Saturday", "Sunday"]

_SUPPORTED_LETTERS = "yMdEHhamsS"
_MAX_FRACTION_DIGITS = 6


def _name_regex(names: List[str], abbreviated: bool) -> str:
    if abbreviated:
        names = [name[:3] for name in names]
    return "|".join(names)


class DatePattern(object):
    """
    A compiled date pattern.

    Parameters
    ----------
    pattern : str
        A ``SimpleDateFormat``-style pattern, e.g. ``"yyyy-MM-dd"``.

    Raises
    ------
    ValueError
        If the pattern contains an unsupported pattern letter or an
        unterminated quoted literal.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._parts = self._split(pattern)
        self._regex = re.compile(
            "".join(self._part_regex(index, part) for index, part in enumerate(self._parts)),
            re.IGNORECASE,
        )

    def __repr__(self):
        return f"DatePattern({self.pattern!r})"

    @staticmethod
    def _split(pattern: str) -> List[Tuple[str, str]]:
        """Split a pattern into ``("field", letters)`` and ``("literal", text)`` parts."""
        parts: List[Tuple[str, str]] = []
        position = 0
        while position < len(pattern):
            char = pattern[position]
            if char == "'":
                if pattern.startswith("''", position):
                    parts.append(("literal", "'"))
                    position += 2
                    continue
                literal = []
                position += 1
                while True:
                    if position >= len(pattern):
                        raise ValueError(f"Unterminated quoted text in date pattern {pattern!r}.")
                    if pattern.startswith("''", position):
                        literal.append("'")
                        position += 2
                    elif pattern[position] == "'":
                        position += 1
                        break
                    else:
                        literal.append(pattern[position])
                        position += 1
                parts.append(("literal", "".join(literal)))
            elif char.isascii() and char.isalpha():
                if char not in _SUPPORTED_LETTERS:
                    raise ValueError(f"Unsupported letter {char!r} in date pattern {pattern!r}.")
                end = position
                while end < len(pattern) and pattern[end] == char:
                    end += 1
                letters = pattern[position:end]
                if char == "S" and len(letters) > _MAX_FRACTION_DIGITS:
                    raise ValueError(f"At most {_MAX_FRACTION_DIGITS} fraction digits are "
                                     f"supported in date pattern {pattern!r}.")
                parts.append(("field", letters))
                position = end
            else:
                parts.append(("literal", char))
                position += 1
        return parts

    @staticmethod
    def _part_regex(index: int, part: Tuple[str, str]) -> str:
        kind, text = part
        if kind == "literal":
            return re.escape(text)

        letter, count = text[0], len(text)
        group = f"(?P<g{index}>"
        if letter == "y":
            digits = r"\d{2}" if count == 2 else fr"\d{{{count},}}"
            return group + digits + ")"
        if letter == "M" and count >= 3:
            return group + _name_regex(MONTH_NAMES, count == 3) + ")"
        if letter == "E":
            return group + _name_regex(DAY_NAMES, count <= 3) + ")"
        if letter == "a":
            return group + "AM|PM)"
        if letter == "S":
            return group + fr"\d{{{count}}})"
        digits = r"\d{1,2}" if count == 1 else fr"\d{{{count}}}"
        return group + digits + ")"

    def format(self, value: datetime.datetime) -> str:
        """
        Format a date according to this pattern.

        Parameters
        ----------
        value : datetime.datetime
            The date to format.

        Returns
        -------
        str
            The formatted date.
        """
        pieces = []
        for kind, text in self._parts:
            if kind == "literal":
                pieces.append(text)
                continue

            letter, count = text[0], len(text)
            if letter == "y":
                year = value.year % 100 if count == 2 else value.year
                pieces.append(str(year).zfill(count))
            elif letter == "M":
                if count >= 3:
                    name = MONTH_NAMES[value.month - 1]
                    pieces.append(name[:3] if count == 3 else name)
                else:
                    pieces.append(str(value.month).zfill(count))
            elif letter == "d":
                pieces.append(str(value.day).zfill(count))
            elif letter == "E":
                name = DAY_NAMES[value.weekday()]
                pieces.append(name[:3] if count <= 3 else name)
            elif letter == "H":
                pieces.append(str(value.hour).zfill(count))
            elif letter == "h":
                pieces.append(str(value.hour % 12 or 12).zfill(count))
            elif letter == "a":
                pieces.append("AM" if value.hour < 12 else "PM")
            elif letter == "m":
                pieces.append(str(value.minute).zfill(count))
            elif letter == "s":
                pieces.append(str(value.second).zfill(count))
            elif letter == "S":
                pieces.append(str(value.microsecond).zfill(_MAX_FRACTION_DIGITS)[:count])
        return "".join(pieces)

    def parse(self, text: str) -> datetime.datetime:
        """
        Parse a date formatted according to this pattern.

        Parameters
        ----------
        text : str
            The text to parse.

        Returns
        -------
        datetime.datetime
            The parsed date.

        Raises
        ------
        ValueError
            If the text does not match the pattern or describes an
            invalid date.
        """
        match = self._regex.fullmatch(text)
        if not match:
            raise ValueError(f"{text!r} does not match date pattern {self.pattern!r}.")

        fields = {"year": 1900, "month": 1, "day": 1, "hour": 0,
                  "minute": 0, "second": 0, "microsecond": 0}
        twelve_hour = None
        post_meridiem = False
        for index, (kind, text_) in enumerate(self._parts):
            if kind == "literal":
                continue
            letter, count = text_[0], len(text_)
            matched = match.group(f"g{index}")
            if letter == "y":
                year = int(matched)
                if count == 2:
                    year += 1900 if year >= 69 else 2000
                fields["year"] = year
            elif letter == "M":
                if count >= 3:
                    prefix = matched[:3].lower()
                    fields["month"] = [name[:3].lower() for name in MONTH_NAMES].index(prefix) + 1
                else:
                    fields["month"] = int(matched)
            elif letter == "d":
                fields["day"] = int(matched)
            elif letter == "H":
                fields["hour"] = int(matched)
            elif letter == "h":
                twelve_hour = int(matched)
            elif letter == "a":
                post_meridiem = matched.upper() == "PM"
            elif letter == "m":
                fields["minute"] = int(matched)
            elif letter == "s":
                fields["second"] = int(matched)
            elif letter == "S":
                fields["microsecond"] = int(matched.ljust(_MAX_FRACTION_DIGITS, "0"))

        if twelve_hour is not None:
            if not 1 <= twelve_hour <= 12:
                raise ValueError(f"Hour {twelve_hour} in {text!r} is not between 1 and 12.")
            fields["hour"] = twelve_hour % 12 + (12 if post_meridiem else 0)

        return datetime.datetime(**fields)


@lru_cache(maxsize=128)
def compile_date_pattern(pattern: str) -> DatePattern:
    """Compile ``pattern``, reusing earlier compilations of the same pattern."""
    return DatePattern(pattern)
