# License: BSD 3 clause
"""
This module turns ARFF text into a sequence of tokens.

A token is either a piece of unquoted text, a piece of quoted text (with
all escape sequences already resolved), an end-of-line marker or an
end-of-file marker. Comments (everything from an unquoted ``%`` to the end
of the line) never produce a token of their own; they simply end the
current line.

The inverse operation, deciding whether a value needs to be quoted when it
is written and escaping it accordingly, lives here too, so that the reading
and writing rules stay in one place.
"""

import io
import re
from enum import Enum
from typing import IO, Iterator, NamedTuple, Optional

from arfftools.data.errors import ArffFormatError
from arfftools.utils.constants import (
    COMMENT_CHAR,
    DELIMITER_CHARS,
    ESCAPE_CHAR,
    ESCAPED_CHARS,
    LINE_TERMINATORS,
    MISSING_VALUE,
    QUOTE_CHARS,
    QUOTE_TRIGGER_CHARS,
    READ_CHUNK_SIZE,
    RECORD_SEPARATOR,
    RECORD_SEPARATOR_ESCAPE,
    UNESCAPED_CHARS,
)

# the information separators are whitespace to ``str.isspace()``
# but are ordinary characters in ARFF text
_NON_WHITESPACE_CONTROLS = frozenset("\x1c\x1d\x1e\x1f")

_UNQUOTED_STOP_CHARS = frozenset(LINE_TERMINATORS + COMMENT_CHAR + DELIMITER_CHARS)


def _is_whitespace(char: str) -> bool:
    return char.isspace() and char not in _NON_WHITESPACE_CONTROLS


def quote_and_escape(text: str) -> str:
    """
    Quote and escape a piece of text so that it is read back unchanged.

    Text is left as is unless it is empty, is the missing value marker
    ``?``, contains whitespace or contains a character that would otherwise
    end or alter an unquoted token. Quoted text always uses single quotes.

    Parameters
    ----------
    text : str
        The text to quote.

    Returns
    -------
    str
        The text, quoted and escaped if necessary.

    Examples
    --------
    >>> quote_and_escape("sepallength")
    'sepallength'
    >>> quote_and_escape("Iris setosa")
    "'Iris setosa'"
    >>> quote_and_escape("?")
    "'?'"
    """
    if text == "":
        return "''"
    if text == MISSING_VALUE:
        return "'?'"
    if not QUOTE_TRIGGER_CHARS.intersection(text) and not any(map(_is_whitespace, text)):
        return text
    return "'" + "".join(ESCAPED_CHARS.get(char, char) for char in text) + "'"


class TokenKind(Enum):
    """The kinds of tokens produced by :class:`Tokenizer`."""

    UNQUOTED = "unquoted"
    QUOTED = "quoted"
    END_OF_LINE = "end-of-line"
    END_OF_FILE = "end-of-file"


class Token(NamedTuple):
    """
    A single token along with the position where it started.

    ``text`` is empty for end-of-line and end-of-file tokens.
    """

    kind: TokenKind
    text: str
    line: int
    column: int

    @property
    def is_end(self) -> bool:
        """Whether this token ends a line, either explicitly or at end-of-file."""
        return self.kind is TokenKind.END_OF_LINE or self.kind is TokenKind.END_OF_FILE

    @property
    def is_missing(self) -> bool:
        """Whether this token is the (unquoted) missing value marker."""
        return self.kind is TokenKind.UNQUOTED and self.text == MISSING_VALUE

    def is_symbol(self, symbol: str) -> bool:
        """Whether this is the given unquoted token, e.g. ``","``."""
        return self.kind is TokenKind.UNQUOTED and self.text == symbol

    def describe(self) -> str:
        if self.kind is TokenKind.END_OF_LINE:
            return "end-of-line"
        if self.kind is TokenKind.END_OF_FILE:
            return "end-of-file"
        return f'token "{self.text}"'


class TextCursor(object):
    """
    A character-level view of a text stream with one character of lookahead.

    The stream is read in chunks; the 1-based line and column of the next
    character are tracked so that errors can point at the offending text.
    ``\\r\\n`` counts as a single line break.

    Parameters
    ----------
    stream : IO[str]
        The text stream to read from.

    chunk_size : int, default=65536
        How many characters to request from ``stream`` at a time.
    """

    def __init__(self, stream: IO[str], chunk_size: int = READ_CHUNK_SIZE):
        self._stream = stream
        self._chunk_size = chunk_size
        self._buffer = ""
        self._position = 0
        self.line = 1
        self.column = 1

    def _fill(self) -> bool:
        chunk = self._stream.read(self._chunk_size)
        if not chunk:
            return False
        self._buffer = chunk
        self._position = 0
        return True

    def peek(self) -> str:
        """Return the next character without consuming it, or ``""`` at the end."""
        if self._position >= len(self._buffer) and not self._fill():
            return ""
        return self._buffer[self._position]

    def read(self) -> str:
        """Consume and return the next character, or ``""`` at the end."""
        char = self.peek()
        if not char:
            return char
        self._position += 1
        if char == "\n" or (char == "\r" and self.peek() != "\n"):
            self.line += 1
            self.column = 1
        elif char != "\r":
            self.column += 1
        return char

    def at_end(self) -> bool:
        return self.peek() == ""


class Tokenizer(object):
    """
    Split ARFF text into :class:`Token` instances.

    Tokens are produced lazily; :meth:`peek` offers one token of lookahead.
    The ``expect_*`` and ``next_*`` helpers consume a token and raise an
    :class:`arfftools.data.errors.ArffFormatError` if it is not of the
    required kind.

    Parameters
    ----------
    source : Union[str, IO[str]]
        Either the ARFF text itself or a text stream to read it from.

    chunk_size : int, default=65536
        How many characters to request from a stream at a time.
    """

    def __init__(self, source, chunk_size: int = READ_CHUNK_SIZE):
        if isinstance(source, str):
            source = io.StringIO(source)
        self._cursor = TextCursor(source, chunk_size=chunk_size)
        self._lookahead: Optional[Token] = None

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.END_OF_FILE:
                return

    def error(self, message: str, token: Optional[Token] = None) -> ArffFormatError:
        """Create an error located at ``token`` or at the current position."""
        if token is None:
            return ArffFormatError(message, self._cursor.line, self._cursor.column)
        return ArffFormatError(message, token.line, token.column)

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._scan()
        return self._lookahead

    def next_token(self) -> Token:
        """Consume and return the next token."""
        if self._lookahead is not None:
            token, self._lookahead = self._lookahead, None
            return token
        return self._scan()

    def skip_blank_lines(self) -> Token:
        """Skip empty and comment-only lines and return (without consuming) the next token."""
        while self.peek().kind is TokenKind.END_OF_LINE:
            self.next_token()
        return self.peek()

    def next_value(self, expected: str = "value") -> Token:
        """Consume a quoted or unquoted token, failing on end-of-line."""
        token = self.next_token()
        if token.is_end:
            raise self.error(f"Unexpected {token.describe()}. Expected {expected}.", token)
        return token

    def next_unquoted(self, expected: str = "value") -> Token:
        """Consume an unquoted token, failing on end-of-line or quoted text."""
        token = self.next_value(expected)
        if token.kind is TokenKind.QUOTED:
            raise self.error(f'Incorrect quoting for token "{token.text}".', token)
        return token

    def expect_symbol(self, symbol: str) -> Token:
        """Consume the given unquoted token, e.g. ``","`` or ``"{"``."""
        token = self.next_unquoted(f'"{symbol}"')
        if token.text != symbol:
            raise self.error(f'Unexpected token "{token.text}". Expected "{symbol}".', token)
        return token

    def expect_keyword(self, keyword: str) -> Token:
        """Skip blank lines and consume ``keyword``, ignoring case."""
        self.skip_blank_lines()
        token = self.next_unquoted(f'"{keyword}"')
        if token.text.lower() != keyword:
            raise self.error(f'Unexpected token "{token.text}". Expected "{keyword}".', token)
        return token

    def expect_end_of_line(self) -> Token:
        """Consume an end-of-line (or end-of-file) token."""
        token = self.next_token()
        if not token.is_end:
            raise self.error(f'Unexpected token "{token.text}". Expected end-of-line.', token)
        return token

    def _scan(self) -> Token:
        cursor = self._cursor

        char = cursor.peek()
        while char and char not in LINE_TERMINATORS and _is_whitespace(char):
            cursor.read()
            char = cursor.peek()

        line, column = cursor.line, cursor.column

        if not char:
            return Token(TokenKind.END_OF_FILE, "", line, column)

        if char == COMMENT_CHAR:
            while char and char not in LINE_TERMINATORS:
                cursor.read()
                char = cursor.peek()
            if not char:
                return Token(TokenKind.END_OF_FILE, "", line, column)

        if not char or char in LINE_TERMINATORS:
            self._read_line_terminator()
            return Token(TokenKind.END_OF_LINE, "", line, column)

        if char in QUOTE_CHARS:
            return Token(TokenKind.QUOTED, self._read_quoted(), line, column)

        if char in DELIMITER_CHARS:
            return Token(TokenKind.UNQUOTED, cursor.read(), line, column)

        chars = []
        while char and char not in _UNQUOTED_STOP_CHARS and not _is_whitespace(char):
            chars.append(cursor.read())
            char = cursor.peek()
        return Token(TokenKind.UNQUOTED, "".join(chars), line, column)

    def _read_line_terminator(self) -> None:
        if self._cursor.read() == "\r" and self._cursor.peek() == "\n":
            self._cursor.read()

    def _read_quoted(self) -> str:
        cursor = self._cursor
        quote_char = cursor.read()
        chars = []
        while True:
            char = cursor.peek()
            if not char:
                raise self.error("Unexpected end-of-file. Expected closing quotation mark.")
            if char in LINE_TERMINATORS:
                raise self.error("Unexpected end-of-line. Expected closing quotation mark.")
            cursor.read()
            if char == quote_char:
                return "".join(chars)
            if char == ESCAPE_CHAR:
                chars.append(self._read_escape())
            else:
                chars.append(char)

    def _read_escape(self) -> str:
        cursor = self._cursor
        char = cursor.read()
        if not char:
            raise self.error("Unexpected end-of-file in escape sequence.")
        if char == "u":
            digits = "".join(cursor.read() for _ in range(len(RECORD_SEPARATOR_ESCAPE) - 1))
            if char + digits != RECORD_SEPARATOR_ESCAPE:
                raise self.error(f'Unsupported universal character name "\\u{digits}".')
            return RECORD_SEPARATOR
        return UNESCAPED_CHARS.get(char, char)


_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list:
    """
    Split text on ``\\r\\n``, ``\\r`` and ``\\n`` only.

    A single trailing line break does not produce an empty last line.
    """
    lines = _LINE_BREAK_RE.split(text)
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines
