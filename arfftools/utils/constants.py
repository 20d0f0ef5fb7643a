# License: BSD 3 clause
"""
Constants shared by the ARFF readers, writers and command-line tools.
"""

# header keywords; matched case-insensitively when reading
RELATION_KEYWORD = "@relation"
ATTRIBUTE_KEYWORD = "@attribute"
END_KEYWORD = "@end"
DATA_KEYWORD = "@data"

# attribute type keywords
NUMERIC_TYPE_KEYWORDS = frozenset(["numeric", "integer", "real"])
STRING_TYPE_KEYWORD = "string"
DATE_TYPE_KEYWORD = "date"
RELATIONAL_TYPE_KEYWORD = "relational"

DEFAULT_DATE_FORMAT = "yyyy-MM-dd'T'HH:mm:ss"

# the unquoted token that marks a missing value
MISSING_VALUE = "?"

COMMENT_CHAR = "%"
QUOTE_CHARS = "'\""
ESCAPE_CHAR = "\\"
LINE_TERMINATORS = "\r\n"

# characters that end an unquoted token and are tokens on their own
DELIMITER_CHARS = ",{}"

# the only universal character name that may appear in escaped text
RECORD_SEPARATOR = "\u001e"
RECORD_SEPARATOR_ESCAPE = "u001E"

# characters that force a value to be quoted when it is written
ESCAPED_CHARS = {
    '"': '\\"',
    "'": "\\'",
    "%": "\\%",
    "\\": "\\\\",
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
    RECORD_SEPARATOR: "\\" + RECORD_SEPARATOR_ESCAPE,
}
QUOTE_TRIGGER_CHARS = frozenset(ESCAPED_CHARS) | frozenset(" ,{}")

# unescaping of the character that follows a backslash in quoted text;
# any other character stands for itself
UNESCAPED_CHARS = {"r": "\r", "n": "\n", "t": "\t"}

DEFAULT_READ_ENCODING = "utf-8-sig"
DEFAULT_WRITE_ENCODING = "utf-8"
DETECTABLE_ENCODINGS = ["utf-8", "windows-1252"]

# size of the chunks pulled from the underlying text stream
READ_CHUNK_SIZE = 65536

ARFF_EXTENSION = ".arff"
EXT_TO_DELIMITER = {".csv": ",", ".tsv": "\t"}
JSONLINES_EXTENSIONS = frozenset([".jsonlines", ".ndj"])
