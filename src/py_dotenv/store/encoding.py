"""Character encodings — convert file bytes into canonical text.

Env files are usually UTF-8, but files saved by older editors may use a
legacy code page such as Windows-1252.  The reader decodes every file
from its declared encoding into a Python ``str`` before lexing, so the
lexer and parser only ever see one representation.

The encoding name is checked up front with ``check_encoding`` so a typo
fails before any file is touched.
"""

import codecs

from py_dotenv.errors import InvalidEncodingError

DEFAULT_ENCODING = "UTF-8"

_BOM = "\ufeff"


def check_encoding(encoding: str) -> str:
    """Return the canonical codec name for *encoding*.

    Only text encodings qualify; bytes-to-bytes codecs such as ``rot13``
    or ``base64`` are rejected even though the registry knows them.

    Raises:
        InvalidEncodingError: If the codec registry does not know it or
            it does not decode bytes to text.

    """
    try:
        name = codecs.lookup(encoding).name
        b"".decode(name)
    except LookupError as e:
        raise InvalidEncodingError(encoding) from e
    return name


def decode(data: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode *data* strictly and strip a leading byte-order mark.

    Raises:
        InvalidEncodingError: If *encoding* is not recognised.
        UnicodeDecodeError: If *data* is not valid in *encoding*.

    """
    codec = check_encoding(encoding)
    text = data.decode(codec, errors="strict")
    return text.removeprefix(_BOM)
