"""Store subsystem — path resolution, file reading, encodings, and loading.

Re-exports public symbols so callers can write::

    from py_dotenv.store import Store, StoreConfig
"""

from py_dotenv.store.encoding import DEFAULT_ENCODING, check_encoding, decode
from py_dotenv.store.paths import file_paths
from py_dotenv.store.reader import read, read_file
from py_dotenv.store.store import DEFAULT_NAME, Store, StoreConfig, load_config

__all__ = [
    "DEFAULT_ENCODING",
    "DEFAULT_NAME",
    "Store",
    "StoreConfig",
    "check_encoding",
    "decode",
    "file_paths",
    "load_config",
    "read",
    "read_file",
]
