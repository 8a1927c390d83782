"""
Shared configuration constants.

Every tunable lives here so the service, the store and the demo script
read from one place. Environment variables override the defaults.
"""

import os

# ------------------ Data loading ------------------
CSV_PATH: str = os.environ.get("SYMTAB_CSV_PATH", "")
KEY_TYPE: str = os.environ.get("SYMTAB_KEY_TYPE", "str")
KEY_COLUMN: str = os.environ.get("SYMTAB_KEY_COLUMN", "key")
VALUE_COLUMN: str = os.environ.get("SYMTAB_VALUE_COLUMN", "value")

# ------------------ HTTP service ------------------
HOST: str = os.environ.get("SYMTAB_HOST", "127.0.0.1")
PORT: int = int(os.environ.get("SYMTAB_PORT", "5000"))
KEYS_LIMIT: int = int(os.environ.get("SYMTAB_KEYS_LIMIT", "100"))
MAX_KEYS_LIMIT: int = 500

# ------------------ Logging ------------------
LOG_LEVEL: str = os.environ.get("SYMTAB_LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
