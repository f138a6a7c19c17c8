"""Project configuration settings.

Constants shared by the store, the strength policy and the CLI.
Environment overrides are read at import time. AccountStore re-reads
CREDVAULT_PATH and CREDVAULT_LENIENT when it is constructed.
"""

from pathlib import Path
import os

# Store
DEFAULT_STORE_PATH = Path("user_data.db")
STORE_ENCODING = "utf-8"

# Strength policy
MIN_SECRET_LENGTH = 8
SPECIAL_CHARS = "@$!%*?&#"

def env_flag(name: str) -> bool:
	return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")

# Validation (strict unless CREDVAULT_LENIENT is set)
STRICT_VALIDATION = not env_flag("CREDVAULT_LENIENT")

# Logging
LOG_LEVEL = os.environ.get("CREDVAULT_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Backup
BACKUP_SUFFIX = ".backup"

__all__ = [
	'DEFAULT_STORE_PATH','STORE_ENCODING','MIN_SECRET_LENGTH','SPECIAL_CHARS',
	'STRICT_VALIDATION','env_flag','LOG_LEVEL','LOG_FORMAT','BACKUP_SUFFIX'
]
