"""Project configuration settings.

Paths are resolved lazily (see `default_db_path`) so environment overrides
set by tests or wrappers are honoured after import.
"""

from pathlib import Path
import os

# Security / crypto
KEY_LENGTH = 32   # AES-256
IV_LENGTH = 16    # AES block size in bytes
BLOCK_SIZE = 128  # AES block size in bits, used by the PKCS7 padder

# Database document
DATABASE_VERSION = 1
DB_PATH_ENV = 'TOTPONY_DB_PATH'
DEFAULT_DB_PATH = Path.home() / '.totpony' / 'db.json'

# Passphrase
PASSPHRASE_ENV = 'TOTPONY_PASSPHRASE'

# TOTP (RFC 6238)
TOTP_DIGITS = 6
TOTP_INTERVAL = 30  # seconds
TOTP_DIGEST = 'sha1'

# Logging
LOG_LEVEL = os.environ.get('TOTPONY_LOG_LEVEL', 'WARNING')
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def default_db_path() -> Path:
	env_path = os.environ.get(DB_PATH_ENV)
	return Path(env_path).expanduser() if env_path else DEFAULT_DB_PATH


__all__ = [
	'KEY_LENGTH','IV_LENGTH','BLOCK_SIZE','DATABASE_VERSION','DB_PATH_ENV','DEFAULT_DB_PATH',
	'PASSPHRASE_ENV','TOTP_DIGITS','TOTP_INTERVAL','TOTP_DIGEST','LOG_LEVEL','LOG_FORMAT',
	'default_db_path'
]
