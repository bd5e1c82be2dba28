"""Configuration constants for totpony.

The constants are defined in `settings` and re-exported here so callers can
write `from totpony.config import KEY_LENGTH`.
"""

import logging

from .settings import (
	KEY_LENGTH, IV_LENGTH, BLOCK_SIZE, DATABASE_VERSION, DB_PATH_ENV, DEFAULT_DB_PATH,
	PASSPHRASE_ENV, TOTP_DIGITS, TOTP_INTERVAL, TOTP_DIGEST, LOG_LEVEL, LOG_FORMAT,
	default_db_path
)


def configure_logging(level=None):
	"""Install a root handler for applications embedding the library.

	Library modules only create loggers; nothing is emitted unless the host
	application (or this helper) configures handlers.
	"""
	level = level if level is not None else LOG_LEVEL
	if isinstance(level, str):
		level = level.upper()
	logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = [
	'KEY_LENGTH', 'IV_LENGTH', 'BLOCK_SIZE', 'DATABASE_VERSION', 'DB_PATH_ENV', 'DEFAULT_DB_PATH',
	'PASSPHRASE_ENV', 'TOTP_DIGITS', 'TOTP_INTERVAL', 'TOTP_DIGEST', 'LOG_LEVEL', 'LOG_FORMAT',
	'default_db_path', 'configure_logging'
]
