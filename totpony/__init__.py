"""totpony - TOTP generators kept in a single passphrase-encrypted file."""

__version__ = '0.3.0'
