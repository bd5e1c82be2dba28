"""TOTP generator entries (one per registered application)."""
from __future__ import annotations
import base64, binascii, hashlib, time
from datetime import datetime, timezone
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional
import pyotp
from ..config.settings import TOTP_DIGITS, TOTP_INTERVAL, TOTP_DIGEST

class EntryError(Exception): ...
class InvalidSecretEncoding(EntryError): ...

_B32_ALPHABET = frozenset('ABCDEFGHIJKLMNOPQRSTUVWXYZ234567')

def decode_base32(text: str) -> Optional[bytes]:
	"""Decode an RFC 4648 base32 secret, or return None.

	Spaces are ignored, case is folded and missing ``=`` padding is restored,
	since authenticator secrets are usually shown without it. A trailing
	character that cannot complete a byte (length 1, 3 or 6 mod 8) is still
	checked against the alphabet, then its leftover bits are dropped, so the
	result is always len * 5 // 8 bytes.
	"""
	clean = ''.join(text.split()).upper().rstrip('=')
	if not clean or any(c not in _B32_ALPHABET for c in clean):
		return None
	if len(clean) % 8 in (1, 3, 6):
		clean = clean[:-1]
	clean += '=' * (-len(clean) % 8)
	try:
		raw = base64.b32decode(clean)
	except (binascii.Error, ValueError):
		return None
	return raw or None

def compute_code(secret_bytes: bytes, for_time: Optional[float] = None, digits: int = TOTP_DIGITS, interval: int = TOTP_INTERVAL) -> int:
	totp = pyotp.TOTP(
		base64.b32encode(secret_bytes).decode('ascii'),
		digits=digits,
		digest=getattr(hashlib, TOTP_DIGEST),
		interval=interval,
	)
	otp = totp.now() if for_time is None else totp.at(datetime.fromtimestamp(int(for_time), tz=timezone.utc))
	return int(otp)

@dataclass(frozen=True)
class TOTPGenerator:
	name: str
	username: str
	secret: str
	secret_bytes: bytes

	def __post_init__(self):
		if not self.name:
			raise EntryError('Application name must not be empty')
		if not self.secret_bytes:
			raise InvalidSecretEncoding(f"Empty secret for application '{self.name}'")

	@classmethod
	def from_base32(cls, name: str, username: str, secret: str) -> 'TOTPGenerator':
		secret_bytes = decode_base32(secret)
		if secret_bytes is None:
			raise InvalidSecretEncoding("Couldn't decode secret key")
		return cls(name, username, secret, secret_bytes)

	def renamed(self, name: str) -> 'TOTPGenerator':
		return replace(self, name=name)

	def code(self, for_time: Optional[float] = None) -> int:
		return compute_code(self.secret_bytes, for_time)

	def formatted_code(self, for_time: Optional[float] = None) -> str:
		return str(self.code(for_time)).zfill(TOTP_DIGITS)

	@staticmethod
	def seconds_remaining(now: Optional[float] = None) -> int:
		now = time.time() if now is None else now
		return TOTP_INTERVAL - int(now) % TOTP_INTERVAL

	def to_dict(self) -> Dict[str, Any]:
		return {
			'name': self.name,
			'secret': self.secret,
			'username': self.username,
			'secret_bytes': list(self.secret_bytes),
		}

	def __repr__(self):
		# secret material stays out of logs and tracebacks
		return f"TOTPGenerator(name={self.name!r}, username={self.username!r})"
