"""Cryptographic envelope: passphrase -> key, AES-256-CBC with PKCS7 padding.

Blob layout is ``IV (16 bytes) || ciphertext``. Every function here is pure;
keys are recomputed by callers for each operation and never cached.
"""
from __future__ import annotations
import hashlib, secrets
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from ..config.settings import KEY_LENGTH, IV_LENGTH, BLOCK_SIZE

class CryptoError(Exception):
	pass

class DecryptionError(CryptoError):
	"""Blob could not be turned back into plaintext.

	CBC carries no authentication tag, so a wrong passphrase and a corrupted
	file look the same: both usually end as a padding or text-decoding failure.
	"""

def derive_key(passphrase: str) -> bytes:
	"""SHA-256 of the UTF-8 passphrase. Empty passphrases are accepted."""
	return hashlib.sha256(passphrase.encode('utf-8')).digest()

def generate_iv() -> bytes:
	return secrets.token_bytes(IV_LENGTH)

def _cipher(key: bytes, iv: bytes) -> Cipher:
	if len(key) != KEY_LENGTH: raise CryptoError(f"Key must be {KEY_LENGTH} bytes")
	return Cipher(algorithms.AES(key), modes.CBC(iv))

def encrypt(data: bytes, key: bytes) -> bytes:
	iv = generate_iv()
	padder = padding.PKCS7(BLOCK_SIZE).padder()
	padded = padder.update(data) + padder.finalize()
	enc = _cipher(key, iv).encryptor()
	return iv + enc.update(padded) + enc.finalize()

def decrypt(blob: bytes, key: bytes) -> bytes:
	if len(blob) < IV_LENGTH: raise DecryptionError("Ciphertext too short")
	iv, ct = blob[:IV_LENGTH], blob[IV_LENGTH:]
	if len(ct) % IV_LENGTH:
		raise DecryptionError(f"Ciphertext length {len(ct)} is not a multiple of the block size")
	dec = _cipher(key, iv).decryptor()
	padded = dec.update(ct) + dec.finalize()
	unpadder = padding.PKCS7(BLOCK_SIZE).unpadder()
	try:
		return unpadder.update(padded) + unpadder.finalize()
	except ValueError as e:
		raise DecryptionError(f"Decrypt failed (wrong passphrase or corrupted data): {e}") from e

def encrypt_text(text: str, key: bytes) -> bytes:
	return encrypt(text.encode('utf-8'), key)

def decrypt_text(blob: bytes, key: bytes) -> str:
	try:
		return decrypt(blob, key).decode('utf-8')
	except UnicodeDecodeError as e:
		raise DecryptionError(f"Decrypted data is not text (wrong passphrase or corrupted data): {e}") from e
