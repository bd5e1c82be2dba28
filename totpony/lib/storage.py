"""Storage layer: load/save the full application map.

Two backends share one contract:
- JsonDatabase: plaintext document on disk (tests, inspection).
- EncryptedDatabase: the same document inside the IV-prefixed AES-256-CBC
  envelope, keyed from a passphrase provider called on every load and save.

A single process is assumed to own the file; there is no locking and
concurrent external writers give undefined results.
"""
from __future__ import annotations
import contextlib, logging, os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional
from ..config.settings import default_db_path
from .crypto import derive_key, encrypt, decrypt_text, DecryptionError
from .generators import TOTPGenerator
from .passphrase import prompt_passphrase, PassphraseError
from .schema import serialize, deserialize, empty_document, SchemaError

log = logging.getLogger(__name__)

PassphraseProvider = Callable[[], str]

class StorageError(Exception): ...

class Database(ABC):
	def __init__(self, path: Path | str):
		self.path = Path(path)

	@abstractmethod
	def _encode(self, document: bytes) -> bytes:
		"""Turn a serialized document into file contents."""

	@abstractmethod
	def _decode(self, raw: bytes) -> bytes:
		"""Turn file contents back into a serialized document."""

	def exists(self) -> bool:
		return self.path.exists()

	def load_all(self) -> Dict[str, TOTPGenerator]:
		"""Return every stored application; a missing file yields an empty map."""
		try:
			raw = self.path.read_bytes()
		except FileNotFoundError:
			log.info('No database at %s, starting empty', self.path)
			return dict(empty_document()['content']['applications'])
		except OSError as e:
			log.error('Reading %s failed: %s', self.path, e)
			raise StorageError(f"load_all({self.path}): couldn't read file: {e}") from e
		try:
			entries = deserialize(self._decode(raw))
		except DecryptionError as e:
			log.error('Decrypting %s failed', self.path)
			raise DecryptionError(f"load_all({self.path}): {e}") from e
		except SchemaError as e:
			log.error('Parsing %s failed', self.path)
			raise SchemaError(f"load_all({self.path}): {e}") from e
		except PassphraseError as e:
			log.error('No passphrase for %s', self.path)
			raise PassphraseError(f"load_all({self.path}): {e}") from e
		log.info('Loaded %d applications from %s', len(entries), self.path)
		return entries

	def save_all(self, entries: Mapping[str, TOTPGenerator]) -> None:
		"""Overwrite the file with exactly `entries` (no merge)."""
		try:
			blob = self._encode(serialize(entries))
		except PassphraseError as e:
			raise PassphraseError(f"save_all({self.path}): {e}") from e
		self._write(blob)
		log.info('Saved %d applications to %s', len(entries), self.path)

	def _write(self, blob: bytes):
		tmp = self.path.with_name(self.path.name + '.tmp')
		try:
			self.path.parent.mkdir(parents=True, exist_ok=True)
			tmp.write_bytes(blob)
			os.replace(tmp, self.path)
		except OSError as e:
			with contextlib.suppress(OSError):
				tmp.unlink(missing_ok=True)
			raise StorageError(f"save_all({self.path}): couldn't write file: {e}") from e

class JsonDatabase(Database):
	def _encode(self, document: bytes) -> bytes:
		return document

	def _decode(self, raw: bytes) -> bytes:
		return raw

class EncryptedDatabase(Database):
	def __init__(self, path: Path | str, passphrase: PassphraseProvider):
		super().__init__(path)
		self.passphrase = passphrase

	def _encode(self, document: bytes) -> bytes:
		return encrypt(document, derive_key(self.passphrase()))

	def _decode(self, raw: bytes) -> bytes:
		return decrypt_text(raw, derive_key(self.passphrase())).encode('utf-8')

def open_database(path: Path | str | None = None, passphrase: Optional[PassphraseProvider] = None, encrypted: bool = True) -> Database:
	"""Build a store from configuration ($TOTPONY_DB_PATH or the default path)."""
	path = Path(path) if path is not None else default_db_path()
	if not encrypted:
		return JsonDatabase(path)
	if passphrase is None:
		passphrase = prompt_passphrase
	return EncryptedDatabase(path, passphrase)
