"""In-memory application registry on top of a Database.

Mutations only touch memory until `flush()` rewrites the whole store.
"""
from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Dict, List, Mapping
from .generators import TOTPGenerator, EntryError, InvalidSecretEncoding
from .storage import Database

log = logging.getLogger(__name__)

class DuplicateName(EntryError): ...
class NotFound(EntryError): ...
class EmptyRegistry(EntryError): ...

class Registry:
	def __init__(self, database: Database):
		self.database = database
		self._applications: Dict[str, TOTPGenerator] = dict(database.load_all())

	def __len__(self):
		return len(self._applications)

	def __contains__(self, name):
		return name in self._applications

	def names(self) -> List[str]:
		return sorted(self._applications)

	def create(self, name: str, username: str, secret: str) -> TOTPGenerator:
		app = TOTPGenerator.from_base32(name, username, secret)
		if name in self._applications:
			raise DuplicateName(f"Application with name '{name}' already exists!")
		self._applications[name] = app
		log.debug("Created application '%s'", name)
		return app

	def delete(self, name: str) -> None:
		if self._applications.pop(name, None) is None:
			raise NotFound(f"Application with the name '{name}' doesn't exist")
		log.debug("Deleted application '%s'", name)

	def rename(self, name: str, new_name: str) -> TOTPGenerator:
		"""Rename and re-key, so the entry is found under `new_name` afterwards."""
		app = self.get(name)
		if new_name == name:
			return app
		if new_name in self._applications:
			raise DuplicateName(f"Application with name '{new_name}' already exists!")
		renamed = app.renamed(new_name)
		del self._applications[name]
		self._applications[new_name] = renamed
		log.debug("Renamed application '%s' to '%s'", name, new_name)
		return renamed

	def list(self) -> Mapping[str, TOTPGenerator]:
		if not self._applications:
			raise EmptyRegistry('There are no applications')
		return MappingProxyType(self._applications)

	def get(self, name: str) -> TOTPGenerator:
		try:
			return self._applications[name]
		except KeyError:
			raise NotFound(f"Application '{name}' wasn't found") from None

	def clear(self) -> None:
		self._applications = {}
		log.debug('Cleared all applications')

	def flush(self) -> None:
		self.database.save_all(self._applications)

__all__ = ['Registry', 'EntryError', 'InvalidSecretEncoding', 'DuplicateName', 'NotFound', 'EmptyRegistry']
