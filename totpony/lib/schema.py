"""Versioned JSON document holding the application map.

Shape::

	{"version": 1, "content": {"applications": {"<name>": {"name": ..., "secret": ...,
	 "username": ..., "secret_bytes": [...]}}}}
"""
from __future__ import annotations
import json, logging
from typing import Any, Dict, Mapping
from ..config.settings import DATABASE_VERSION
from .generators import TOTPGenerator, EntryError, decode_base32

log = logging.getLogger(__name__)

CURRENT_VERSION = DATABASE_VERSION

class SchemaError(Exception): ...

def empty_document() -> Dict[str, Any]:
	return {'version': CURRENT_VERSION, 'content': {'applications': {}}}

def serialize(entries: Mapping[str, TOTPGenerator]) -> bytes:
	doc = empty_document()
	doc['content']['applications'] = {key: e.to_dict() for key, e in entries.items()}
	return json.dumps(doc).encode('utf-8')

def _require(obj: Mapping[str, Any], field: str, kind, where: str):
	if field not in obj:
		raise SchemaError(f"Missing field '{field}' in {where}")
	value = obj[field]
	if not isinstance(value, kind) or isinstance(value, bool):
		raise SchemaError(f"Field '{field}' in {where} has wrong type {type(value).__name__}")
	return value

def _generator_from_dict(raw: Any, where: str) -> TOTPGenerator:
	if not isinstance(raw, dict):
		raise SchemaError(f"{where} is not an object")
	name = _require(raw, 'name', str, where)
	username = _require(raw, 'username', str, where)
	secret = _require(raw, 'secret', str, where)
	byte_list = _require(raw, 'secret_bytes', list, where)
	if not all(isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in byte_list):
		raise SchemaError(f"'secret_bytes' in {where} must be a list of byte values")
	secret_bytes = bytes(byte_list)
	if decode_base32(secret) != secret_bytes:
		raise SchemaError(f"'secret_bytes' in {where} does not match its secret")
	try:
		return TOTPGenerator(name, username, secret, secret_bytes)
	except EntryError as e:
		raise SchemaError(f"Invalid application in {where}: {e}") from e

def read_version(doc: Mapping[str, Any]) -> int:
	version = _require(doc, 'version', int, 'document')
	if not 1 <= version <= CURRENT_VERSION:
		raise SchemaError(f"Unsupported database version {version} (this build reads up to {CURRENT_VERSION})")
	return version

def deserialize(data: bytes) -> Dict[str, TOTPGenerator]:
	"""Parse a document into a name -> generator map.

	Entries are keyed by their ``name`` field. Files written by older builds,
	whose rename left an entry under its previous key, are re-keyed here.
	"""
	try:
		doc = json.loads(data)
	except (ValueError, TypeError) as e:
		raise SchemaError(f"Malformed database document: {e}") from e
	if not isinstance(doc, dict):
		raise SchemaError('Database document is not an object')
	version = read_version(doc)
	content = _require(doc, 'content', dict, 'document')
	apps = _require(content, 'applications', dict, 'content')
	entries: Dict[str, TOTPGenerator] = {}
	for key, raw in apps.items():
		gen = _generator_from_dict(raw, f"application '{key}'")
		if gen.name in entries:
			raise SchemaError(f"Duplicate application name '{gen.name}'")
		if gen.name != key:
			log.info("Re-keying application stored as '%s' under its name '%s'", key, gen.name)
		entries[gen.name] = gen
	log.debug('Parsed database document v%d with %d applications', version, len(entries))
	return entries
