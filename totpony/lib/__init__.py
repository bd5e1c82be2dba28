"""Core layers: generators, crypto envelope, schema, storage, registry."""
from .crypto import derive_key, encrypt, decrypt, CryptoError, DecryptionError
from .generators import TOTPGenerator, EntryError, InvalidSecretEncoding
from .schema import serialize, deserialize, empty_document, SchemaError, CURRENT_VERSION
from .storage import Database, JsonDatabase, EncryptedDatabase, open_database, StorageError
from .registry import Registry, DuplicateName, NotFound, EmptyRegistry
from .passphrase import fixed_passphrase, env_passphrase, prompt_passphrase, PassphraseError
