import pytest
from pathlib import Path
from totpony.lib.generators import EntryError, InvalidSecretEncoding
from totpony.lib.passphrase import fixed_passphrase
from totpony.lib.registry import Registry, DuplicateName, NotFound, EmptyRegistry
from totpony.lib.storage import EncryptedDatabase, JsonDatabase
from totpony.lib.crypto import DecryptionError

SECRET = 'JBSWY3DPEHPK3PXP'

def make_registry(tmp_path: Path, pw='pw'):
    return Registry(EncryptedDatabase(tmp_path / 'db.json', fixed_passphrase(pw)))

def test_fresh_registry_is_empty(tmp_path: Path):
    reg = make_registry(tmp_path)
    assert len(reg) == 0
    with pytest.raises(EmptyRegistry):
        reg.list()

def test_create_and_get(tmp_path: Path):
    reg = make_registry(tmp_path)
    reg.create('github', 'octocat', SECRET)
    app = reg.get('github')
    assert app.username == 'octocat' and app.secret == SECRET
    assert 'github' in reg

def test_duplicate_create_keeps_first(tmp_path: Path):
    reg = make_registry(tmp_path)
    reg.create('github', 'first', SECRET)
    with pytest.raises(DuplicateName):
        reg.create('github', 'second', 'GEZDGNBVGY3TQOJQ')
    assert reg.get('github').username == 'first'
    assert reg.get('github').secret == SECRET

def test_invalid_secret(tmp_path: Path):
    reg = make_registry(tmp_path)
    with pytest.raises(InvalidSecretEncoding):
        reg.create('x', 'u', 'not base32!')
    assert len(reg) == 0

def test_delete_then_get(tmp_path: Path):
    reg = make_registry(tmp_path)
    reg.create('a', 'u', SECRET)
    reg.delete('a')
    with pytest.raises(NotFound):
        reg.get('a')
    with pytest.raises(NotFound):
        reg.delete('a')

def test_rename_rekeys(tmp_path: Path):
    reg = make_registry(tmp_path)
    reg.create('a', 'u', SECRET)
    reg.rename('a', 'b')
    assert reg.get('b').name == 'b'
    with pytest.raises(NotFound):
        reg.get('a')
    with pytest.raises(NotFound):
        reg.rename('a', 'c')

def test_rename_conflicts(tmp_path: Path):
    reg = make_registry(tmp_path)
    reg.create('a', 'u', SECRET); reg.create('b', 'u', SECRET)
    with pytest.raises(DuplicateName):
        reg.rename('a', 'b')
    with pytest.raises(EntryError):
        reg.rename('a', '')
    assert reg.rename('a', 'a').name == 'a'
    assert reg.names() == ['a', 'b']

def test_list_is_read_only(tmp_path: Path):
    reg = make_registry(tmp_path)
    reg.create('a', 'u', SECRET)
    view = reg.list()
    assert list(view) == ['a']
    with pytest.raises(TypeError):
        view['b'] = view['a']

def test_clear(tmp_path: Path):
    reg = make_registry(tmp_path)
    reg.create('a', 'u', SECRET)
    reg.clear()
    assert len(reg) == 0

def test_mutations_memory_only_until_flush(tmp_path: Path):
    reg = make_registry(tmp_path)
    reg.create('a', 'u', SECRET)
    assert len(make_registry(tmp_path)) == 0
    reg.flush()
    again = make_registry(tmp_path)
    assert again.get('a').username == 'u'
    again.rename('a', 'b'); again.flush()
    assert make_registry(tmp_path).names() == ['b']

def test_wrong_passphrase_fails_construction(tmp_path: Path):
    reg = make_registry(tmp_path, 'right')
    reg.create('a', 'u', SECRET); reg.flush()
    with pytest.raises(DecryptionError):
        make_registry(tmp_path, 'wrong')

def test_plaintext_backend(tmp_path: Path):
    reg = Registry(JsonDatabase(tmp_path / 'db.json'))
    reg.create('a', 'u', SECRET); reg.flush()
    assert '"a"' in (tmp_path / 'db.json').read_text()
