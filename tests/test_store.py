import pytest
from pathlib import Path
from credvault.lib import store as store_module
from credvault.lib.errors import (
    DuplicateAccountError, InvalidCredentialsError, NotFoundError, ValidationError, PersistenceError
)
from credvault.lib.models import CredentialEntry
from credvault.lib.store import AccountStore

def make_store(tmp_path: Path, **kw):
    return AccountStore(tmp_path / 'user_data.db', **kw)

def test_missing_file_loads_empty(tmp_path: Path):
    st = make_store(tmp_path)
    assert st.load() == 0
    assert len(st) == 0 and st.last_error is None
    assert not st.exists()

def test_register_writes_file(tmp_path: Path):
    st = make_store(tmp_path)
    acc = st.register('alice', 'Str0ng!Pw')
    assert acc.name == 'alice'
    assert st.path.read_text() == 'alice;Str0ng!Pw\n'

def test_register_duplicate(tmp_path: Path):
    st = make_store(tmp_path)
    st.register('alice', 'Str0ng!Pw')
    with pytest.raises(DuplicateAccountError):
        st.register('alice', 'An0ther!pw')
    with pytest.raises(DuplicateAccountError):
        st.register('alice', '')

def test_register_validation(tmp_path: Path):
    st = make_store(tmp_path)
    with pytest.raises(ValidationError):
        st.register('bob', 'weak')
    with pytest.raises(ValidationError):
        st.register('  ', 'Str0ng!Pw')
    assert 'bob' not in st
    assert not st.exists()

def test_register_lenient(tmp_path: Path):
    st = make_store(tmp_path, strict=False)
    st.register('bob', 'weak')
    assert st.authenticate('bob', 'weak').name == 'bob'

def test_lenient_from_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv('CREDVAULT_LENIENT', '1')
    assert make_store(tmp_path).strict is False

def test_path_from_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv('CREDVAULT_PATH', str(tmp_path / 'env.db'))
    assert AccountStore().path == tmp_path / 'env.db'

def test_authenticate(tmp_path: Path):
    st = make_store(tmp_path)
    alice = st.register('alice', 'Str0ng!Pw')
    assert st.authenticate('alice', 'Str0ng!Pw') is alice
    with pytest.raises(InvalidCredentialsError):
        st.authenticate('alice', 'wrong')
    with pytest.raises(NotFoundError):
        st.authenticate('bob', 'Str0ng!Pw')

def test_mutation_writes_through_all_accounts(tmp_path: Path):
    st = make_store(tmp_path)
    alice = st.register('alice', 'Str0ng!Pw')
    st.register('bob', 'B0bby!pass')
    alice.add_credential(CredentialEntry('mail', 'a@x.io', 'M4il!pass'))
    assert st.path.read_text() == 'alice;Str0ng!Pw;mail,a@x.io,M4il!pass\nbob;B0bby!pass\n'
    alice.delete_credential('MAIL')
    assert st.path.read_text() == 'alice;Str0ng!Pw\nbob;B0bby!pass\n'

def test_round_trip(tmp_path: Path):
    st = make_store(tmp_path)
    alice = st.register('alice', 'Str0ng!Pw')
    alice.add_credential(CredentialEntry('mail', 'a@x.io', 'M4il!pass'))
    alice.add_credential(CredentialEntry('Bank', 'alice1', 'B4nk#pass'))
    st.register('bob', 'B0bby!pass')
    again = AccountStore.open(st.path)
    assert again.names() == ['alice', 'bob']
    assert again.get('alice').secret == 'Str0ng!Pw'
    assert again.get('alice').entries == alice.entries
    assert again.get('bob').entries == ()
    assert again.dump() == st.dump()

def test_flush_idempotent(tmp_path: Path):
    st = make_store(tmp_path)
    st.register('alice', 'Str0ng!Pw').add_credential(CredentialEntry('mail', 'u', 'M4il!pass'))
    assert st.flush()
    first = st.path.read_bytes()
    assert st.flush()
    assert st.path.read_bytes() == first

def test_load_skips_malformed_line(tmp_path: Path):
    path = tmp_path / 'user_data.db'
    path.write_text('onlyonefield\nalice;Str0ng!Pw;mail,u,M4il!pass\n')
    st = AccountStore.open(path)
    assert st.names() == ['alice']
    assert st.get('alice').find_credential('MAIL').username == 'u'
    assert st.last_error is None

def test_load_does_not_validate_or_flush(tmp_path: Path):
    path = tmp_path / 'user_data.db'
    path.write_text('alice;weak;mail,u,weak\n\n')
    st = AccountStore.open(path)
    assert st.get('alice').find_credential('mail').secret == 'weak'
    assert path.read_text() == 'alice;weak;mail,u,weak\n\n'

def test_load_duplicate_name_keeps_later_line(tmp_path: Path):
    path = tmp_path / 'user_data.db'
    path.write_text('alice;first\nalice;second\n')
    st = AccountStore.open(path)
    assert len(st) == 1 and st.get('alice').secret == 'second'

def test_load_failure_starts_empty(tmp_path: Path):
    path = tmp_path / 'user_data.db'
    path.mkdir()
    st = AccountStore.open(path)
    assert len(st) == 0
    assert isinstance(st.last_error, PersistenceError)

def test_flush_failure_keeps_memory(monkeypatch, tmp_path: Path):
    st = make_store(tmp_path)
    def boom(*a, **kw):
        raise OSError('disk full')
    monkeypatch.setattr(store_module.os, 'replace', boom)
    acc = st.register('alice', 'Str0ng!Pw')
    assert 'alice' in st and acc.name == 'alice'
    assert isinstance(st.last_error, PersistenceError)
    assert not st.exists()
    assert not (tmp_path / 'user_data.db.tmp').exists()
    monkeypatch.undo()
    assert st.flush() and st.last_error is None
    assert AccountStore.open(st.path).names() == ['alice']

def test_flush_creates_parent_directory(tmp_path: Path):
    st = AccountStore(tmp_path / 'nested' / 'dir' / 'user_data.db')
    st.register('alice', 'Str0ng!Pw')
    assert st.exists()

def test_backup(tmp_path: Path):
    st = make_store(tmp_path)
    with pytest.raises(PersistenceError):
        st.backup(tmp_path / 'b' / 'copy.db')
    st.register('alice', 'Str0ng!Pw')
    dest = st.backup(tmp_path / 'b' / 'copy.db')
    assert dest.read_text() == st.path.read_text()

@pytest.mark.parametrize('username', [
    'u\u2028x', 'u\x85x', 'u\u2029x', 'u\x0bx\x0cy', 'u\x1cx', 'tab\there', 'jürgen', 'Ωmega', '用户',
])
def test_round_trip_unusual_characters(tmp_path: Path, username):
    st = make_store(tmp_path)
    alice = st.register('alice', 'Str0ng!Pw')
    alice.add_credential(CredentialEntry('mail', username, 'M4il!pass'))
    st.register('bob', 'B0bby!pass')
    again = AccountStore.open(st.path)
    assert again.names() == ['alice', 'bob']
    assert again.get('alice').entries == (CredentialEntry('mail', username, 'M4il!pass'),)

def test_load_accepts_crlf_line_ends(tmp_path: Path):
    path = tmp_path / 'user_data.db'
    path.write_bytes(b'alice;Str0ng!Pw;mail,u,M4il!pass\r\nbob;B0bby!pass\r\n')
    st = AccountStore.open(path)
    assert st.names() == ['alice', 'bob']
    assert st.get('alice').find_credential('mail').secret == 'M4il!pass'

def test_lenient_register_rejects_none(tmp_path: Path):
    st = make_store(tmp_path, strict=False)
    bob = st.register('bob', 'weak')
    with pytest.raises(ValidationError):
        st.register(None, 'x')
    with pytest.raises(ValidationError):
        st.register('carol', None)
    assert st.names() == ['bob']
    bob.add_credential(CredentialEntry('a', 'b', 'c'))
    assert st.last_error is None
    assert st.path.read_text() == 'bob;weak;a,b,c\n'
