"""Account store: the authoritative name -> Account mapping and its file.

The store is the only component that touches the filesystem. Every mutation
rewrites the whole file from memory (a full snapshot); a failed write is
logged and remembered in ``last_error`` but never rolls memory back.
"""
from __future__ import annotations
import logging
import os
import shutil
from pathlib import Path
from typing import Dict, Iterator, List, Optional
from credvault.config.settings import DEFAULT_STORE_PATH, STORE_ENCODING, env_flag
from . import codec
from .account import Account
from .errors import DuplicateAccountError, InvalidCredentialsError, NotFoundError, PersistenceError, ValidationError
from .policy import validate_login

log = logging.getLogger(__name__)

class AccountStore:
	def __init__(self, path: Path | str | None = None, strict: bool | None = None):
		# Resolve path and mode dynamically to honor environment overrides in tests
		if path is not None:
			self.path = Path(path)
		else:
			env_path = os.environ.get('CREDVAULT_PATH')
			self.path = Path(env_path) if env_path else DEFAULT_STORE_PATH
		self.strict = (not env_flag('CREDVAULT_LENIENT')) if strict is None else strict
		if not self.strict:
			log.warning("Validation disabled: weak or empty secrets will be stored")
		self.accounts: Dict[str, Account] = {}
		self.last_error: Optional[PersistenceError] = None

	@classmethod
	def open(cls, path: Path | str | None = None, strict: bool | None = None) -> 'AccountStore':
		store = cls(path, strict)
		store.load()
		return store

	def __len__(self) -> int:
		return len(self.accounts)

	def __contains__(self, name) -> bool:
		return name in self.accounts

	def __iter__(self) -> Iterator[Account]:
		return iter(self.accounts.values())

	def names(self) -> List[str]:
		return list(self.accounts)

	def get(self, name: str) -> Optional[Account]:
		return self.accounts.get(name)

	def exists(self) -> bool:
		return self.path.exists()

	def load(self) -> int:
		"""Rebuild the in-memory accounts from the file; returns how many were loaded.

		A missing file means an empty store. Unreadable files are logged and
		also leave the store empty.
		"""
		self.accounts.clear()
		if not self.path.exists():
			log.info("No store at %s; starting empty", self.path)
			return 0
		try:
			with open(self.path, encoding=STORE_ENCODING, newline='') as f:
				text = f.read()
		except (OSError, UnicodeDecodeError) as e:
			self.last_error = PersistenceError(f'Failed to load {self.path}: {e}')
			log.error("%s", self.last_error)
			return 0
		for record in codec.loads(text):
			if record.name in self.accounts:
				log.warning("Duplicate account %r in %s; keeping the later line", record.name, self.path)
			self.accounts[record.name] = self._make_account(record.name, record.secret, record.entries)
		log.info("Loaded %d account(s) from %s", len(self.accounts), self.path)
		return len(self.accounts)

	def register(self, name: str, secret: str) -> Account:
		for field, value in (('name', name), ('secret', secret)):
			if not isinstance(value, str):
				raise ValidationError(f'{field} must be a string', field=field)
		if name in self.accounts:
			raise DuplicateAccountError(f'Account {name!r} already exists')
		if self.strict:
			validate_login(name, secret)
		account = self._make_account(name, secret)
		self.accounts[name] = account
		log.info("Registered account %r", name)
		self.flush()
		return account

	def authenticate(self, name: str, secret: str) -> Account:
		account = self.accounts.get(name)
		if account is None:
			raise NotFoundError(f'No account named {name!r}')
		if not account.check_secret(secret):
			raise InvalidCredentialsError('Invalid username or password')
		return account

	def dump(self) -> str:
		return codec.dumps(
			codec.AccountRecord(a.name, a.secret, list(a.entries)) for a in self.accounts.values()
		)

	def flush(self) -> bool:
		"""Rewrite the whole file from memory. Returns False when the write failed."""
		tmp = self.path.with_name(self.path.name + '.tmp')
		try:
			self.path.parent.mkdir(parents=True, exist_ok=True)
			tmp.write_text(self.dump(), encoding=STORE_ENCODING, newline='')
			os.replace(tmp, self.path)
		except OSError as e:
			self.last_error = PersistenceError(f'Failed to save {self.path}: {e}')
			log.error("%s; changes may not survive a restart", self.last_error)
			try:
				tmp.unlink(missing_ok=True)
			except OSError:
				log.debug("Could not remove %s", tmp)
			return False
		self.last_error = None
		log.info("Saved %d account(s) to %s", len(self.accounts), self.path)
		return True

	def backup(self, dest: Path | str) -> Path:
		dest = Path(dest)
		if not self.path.exists():
			raise PersistenceError(f'No store at {self.path} to back up')
		dest.parent.mkdir(parents=True, exist_ok=True)
		try:
			shutil.copy2(self.path, dest)
		except OSError as e:
			raise PersistenceError(f'Failed to back up {self.path}: {e}') from e
		log.info("Backed up %s to %s", self.path, dest)
		return dest

	def _make_account(self, name, secret, entries=()) -> Account:
		return Account(name, secret, entries, on_change=self.flush, strict=self.strict)
