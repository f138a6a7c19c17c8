"""Command surface for UI collaborators.

A Session wraps one AccountStore and remembers the logged-in account. Each
command returns a Result instead of raising, so the caller has to look at
the outcome. A flush that failed during an otherwise successful command is
reported through ``Result.warning``.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar
from .account import Account
from .errors import ErrorKind, NotFoundError, SessionError, VaultError
from .models import CredentialEntry
from .store import AccountStore

log = logging.getLogger(__name__)

T = TypeVar('T')

@dataclass(frozen=True)
class Result(Generic[T]):
	value: Optional[T] = None
	error: Optional[VaultError] = None
	warning: Optional[str] = None

	@property
	def ok(self) -> bool:
		return self.error is None

	@property
	def kind(self) -> Optional[ErrorKind]:
		return self.error.kind if self.error is not None else None

	@property
	def message(self) -> str:
		return str(self.error) if self.error is not None else ''

	def unwrap(self) -> T:
		if self.error is not None:
			raise self.error
		return self.value

class Session:
	def __init__(self, store: AccountStore):
		self.store = store
		self.current: Optional[Account] = None

	@property
	def logged_in(self) -> bool:
		return self.current is not None

	def register(self, name: str, secret: str) -> Result[Account]:
		return self._run(lambda: self.store.register(name, secret))

	def login(self, name: str, secret: str) -> Result[Account]:
		result = self._run(lambda: self.store.authenticate(name, secret))
		if result.ok:
			self.current = result.value
		return result

	def logout(self) -> None:
		self.current = None

	def add_credential(self, app_name: str, username: str, secret: str) -> Result[CredentialEntry]:
		def op():
			entry = CredentialEntry(app_name, username, secret)
			self._account().add_credential(entry)
			return entry
		return self._run(op)

	def find_credential(self, app_name: str) -> Result[CredentialEntry]:
		def op():
			entry = self._account().find_credential(app_name)
			if entry is None:
				raise NotFoundError('No data found for the given application')
			return entry
		return self._run(op)

	def delete_credential(self, app_name: str) -> Result[bool]:
		return self._run(lambda: self._account().delete_credential(app_name))

	def _account(self) -> Account:
		if self.current is None:
			raise SessionError('Not logged in')
		return self.current

	def _run(self, op: Callable[[], T]) -> Result[T]:
		self.store.last_error = None
		try:
			value = op()
		except VaultError as e:
			log.debug("Command failed: %s", e)
			return Result(error=e)
		warning = str(self.store.last_error) if self.store.last_error is not None else None
		return Result(value=value, warning=warning)
