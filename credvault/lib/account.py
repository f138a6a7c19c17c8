"""Account: a registered identity and its credential entries."""
from __future__ import annotations
import logging
from typing import Callable, Dict, Iterable, Optional, Tuple
from .auth import verify_secret
from .models import CredentialEntry, app_key
from .policy import validate_entry

log = logging.getLogger(__name__)

class Account:
	"""Owns an ordered, case-insensitive collection of credential entries.

	Every successful mutation calls ``on_change`` (the owning store's flush).
	With ``strict`` off, entries are stored without any validation.
	"""

	def __init__(self, name: str, secret: str, entries: Iterable[CredentialEntry] = (),
				 on_change: Optional[Callable[[], object]] = None, strict: bool = True):
		self.name = name
		self._secret = secret
		self._entries: Dict[str, CredentialEntry] = {}
		self._on_change = on_change
		self.strict = strict
		for e in entries:
			self._entries[e.key] = e

	def __repr__(self):
		return f'Account(name={self.name!r}, entries={len(self._entries)})'

	def __len__(self) -> int:
		return len(self._entries)

	def __contains__(self, app_name) -> bool:
		return isinstance(app_name, str) and app_key(app_name) in self._entries

	@property
	def secret(self) -> str:
		return self._secret

	@property
	def entries(self) -> Tuple[CredentialEntry, ...]:
		return tuple(self._entries.values())

	def check_secret(self, secret: Optional[str]) -> bool:
		return verify_secret(secret, self._secret)

	def add_credential(self, entry: CredentialEntry) -> None:
		"""Insert or overwrite ``entry`` by app name, then flush.

		Raises ValidationError in strict mode when a field is empty or
		unstorable, or the secret fails the strength policy.
		"""
		if self.strict:
			validate_entry(entry)
		replaced = entry.key in self._entries
		self._entries[entry.key] = entry
		log.info("%s credential %r for account %r", 'Updated' if replaced else 'Added', entry.app_name, self.name)
		self._changed()

	def find_credential(self, app_name: Optional[str]) -> Optional[CredentialEntry]:
		if app_name is None:
			return None
		return self._entries.get(app_key(app_name))

	def delete_credential(self, app_name: Optional[str]) -> bool:
		if app_name is None:
			return False
		removed = self._entries.pop(app_key(app_name), None)
		if removed is None:
			return False
		log.info("Deleted credential %r for account %r", removed.app_name, self.name)
		self._changed()
		return True

	def _changed(self):
		if self._on_change is not None:
			self._on_change()
