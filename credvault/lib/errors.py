"""Error taxonomy shared by the store, accounts and the session layer."""
from __future__ import annotations
from enum import Enum

class ErrorKind(str, Enum):
	VALIDATION = 'validation'
	DUPLICATE_ACCOUNT = 'duplicate_account'
	NOT_FOUND = 'not_found'
	INVALID_CREDENTIALS = 'invalid_credentials'
	PERSISTENCE = 'persistence'
	SESSION = 'session'

class VaultError(Exception):
	kind: ErrorKind

class ValidationError(VaultError):
	"""A field is missing, unstorable, or the secret is too weak.

	``field`` names the offending input ('name', 'secret', 'app_name',
	'username') when one can be singled out, so a UI can focus it.
	"""
	kind = ErrorKind.VALIDATION

	def __init__(self, message: str, field: str | None = None):
		super().__init__(message)
		self.field = field

class DuplicateAccountError(VaultError):
	kind = ErrorKind.DUPLICATE_ACCOUNT

class NotFoundError(VaultError):
	kind = ErrorKind.NOT_FOUND

class InvalidCredentialsError(VaultError):
	kind = ErrorKind.INVALID_CREDENTIALS

class PersistenceError(VaultError):
	kind = ErrorKind.PERSISTENCE

class SessionError(VaultError):
	kind = ErrorKind.SESSION
