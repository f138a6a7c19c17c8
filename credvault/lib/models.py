"""Credential entry value object."""
from __future__ import annotations
from dataclasses import dataclass, field
from .errors import ValidationError

def app_key(app_name: str) -> str:
	"""Normalised lookup key: app names match case-insensitively, per character."""
	return app_name.lower()

@dataclass(frozen=True)
class CredentialEntry:
	app_name: str
	username: str
	secret: str = field(repr=False)

	def __post_init__(self):
		for name in ('app_name', 'username', 'secret'):
			if not isinstance(getattr(self, name), str):
				raise ValidationError(f'{name} must be a string', field=name)

	@property
	def key(self) -> str:
		return app_key(self.app_name)
