"""Secret strength policy and field validators."""
from __future__ import annotations
from typing import Optional, Tuple
from credvault.config.settings import MIN_SECRET_LENGTH, SPECIAL_CHARS
from .codec import RESERVED
from .errors import ValidationError
from .models import CredentialEntry

def is_strong(secret: Optional[str]) -> bool:
	"""True when ``secret`` is long enough and mixes upper, lower, digit and special."""
	if not secret or len(secret) < MIN_SECRET_LENGTH:
		return False
	upper = lower = digit = special = False
	for c in secret:
		if c.isupper(): upper = True
		elif c.islower(): lower = True
		elif c.isdecimal(): digit = True
		elif c in SPECIAL_CHARS: special = True
		if upper and lower and digit and special:
			return True
	return False

def check_strength(secret: Optional[str]) -> Tuple[bool, str]:
	if is_strong(secret):
		return True, 'Strong'
	secret = secret or ''
	missing = []
	if len(secret) < MIN_SECRET_LENGTH: missing.append(f'at least {MIN_SECRET_LENGTH} characters')
	if not any(c.isupper() for c in secret): missing.append('an uppercase letter')
	if not any(c.islower() for c in secret): missing.append('a lowercase letter')
	if not any(c.isdecimal() for c in secret): missing.append('a digit')
	if not any(c in SPECIAL_CHARS for c in secret): missing.append(f'one of {SPECIAL_CHARS}')
	return False, 'Weak - needs ' + ', '.join(missing)

def require_text(field: str, value: Optional[str]) -> None:
	if value is None or not value.strip():
		raise ValidationError(f'{field} must not be empty', field=field)

def require_storable(field: str, value: str) -> None:
	if any(sep in value for sep in RESERVED):
		raise ValidationError(f"{field} must not contain ';', ',' or line breaks", field=field)

def require_strong(field: str, secret: Optional[str]) -> None:
	ok, feedback = check_strength(secret)
	if not ok:
		raise ValidationError(f'{field} is too weak: {feedback}', field=field)

def validate_login(name: Optional[str], secret: Optional[str]) -> None:
	"""Checks applied to a new account's name and secret."""
	require_text('name', name); require_text('secret', secret)
	require_storable('name', name); require_storable('secret', secret)
	require_strong('secret', secret)

def validate_entry(entry: CredentialEntry) -> None:
	for field in ('app_name', 'username', 'secret'):
		value = getattr(entry, field)
		require_text(field, value)
		require_storable(field, value)
	require_strong('secret', entry.secret)
