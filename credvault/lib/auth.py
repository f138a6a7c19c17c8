"""Authentication helpers (plaintext secret comparison)."""
from __future__ import annotations
import hmac
from typing import Optional

def verify_secret(candidate: Optional[str], stored: str) -> bool:
	"""Exact, case-sensitive match of a login secret against the stored one."""
	if candidate is None:
		return False
	return hmac.compare_digest(candidate.encode('utf-8'), stored.encode('utf-8'))
