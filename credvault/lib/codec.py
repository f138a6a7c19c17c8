"""Flat-file line format for the account store.

One line per account::

	name;secret;app1,user1,secret1;app2,user2,secret2

Nothing is escaped: a value holding ``;``, ``,`` or a line break cannot be
read back faithfully.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional
from .models import CredentialEntry

log = logging.getLogger(__name__)

ACCOUNT_SEP = ';'
FIELD_SEP = ','
LINE_END = '\n'
RESERVED = (ACCOUNT_SEP, FIELD_SEP, '\n', '\r')

@dataclass
class AccountRecord:
	name: str
	secret: str
	entries: List[CredentialEntry] = field(default_factory=list)

def encode_entry(entry: CredentialEntry) -> str:
	return FIELD_SEP.join((entry.app_name, entry.username, entry.secret))

def decode_entry(segment: str) -> Optional[CredentialEntry]:
	parts = segment.split(FIELD_SEP)
	if len(parts) < 3:
		return None
	# fields past the third are dropped
	return CredentialEntry(parts[0], parts[1], parts[2])

def encode_line(record: AccountRecord) -> str:
	fields = [record.name, record.secret]
	fields.extend(encode_entry(e) for e in record.entries)
	return ACCOUNT_SEP.join(fields)

def decode_line(line: str, lineno: int = 0) -> Optional[AccountRecord]:
	"""Parse one account line, or return None when it cannot be used.

	A line needs a non-empty name and secret. Empty trailing segments are
	ignored; entry segments with fewer than three fields are skipped.
	"""
	parts = line.rstrip('\r\n').split(ACCOUNT_SEP)
	while parts and not parts[-1]:
		parts.pop()
	if len(parts) < 2 or not parts[0] or not parts[1]:
		return None
	record = AccountRecord(parts[0], parts[1])
	for segment in parts[2:]:
		if not segment:
			continue
		entry = decode_entry(segment)
		if entry is None:
			log.warning("Skipping malformed entry on line %d of account %r", lineno, record.name)
			continue
		record.entries.append(entry)
	return record

def dumps(records: Iterable[AccountRecord]) -> str:
	return ''.join(encode_line(r) + LINE_END for r in records)

def loads(text: str) -> Iterator[AccountRecord]:
	"""Yield every usable account record in ``text``; bad lines are logged and skipped."""
	# only \n (optionally preceded by \r) ends a line; other Unicode breaks are data
	for lineno, line in enumerate(text.split(LINE_END), 1):
		line = line.rstrip('\r')
		if not line.strip(' \t'):
			continue
		record = decode_line(line, lineno)
		if record is None:
			log.warning("Skipping malformed line %d", lineno)
			continue
		yield record
