"""Simple backup utility script.

Usage (from repo root):
  python -m scripts.backup --dest backups/
"""
from __future__ import annotations
from datetime import datetime
from pathlib import Path
import click
from credvault.config import settings
from credvault.lib.errors import PersistenceError
from credvault.lib.store import AccountStore

@click.command()
@click.option('--dest', type=click.Path(file_okay=False, path_type=Path), default=Path('backups'), help='Destination directory for backups.')
@click.option('--store', 'store_path', type=click.Path(dir_okay=False, path_type=Path), envvar='CREDVAULT_PATH', help='Path of the account store file.')
def main(dest: Path, store_path: Path | None):
	store = AccountStore(store_path)
	if not store.exists():
		click.echo(f"No store at {store.path}; nothing to backup.")
		raise SystemExit(1)
	stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
	target = dest / f"{store.path.stem}_{stamp}{store.path.suffix}{settings.BACKUP_SUFFIX}"
	try:
		store.backup(target)
	except PersistenceError as e:
		click.echo(f"Error: {e}")
		raise SystemExit(1)
	click.echo(f"Backup written: {target}")

if __name__ == '__main__':  # pragma: no cover
	main()
