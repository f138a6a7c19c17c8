"""CLI commands implemented with click.

Each invocation opens the store, logs in when the command needs an account,
runs one command through the Session, and prints the outcome.
"""
from __future__ import annotations
import click
from pathlib import Path
from credvault.lib.policy import check_strength
from credvault.lib.session import Result, Session
from credvault.lib.store import AccountStore

def _report(result: Result) -> bool:
	if result.warning:
		click.echo(f'Warning: {result.warning}')
	if not result.ok:
		click.echo(f'Error: {result.message}')
	return result.ok

def _login(ctx: click.Context, name: str, password: str) -> Session | None:
	session: Session = ctx.obj
	return session if _report(session.login(name, password)) else None

@click.group()
@click.option('--store', 'store_path', type=click.Path(dir_okay=False, path_type=Path), envvar='CREDVAULT_PATH', help='Path of the account store file.')
@click.option('--lenient', is_flag=True, help='Skip field and strength validation.')
@click.pass_context
def cli(ctx, store_path, lenient):
	"""credvault: local credential vault"""
	store = AccountStore.open(store_path, strict=False if lenient else None)
	if store.last_error is not None:
		click.echo(f'Warning: {store.last_error}')
	ctx.obj = Session(store)

@cli.command()
@click.option('--name', prompt=True)
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.pass_obj
def register(session: Session, name, password):
	"""Register a new account."""
	if _report(session.register(name, password)):
		click.echo('User registered successfully.')

@cli.command()
@click.option('--name', prompt=True)
@click.option('--password', prompt=True, hide_input=True)
@click.option('--app', 'app_name', prompt='App name')
@click.option('--username', prompt=True)
@click.option('--secret', prompt=True, hide_input=True)
@click.pass_context
def add(ctx, name, password, app_name, username, secret):
	"""Add or replace the credential stored for an application."""
	session = _login(ctx, name, password)
	if session and _report(session.add_credential(app_name, username, secret)):
		click.echo('Password added.')

@cli.command()
@click.argument('app_name')
@click.option('--name', prompt=True)
@click.option('--password', prompt=True, hide_input=True)
@click.pass_context
def find(ctx, app_name, name, password):
	"""Show the credential stored for APP_NAME."""
	session = _login(ctx, name, password)
	if session is None:
		return
	result = session.find_credential(app_name)
	if _report(result):
		e = result.value
		click.echo(f"App: {e.app_name}\nUsername: {e.username}\nPassword: {e.secret}")

@cli.command()
@click.argument('app_name')
@click.option('--name', prompt=True)
@click.option('--password', prompt=True, hide_input=True)
@click.pass_context
def delete(ctx, app_name, name, password):
	"""Delete the credential stored for APP_NAME."""
	session = _login(ctx, name, password)
	if session is None:
		return
	result = session.delete_credential(app_name)
	if _report(result):
		click.echo('Password deleted.' if result.value else 'No application found with the given name.')

@cli.command('list')
@click.option('--name', prompt=True)
@click.option('--password', prompt=True, hide_input=True)
@click.pass_context
def list_entries(ctx, name, password):
	"""List stored applications and usernames (secrets hidden)."""
	session = _login(ctx, name, password)
	if session is None:
		return
	entries = session.current.entries
	if not entries:
		click.echo('No credentials stored.')
	for e in entries:
		click.echo(f"{e.app_name}: {e.username}")

@cli.command('check-strength')
@click.argument('password')
def check_strength_cmd(password):
	"""Check a password against the strength policy."""
	_ok, feedback = check_strength(password)
	click.echo(feedback)
