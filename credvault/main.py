"""Program entry point (CLI dispatcher).

Logging is configured here only; library modules just create loggers.
"""
from __future__ import annotations
import logging
from credvault.cli.commands import cli
from credvault.config.settings import LOG_FORMAT, LOG_LEVEL

def main():  # pragma: no cover - thin wrapper
	logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
	cli()

if __name__ == '__main__':  # pragma: no cover
	main()
