"""credvault: a local credential vault backed by a flat file."""

__version__ = "1.0.0"
