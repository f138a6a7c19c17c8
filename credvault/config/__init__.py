"""Configuration settings and constants for credvault.

Import constants from here (``from credvault.config import SPECIAL_CHARS``)
or from ``credvault.config.settings`` directly; both expose the same names.
"""

from .settings import *  # noqa: F401,F403
from .settings import __all__  # noqa: F401
