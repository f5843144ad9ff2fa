"""Core application infrastructure: configuration, store and observability.

Exports configuration settings to simplify import paths inside tests
(e.g. `from pariwar.core import settings`).
"""

from .config import settings  # noqa: F401
