"""API module.

Import the router from ``superpowers.api.routes``; it depends on
``superpowers.dependencies``, which imports from this package.
"""

from superpowers.api.auth import require_basic_auth
from superpowers.api.sessions import Session, SessionStore

__all__ = ["require_basic_auth", "Session", "SessionStore"]
