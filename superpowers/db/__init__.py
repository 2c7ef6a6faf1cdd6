"""Database module for agents, superpowers, documents and sessions."""

from superpowers.db.connection import close_db, get_db_session, get_session_factory, init_db
from superpowers.db.models import (
    AgentModel,
    AgentSuperpowerModel,
    Base,
    DocumentModel,
    SessionModel,
    SuperpowerModel,
)

__all__ = [
    "Base",
    "AgentModel",
    "AgentSuperpowerModel",
    "DocumentModel",
    "SessionModel",
    "SuperpowerModel",
    "close_db",
    "get_db_session",
    "get_session_factory",
    "init_db",
]
