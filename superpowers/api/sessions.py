"""Chat session persistence."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from superpowers.core.messages import Conversation
from superpowers.db.models import SessionModel


@dataclass
class Session:
    """A conversation with one agent.

    Only the conversation is persisted. The agent itself is rebuilt from
    its stored configuration on every turn, so edits to its superpowers
    take effect mid-conversation.
    """

    session_id: str
    agent_id: str
    conversation: Conversation = field(default_factory=Conversation)
    created_at: datetime = field(default_factory=datetime.now)
    last_accessed: datetime = field(default_factory=datetime.now)
    message_count: int = 0

    def increment_messages(self) -> None:
        self.message_count += 1


def _to_session(db_session: SessionModel) -> Session:
    return Session(
        session_id=db_session.id,
        agent_id=db_session.agent_id,
        conversation=Conversation.from_dict(db_session.conversation_data or {}),
        created_at=db_session.created_at,
        last_accessed=db_session.last_accessed,
        message_count=db_session.message_count,
    )


class SessionStore:
    """Database-backed session store."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create(self, agent_id: str) -> Session:
        """Create an empty session for an agent."""
        db_session = SessionModel(
            id=str(uuid.uuid4()),
            agent_id=agent_id,
            message_count=0,
            conversation_data=Conversation().to_dict(),
        )
        self._db.add(db_session)
        await self._db.flush()
        await self._db.refresh(db_session)
        return _to_session(db_session)

    async def get(self, session_id: str) -> Session | None:
        db_session = await self._db.get(SessionModel, session_id)
        if db_session is None:
            return None
        return _to_session(db_session)

    async def update(self, session: Session) -> None:
        """Persist the session's conversation and message count."""
        db_session = await self._db.get(SessionModel, session.session_id)
        if db_session is None:
            return

        db_session.message_count = session.message_count
        db_session.conversation_data = session.conversation.to_dict()
        await self._db.flush()

    async def delete(self, session_id: str) -> bool:
        """Delete a session.

        Returns:
            True if deleted, False if not found.
        """
        db_session = await self._db.get(SessionModel, session_id)
        if db_session is None:
            return False

        await self._db.delete(db_session)
        await self._db.flush()
        return True

    async def list_all(self, agent_id: str | None = None) -> list[Session]:
        """List sessions, newest first, optionally for one agent."""
        stmt = select(SessionModel).order_by(SessionModel.created_at.desc())
        if agent_id is not None:
            stmt = stmt.where(SessionModel.agent_id == agent_id)
        result = await self._db.execute(stmt)
        return [_to_session(s) for s in result.scalars().all()]
