"""SQLAlchemy-backed record store."""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from superpowers.core.records import AgentConfig, KnowledgeDocument, Script, Superpower
from superpowers.db.models import (
    AgentModel,
    AgentSuperpowerModel,
    DocumentModel,
    SessionModel,
    SuperpowerModel,
)

logger = logging.getLogger(__name__)


class InvalidReferenceError(Exception):
    """An agent references superpowers that do not exist."""

    def __init__(self, missing_ids: Sequence[str]):
        self.missing_ids = list(missing_ids)
        super().__init__(f"Unknown superpower ids: {', '.join(self.missing_ids)}")


def _parse_tools(value: Any) -> tuple[Any, ...]:
    """Stored tool lists degrade to empty when malformed."""
    return tuple(value) if isinstance(value, list) else ()


def _parse_scripts(value: Any) -> tuple[Script, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(
        Script(name=item["name"], content=item["content"])
        for item in value
        if isinstance(item, dict)
        and isinstance(item.get("name"), str)
        and isinstance(item.get("content"), str)
    )


def superpower_from_model(model: SuperpowerModel) -> Superpower:
    return Superpower(
        id=model.id,
        name=model.name,
        description=model.description or "",
        content=model.content or "",
        tools=_parse_tools(model.tools),
        scripts=_parse_scripts(model.scripts),
    )


def agent_from_model(model: AgentModel) -> AgentConfig:
    return AgentConfig(
        id=model.id,
        name=model.name,
        base_prompt=model.base_prompt or "",
        superpower_ids=tuple(link.superpower_id for link in model.superpower_links),
    )


def document_from_model(model: DocumentModel) -> KnowledgeDocument:
    return KnowledgeDocument(
        id=model.id,
        agent_id=model.agent_id,
        name=model.name,
        content=model.content,
    )


def _scripts_to_json(scripts: Sequence[Script]) -> list[dict[str, str]]:
    return [{"name": s.name, "content": s.content} for s in scripts]


class SqlRecordStore:
    """Record store over an SQLAlchemy async session.

    Implements the read-only ``RecordStore`` contract used by the
    orchestration core, plus the create/update/delete operations used by
    the HTTP API. The caller owns the session and its transaction.

    Example:
        async with session_factory() as db:
            store = SqlRecordStore(db)
            agent = await store.create_agent("Researcher Bot", "You research.", [sp.id])
            await db.commit()
    """

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _load_agent(self, agent_id: str) -> AgentModel | None:
        # Reload links even when the agent is already in the session.
        result = await self._db.execute(
            select(AgentModel)
            .where(AgentModel.id == agent_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    # RecordStore contract

    async def get_agent(self, agent_id: str) -> AgentConfig | None:
        model = await self._load_agent(agent_id)
        return agent_from_model(model) if model else None

    async def get_superpowers(self, ids: Sequence[str]) -> list[Superpower]:
        if not ids:
            return []
        result = await self._db.execute(
            select(SuperpowerModel)
            .where(SuperpowerModel.id.in_(list(ids)))
            .order_by(SuperpowerModel.name)
        )
        return [superpower_from_model(m) for m in result.scalars().all()]

    async def get_documents(self, agent_id: str) -> list[KnowledgeDocument]:
        result = await self._db.execute(
            select(DocumentModel)
            .where(DocumentModel.agent_id == agent_id)
            .order_by(DocumentModel.created_at, DocumentModel.name)
        )
        return [document_from_model(m) for m in result.scalars().all()]

    # Superpowers

    async def list_superpowers(self) -> list[Superpower]:
        result = await self._db.execute(select(SuperpowerModel).order_by(SuperpowerModel.name))
        return [superpower_from_model(m) for m in result.scalars().all()]

    async def get_superpower(self, superpower_id: str) -> Superpower | None:
        model = await self._db.get(SuperpowerModel, superpower_id)
        return superpower_from_model(model) if model else None

    async def create_superpower(
        self,
        name: str,
        description: str = "",
        content: str = "",
        tools: Sequence[Any] = (),
        scripts: Sequence[Script] = (),
    ) -> Superpower:
        model = SuperpowerModel(
            name=name,
            description=description,
            content=content,
            tools=list(tools),
            scripts=_scripts_to_json(scripts),
        )
        self._db.add(model)
        await self._db.flush()
        logger.info("Created superpower %s (%s)", name, model.id)
        return superpower_from_model(model)

    async def update_superpower(
        self,
        superpower_id: str,
        name: str,
        description: str = "",
        content: str = "",
        tools: Sequence[Any] = (),
        scripts: Sequence[Script] = (),
    ) -> Superpower | None:
        model = await self._db.get(SuperpowerModel, superpower_id)
        if model is None:
            return None

        model.name = name
        model.description = description
        model.content = content
        model.tools = list(tools)
        model.scripts = _scripts_to_json(scripts)
        await self._db.flush()
        return superpower_from_model(model)

    async def delete_superpower(self, superpower_id: str) -> bool:
        """Delete a superpower and detach it from every agent."""
        model = await self._db.get(SuperpowerModel, superpower_id)
        if model is None:
            return False

        await self._db.execute(
            delete(AgentSuperpowerModel).where(AgentSuperpowerModel.superpower_id == superpower_id)
        )
        await self._db.delete(model)
        await self._db.flush()
        return True

    async def count_superpowers(self) -> int:
        result = await self._db.execute(select(SuperpowerModel.id))
        return len(result.scalars().all())

    # Agents

    async def list_agents(self) -> list[AgentConfig]:
        result = await self._db.execute(
            select(AgentModel).order_by(AgentModel.name).execution_options(populate_existing=True)
        )
        return [agent_from_model(m) for m in result.scalars().all()]

    async def _check_references(self, superpower_ids: Sequence[str]) -> list[str]:
        """Deduplicate ids, preserving order, and verify they exist."""
        unique_ids = list(dict.fromkeys(superpower_ids))
        if not unique_ids:
            return unique_ids

        result = await self._db.execute(
            select(SuperpowerModel.id).where(SuperpowerModel.id.in_(unique_ids))
        )
        found = set(result.scalars().all())
        missing = [sid for sid in unique_ids if sid not in found]
        if missing:
            raise InvalidReferenceError(missing)
        return unique_ids

    async def create_agent(
        self,
        name: str,
        base_prompt: str = "",
        superpower_ids: Sequence[str] = (),
    ) -> AgentConfig:
        """Create an agent.

        Raises:
            InvalidReferenceError: If a superpower id does not exist.
        """
        ids = await self._check_references(superpower_ids)
        model = AgentModel(
            name=name,
            base_prompt=base_prompt,
            superpower_links=[
                AgentSuperpowerModel(superpower_id=sid, position=i) for i, sid in enumerate(ids)
            ],
        )
        self._db.add(model)
        await self._db.flush()
        logger.info("Created agent %s (%s)", name, model.id)
        return agent_from_model(model)

    async def update_agent(
        self,
        agent_id: str,
        name: str,
        base_prompt: str = "",
        superpower_ids: Sequence[str] = (),
    ) -> AgentConfig | None:
        """Update an agent, replacing its superpower links wholesale.

        Raises:
            InvalidReferenceError: If a superpower id does not exist.
        """
        model = await self._load_agent(agent_id)
        if model is None:
            return None

        ids = await self._check_references(superpower_ids)
        model.name = name
        model.base_prompt = base_prompt
        model.superpower_links.clear()
        await self._db.flush()
        model.superpower_links.extend(
            AgentSuperpowerModel(superpower_id=sid, position=i) for i, sid in enumerate(ids)
        )
        await self._db.flush()
        return agent_from_model(model)

    async def delete_agent(self, agent_id: str) -> bool:
        """Delete an agent with its documents, sessions and links."""
        model = await self._load_agent(agent_id)
        if model is None:
            return False

        await self._db.execute(delete(DocumentModel).where(DocumentModel.agent_id == agent_id))
        await self._db.execute(delete(SessionModel).where(SessionModel.agent_id == agent_id))
        await self._db.delete(model)
        await self._db.flush()
        return True

    # Documents

    async def add_document(self, agent_id: str, name: str, content: str) -> KnowledgeDocument | None:
        """Attach a document to an agent; None if the agent does not exist."""
        if await self._db.get(AgentModel, agent_id) is None:
            return None

        model = DocumentModel(agent_id=agent_id, name=name, content=content)
        self._db.add(model)
        await self._db.flush()
        logger.info("Added document %s to agent %s", name, agent_id)
        return document_from_model(model)

    async def delete_document(self, document_id: str) -> bool:
        model = await self._db.get(DocumentModel, document_id)
        if model is None:
            return False
        await self._db.delete(model)
        await self._db.flush()
        return True
