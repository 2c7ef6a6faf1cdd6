"""Record store protocol for agents, superpowers and documents."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from superpowers.core.records import AgentConfig, KnowledgeDocument, Superpower


@runtime_checkable
class RecordStore(Protocol):
    """Read-only view of the records the orchestration core consumes.

    Implementations own persistence and referential integrity. The core never
    writes through this protocol:
    - SqlRecordStore for the running service
    - InMemoryRecordStore for tests and local dry runs
    """

    async def get_agent(self, agent_id: str) -> AgentConfig | None:
        """Fetch an agent snapshot.

        Args:
            agent_id: Agent identifier.

        Returns:
            The agent, or None when it does not exist.
        """
        ...

    async def get_superpowers(self, ids: Sequence[str]) -> list[Superpower]:
        """Fetch the superpowers with the given ids.

        Unknown ids are skipped. Results follow the store's catalog order
        (by name), not the order of ``ids``.
        """
        ...

    async def get_documents(self, agent_id: str) -> list[KnowledgeDocument]:
        """Fetch every document in an agent's knowledge base."""
        ...
