"""In-memory record store for tests and local dry runs."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from superpowers.core.records import AgentConfig, KnowledgeDocument, Superpower


@dataclass
class InMemoryRecordStore:
    """Dictionary-backed record store.

    Example:
        store = InMemoryRecordStore()
        store.add_superpower(Superpower(id="sp-1", name="HTTP Fetcher", tools=("http_call",)))
        store.add_agent(AgentConfig(id="a-1", name="Bot", superpower_ids=("sp-1",)))
        agent = await store.get_agent("a-1")
    """

    agents: dict[str, AgentConfig] = field(default_factory=dict)
    superpowers: dict[str, Superpower] = field(default_factory=dict)
    documents: list[KnowledgeDocument] = field(default_factory=list)

    def add_agent(self, agent: AgentConfig) -> AgentConfig:
        self.agents[agent.id] = agent
        return agent

    def add_superpower(self, superpower: Superpower) -> Superpower:
        self.superpowers[superpower.id] = superpower
        return superpower

    def add_document(self, document: KnowledgeDocument) -> KnowledgeDocument:
        self.documents.append(document)
        return document

    async def get_agent(self, agent_id: str) -> AgentConfig | None:
        return self.agents.get(agent_id)

    async def get_superpowers(self, ids: Sequence[str]) -> list[Superpower]:
        wanted = set(ids)
        matches = [sp for sp in self.superpowers.values() if sp.id in wanted]
        return sorted(matches, key=lambda sp: sp.name)

    async def get_documents(self, agent_id: str) -> list[KnowledgeDocument]:
        return [doc for doc in self.documents if doc.agent_id == agent_id]
