"""Shared test fixtures."""

import hashlib
import re
from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.embeddings import Embeddings
from pydantic import BaseModel

from superpowers.config import Settings
from superpowers.core import (
    AgentConfig,
    KnowledgeDocument,
    Script,
    SkillCatalog,
    Superpower,
    Tool,
)
from superpowers.sandbox import ScriptSandbox
from superpowers.store import InMemoryRecordStore


@pytest.fixture(autouse=True)
def reset_db_connection():
    """Reset database connection between tests to avoid event loop issues."""
    import superpowers.db.connection as db_conn

    db_conn._engine = None
    db_conn._async_session_factory = None
    yield
    db_conn._engine = None
    db_conn._async_session_factory = None


# Settings Fixtures


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return Settings(
        env="development",
        debug=True,
        llm_provider="ollama",
        ollama_base_url="http://localhost:11434",
        ollama_model="llama3.2",
    )


# Records

BOOK_APPOINTMENT = '''
from datetime import date

def main(params):
    day = date.fromisoformat(params["date"])
    if day.weekday() >= 5:
        return {"ok": False, "error": "Appointments are only available Monday to Friday"}
    return {"ok": True, "confirmation": f"Booked {params.get('name', 'guest')} on {day.isoformat()}"}
'''


@pytest.fixture
def scheduler_skill() -> Superpower:
    return Superpower(
        id="sp-scheduler",
        name="Appointment Scheduler",
        description="Books appointments on weekdays.",
        content="## Scripts\n\n- bookAppointment: params {date, name}",
        tools=("run_script",),
        scripts=(Script(name="bookAppointment", content=BOOK_APPOINTMENT),),
    )


@pytest.fixture
def fetcher_skill() -> Superpower:
    return Superpower(
        id="sp-fetcher",
        name="HTTP Fetcher",
        description="Call external APIs via HTTP.",
        content="Uses http_call to perform curl-like requests and return responses.",
        tools=('http_call("https://example.com")', "query_files"),
    )


@pytest.fixture
def agent_config() -> AgentConfig:
    return AgentConfig(
        id="agent-1",
        name="Receptionist",
        base_prompt="You are a friendly receptionist.",
        superpower_ids=("sp-scheduler", "sp-fetcher"),
    )


@pytest.fixture
def record_store(
    agent_config: AgentConfig,
    scheduler_skill: Superpower,
    fetcher_skill: Superpower,
) -> InMemoryRecordStore:
    """Store with one agent using both skills, plus an agent with none."""
    store = InMemoryRecordStore()
    store.add_superpower(scheduler_skill)
    store.add_superpower(fetcher_skill)
    store.add_agent(agent_config)
    store.add_agent(AgentConfig(id="agent-bare", name="Bare", base_prompt="Plain."))
    return store


@pytest.fixture
def stores_csv() -> KnowledgeDocument:
    return KnowledgeDocument(
        id="doc-1",
        agent_id="agent-1",
        name="stores.csv",
        content=(
            "city,opening hours\n"
            "Berlin,monday to friday 9 to 18\n"
            "\n"
            "Hamburg,monday to saturday 10 to 20\r\n"
            "Munich,closed for renovation\n"
        ),
    )


@pytest.fixture
def staff_csv() -> KnowledgeDocument:
    return KnowledgeDocument(
        id="doc-2",
        agent_id="agent-1",
        name="staff.csv",
        content="name,role\nAnna,dentist\nBen,hygienist\n",
    )


@pytest.fixture
def make_catalog():
    """Build a catalog straight from skills, bypassing the resolver."""

    def _make(*skills: Superpower, agent: AgentConfig | None = None) -> SkillCatalog:
        agent = agent or AgentConfig(
            id="agent-1", name="Test", superpower_ids=tuple(s.id for s in skills)
        )
        return SkillCatalog.from_skills(agent, list(skills))

    return _make


# Tool Fixtures


class SimpleInput(BaseModel):
    """Simple input for test tools."""

    value: str


def simple_function(value: str) -> dict:
    """Simple test function."""
    return {"result": value}


@pytest.fixture
def simple_tool() -> Tool:
    """Simple tool for testing."""
    return Tool(
        name="simple_tool",
        description="A simple test tool",
        function=simple_function,
        input_schema=SimpleInput,
    )


# Sandbox


@pytest.fixture
def sandbox() -> ScriptSandbox:
    """Sandbox with a short budget so timeout tests stay quick."""
    return ScriptSandbox(timeout=2.0, startup_timeout=30.0)


# LLM Mocks


def ai_message(content: str = "", tool_calls: list[dict] | None = None) -> MagicMock:
    response = MagicMock()
    response.content = content
    response.tool_calls = tool_calls
    return response


@pytest.fixture
def mock_chat_model() -> MagicMock:
    """Mock LangChain chat model."""
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=ai_message("Mock response"))
    model.bind_tools = MagicMock(return_value=model)
    return model


# Embeddings


class KeywordEmbeddings(Embeddings):
    """Deterministic bag-of-words embeddings.

    Texts sharing words end up close together, which is all the ranking
    tests need. A constant component keeps every vector non-zero.
    """

    def __init__(self, dimension: int = 256):
        self.dimension = dimension

    def _embed(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        vector[0] = 0.1
        for word in re.findall(r"\w+", text.lower()):
            digest = hashlib.md5(word.encode()).digest()
            vector[1 + int.from_bytes(digest[:4], "big") % (self.dimension - 1)] += 1.0
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._embed(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._embed(text)


class FailingEmbeddings(Embeddings):
    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        raise ConnectionError("embedding service unreachable")

    def embed_query(self, text: str) -> list[float]:
        raise ConnectionError("embedding service unreachable")


@pytest.fixture
def embeddings() -> KeywordEmbeddings:
    return KeywordEmbeddings()


@pytest.fixture
def failing_embeddings() -> FailingEmbeddings:
    return FailingEmbeddings()


# Temp Directory Fixtures


@pytest.fixture
def database_url(tmp_path) -> Generator[str, None, None]:
    """SQLite database file for API and store tests."""
    yield f"sqlite+aiosqlite:///{tmp_path / 'superpowers.db'}"
