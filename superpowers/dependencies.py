"""FastAPI dependency injection."""

from functools import lru_cache

from fastapi import Depends
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from sqlalchemy.ext.asyncio import AsyncSession

from superpowers.api.sessions import SessionStore
from superpowers.config import get_settings
from superpowers.core.builder import AgentBuilder
from superpowers.core.registry import ToolRegistry
from superpowers.db.connection import get_db_session
from superpowers.llm import LLMProvider, create_llm_provider
from superpowers.rag import create_embeddings
from superpowers.sandbox import ScriptSandbox
from superpowers.store import SqlRecordStore
from superpowers.tools import create_tool_registry


@lru_cache
def get_llm_provider() -> LLMProvider:
    """Get cached LLM provider instance."""
    return create_llm_provider(get_settings())


def get_chat_model() -> BaseChatModel:
    """Get LangChain chat model for dependency injection."""
    return get_llm_provider().get_chat_model()


@lru_cache
def get_embeddings() -> Embeddings:
    """Get cached embeddings for knowledge base search."""
    return create_embeddings(get_settings())


@lru_cache
def get_sandbox() -> ScriptSandbox:
    """Get the script sandbox configured from settings."""
    settings = get_settings()
    return ScriptSandbox(
        timeout=settings.script_timeout_seconds,
        startup_timeout=settings.script_startup_timeout_seconds,
        start_method=settings.sandbox_start_method,
    )


def get_record_store(db: AsyncSession = Depends(get_db_session)) -> SqlRecordStore:
    """Record store bound to the request's database session."""
    return SqlRecordStore(db)


def get_tool_registry(
    store: SqlRecordStore = Depends(get_record_store),
    embeddings: Embeddings = Depends(get_embeddings),
    sandbox: ScriptSandbox = Depends(get_sandbox),
) -> ToolRegistry:
    """Tool registry whose per-agent factories read from the request's store."""
    return create_tool_registry(store, embeddings, sandbox, get_settings())


def get_agent_builder(
    store: SqlRecordStore = Depends(get_record_store),
    registry: ToolRegistry = Depends(get_tool_registry),
    chat_model: BaseChatModel = Depends(get_chat_model),
) -> AgentBuilder:
    """Builder that assembles a fresh agent for each chat turn."""
    return AgentBuilder(
        store=store,
        registry=registry,
        chat_model=chat_model,
        max_iterations=get_settings().agent_max_iterations,
    )


def get_session_store(db: AsyncSession = Depends(get_db_session)) -> SessionStore:
    """Get session store with database session."""
    return SessionStore(db)
