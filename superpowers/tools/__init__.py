"""Built-in tools and the default tool registry."""

from langchain_core.embeddings import Embeddings

from superpowers.config import Settings
from superpowers.core.registry import ToolRegistry
from superpowers.sandbox import ScriptSandbox
from superpowers.store.protocol import RecordStore
from superpowers.tools.http_call import create_http_call_tool
from superpowers.tools.query_db import query_db_tool
from superpowers.tools.query_files import (
    NO_DOCUMENTS_MESSAGE,
    create_query_files_tool,
    query_files_factory,
)
from superpowers.tools.run_script import create_run_script_tool, run_script_factory


def create_tool_registry(
    store: RecordStore,
    embeddings: Embeddings,
    sandbox: ScriptSandbox,
    settings: Settings,
) -> ToolRegistry:
    """Build the registry with every built-in tool.

    Static: http_call, query_db. Per agent: run_script, query_files.
    """
    registry = ToolRegistry()
    registry.register(create_http_call_tool(timeout=settings.http_call_timeout_seconds))
    registry.register(query_db_tool)
    registry.register_factory("run_script", run_script_factory(sandbox))
    registry.register_factory(
        "query_files",
        query_files_factory(store, embeddings, top_k=settings.query_files_top_k),
    )
    return registry


__all__ = [
    "create_tool_registry",
    "create_http_call_tool",
    "create_run_script_tool",
    "create_query_files_tool",
    "query_db_tool",
    "NO_DOCUMENTS_MESSAGE",
]
