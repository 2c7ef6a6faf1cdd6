"""Semantic search tool over an agent's knowledge base."""

import logging

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from pydantic import BaseModel, Field

from superpowers.core.catalog import SkillCatalog
from superpowers.core.records import KnowledgeDocument
from superpowers.core.tool import Tool
from superpowers.rag.index import DEFAULT_TOP_K, DocumentIndex
from superpowers.store.protocol import RecordStore

logger = logging.getLogger(__name__)

NO_DOCUMENTS_MESSAGE = (
    "No documents in the knowledge base. Upload CSV files to the agent's "
    "knowledge base to enable semantic search."
)

QUERY_FILES_DESCRIPTION = (
    "Search documents in the agent knowledge base using semantic similarity. "
    "Returns relevant rows from uploaded CSV files. You MUST specify which files to search."
)


class QueryFilesInput(BaseModel):
    """Input for query_files.

    Parameters:
        query: Free-text search query.
        file_names: Knowledge base files to restrict the search to.
    """

    query: str = Field(description="The search query to find relevant document content")
    file_names: list[str] | None = Field(
        default=None,
        description="The names of the files to search in (from the knowledge base)",
    )


def format_results(results: list[Document]) -> str:
    """Render rows as ``[rank] (source): text`` lines."""
    return "\n".join(
        f"[{rank}] ({doc.metadata.get('source', 'unknown')}): {doc.page_content}"
        for rank, doc in enumerate(results, start=1)
    )


def _fixed_answer_tool(message: str) -> Tool:
    def query_files(query: str, file_names: list[str] | None = None) -> str:
        logger.info("Calling tool query_files | query=%r files=%s", query, file_names)
        return message

    return Tool(
        name="query_files",
        description=QUERY_FILES_DESCRIPTION,
        function=query_files,
        input_schema=QueryFilesInput,
    )


async def create_query_files_tool(
    documents: list[KnowledgeDocument],
    embeddings: Embeddings,
    top_k: int = DEFAULT_TOP_K,
) -> Tool:
    """Embed an agent's documents and create the query_files tool.

    Every row is embedded up front. With no documents the tool still exists
    and answers every query with ``NO_DOCUMENTS_MESSAGE``.

    Args:
        documents: The agent's knowledge base.
        embeddings: Embedding provider.
        top_k: Maximum rows per answer.

    Returns:
        The query_files tool.
    """
    if not documents:
        return _fixed_answer_tool(NO_DOCUMENTS_MESSAGE)

    try:
        index = await DocumentIndex.build(documents, embeddings)
    except Exception as e:
        logger.exception("Failed to build knowledge base index")
        return _fixed_answer_tool(f"The knowledge base is currently unavailable: {e}")

    if index.unit_count == 0:
        return _fixed_answer_tool(NO_DOCUMENTS_MESSAGE)

    logger.debug("Indexed %d rows from %s", index.unit_count, list(index.sources))

    async def query_files(query: str, file_names: list[str] | None = None) -> str:
        logger.info("Calling tool query_files | query=%r files=%s", query, file_names)
        try:
            results = await index.search(query, file_names=file_names, k=top_k)
        except Exception as e:
            logger.exception("Knowledge base search failed")
            return f"Knowledge base search failed: {e}"

        if not results:
            file_list = f" in {', '.join(file_names)}" if file_names else ""
            return f"No relevant content found{file_list}. Try a broader or different query."
        return format_results(results)

    return Tool(
        name="query_files",
        description=QUERY_FILES_DESCRIPTION,
        function=query_files,
        input_schema=QueryFilesInput,
    )


def query_files_factory(store: RecordStore, embeddings: Embeddings, top_k: int = DEFAULT_TOP_K):
    """Registry factory loading each agent's documents at resolution time."""

    async def factory(catalog: SkillCatalog) -> Tool:
        documents = await store.get_documents(catalog.agent_id)
        return await create_query_files_tool(documents, embeddings, top_k)

    return factory
