"""Ephemeral vector index over an agent's documents."""

from collections.abc import Sequence
from dataclasses import dataclass

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore

from superpowers.core.records import KnowledgeDocument
from superpowers.rag.documents import split_documents

DEFAULT_TOP_K = 8


@dataclass(frozen=True)
class DocumentIndex:
    """In-memory nearest-neighbour index over document rows.

    Built once per tool instantiation and never persisted. Searches only
    read from the store.

    Example:
        index = await DocumentIndex.build(documents, embeddings)
        hits = await index.search("opening hours", file_names=["stores.csv"])
    """

    store: InMemoryVectorStore
    unit_count: int
    sources: tuple[str, ...]

    @classmethod
    async def build(
        cls,
        documents: Sequence[KnowledgeDocument],
        embeddings: Embeddings,
    ) -> "DocumentIndex":
        """Embed every row of every document.

        Raises:
            Exception: Whatever the embedding provider raises.
        """
        units = split_documents(list(documents))
        store = InMemoryVectorStore(embedding=embeddings)
        if units:
            await store.aadd_documents(units)

        return cls(
            store=store,
            unit_count=len(units),
            sources=tuple(dict.fromkeys(doc.name for doc in documents)),
        )

    async def search(
        self,
        query: str,
        file_names: Sequence[str] | None = None,
        k: int = DEFAULT_TOP_K,
    ) -> list[Document]:
        """Return the ``k`` most similar rows, optionally limited to some files.

        Args:
            query: Free-text query.
            file_names: Only rows from these documents take part when given.
            k: Maximum number of rows.

        Returns:
            Rows ordered by decreasing similarity.
        """
        if self.unit_count == 0:
            return []

        if file_names:
            allowed = set(file_names)
            return await self.store.asimilarity_search(
                query,
                k=k,
                filter=lambda doc: doc.metadata.get("source") in allowed,
            )
        return await self.store.asimilarity_search(query, k=k)
