"""RAG module - knowledge base retrieval."""

from superpowers.rag.documents import split_documents, split_rows
from superpowers.rag.embeddings import EmbeddingsFactoryError, create_embeddings
from superpowers.rag.index import DEFAULT_TOP_K, DocumentIndex

__all__ = [
    "DocumentIndex",
    "DEFAULT_TOP_K",
    "split_rows",
    "split_documents",
    "create_embeddings",
    "EmbeddingsFactoryError",
]
