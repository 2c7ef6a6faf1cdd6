"""Conversion of uploaded documents into retrievable units."""

import re

from langchain_core.documents import Document

from superpowers.core.records import KnowledgeDocument

_LINE_BREAK = re.compile(r"\r?\n")


def split_rows(document: KnowledgeDocument) -> list[Document]:
    """Split a tabular document into one unit per non-blank row.

    Each unit carries the source document name and its 1-based position
    among the non-blank rows.
    """
    rows = [row for row in _LINE_BREAK.split(document.content) if row.strip()]
    return [
        Document(
            page_content=row,
            metadata={"source": document.name, "row_index": index},
        )
        for index, row in enumerate(rows, start=1)
    ]


def split_documents(documents: list[KnowledgeDocument]) -> list[Document]:
    """Split every document, preserving document order."""
    units: list[Document] = []
    for document in documents:
        units.extend(split_rows(document))
    return units
