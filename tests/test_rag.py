"""Tests for document splitting and the in-memory index."""

import pytest

from superpowers.core import KnowledgeDocument
from superpowers.rag import DocumentIndex, split_documents, split_rows


class TestSplitRows:
    def test_one_unit_per_non_blank_line(self, stores_csv):
        units = split_rows(stores_csv)

        assert [u.page_content for u in units] == [
            "city,opening hours",
            "Berlin,monday to friday 9 to 18",
            "Hamburg,monday to saturday 10 to 20",
            "Munich,closed for renovation",
        ]
        assert [u.metadata["row_index"] for u in units] == [1, 2, 3, 4]
        assert {u.metadata["source"] for u in units} == {"stores.csv"}

    def test_whitespace_lines_are_dropped(self):
        doc = KnowledgeDocument(id="d", agent_id="a", name="x.csv", content="a\n   \n\t\nb")

        assert [u.page_content for u in split_rows(doc)] == ["a", "b"]

    def test_empty_document(self):
        doc = KnowledgeDocument(id="d", agent_id="a", name="x.csv", content="")

        assert split_rows(doc) == []

    def test_split_documents_keeps_order(self, stores_csv, staff_csv):
        units = split_documents([staff_csv, stores_csv])

        assert len(units) == 7
        assert units[0].metadata == {"source": "staff.csv", "row_index": 1}
        assert units[3].metadata == {"source": "stores.csv", "row_index": 1}


class TestDocumentIndex:
    @pytest.mark.asyncio
    async def test_build_counts_units(self, stores_csv, staff_csv, embeddings):
        index = await DocumentIndex.build([stores_csv, staff_csv], embeddings)

        assert index.unit_count == 7
        assert index.sources == ("stores.csv", "staff.csv")

    @pytest.mark.asyncio
    async def test_search_ranks_by_similarity(self, stores_csv, staff_csv, embeddings):
        index = await DocumentIndex.build([stores_csv, staff_csv], embeddings)

        results = await index.search("Anna dentist", k=1)

        assert results[0].page_content == "Anna,dentist"

    @pytest.mark.asyncio
    async def test_search_respects_k(self, stores_csv, embeddings):
        index = await DocumentIndex.build([stores_csv], embeddings)

        assert len(await index.search("monday", k=2)) == 2

    @pytest.mark.asyncio
    async def test_search_filters_by_file(self, stores_csv, staff_csv, embeddings):
        index = await DocumentIndex.build([stores_csv, staff_csv], embeddings)

        results = await index.search("Anna dentist", file_names=["stores.csv"])

        assert results
        assert {r.metadata["source"] for r in results} == {"stores.csv"}

    @pytest.mark.asyncio
    async def test_search_unknown_file(self, stores_csv, embeddings):
        index = await DocumentIndex.build([stores_csv], embeddings)

        assert await index.search("Berlin", file_names=["missing.csv"]) == []

    @pytest.mark.asyncio
    async def test_empty_index(self, embeddings):
        index = await DocumentIndex.build([], embeddings)

        assert index.unit_count == 0
        assert await index.search("anything") == []
