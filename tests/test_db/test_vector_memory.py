"""Tests for the in-process vector store."""

import pytest

from codeseek.db.vector.base import StoreError
from codeseek.db.vector.memory import InMemoryVectorDB
from codeseek.models.text_chunk import TextChunk


def make_chunk(name, seq, text, embedding):
    chunk = TextChunk.create(name, seq, text)
    chunk.embedding = list(embedding)
    return chunk


@pytest.fixture
def db():
    db = InMemoryVectorDB()
    db.ensure_collection("codebase", 3)
    yield db
    db.close()


class TestEnsureCollection:

    def test_idempotent(self, db):
        db.upsert("codebase", make_chunk("A.cs", 1, "a", [1, 0, 0]))
        db.ensure_collection("codebase", 3)

        assert db.count("codebase") == 1

    def test_count_of_missing_collection_is_zero(self):
        assert InMemoryVectorDB().count("nope") == 0

    def test_upsert_into_missing_collection_fails(self):
        with pytest.raises(StoreError, match="does not exist"):
            InMemoryVectorDB().upsert("nope", make_chunk("A.cs", 1, "a", [1, 0, 0]))


class TestUpsert:

    def test_same_key_replaces_record(self, db):
        db.upsert("codebase", make_chunk("A.cs", 1, "old", [1, 0, 0]))
        db.upsert("codebase", make_chunk("A.cs", 1, "new", [0, 1, 0]))

        assert db.count("codebase") == 1
        [hit] = db.search("codebase", [0, 1, 0], top_k=5)
        assert hit.chunk.text == "new"

    def test_rejects_blank_text(self, db):
        with pytest.raises(StoreError, match="empty text"):
            db.upsert("codebase", make_chunk("A.cs", 1, "   ", [1, 0, 0]))

    def test_rejects_missing_embedding(self, db):
        with pytest.raises(StoreError, match="without an embedding"):
            db.upsert("codebase", TextChunk.create("A.cs", 1, "a"))

    def test_rejects_dimension_mismatch(self, db):
        with pytest.raises(StoreError, match="expects 3"):
            db.upsert("codebase", make_chunk("A.cs", 1, "a", [1, 0]))

    def test_dimension_fixed_by_first_upsert_when_unknown(self):
        db = InMemoryVectorDB()
        db.ensure_collection("c", 0)
        db.upsert("c", make_chunk("A.cs", 1, "a", [1, 0]))

        with pytest.raises(StoreError):
            db.upsert("c", make_chunk("A.cs", 2, "b", [1, 0, 0]))

    def test_stored_record_is_a_copy(self, db):
        chunk = make_chunk("A.cs", 1, "a", [1, 0, 0])
        db.upsert("codebase", chunk)
        chunk.embedding[0] = -1.0

        [hit] = db.search("codebase", [1, 0, 0], top_k=1)
        assert hit.distance == pytest.approx(0.0)

    def test_search_hits_are_copies(self, db):
        db.upsert("codebase", make_chunk("A.cs", 1, "original", [1, 0, 0]))

        [hit] = db.search("codebase", [1, 0, 0], top_k=1)
        hit.chunk.text = "edited"
        hit.chunk.embedding[0] = -1.0

        [again] = db.search("codebase", [1, 0, 0], top_k=1)
        assert again.chunk.text == "original"
        assert again.distance == pytest.approx(0.0)


class TestSearch:

    def test_orders_by_cosine_distance(self, db):
        db.upsert("codebase", make_chunk("A.cs", 1, "far", [0, 0, 1]))
        db.upsert("codebase", make_chunk("A.cs", 2, "near", [1, 0.1, 0]))
        db.upsert("codebase", make_chunk("A.cs", 3, "exact", [2, 0, 0]))

        hits = db.search("codebase", [1, 0, 0], top_k=3)

        assert [h.chunk.text for h in hits] == ["exact", "near", "far"]
        assert hits[0].distance == pytest.approx(0.0)
        assert hits[2].distance == pytest.approx(1.0)

    def test_top_k_larger_than_collection_returns_all(self, db):
        db.upsert("codebase", make_chunk("A.cs", 1, "a", [1, 0, 0]))
        db.upsert("codebase", make_chunk("A.cs", 2, "b", [0, 1, 0]))

        assert len(db.search("codebase", [1, 0, 0], top_k=3)) == 2

    def test_top_k_limits_results(self, db):
        for i in range(1, 6):
            db.upsert("codebase", make_chunk("A.cs", i, f"t{i}", [1, i, 0]))

        assert len(db.search("codebase", [1, 0, 0], top_k=2)) == 2

    def test_empty_collection_returns_nothing(self, db):
        assert db.search("codebase", [1, 0, 0], top_k=5) == []

    def test_ties_keep_insertion_order(self, db):
        db.upsert("codebase", make_chunk("A.cs", 1, "first", [1, 0, 0]))
        db.upsert("codebase", make_chunk("A.cs", 2, "second", [1, 0, 0]))

        hits = db.search("codebase", [1, 0, 0], top_k=2)

        assert [h.chunk.key for h in hits] == ["A.cs_1", "A.cs_2"]

    def test_zero_query_vector_does_not_fail(self, db):
        db.upsert("codebase", make_chunk("A.cs", 1, "a", [1, 0, 0]))

        [hit] = db.search("codebase", [0, 0, 0], top_k=1)

        assert hit.distance == pytest.approx(1.0)

    def test_query_dimension_mismatch(self, db):
        db.upsert("codebase", make_chunk("A.cs", 1, "a", [1, 0, 0]))

        with pytest.raises(StoreError):
            db.search("codebase", [1, 0], top_k=1)

    def test_invalid_top_k(self, db):
        with pytest.raises(StoreError):
            db.search("codebase", [1, 0, 0], top_k=0)
