"""
conftest.py — Pytest fixtures for the semantic search demo.

Uses an in-memory SQLite database so no PostgreSQL connection is needed.
pgvector-specific SQL (CAST … AS vector, <=>) is not available in SQLite,
so the embedding provider and the vector store are replaced by the
`fake_store` fixture, which ranks by cosine similarity in Python.
"""

import os
import sys
import math
import pytest

# Put backend on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

os.environ.setdefault("FLASK_ENV",    "testing")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")


# Hand-made 3-dim vectors: (fruit, programming, web)
FAKE_VECTORS = {
    "javascript":     [0.05, 0.90, 0.40],
    "python":         [0.10, 1.00, 0.00],
    "next.js":        [0.00, 0.70, 0.90],
    "apple":          [1.00, 0.15, 0.00],
    "mango":          [1.00, 0.00, 0.05],
    "grapes":         [0.95, 0.00, 0.10],
    "fruit":          [1.00, 0.00, 0.00],
    "tropical fruit": [0.98, 0.02, 0.02],
    "programming":    [0.00, 1.00, 0.20],
    "spaceship":      [-0.20, -0.30, 0.10],
}


def cosine_similarity(a, b):
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm


class FakeVectorStore:
    """In-memory stand-in for the embeddings table and the OpenAI call."""

    def __init__(self):
        self.rows = []
        self.embed_calls = []
        self.fail_embed_for = set()

    def embed(self, text):
        self.embed_calls.append(text)
        if text in self.fail_embed_for:
            raise RuntimeError(f"Embedding generation failed: provider rejected {text!r}")
        return list(FAKE_VECTORS[text.strip()])

    def insert(self, content, embedding):
        self.rows.append({"id": len(self.rows) + 1, "content": content, "embedding": embedding})

    def search(self, embedding, limit=5):
        scored = [
            {
                "id":         row["id"],
                "content":    row["content"],
                "similarity": min(1.0, max(0.0, cosine_similarity(embedding, row["embedding"]))),
            }
            for row in self.rows
        ]
        scored.sort(key=lambda r: r["similarity"], reverse=True)
        return scored[:limit]


@pytest.fixture(scope="session")
def app():
    """Create application with an in-memory SQLite database."""
    from app import create_app
    from config import TestingConfig
    from database import db

    test_app = create_app(TestingConfig)

    with test_app.app_context():
        import models  # noqa
        db.create_all()

    yield test_app


@pytest.fixture(scope="session")
def client(app):
    return app.test_client()


@pytest.fixture
def fake_store(monkeypatch):
    """Route the search and seed routes through a FakeVectorStore."""
    store = FakeVectorStore()
    monkeypatch.setattr("routes.search.get_embedding", store.embed)
    monkeypatch.setattr("routes.search.search_similar", store.search)
    monkeypatch.setattr("routes.seed.get_embedding", store.embed)
    monkeypatch.setattr("routes.seed.insert_embedding", store.insert)
    return store


@pytest.fixture
def seeded_store(client, fake_store):
    r = client.get("/api/seed")
    assert r.status_code == 200
    return fake_store
