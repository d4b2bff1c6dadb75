"""
models.py — Database table definitions for the semantic search demo.

One table: embeddings. Rows are only ever inserted (by the seed route);
nothing in the application updates or deletes them.
"""

from database import db
from sqlalchemy import Column, Integer, Text


# ─────────────────────────────────────────────
# Embeddings (indexed items)
# ─────────────────────────────────────────────

class Embedding(db.Model):
    """
    A piece of text and its vector embedding.
    The embedding column is a pgvector column whose dimension must match
    the configured embedding model (1536 for text-embedding-3-small).
    """
    __tablename__ = "embeddings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    # pgvector column — patched to vector(N) by scripts/init_db.py; SQLAlchemy uses Text as placeholder
    embedding = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Embedding {self.id} {self.content!r}>"
