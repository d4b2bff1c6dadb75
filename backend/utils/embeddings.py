"""
embeddings.py — pgvector storage and nearest-neighbour search.

Ranking is delegated to pgvector's cosine distance operator (<=>).
similarity = 1 - cosine_distance, so higher is more similar.
"""

import logging

from sqlalchemy import text as sql_text
from database import db

logger = logging.getLogger(__name__)


def get_embedding(text: str) -> list:
    """
    Generate an embedding vector for text.
    Delegates to ai.py — isolated AI provider call.
    """
    from routes.ai import generate_embedding
    return generate_embedding(text)


def to_vector_literal(embedding) -> str:
    """Format an embedding for pgvector: '[0.1,0.2,...]'."""
    return "[" + ",".join(str(float(v)) for v in embedding) + "]"


def search_similar(embedding: list, limit: int = 5, session=None) -> list:
    """
    Return the `limit` stored items closest to `embedding`, nearest first.

    Each result is a dict: { id, content, similarity }.
    Database errors propagate to the caller.
    """
    session = session or db.session
    vec_str = to_vector_literal(embedding)

    rows = session.execute(sql_text(
        """
        SELECT id, content,
               1 - (embedding <=> CAST(:vec AS vector)) AS similarity
        FROM embeddings
        WHERE embedding IS NOT NULL
        ORDER BY embedding <=> CAST(:vec AS vector)
        LIMIT :limit
        """
    ), {"vec": vec_str, "limit": limit}).fetchall()

    return [_row_to_result(row) for row in rows]


def insert_embedding(content: str, embedding: list, session=None) -> None:
    """Insert one row into the embeddings table and commit."""
    session = session or db.session
    try:
        session.execute(sql_text(
            """
            INSERT INTO embeddings (content, embedding)
            VALUES (:content, CAST(:vec AS vector))
            """
        ), {"content": content, "vec": to_vector_literal(embedding)})
        session.commit()
    except Exception:
        session.rollback()
        raise


def _row_to_result(row) -> dict:
    # cosine distance lies in [0, 2]; anti-correlated vectors would go negative
    similarity = min(1.0, max(0.0, float(row.similarity)))
    return {
        "id":         row.id,
        "content":    row.content,
        "similarity": similarity,
    }
