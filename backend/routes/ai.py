"""
ai.py — ALL OpenAI calls are isolated here.

This is the ONLY file that imports or calls OpenAI.
To swap to a local embedding model, change only this file. Nothing else changes.

Current provider:
  - Embeddings: OpenAI text-embedding-3-small (1536 dimensions)

Swap target:
  - Embeddings: sentence-transformers (local)

The stored vector column is sized for the configured model. Changing
EMBEDDING_MODEL without re-seeding makes stored and query vectors
incomparable.
"""

import openai
from flask import current_app


# ─── Embeddings ───────────────────────────────────────────────────────────────

def generate_embedding(text: str) -> list:
    """
    Generate a vector embedding for text.

    Args:
        text: The text to embed (a search query or a seed item)

    Returns:
        List of floats (EMBEDDING_DIMENSIONS long)

    Raises:
        RuntimeError if embedding generation fails
    """
    try:
        api_key = current_app.config.get("OPENAI_API_KEY")
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY not configured.")
        client = openai.OpenAI(api_key=api_key)
        response = client.embeddings.create(
            model=current_app.config.get("EMBEDDING_MODEL", "text-embedding-3-small"),
            input=text.strip() or text,
        )
        return response.data[0].embedding
    except Exception as exc:
        raise RuntimeError(f"Embedding generation failed: {exc}") from exc
