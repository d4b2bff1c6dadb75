"""
seed.py — Demo data route.

Embeds a fixed list of example strings and inserts one row per string.
Not idempotent: every call inserts a fresh copy of each item.
"""

import logging
from flask import Blueprint

from utils.embeddings import get_embedding, insert_embedding
from utils.response import success, server_error

seed_bp = Blueprint("seed", __name__)
logger = logging.getLogger(__name__)

SEED_ITEMS = [
    "javascript",
    "python",
    "next.js",
    "apple",
    "mango",
    "grapes",
]


@seed_bp.route("/seed", methods=["GET"])
def seed():
    """
    GET /api/seed
    Inserts the example items. A failure on one item is logged and skipped.

    Response:
    {
        "message":  str,
        "inserted": int,
        "failed":   [str]
    }
    """
    logger.info("[Seed] Starting embedding insertion...")

    try:
        failed = [content for content in SEED_ITEMS if not _insert_item(content)]
    except Exception:
        logger.exception("[Seed] Error inserting embeddings")
        return server_error("Failed to insert embeddings")

    inserted = len(SEED_ITEMS) - len(failed)
    logger.info(f"[Seed] Done: {inserted} inserted, {len(failed)} failed")

    return success({
        "message":  "Embeddings inserted successfully!",
        "inserted": inserted,
        "failed":   failed,
    })


def _insert_item(content: str) -> bool:
    """Embed and insert one item. Returns False (and logs) on failure."""
    logger.info(f"[Seed] Inserting embedding for: {content}")
    try:
        embedding = get_embedding(content)
        logger.debug(f"[Seed] Generated {len(embedding)}-dim embedding for {content!r}")
        insert_embedding(content, embedding)
    except Exception as exc:
        logger.error(f"[Seed] Error inserting embedding for {content!r}: {exc}")
        return False

    logger.info(f"[Seed] Successfully inserted: {content}")
    return True
