"""
search.py — Semantic search API route.

Search flow:
  1. Read the query string (?query= or ?q=) and optional ?limit=
  2. Embed the query via routes/ai.py
  3. Nearest-neighbour query against the embeddings table (pgvector <=>)
  4. Return rows ranked by similarity (1 - cosine distance)

No retries and no partial results: any downstream failure is a 500.
"""

import logging
from flask import Blueprint, request, current_app

from utils.embeddings import get_embedding, search_similar
from utils.response import success, bad_request, server_error

search_bp = Blueprint("search", __name__)
logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════
#  Search
# ════════════════════════════════════════════════════════════

@search_bp.route("/search", methods=["GET"])
def search():
    """
    GET /api/search?query=<string>&limit=<int>
    `q` is accepted as an alias for `query`. limit defaults to 5.

    Response:
    {
        "query":   str,
        "results": [ { "id": int, "content": str, "similarity": float } ],
        "count":   int
    }
    """
    query = request.args.get("query") or request.args.get("q")
    if not query:
        return bad_request("Missing 'query' or 'q' parameter")

    limit = _parse_limit(request.args.get("limit"))
    if limit is None:
        return bad_request("'limit' must be a positive integer")

    logger.info(f"[Search] Searching for: {query!r} (limit={limit})")

    try:
        embedding = get_embedding(query)
        results = search_similar(embedding, limit)
    except Exception as exc:
        logger.exception("[Search] Error processing search")
        return server_error("Failed to process search", details=str(exc))

    logger.info(f"[Search] {len(results)} result(s) for {query!r}")

    return success({
        "query":   query,
        "results": results,
        "count":   len(results),
    })


# ════════════════════════════════════════════════════════════
#  Helpers
# ════════════════════════════════════════════════════════════

def _parse_limit(raw):
    """
    Parse the ?limit= parameter.
    Missing → SEARCH_DEFAULT_LIMIT; not a positive integer → None;
    above SEARCH_MAX_LIMIT → clamped.
    """
    if raw is None or raw.strip() == "":
        return current_app.config.get("SEARCH_DEFAULT_LIMIT", 5)
    try:
        limit = int(raw)
    except ValueError:
        return None
    if limit < 1:
        return None
    return min(limit, current_app.config.get("SEARCH_MAX_LIMIT", 100))
