"""
page.py — Search page.

The page itself is static HTML + JS (frontend/search.html, frontend/static/search.js).
This route only injects the settings the script needs and the default items
rendered before any search.
"""

from flask import Blueprint, render_template, current_app

from utils.relevance import (
    SIMILARITY_THRESHOLD,
    LOW_CONFIDENCE_WARNING,
    FETCH_ERROR_WARNING,
    default_items,
)

page_bp = Blueprint("page", __name__)


@page_bp.route("/", methods=["GET"])
def index():
    """GET / — the semantic search page."""
    settings = {
        "searchUrl":      "/api/search",
        "limit":          current_app.config.get("SEARCH_PAGE_LIMIT", 20),
        "debounceMs":     current_app.config.get("SEARCH_DEBOUNCE_MS", 500),
        "threshold":      SIMILARITY_THRESHOLD,
        "lowConfidence":  LOW_CONFIDENCE_WARNING,
        "fetchError":     FETCH_ERROR_WARNING,
        "defaultItems":   default_items(),
    }
    return render_template(
        "search.html",
        items=settings["defaultItems"],
        settings=settings,
    )
