"""
relevance.py — How search results are presented on the search page.

Threshold
─────────
A result is "relevant" when similarity >= SIMILARITY_THRESHOLD (0.4).
If at least one result is relevant, only relevant results are shown.
Otherwise every result is shown with a low-confidence warning.

Tiers (badge / colour on the page)
──────────────────────────────────
similarity >= 0.8 → high
similarity >= 0.6 → medium
similarity >= 0.4 → low
otherwise         → poor
"""

SIMILARITY_THRESHOLD = 0.4

LOW_CONFIDENCE_WARNING = (
    "⚠️ No results found with high similarity (>40%). "
    "Showing all available results, but they may not be relevant."
)
FETCH_ERROR_WARNING = "Error fetching search results. Please try again."

# Shown while the search box is empty (browsing state)
DEFAULT_ITEMS = [
    {"id": 1, "content": "javascript", "similarity": 1},
    {"id": 2, "content": "python",     "similarity": 1},
    {"id": 3, "content": "next.js",    "similarity": 1},
    {"id": 4, "content": "apple",      "similarity": 1},
    {"id": 5, "content": "mango",      "similarity": 1},
    {"id": 6, "content": "grapes",     "similarity": 1},
]

_TIERS = (
    (0.8, "high"),
    (0.6, "medium"),
    (0.4, "low"),
)


def default_items() -> list:
    return [dict(item) for item in DEFAULT_ITEMS]


def filter_by_threshold(results: list, threshold: float = SIMILARITY_THRESHOLD):
    """
    Apply the page's relevance rule.

    Returns:
        (visible_results, warning) — warning is "" when at least one
        result meets the threshold.
    """
    relevant = [r for r in results if r["similarity"] >= threshold]
    if relevant:
        return relevant, ""
    return list(results), LOW_CONFIDENCE_WARNING


def similarity_tier(similarity: float) -> str:
    for floor, tier in _TIERS:
        if similarity >= floor:
            return tier
    return "poor"


def format_percent(similarity: float) -> str:
    return f"{similarity * 100:.0f}%"
