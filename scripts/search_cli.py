"""
search_cli.py — Terminal client for the semantic search API.

Behaves like the search page: results below the similarity threshold are
hidden unless nothing clears it, in which case everything is shown with a
low-confidence warning.

Usage:
    python scripts/search_cli.py --seed
    python scripts/search_cli.py "tropical fruit"
    python scripts/search_cli.py --interactive
"""

import sys
import os
import logging
import argparse
import threading

import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from config import get_config
from utils.relevance import format_percent, similarity_tier
from utils.search_client import SearchApiClient, SearchApiError, SearchSession


def render(session):
    """Print the session's current view."""
    if session.loading:
        print("  searching...")
        return

    if session.warning:
        print(f"\n  {session.warning}")

    if session.has_searched:
        print(f"\nSearch Results ({len(session.results)}) for {session.query!r}")
    else:
        print("\nAvailable Content")

    if not session.results:
        print("  No results found — try a different search term")
        return

    for r in session.results:
        if session.has_searched:
            sim = r["similarity"]
            print(f"  {format_percent(sim):>5}  {sim:.3f}  [{similarity_tier(sim):<6}]  {r['content']}")
        else:
            print(f"  - {r['content']}")


def run_interactive(session):
    """
    Each line read is treated as the new contents of the search box.
    Lines arriving faster than the debounce delay collapse into one request.
    """
    print("Type a query and press Enter (blank line resets, Ctrl-D quits).")
    render(session)
    try:
        for line in sys.stdin:
            session.set_query(line.rstrip("\n"))
        session.flush()
    except KeyboardInterrupt:
        pass
    finally:
        session.close()


def run_seed(api):
    """Call /api/seed and print a one-line summary. Returns False on failure."""
    try:
        result = api.seed()
    except (SearchApiError, requests.RequestException) as exc:
        print(f"[SEED] Failed: {exc}")
        return False
    print(f"[SEED] {result.get('message')} inserted={result.get('inserted')} failed={result.get('failed')}")
    return True


def main():
    cfg = get_config()

    parser = argparse.ArgumentParser(description="Query the semantic search API")
    parser.add_argument("query", nargs="?", help="Search text (one-shot mode)")
    parser.add_argument("--url", default=os.environ.get("SEARCH_API_URL", "http://localhost:5000"),
                        help="Base URL of the search API")
    parser.add_argument("--limit", type=int, default=cfg.SEARCH_PAGE_LIMIT)
    parser.add_argument("--seed", action="store_true", help="Call /api/seed before anything else")
    parser.add_argument("--interactive", action="store_true", help="Read queries from stdin")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    api = SearchApiClient(args.url)

    if args.seed:
        if not run_seed(api):
            sys.exit(1)

    if args.interactive:
        lock = threading.Lock()

        def on_change(s):
            with lock:
                render(s)

        session = SearchSession(api, debounce_ms=cfg.SEARCH_DEBOUNCE_MS, limit=args.limit, on_change=on_change)
        run_interactive(session)
    elif args.query is not None:
        session = SearchSession(api, limit=args.limit)
        session.query = args.query
        session.fetch(args.query)
        render(session)
    elif not args.seed:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
