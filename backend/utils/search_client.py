"""
search_client.py — Python client for the search API, with the page's behaviour.

SearchApiClient  → thin HTTP wrapper over GET /api/search and GET /api/seed
Debouncer        → restartable timer; only the last call within `delay` fires
SearchSession    → browsing / searching state machine used by scripts/search_cli.py

Every fetch is tagged with a generation number. A response whose
generation is no longer the latest is dropped, so a slow answer to an old
query never replaces the results of a newer one.
"""

import logging
import threading

import requests

from utils.relevance import (
    FETCH_ERROR_WARNING,
    default_items,
    filter_by_threshold,
)

logger = logging.getLogger(__name__)

BROWSING = "browsing"
SEARCHING = "searching"


class SearchApiError(Exception):
    """Non-2xx response from the search API."""

    def __init__(self, status_code: int, message: str, details: str = None):
        super().__init__(f"{status_code}: {message}" + (f" ({details})" if details else ""))
        self.status_code = status_code
        self.message = message
        self.details = details


# ─── HTTP client ──────────────────────────────────────────────────────────────

class SearchApiClient:
    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 30, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(self, query: str, limit: int = 20) -> dict:
        """GET /api/search — returns { query, results, count }."""
        return self._get("/api/search", params={"query": query, "limit": limit})

    def seed(self) -> dict:
        """GET /api/seed — returns { message, inserted, failed }."""
        return self._get("/api/seed")

    def _get(self, path: str, params=None) -> dict:
        resp = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not resp.ok:
            raise SearchApiError(
                resp.status_code,
                body.get("error") or resp.reason or "Request failed",
                body.get("details"),
            )
        return body


# ─── Debounce ─────────────────────────────────────────────────────────────────

class Debouncer:
    """Call `fn` once input has paused for `delay` seconds."""

    def __init__(self, delay: float, fn):
        self.delay = delay
        self.fn = fn
        self._timer = None
        self._pending = None
        self._lock = threading.Lock()

    def __call__(self, *args):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            call = self._pending = [args]
            self._timer = threading.Timer(self.delay, self._fire, (call,))
            self._timer.daemon = True
            self._timer.start()

    def _fire(self, call):
        with self._lock:
            # a newer call replaced this timer after it had already started
            if self._pending is not call:
                return
            self._pending = None
            self._timer = None
        self.fn(*call[0])

    def flush(self):
        """Run the pending call now, if there is one."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            call, self._pending = self._pending, None
        if call is not None:
            self.fn(*call[0])

    def cancel(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None


# ─── Session (page state machine) ─────────────────────────────────────────────

class SearchSession:
    """
    Mirrors the search page.

    browsing  — query is blank; results are the fixed default items, no request.
    searching — query is non-blank; one request per debounce window, results
                filtered by the similarity threshold.

    `on_change(session)` is called after every state update.
    """

    def __init__(self, api: SearchApiClient, debounce_ms: int = 500, limit: int = 20, on_change=None):
        self.api = api
        self.limit = limit
        self.on_change = on_change

        self.query = ""
        self.state = BROWSING
        self.results = default_items()
        self.warning = ""
        self.loading = False

        self._generation = 0
        self._lock = threading.Lock()
        self._debounce = Debouncer(debounce_ms / 1000.0, self.fetch)

    @property
    def has_searched(self) -> bool:
        return self.state == SEARCHING

    def set_query(self, value: str):
        """Record a keystroke; the fetch runs once typing pauses."""
        self.query = value
        self._debounce(value)

    def flush(self):
        """Fetch immediately if a debounced fetch is still waiting."""
        self._debounce.flush()

    def close(self):
        self._debounce.cancel()

    def fetch(self, query: str):
        """Run the search for `query` now and update state."""
        browsing = not query.strip()
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.state = BROWSING if browsing else SEARCHING
            self.results = default_items() if browsing else self.results
            self.warning = ""
            self.loading = not browsing
        self._notify()
        if browsing:
            return

        try:
            data = self.api.search(query, limit=self.limit)
            results, warning = filter_by_threshold(data.get("results", []))
        except (requests.RequestException, SearchApiError, ValueError, KeyError, TypeError) as exc:
            logger.error(f"[Client] Error fetching results for {query!r}: {exc}")
            results, warning = None, FETCH_ERROR_WARNING

        with self._lock:
            if generation != self._generation:
                logger.debug(f"[Client] Dropping stale response for {query!r}")
                return
            if results is not None:
                self.results = results
            self.warning = warning
            self.loading = False
        self._notify()

    def _notify(self):
        if self.on_change:
            self.on_change(self)
