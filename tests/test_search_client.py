"""
test_search_client.py — Python search client: HTTP wrapper, debounce, page state machine.
"""

import threading
import time

import pytest
import requests

from utils.relevance import DEFAULT_ITEMS, FETCH_ERROR_WARNING, LOW_CONFIDENCE_WARNING
from utils.search_client import (
    BROWSING,
    SEARCHING,
    Debouncer,
    SearchApiClient,
    SearchApiError,
    SearchSession,
)


def _result(rid, content, similarity):
    return {"id": rid, "content": content, "similarity": similarity}


class FakeApi:
    """Answers from a dict of canned responses; records every query."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.queries = []
        self.gates = {}

    def search(self, query, limit=20):
        self.queries.append((query, limit))
        gate = self.gates.get(query)
        if gate is not None:
            gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        results = self.responses.get(query, [])
        return {"query": query, "results": results, "count": len(results)}


class FakeResponse:
    def __init__(self, status_code, body, reason="OK"):
        self.status_code = status_code
        self._body = body
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeHttpSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        return self.response


class TestSearchApiClient:
    def test_search_request(self):
        http = FakeHttpSession(FakeResponse(200, {"query": "fruit", "results": [], "count": 0}))
        api = SearchApiClient("http://search.local/", timeout=5, session=http)
        assert api.search("fruit", limit=20)["count"] == 0
        assert http.calls == [
            ("http://search.local/api/search", {"query": "fruit", "limit": 20}, 5),
        ]

    def test_seed_request(self):
        http = FakeHttpSession(FakeResponse(200, {"message": "Embeddings inserted successfully!"}))
        api = SearchApiClient("http://search.local", session=http)
        assert api.seed()["message"] == "Embeddings inserted successfully!"
        assert http.calls[0][0] == "http://search.local/api/seed"

    def test_server_error_raises(self):
        body = {"error": "Failed to process search", "details": "db down"}
        api = SearchApiClient(session=FakeHttpSession(FakeResponse(500, body, "INTERNAL SERVER ERROR")))
        with pytest.raises(SearchApiError) as exc_info:
            api.search("fruit")
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to process search"
        assert exc_info.value.details == "db down"

    def test_non_json_error_body(self):
        api = SearchApiClient(session=FakeHttpSession(FakeResponse(502, None, "Bad Gateway")))
        with pytest.raises(SearchApiError) as exc_info:
            api.search("fruit")
        assert exc_info.value.message == "Bad Gateway"


class TestDebouncer:
    def test_only_last_call_fires(self):
        calls = []
        fired = threading.Event()

        def fn(value):
            calls.append(value)
            fired.set()

        debounce = Debouncer(0.05, fn)
        for value in ("f", "fr", "fru", "fruit"):
            debounce(value)
        assert fired.wait(timeout=2)
        time.sleep(0.1)
        assert calls == ["fruit"]

    def test_cancel(self):
        calls = []
        debounce = Debouncer(0.05, calls.append)
        debounce("fruit")
        debounce.cancel()
        time.sleep(0.15)
        assert calls == []

    def test_flush_runs_pending_once(self):
        calls = []
        debounce = Debouncer(0.05, calls.append)
        debounce("fruit")
        debounce.flush()
        time.sleep(0.15)
        assert calls == ["fruit"]
        debounce.flush()
        assert calls == ["fruit"]


class TestSearchSession:
    def test_starts_browsing_with_defaults(self):
        api = FakeApi()
        session = SearchSession(api)
        assert session.state == BROWSING
        assert not session.has_searched
        assert session.results == DEFAULT_ITEMS
        assert api.queries == []

    def test_blank_query_makes_no_request(self):
        api = FakeApi()
        session = SearchSession(api)
        session.fetch("   ")
        assert session.state == BROWSING
        assert session.results == DEFAULT_ITEMS
        assert api.queries == []

    def test_relevant_results_only(self):
        api = FakeApi({"fruit": [
            _result(5, "mango", 0.71),
            _result(4, "apple", 0.66),
            _result(2, "python", 0.18),
        ]})
        session = SearchSession(api)
        session.fetch("fruit")
        assert session.state == SEARCHING
        assert [r["content"] for r in session.results] == ["mango", "apple"]
        assert session.warning == ""
        assert not session.loading
        assert api.queries == [("fruit", 20)]

    def test_low_confidence_keeps_all_results(self):
        results = [_result(1, "javascript", 0.31), _result(6, "grapes", 0.12)]
        session = SearchSession(FakeApi({"spaceship": results}))
        session.fetch("spaceship")
        assert session.results == results
        assert session.warning == LOW_CONFIDENCE_WARNING

    def test_error_sets_warning(self):
        api = FakeApi(error=requests.ConnectionError("refused"))
        session = SearchSession(api)
        session.fetch("fruit")
        assert session.warning == FETCH_ERROR_WARNING
        assert not session.loading

    def test_api_error_sets_warning(self):
        api = FakeApi(error=SearchApiError(500, "Failed to process search"))
        session = SearchSession(api)
        session.fetch("fruit")
        assert session.warning == FETCH_ERROR_WARNING

    def test_malformed_results_set_warning(self):
        session = SearchSession(FakeApi({"fruit": [{"id": 4, "content": "apple"}]}))
        session.fetch("fruit")
        assert session.warning == FETCH_ERROR_WARNING
        assert not session.loading

    def test_null_results_set_warning(self):
        session = SearchSession(FakeApi({"fruit": [None]}))
        session.fetch("fruit")
        assert session.warning == FETCH_ERROR_WARNING
        assert not session.loading

    def test_clearing_query_returns_to_browsing(self):
        session = SearchSession(FakeApi({"fruit": [_result(4, "apple", 0.9)]}))
        session.fetch("fruit")
        session.fetch("")
        assert session.state == BROWSING
        assert session.results == DEFAULT_ITEMS
        assert session.warning == ""

    def test_rapid_typing_sends_one_request(self):
        api = FakeApi({"fruit": [_result(4, "apple", 0.9)]})
        done = threading.Event()

        def on_change(s):
            if s.has_searched and not s.loading:
                done.set()

        session = SearchSession(api, debounce_ms=50, on_change=on_change)
        for value in ("f", "fr", "fru", "frui", "fruit"):
            session.set_query(value)
        assert done.wait(timeout=2)
        time.sleep(0.1)
        assert api.queries == [("fruit", 20)]
        assert session.query == "fruit"
        session.close()

    def test_stale_response_is_dropped(self):
        api = FakeApi({
            "fru":   [_result(2, "python", 0.45)],
            "fruit": [_result(4, "apple", 0.88)],
        })
        api.gates["fru"] = threading.Event()
        session = SearchSession(api)

        slow = threading.Thread(target=session.fetch, args=("fru",))
        slow.start()
        while not api.queries:
            time.sleep(0.01)

        session.fetch("fruit")
        api.gates["fru"].set()
        slow.join(timeout=5)

        assert [r["content"] for r in session.results] == ["apple"]
        assert not session.loading
