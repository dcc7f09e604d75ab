"""Tests for per-user quote sessions."""

from quickcite.models import CaptureRecord
from quickcite.session import QuoteSession, SessionStore


def _quote(text, timestamp=None, quote_id=None):
    return CaptureRecord(text=text, source_url="https://example.com", id=quote_id, timestamp=timestamp)


class TestQuoteSession:

    def test_add_assigns_id(self):
        quotes = QuoteSession()
        stored = quotes.add(_quote("a"))
        assert stored.id
        assert quotes.get(stored.id) == stored
        assert len(quotes) == 1

    def test_add_replaces_same_id(self):
        quotes = QuoteSession()
        quotes.add(_quote("old", quote_id="q1"))
        quotes.add(_quote("new", quote_id="q1"))
        assert len(quotes) == 1
        assert quotes.get("q1").text == "new"

    def test_delete(self):
        quotes = QuoteSession()
        quotes.add(_quote("a", quote_id="q1"))
        quotes.select("q1")
        assert quotes.delete("q1") is True
        assert quotes.current_id is None
        assert quotes.delete("q1") is False

    def test_select(self):
        quotes = QuoteSession()
        quotes.add(_quote("a", quote_id="q1"))
        assert quotes.select("q1").text == "a"
        assert quotes.current().id == "q1"
        assert quotes.select("missing") is None
        assert quotes.current_id == "q1"

    def test_clear(self):
        quotes = QuoteSession()
        quotes.add(_quote("a", quote_id="q1"))
        quotes.select("q1")
        quotes.clear()
        assert len(quotes) == 0
        assert quotes.current() is None

    def test_citations_for(self, arxiv_record):
        quotes = QuoteSession()
        stored = quotes.add(arxiv_record)
        citations = quotes.citations_for(stored.id)
        assert set(citations) == {"mla", "apa", "chicago"}
        assert citations["apa"].in_text == "(Doe & Roe, 2023)"
        assert quotes.citations_for("missing") == {}

    def test_sorted_quotes(self):
        quotes = QuoteSession()
        quotes.add(_quote("undated", quote_id="u"))
        quotes.add(_quote("early", "2024-01-01T00:00:00Z", "e"))
        quotes.add(_quote("late", "2024-06-01T00:00:00Z", "l"))
        assert [q.id for q in quotes.sorted_quotes()] == ["l", "e", "u"]
        assert [q.id for q in quotes.sorted_quotes("oldest")] == ["e", "l", "u"]

    def test_sort_order_from_preferences(self):
        quotes = QuoteSession()
        quotes.add(_quote("early", "2024-01-01T00:00:00Z", "e"))
        quotes.add(_quote("late", "2024-06-01T00:00:00Z", "l"))
        quotes.preferences.sort_order = "oldest"
        assert [q.id for q in quotes.sorted_quotes()] == ["e", "l"]


class TestSessionStore:

    def test_get_creates_once(self):
        store = SessionStore()
        first = store.get("abc")
        assert store.get("abc") is first
        assert "abc" in store
        assert len(store) == 1

    def test_discard(self):
        store = SessionStore()
        store.get("abc")
        store.discard("abc")
        store.discard(None)
        assert "abc" not in store
        assert len(store) == 0
