"""
quickcite/session.py

Explicit application state for one user: the saved quotes, the quote
currently being viewed and the export preferences. The HTTP layer keeps
one QuoteSession per browser session in a SessionStore; nothing in the
package holds state at module level.
"""

import uuid
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from .models import CaptureRecord, Citation, CitationStyle
from .router import get_citation
from .export import ExportPreferences

logger = logging.getLogger(__name__)


@dataclass
class QuoteSession:
    """Saved quotes in insertion order plus the current selection."""
    quotes: List[CaptureRecord] = field(default_factory=list)
    current_id: Optional[str] = None
    preferences: ExportPreferences = field(default_factory=ExportPreferences)

    def add(self, record: CaptureRecord) -> CaptureRecord:
        """Store a record, giving it an id if it has none. Returns the stored record."""
        if not record.id:
            record = replace(record, id=str(uuid.uuid4()))
        self.quotes = [q for q in self.quotes if q.id != record.id]
        self.quotes.append(record)
        logger.debug("[Session] Added quote %s", record.id)
        return record

    def get(self, quote_id: str) -> Optional[CaptureRecord]:
        for quote in self.quotes:
            if quote.id == quote_id:
                return quote
        return None

    def delete(self, quote_id: str) -> bool:
        """Remove a quote; clears the selection if it was selected."""
        before = len(self.quotes)
        self.quotes = [q for q in self.quotes if q.id != quote_id]
        if self.current_id == quote_id:
            self.current_id = None
        return len(self.quotes) < before

    def clear(self) -> None:
        self.quotes = []
        self.current_id = None

    def select(self, quote_id: str) -> Optional[CaptureRecord]:
        """Make a quote current. Unknown ids leave the selection unchanged."""
        quote = self.get(quote_id)
        if quote is not None:
            self.current_id = quote_id
        return quote

    def current(self) -> Optional[CaptureRecord]:
        if self.current_id is None:
            return None
        return self.get(self.current_id)

    def citations_for(self, quote_id: str) -> Dict[str, Citation]:
        """Every style's citation for one quote, keyed by style value."""
        quote = self.get(quote_id)
        if quote is None:
            return {}
        return {style.value: get_citation(quote, style) for style in CitationStyle}

    def sorted_quotes(self, sort_order: Optional[str] = None) -> List[CaptureRecord]:
        """
        Quotes ordered by capture timestamp.

        'newest' (default) puts the latest first, 'oldest' the earliest.
        Quotes without a timestamp keep their relative order at the end.
        """
        order = sort_order or self.preferences.sort_order
        dated = [q for q in self.quotes if q.timestamp]
        undated = [q for q in self.quotes if not q.timestamp]
        dated = sorted(dated, key=lambda q: q.timestamp, reverse=(order != 'oldest'))
        return dated + undated

    def __len__(self) -> int:
        return len(self.quotes)


class SessionStore:
    """QuoteSessions keyed by session id, safe to share between request threads."""

    def __init__(self):
        self._sessions: Dict[str, QuoteSession] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> QuoteSession:
        """Return the session for an id, creating an empty one if needed."""
        with self._lock:
            if session_id not in self._sessions:
                self._sessions[session_id] = QuoteSession()
            return self._sessions[session_id]

    def discard(self, session_id: Optional[str]) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __contains__(self, session_id) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
