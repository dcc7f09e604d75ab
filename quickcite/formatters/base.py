"""
quickcite/formatters/base.py

Base citation formatter and style registry.
"""

import re
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models import AuthorInfo, CitationSource, CitationStyle, SourceType
from ..authors import last_name
from ..config import DEFAULT_STYLE, ITALIC_OPEN, ITALIC_CLOSE, UNKNOWN_AUTHOR
from ..normalizers import short_title

logger = logging.getLogger(__name__)


def _squash(text: str) -> str:
    return re.sub(r'[\s,]', '', text).lower()


class BaseFormatter(ABC):
    """
    Abstract base class for citation formatters.

    Each style (MLA, APA, Chicago) implements this interface. Subclasses
    declare a `templates` table mapping every SourceType to the name of the
    method that renders it; register_formatter() refuses a class whose table
    has gaps, so a missing (style, source type) pair fails at import time.
    """

    style: CitationStyle = CitationStyle.MLA
    templates: Dict[SourceType, str] = {}

    # Joins the two surnames of a two-author in-text citation
    in_text_conjunction = "and"

    def format(self, source: CitationSource) -> str:
        """
        Main entry point - routes to the source type's template.

        Never raises: a failing template is logged and replaced by a bare
        title-and-URL citation.
        """
        template = getattr(self, self.templates[source.source_type])
        try:
            result = template(source)
        except Exception as e:
            logger.warning("[Format] %s %s template failed: %s",
                           self.style.value, source.source_type.value, e)
            result = ""
        return result or self.format_fallback(source)

    def format_fallback(self, source: CitationSource) -> str:
        """Last resort: whatever we have, never empty."""
        parts = [p for p in (source.title, source.url) if p]
        if not parts:
            return UNKNOWN_AUTHOR + "."
        return self.end(". ".join(parts))

    # =========================================================================
    # AUTHORS
    # =========================================================================

    @abstractmethod
    def format_authors(self, authors: AuthorInfo) -> str:
        """Author clause for the reference list entry (no final period)."""

    def format_in_text_authors(self, authors: AuthorInfo) -> str:
        """
        Short author form for in-text citations.

        1 author: Doe / corporate name as-is
        2 authors: Doe and Roe (APA: Doe & Roe)
        3+ authors: Doe et al.
        """
        if authors.count == 0:
            return ""
        if authors.is_corporate:
            return authors.authors[0]
        names = [last_name(a) for a in authors.authors]
        if authors.count == 1:
            return names[0]
        if authors.count == 2:
            return f"{names[0]} {self.in_text_conjunction} {names[1]}"
        return f"{names[0]} et al."

    # =========================================================================
    # IN-TEXT CITATIONS
    # =========================================================================

    def format_in_text(self, source: CitationSource) -> str:
        """Parenthetical in-text citation. No page numbers, ever."""
        names = self.format_in_text_authors(source.authors)
        if not names:
            names = self.quote(short_title(source.title or source.container)) or UNKNOWN_AUTHOR
        return self.wrap_in_text(names, source.citation_year)

    @abstractmethod
    def wrap_in_text(self, names: str, year: str) -> str:
        """Combine the author part and year into the style's parenthetical."""

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    @staticmethod
    def italicize(text: Optional[str]) -> str:
        """Wrap text in the emphasis marker (stripped by export.to_plain_text)."""
        return f"{ITALIC_OPEN}{text}{ITALIC_CLOSE}" if text else ""

    @staticmethod
    def quote(text: Optional[str]) -> str:
        """Wrap text in quotation marks."""
        return f'"{text}"' if text else ""

    @staticmethod
    def ends_with_stop(text: str) -> bool:
        """True if text already ends in terminal punctuation (markup ignored)."""
        bare = re.sub(r'</?\w+>$', '', text.rstrip())
        bare = re.sub(r'</?\w+>$', '', bare)
        return bare.endswith(('.', '?', '!'))

    @classmethod
    def end(cls, text: str, mark: str = ".") -> str:
        """Terminate a clause with a period unless it already has one."""
        text = text.rstrip()
        if not text or cls.ends_with_stop(text):
            return text
        return text + mark

    @classmethod
    def quote_title(cls, title: str) -> str:
        """MLA/Chicago quoted title: '"Title."' (or '"Why?"')."""
        if not title:
            return ""
        title = title.strip()
        if title.endswith(('.', '?', '!')):
            return f'"{title}"'
        return f'"{title}."'

    @classmethod
    def italic_title(cls, title: str) -> str:
        """Italic title followed by a period: '<em>Title</em>.'"""
        if not title:
            return ""
        return cls.end(cls.italicize(title.strip()))

    @staticmethod
    def join(parts: List[str], sep: str = " ") -> str:
        return sep.join(p for p in parts if p)

    @staticmethod
    def mentions(title: str, value: Optional[str]) -> bool:
        """True if value (a patent number or designation) already appears in title."""
        if not value:
            return True
        return _squash(value) in _squash(title or "")

    @staticmethod
    def pages_label(pages: str) -> str:
        """'10-20' → 'pp. 10-20'; '7' → 'p. 7'"""
        if re.search(r'[-–,]', pages):
            return f"pp. {pages}"
        return f"p. {pages}"


# =============================================================================
# FORMATTER REGISTRY
# =============================================================================

_formatters: Dict[str, type] = {}


def register_formatter(style):
    """
    Decorator to register a formatter class.

    Can be used with CitationStyle enum or string:
        @register_formatter(CitationStyle.APA)
        @register_formatter('APA 7')
        class APAFormatter: ...

    Raises:
        TypeError: if the class doesn't provide a template for every
            SourceType, or names a template method it doesn't define
    """
    def decorator(cls):
        missing = [t.value for t in SourceType if t not in cls.templates]
        if missing:
            raise TypeError(f"{cls.__name__} has no template for: {', '.join(missing)}")
        undefined = [name for name in cls.templates.values() if not callable(getattr(cls, name, None))]
        if undefined:
            raise TypeError(f"{cls.__name__} is missing template methods: {', '.join(undefined)}")

        if isinstance(style, CitationStyle):
            key = style.value.lower()
        else:
            key = str(style).lower()
        _formatters[key] = cls
        return cls
    return decorator


def registered_styles() -> List[str]:
    """Every alias a formatter was registered under."""
    return sorted(_formatters)


def get_formatter(style=None) -> BaseFormatter:
    """
    Get formatter instance for a style.

    Accepts CitationStyle enum or string ('MLA', 'APA 7', 'Chicago Manual
    of Style', ...). Unknown styles fall back to the configured default.
    """
    if isinstance(style, CitationStyle):
        key = style.value.lower()
    else:
        key = str(style or DEFAULT_STYLE).lower().strip()

    formatter_cls = _formatters.get(key)
    if formatter_cls:
        return formatter_cls()

    # Aliases the registry doesn't list verbatim ('mla-9', 'apa_7', ...)
    parsed = CitationStyle.from_string(key.replace('-', ' ').replace('_', ' '),
                                       default=CitationStyle.from_string(DEFAULT_STYLE))
    logger.debug("[Format] Unregistered style %r, using %s", style, parsed.value)
    return _formatters[parsed.value]()
