"""
quickcite/router.py

Main routing logic that orchestrates:
1. Detection (what type of source is this?)
2. Author parsing and field normalization
3. Building the source variant for that type
4. Formatting (produce citation strings in the requested style)

This is the primary public API of the citation core. Everything here is
pure: the same record and style always give the same strings.
"""

import logging
from typing import Optional

from .models import (
    AuthorInfo, CaptureRecord, Citation, CitationSource, CitationStyle,
    SourceType, SOURCE_VARIANTS,
)
from .detectors import detect_type, detection_hints
from .authors import parse_authors
from .normalizers import citation_year, parse_title_and_website, publication_date
from .formatters import get_formatter

logger = logging.getLogger(__name__)


# =============================================================================
# SOURCE BUILDING
# =============================================================================

def classify_record(record: CaptureRecord) -> SourceType:
    """Classify a record, letting the capture's video flag count at the video step."""
    return detect_type(record.source_title, record.source_url, is_video_hint=record.is_video).source_type


def build_source(
    record: CaptureRecord,
    source_type: Optional[SourceType] = None,
    author_info: Optional[AuthorInfo] = None,
) -> CitationSource:
    """
    Build the source variant for a record.

    Args:
        record: The captured quote
        source_type: Skip classification and use this type
        author_info: Skip author parsing and use these authors

    Returns:
        The CitationSource subclass for the type, carrying only that
        type's fields
    """
    if source_type is None:
        detection = detect_type(record.source_title, record.source_url, is_video_hint=record.is_video)
        source_type, hints = detection.source_type, detection.hints
    else:
        hints = detection_hints(source_type, record.source_title or "", record.source_url or "")

    if author_info is None:
        author_info = parse_authors(record.author)
        if source_type is SourceType.VIDEO and not author_info.count and record.video_channel:
            # A channel is credited as an organisation, never inverted
            author_info = AuthorInfo.corporate(record.video_channel.strip())

    title, container = parse_title_and_website(
        record.source_title, record.source_url, record.source_name
    )
    published = publication_date(record)

    common = dict(
        title=title,
        container=container,
        url=record.source_url or "",
        authors=author_info,
        publication_date=published,
        access_date=record.access_date or record.timestamp,
        citation_year=citation_year(published, record.timestamp),
    )
    extra = _variant_fields(source_type, record, hints)

    logger.debug("[Route] %s → %s (%d author(s))", record.source_url, source_type.value, author_info.count)
    return SOURCE_VARIANTS[source_type](**common, **extra)


def _variant_fields(source_type: SourceType, record: CaptureRecord, hints: dict) -> dict:
    if source_type is SourceType.ACADEMIC:
        return dict(volume=record.volume, issue=record.issue, pages=record.pages, doi=record.doi)
    if source_type is SourceType.BOOK:
        return dict(publisher=record.publisher)
    if source_type is SourceType.PATENT:
        return dict(patent_number=hints.get('patent_number'))
    if source_type is SourceType.STANDARD:
        return dict(designation=hints.get('designation'))
    if source_type is SourceType.VIDEO:
        return dict(
            channel=record.video_channel,
            platform=record.video_platform or hints.get('platform'),
        )
    if source_type is SourceType.SOCIAL_MEDIA:
        return dict(platform=hints.get('platform'))
    return {}


# =============================================================================
# PUBLIC API
# =============================================================================

def get_citation(record: CaptureRecord, style=None) -> Citation:
    """
    Full pipeline: classify, parse, build and format.

    Args:
        record: The captured quote
        style: Citation style (CitationStyle or name such as "APA 7");
            unknown names fall back to the configured default

    Returns:
        Citation with the full reference entry and the in-text form
    """
    formatter = get_formatter(style)
    source = build_source(record)
    return Citation(
        source_type=source.source_type,
        style=formatter.style,
        full=formatter.format(source),
        in_text=formatter.format_in_text(source),
    )


def render(
    record: CaptureRecord,
    source_type: SourceType,
    author_info: AuthorInfo,
    style=CitationStyle.MLA,
) -> str:
    """Render a reference entry with the type and authors already decided."""
    source = build_source(record, source_type, author_info)
    return get_formatter(style).format(source)


def format_citation(record: CaptureRecord, style=None) -> str:
    """Reference-list entry for a record."""
    return get_formatter(style).format(build_source(record))


def format_in_text(record: CaptureRecord, style=None) -> str:
    """Parenthetical in-text citation for a record."""
    return get_formatter(style).format_in_text(build_source(record))


def render_in_text(record: CaptureRecord, author_info: AuthorInfo, style=None) -> str:
    """In-text citation with the authors already parsed."""
    source = build_source(record, author_info=author_info)
    return get_formatter(style).format_in_text(source)
