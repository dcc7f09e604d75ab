"""
quickcite - Citation engine for captured web quotes

Turns a quote captured from a web page (its text, URL, title and whatever
metadata the page exposed) into MLA, APA and Chicago citations, in-text
citations and sorted bibliographies.

Usage:
    from quickcite import record_from_dict, get_citation

    record = record_from_dict({
        "text": "...",
        "sourceUrl": "https://arxiv.org/abs/2301.00001",
        "sourceTitle": "Deep Learning Survey",
        "author": "Jane Doe and John Roe",
    })
    citation = get_citation(record, "MLA")
    citation.full      # with <em> italics
    citation.plain     # italics as *asterisks*
    citation.in_text   # (Doe and Roe)

Architecture:
    ┌─────────────────────────────────────────┐
    │ CaptureRecord (extractors.py)           │
    │ Validated payload from the page         │
    └─────────────────┬───────────────────────┘
                      ▼
    ┌─────────────────────────────────────────┐
    │ Detectors (detectors.py)                │
    │ Ordered rules → SourceType              │
    └─────────────────┬───────────────────────┘
                      ▼
    ┌─────────────────────────────────────────┐
    │ Authors + Normalizers                   │
    │ AuthorInfo, dates, titles, containers   │
    └─────────────────┬───────────────────────┘
                      ▼
            ┌─────────────────────┐
            │ CitationSource      │
            │ variant (models.py) │
            └──────────┬──────────┘
                       ▼
            ┌─────────────────────┐
            │ Formatters          │
            │ (formatters/)       │
            └──────────┬──────────┘
                       ▼
         Bibliography / Export / Flask app

Modules:
    - models.py: Data structures (CaptureRecord, SourceType, AuthorInfo, source variants)
    - config.py: Constants, vocabularies, domain mappings, environment settings
    - detectors.py: Rule cascade for source type classification
    - authors.py: Author string parsing and name helpers
    - normalizers.py: Dates, titles, containers, URLs
    - extractors.py: Collaborator payload → CaptureRecord, author recovery
    - formatters/: Citation style implementations
        - base.py: Abstract base, template tables and registry
        - mla.py: MLA 9th Edition
        - apa.py: APA 7th Edition
        - chicago.py: Chicago Manual of Style
    - router.py: Main orchestration logic
    - bibliography.py: Sorting and grouping
    - export.py: Plain-text transform, text and Word exports, signal phrases
    - session.py: Per-user quote session
    - app.py: Flask application
"""

__version__ = "1.0.0"

# =============================================================================
# PUBLIC API
# =============================================================================

# Models
from .models import (
    QuickCiteError,
    InvalidCaptureError,
    CaptureRecord,
    SourceType,
    CitationStyle,
    AuthorInfo,
    CitationSource,
    Citation,
    DetectionResult,
)

# Detection
from .detectors import (
    classify,
    detect_type,
    is_government,
    is_legal,
    is_patent,
    is_standard,
    is_video,
    is_social_media,
    is_academic,
    is_book,
    is_news,
)

# Authors and normalization
from .authors import parse_authors
from .normalizers import (
    format_date_for_style,
    to_sentence_case,
    parse_title_and_website,
)

# Extraction
from .extractors import record_from_dict, extract_author

# Formatting
from .formatters import (
    get_formatter,
    BaseFormatter,
    MLAFormatter,
    APAFormatter,
    ChicagoFormatter,
)

# Main Router API
from .router import (
    build_source,
    get_citation,
    render,
    format_citation,
    format_in_text,
    render_in_text,
)

# Bibliography and export
from .bibliography import assemble_bibliography, sort_records, sort_key
from .export import (
    to_plain_text,
    export_quotes,
    bibliography_text,
    bibliography_docx,
    fill_signal_phrase,
    ExportPreferences,
)
from .session import QuoteSession

__all__ = [
    # Version
    '__version__',

    # Models
    'QuickCiteError',
    'InvalidCaptureError',
    'CaptureRecord',
    'SourceType',
    'CitationStyle',
    'AuthorInfo',
    'CitationSource',
    'Citation',
    'DetectionResult',

    # Detection
    'classify',
    'detect_type',
    'is_government',
    'is_legal',
    'is_patent',
    'is_standard',
    'is_video',
    'is_social_media',
    'is_academic',
    'is_book',
    'is_news',

    # Authors and normalization
    'parse_authors',
    'format_date_for_style',
    'to_sentence_case',
    'parse_title_and_website',

    # Extraction
    'record_from_dict',
    'extract_author',

    # Formatting
    'get_formatter',
    'BaseFormatter',
    'MLAFormatter',
    'APAFormatter',
    'ChicagoFormatter',

    # Main API
    'build_source',
    'get_citation',
    'render',
    'format_citation',
    'format_in_text',
    'render_in_text',

    # Bibliography and export
    'assemble_bibliography',
    'sort_records',
    'sort_key',
    'to_plain_text',
    'export_quotes',
    'bibliography_text',
    'bibliography_docx',
    'fill_signal_phrase',
    'ExportPreferences',
    'QuoteSession',
]
