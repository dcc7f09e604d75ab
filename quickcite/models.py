"""
quickcite/models.py

Core data models for the citation system.
All modules communicate through these standardized structures:

- CaptureRecord: the raw quote captured from a page (input, immutable)
- SourceType / CitationStyle: closed enumerations
- AuthorInfo: structured authors derived from the free-text author string
- CitationSource and its variants: one dataclass per SourceType, carrying
  only the fields that source type uses
"""

from dataclasses import dataclass, field, fields
from typing import Optional, List, Dict, Any, Tuple
from enum import Enum


class QuickCiteError(Exception):
    """Base class for errors raised at the package boundary."""


class InvalidCaptureError(QuickCiteError, ValueError):
    """A capture payload is missing the fields every citation needs."""


class SourceType(Enum):
    """Source categories a capture can be classified into."""
    WEBSITE = "website"
    ACADEMIC = "academic"
    BOOK = "book"
    NEWS = "news"
    GOVERNMENT = "government"
    LEGAL = "legal"
    PATENT = "patent"
    STANDARD = "standard"
    VIDEO = "video"
    SOCIAL_MEDIA = "social_media"

    @classmethod
    def from_string(cls, s: Optional[str]) -> "SourceType":
        """Parse a source type name, defaulting to WEBSITE."""
        if not s:
            return cls.WEBSITE
        key = s.lower().strip().replace('-', '_').replace(' ', '_')
        for member in cls:
            if member.value == key:
                return member
        return cls.WEBSITE


class CitationStyle(Enum):
    """Supported citation formatting styles."""
    MLA = "mla"
    APA = "apa"
    CHICAGO = "chicago"

    @property
    def label(self) -> str:
        return {'mla': 'MLA', 'apa': 'APA', 'chicago': 'Chicago'}[self.value]

    @classmethod
    def from_string(cls, s, default: Optional["CitationStyle"] = None) -> "CitationStyle":
        """Parse style from string, with common aliases."""
        if isinstance(s, CitationStyle):
            return s
        mapping = {
            'mla': cls.MLA,
            'mla 9': cls.MLA,
            'mla9': cls.MLA,
            'apa': cls.APA,
            'apa 7': cls.APA,
            'apa7': cls.APA,
            'chicago': cls.CHICAGO,
            'chicago manual of style': cls.CHICAGO,
            'cms': cls.CHICAGO,
        }
        fallback = default or cls.MLA
        if not s:
            return fallback
        return mapping.get(str(s).lower().strip(), fallback)


# =============================================================================
# CAPTURE RECORD
# =============================================================================

# snake_case attribute -> camelCase key used by the extension's storage
_WIRE_KEYS: Dict[str, str] = {
    'id': 'id',
    'text': 'text',
    'source_title': 'sourceTitle',
    'source_url': 'sourceUrl',
    'author': 'author',
    'source_name': 'sourceName',
    'timestamp': 'timestamp',
    'access_date': 'accessDate',
    'creation_date': 'creationDate',
    'volume': 'volume',
    'issue': 'issue',
    'pages': 'pages',
    'doi': 'doi',
    'publisher': 'publisher',
    'is_video': 'isVideo',
    'video_channel': 'videoChannel',
    'video_platform': 'videoPlatform',
    'video_upload_date': 'videoUploadDate',
    'tags': 'tags',
}


@dataclass(frozen=True)
class CaptureRecord:
    """
    One saved quotation and everything known about where it came from.

    Only `text` and `source_url` are guaranteed; every other field may be
    None and every renderer has to cope with that.
    """

    text: str
    source_url: str
    source_title: str = ""
    author: Optional[str] = None
    source_name: Optional[str] = None
    timestamp: Optional[str] = None
    access_date: Optional[str] = None
    creation_date: Optional[str] = None

    # Bibliographic fields (only some source types have them)
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    doi: Optional[str] = None
    publisher: Optional[str] = None

    # Video overrides
    is_video: bool = False
    video_channel: Optional[str] = None
    video_platform: Optional[str] = None
    video_upload_date: Optional[str] = None

    # Carried for the persistence layer, ignored by the renderers
    id: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape the extension stores."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == 'tags':
                value = list(value)
            result[_WIRE_KEYS[f.name]] = value
        return result

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CaptureRecord":
        """
        Create from a stored dictionary.

        Accepts both camelCase (extension) and snake_case keys. No cleaning
        is done here; see extractors.record_from_dict for the validating
        version used at the collaborator boundary.
        """
        kwargs = {}
        for attr, wire in _WIRE_KEYS.items():
            if wire in d:
                kwargs[attr] = d[wire]
            elif attr in d:
                kwargs[attr] = d[attr]
        kwargs['tags'] = tuple(kwargs.get('tags') or ())
        kwargs['is_video'] = bool(kwargs.get('is_video', False))
        kwargs.setdefault('text', '')
        kwargs.setdefault('source_url', '')
        if kwargs.get('source_title') is None:
            kwargs['source_title'] = ''
        return cls(**kwargs)


# =============================================================================
# AUTHORS
# =============================================================================

@dataclass(frozen=True)
class AuthorInfo:
    """
    Structured authors for one record.

    count is 0 (no author), 1, 2 or more. A corporate author always has
    count 1, whatever the shape of the organization name.
    """
    authors: Tuple[str, ...] = ()
    is_corporate: bool = False
    count: int = 0

    @classmethod
    def none(cls) -> "AuthorInfo":
        """The no-author value (treated as corporate for formatting)."""
        return cls(authors=(), is_corporate=True, count=0)

    @classmethod
    def corporate(cls, name: str) -> "AuthorInfo":
        return cls(authors=(name,), is_corporate=True, count=1)

    @classmethod
    def people(cls, names: List[str]) -> "AuthorInfo":
        names = tuple(n for n in names if n)
        return cls(authors=names, is_corporate=False, count=len(names))

    @property
    def is_empty(self) -> bool:
        return self.count == 0


# =============================================================================
# SOURCE VARIANTS
# =============================================================================

@dataclass(frozen=True)
class CitationSource:
    """
    Normalized fields shared by every source type.

    Built by router.build_source() from a CaptureRecord; the formatters
    consume these and never look at the raw record.
    """
    title: str = ""
    container: str = ""
    url: str = ""
    authors: AuthorInfo = field(default_factory=AuthorInfo.none)
    publication_date: Optional[str] = None  # raw, un-normalized
    access_date: Optional[str] = None       # raw, un-normalized
    citation_year: str = "n.d."

    source_type = SourceType.WEBSITE


@dataclass(frozen=True)
class WebsiteSource(CitationSource):
    source_type = SourceType.WEBSITE


@dataclass(frozen=True)
class AcademicSource(CitationSource):
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    doi: Optional[str] = None

    source_type = SourceType.ACADEMIC


@dataclass(frozen=True)
class BookSource(CitationSource):
    publisher: Optional[str] = None

    source_type = SourceType.BOOK


@dataclass(frozen=True)
class NewsSource(CitationSource):
    source_type = SourceType.NEWS


@dataclass(frozen=True)
class GovernmentSource(CitationSource):
    source_type = SourceType.GOVERNMENT


@dataclass(frozen=True)
class LegalSource(CitationSource):
    source_type = SourceType.LEGAL


@dataclass(frozen=True)
class PatentSource(CitationSource):
    patent_number: Optional[str] = None

    source_type = SourceType.PATENT


@dataclass(frozen=True)
class StandardSource(CitationSource):
    designation: Optional[str] = None  # e.g. "ISO 9001"

    source_type = SourceType.STANDARD


@dataclass(frozen=True)
class VideoSource(CitationSource):
    channel: Optional[str] = None
    platform: Optional[str] = None

    source_type = SourceType.VIDEO


@dataclass(frozen=True)
class SocialMediaSource(CitationSource):
    platform: Optional[str] = None

    source_type = SourceType.SOCIAL_MEDIA


SOURCE_VARIANTS: Dict[SourceType, type] = {
    SourceType.WEBSITE: WebsiteSource,
    SourceType.ACADEMIC: AcademicSource,
    SourceType.BOOK: BookSource,
    SourceType.NEWS: NewsSource,
    SourceType.GOVERNMENT: GovernmentSource,
    SourceType.LEGAL: LegalSource,
    SourceType.PATENT: PatentSource,
    SourceType.STANDARD: StandardSource,
    SourceType.VIDEO: VideoSource,
    SourceType.SOCIAL_MEDIA: SocialMediaSource,
}


@dataclass
class DetectionResult:
    """Result from the detection layer."""
    source_type: SourceType
    matched_rule: str = "default"
    hints: Dict[str, Any] = field(default_factory=dict)  # patent_number, designation


@dataclass(frozen=True)
class Citation:
    """Every rendering of one record in one style."""
    source_type: SourceType
    style: CitationStyle
    full: str
    in_text: str

    @property
    def plain(self) -> str:
        from .export import to_plain_text
        return to_plain_text(self.full)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_type': self.source_type.value,
            'style': self.style.value,
            'citation': self.full,
            'plain': self.plain,
            'in_text': self.in_text,
        }
