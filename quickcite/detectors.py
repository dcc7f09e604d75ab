"""
quickcite/detectors.py

Pattern detection for source type classification.
Fast, free, regex-based; no network and no hidden state.

Each detector takes (title, url) and returns True/False. classify() walks
CLASSIFICATION_RULES in order and returns the first match, so the priority
order below is the whole policy:

    1. Government (.gov TLDs, agency names, regulatory keywords)
    2. Legal (legal databases, "X v. Y", court reporters)
    3. Patent (patent offices, patent numbers)
    4. Standard (standards bodies, "ISO 9001")
    5. Video (YouTube, Vimeo, ...)
    6. Social media (Twitter/X, Facebook, ...)
    7. Academic (arXiv, DOI, .edu)
    8. Book
    9. News
   10. Website (fallback)
"""

import re
import logging
from urllib.parse import urlparse
from typing import Callable, Optional, Tuple

from .models import SourceType, DetectionResult
from .config import (
    GOV_TLDS, GOV_AGENCY_TOKENS, GOV_DOCUMENT_KEYWORDS, SECOND_LEVEL_SUFFIXES,
    LEGAL_DOMAINS, LEGAL_REPORTER_PATTERNS, LEGAL_VOCABULARY,
    PATENT_DOMAINS, PATENT_NUMBER_PATTERNS, PATENT_VOCABULARY,
    STANDARDS_DOMAINS, STANDARD_DESIGNATION_PATTERN, STANDARD_VOCABULARY,
    VIDEO_URL_PATTERNS, SOCIAL_MEDIA_DOMAINS,
    ACADEMIC_URL_TOKENS, ACADEMIC_TLDS, ACADEMIC_TITLE_KEYWORDS,
    BOOK_TITLE_KEYWORDS, BOOK_DOMAINS, NEWS_TITLE_KEYWORDS,
)

logger = logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================

def get_hostname(url: Optional[str]) -> str:
    """Lowercased hostname without 'www.', or '' if the URL has none."""
    if not url:
        return ''
    try:
        host = urlparse(url.strip()).hostname or ''
    except ValueError:
        return ''
    host = host.lower()
    if host.startswith('www.'):
        host = host[4:]
    return host


def registrable_label(host: str) -> str:
    """
    The label an organisation registers: 'epa' for epa.gov or news.epa.gov,
    'nasa' for nasa.co.uk, 'example' for sec.example.com.
    """
    labels = [part for part in host.split('.') if part]
    if len(labels) < 2:
        return labels[0] if labels else ''
    if len(labels) >= 3 and labels[-2] in SECOND_LEVEL_SUFFIXES and len(labels[-1]) == 2:
        return labels[-3]
    return labels[-2]


def _url_path(url: Optional[str]) -> str:
    try:
        return urlparse(url.strip()).path if url else ''
    except ValueError:
        return ''


def _domain_matches(url: Optional[str], domains) -> bool:
    """True if the URL's host (or host + path) falls under one of the domains."""
    host = get_hostname(url)
    if not host:
        return False
    path = _url_path(url)
    location = host + path
    for domain in domains:
        if '/' in domain:
            if location.startswith(domain):
                return True
        elif host == domain or host.endswith('.' + domain):
            return True
    return False


def _has_word(text: str, words) -> bool:
    """Case-insensitive whole-word search for any of the words."""
    if not text:
        return False
    lower = text.lower()
    return any(re.search(r'\b' + re.escape(w.lower()) + r'\b', lower) for w in words)


# =============================================================================
# INDIVIDUAL DETECTORS
# =============================================================================

def is_government(title: str, url: str) -> bool:
    """
    Detect government sources.

    Triggers:
    - Government TLD (.gov, .mil, .gov.uk, ...)
    - Agency or ministry name in title or URL
    - Regulatory document keywords in title (report, regulation, bill, ...)
    """
    host = get_hostname(url)
    if host:
        bare = '.' + host
        if any(bare.endswith(tld) for tld in GOV_TLDS):
            return True

    label = registrable_label(host)

    # Acronyms are matched case-sensitively in titles ("EPA", not "epa")
    for token in GOV_AGENCY_TOKENS:
        if title and re.search(r'\b' + re.escape(token) + r'\b', title):
            return True
        if label and token.isupper() and label == token.lower():
            return True

    return _has_word(title, GOV_DOCUMENT_KEYWORDS)


def is_legal(title: str, url: str) -> bool:
    """
    Detect legal cases.

    Triggers:
    - Legal database domains
    - "X v. Y" / "X vs. Y" case names
    - Court reporter citations: 388 U.S. 1, 159 F.2d 169, [2024] UKSC 12
    - Courtroom vocabulary
    """
    if _domain_matches(url, LEGAL_DOMAINS):
        return True
    if not title:
        return False

    if re.search(r'[A-Za-z]\s+vs?\.\s+[A-Z]', title):
        return True

    for pattern in LEGAL_REPORTER_PATTERNS:
        if re.search(pattern, title):
            return True

    return _has_word(title, LEGAL_VOCABULARY)


def find_patent_number(title: str) -> Optional[str]:
    """Return the first patent number in the title, e.g. 'US 1,234,567'."""
    if not title:
        return None
    for pattern in PATENT_NUMBER_PATTERNS:
        match = re.search(pattern, title)
        if match:
            return match.group(0).strip()
    return None


def is_patent(title: str, url: str) -> bool:
    """Detect patents by office domain, patent number or vocabulary."""
    if _domain_matches(url, PATENT_DOMAINS):
        return True
    if find_patent_number(title):
        return True
    return _has_word(title, PATENT_VOCABULARY)


def find_standard_designation(title: str) -> Optional[str]:
    """Return a standard designation from the title, e.g. 'ISO 9001:2015'."""
    if not title:
        return None
    match = re.search(STANDARD_DESIGNATION_PATTERN, title)
    if match:
        return match.group(0).rstrip('.:-')
    return None


def is_standard(title: str, url: str) -> bool:
    """Detect standards by body domain, designation or vocabulary."""
    if _domain_matches(url, STANDARDS_DOMAINS):
        return True
    if find_standard_designation(title):
        return True
    if not title:
        return False
    lower = title.lower()
    return any(
        re.search(r'\b' + word + r's?\b', lower) for word in STANDARD_VOCABULARY
    )


def find_video_platform(url: str) -> Optional[str]:
    """Return the platform name for a known video URL, else None."""
    if not url:
        return None
    target = url.strip().lower()
    for pattern, platform in VIDEO_URL_PATTERNS:
        if re.search(pattern, target):
            return platform
    return None


def is_video(title: str, url: str) -> bool:
    """Detect video pages (YouTube watch/shorts/embed, Vimeo, TED, ...)."""
    return find_video_platform(url) is not None


def find_social_platform(url: str) -> Optional[str]:
    """Return the platform name for a known social-media URL, else None."""
    host = get_hostname(url)
    if not host:
        return None
    for domain, platform in SOCIAL_MEDIA_DOMAINS.items():
        if host == domain or host.endswith('.' + domain):
            return platform
    return None


def is_social_media(title: str, url: str) -> bool:
    """Detect posts on Twitter/X, Facebook, Instagram, LinkedIn, TikTok."""
    return find_social_platform(url) is not None


def is_academic(title: str, url: str) -> bool:
    """Detect academic papers: arXiv, DOI, .edu, or research keywords."""
    if url:
        lower_url = url.lower()
        if any(token in lower_url for token in ACADEMIC_URL_TOKENS):
            return True
        if ('.' + get_hostname(url)).endswith(ACADEMIC_TLDS):
            return True
    return _has_word(title, ACADEMIC_TITLE_KEYWORDS)


def is_book(title: str, url: str) -> bool:
    """Detect books by title keywords or a books-catalog domain."""
    if _has_word(title, BOOK_TITLE_KEYWORDS):
        return True
    return _domain_matches(url, BOOK_DOMAINS)


def is_news(title: str, url: str) -> bool:
    """Detect news articles by title keywords or 'news' in the URL."""
    if _has_word(title, NEWS_TITLE_KEYWORDS):
        return True
    if not url:
        return False
    host = get_hostname(url)
    path = _url_path(url).lower()
    return 'news' in host or 'news' in path


# =============================================================================
# CLASSIFICATION RULES
# =============================================================================

Rule = Tuple[SourceType, Callable[[str, str], bool]]

CLASSIFICATION_RULES: Tuple[Rule, ...] = (
    (SourceType.GOVERNMENT, is_government),
    (SourceType.LEGAL, is_legal),
    (SourceType.PATENT, is_patent),
    (SourceType.STANDARD, is_standard),
    (SourceType.VIDEO, is_video),
    (SourceType.SOCIAL_MEDIA, is_social_media),
    (SourceType.ACADEMIC, is_academic),
    (SourceType.BOOK, is_book),
    (SourceType.NEWS, is_news),
)


def detect_type(title: Optional[str], url: Optional[str], is_video_hint: bool = False) -> DetectionResult:
    """
    Main detection function. Returns the first matching rule.

    Args:
        title: Page or document title (may be None)
        url: Page URL (may be None)
        is_video_hint: Capture-side flag that forces VIDEO at the video step

    Returns:
        DetectionResult with type, the name of the rule that fired, and
        hints (patent_number, designation, platform) for building the source
    """
    title = title or ''
    url = url or ''

    for source_type, predicate in CLASSIFICATION_RULES:
        matched = predicate(title, url)
        if not matched and source_type is SourceType.VIDEO and is_video_hint:
            matched = True
        if matched:
            logger.debug("[Classify] %r → %s (%s)", title[:60], source_type.value, predicate.__name__)
            return DetectionResult(
                source_type=source_type,
                matched_rule=predicate.__name__,
                hints=detection_hints(source_type, title, url),
            )

    return DetectionResult(source_type=SourceType.WEBSITE)


def classify(title: Optional[str], url: Optional[str]) -> SourceType:
    """Classify a capture into exactly one SourceType. Total and pure."""
    return detect_type(title, url).source_type


def detection_hints(source_type: SourceType, title: str, url: str) -> dict:
    """Variant-specific fields the matching rule can already supply."""
    if source_type is SourceType.PATENT:
        number = find_patent_number(title)
        if not number and url:
            # patents.google.com/patent/US1234567B2/en
            number = find_patent_number(_url_path(url).replace('/', ' '))
        return {'patent_number': number}
    if source_type is SourceType.STANDARD:
        return {'designation': find_standard_designation(title)}
    if source_type is SourceType.VIDEO:
        return {'platform': find_video_platform(url)}
    if source_type is SourceType.SOCIAL_MEDIA:
        return {'platform': find_social_platform(url)}
    return {}
