"""
quickcite/extractors.py

Boundary with the metadata-extraction collaborator.

The browser side hands us loosely-typed dictionaries: missing values may
arrive as '', 'undefined' or 'null', and author names often only exist in
the page title or URL. Everything here turns that into a clean
CaptureRecord before the core ever sees it.
"""

import re
import logging
from typing import Any, Dict, Optional
from urllib.parse import unquote

from .models import CaptureRecord, InvalidCaptureError, _WIRE_KEYS

logger = logging.getLogger(__name__)

# Strings the JavaScript side produces for "no value"
PLACEHOLDERS = {'', 'undefined', 'null', 'none', 'nan'}


# =============================================================================
# CAPTURE RECORDS
# =============================================================================

def clean_value(value: Any) -> Optional[str]:
    """Trim a field, turning placeholder strings into None."""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    if value.lower() in PLACEHOLDERS:
        return None
    return value


def record_from_dict(data: Dict[str, Any]) -> CaptureRecord:
    """
    Build a validated CaptureRecord from a collaborator payload.

    Accepts camelCase (extension storage) or snake_case keys. Placeholder
    values become None, access_date defaults to the capture timestamp and,
    when the payload carries no author, one is recovered from the title or
    URL where the page makes that possible.

    Raises:
        InvalidCaptureError: if the payload has no quote text or no URL
    """
    if not isinstance(data, dict):
        raise InvalidCaptureError(f"Capture payload must be an object, got {type(data).__name__}")

    def get(attr):
        wire = _WIRE_KEYS[attr]
        return data.get(wire, data.get(attr))

    text = clean_value(get('text'))
    url = clean_value(get('source_url'))
    if not text:
        logger.warning("[Capture] Rejected payload without quote text")
        raise InvalidCaptureError("Capture is missing the quoted text")
    if not url:
        logger.warning("[Capture] Rejected payload without source URL")
        raise InvalidCaptureError("Capture is missing the source URL")

    title = clean_value(get('source_title')) or ""
    timestamp = clean_value(get('timestamp'))

    author = clean_value(get('author'))
    if author is None:
        author = extract_author(url, title)

    tags = get('tags') or ()
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(',')]

    return CaptureRecord(
        text=text,
        source_url=url,
        source_title=title,
        author=author,
        source_name=clean_value(get('source_name')),
        timestamp=timestamp,
        access_date=clean_value(get('access_date')) or timestamp,
        creation_date=clean_value(get('creation_date')),
        volume=clean_value(get('volume')),
        issue=clean_value(get('issue')),
        pages=clean_value(get('pages')),
        doi=clean_value(get('doi')),
        publisher=clean_value(get('publisher')),
        is_video=_as_bool(get('is_video')),
        video_channel=clean_value(get('video_channel')),
        video_platform=clean_value(get('video_platform')),
        video_upload_date=clean_value(get('video_upload_date')),
        id=clean_value(get('id')),
        tags=tuple(filter(None, (clean_value(t) for t in tags))),
    )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes')
    return bool(value)


# =============================================================================
# AUTHOR EXTRACTION
# =============================================================================

_NAME = r'([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)'

# "Title - By Jane Doe", "Title | By Jane Doe", "Title by Jane Doe",
# "Title - Jane Doe - Site"
TITLE_AUTHOR_PATTERNS = [
    re.compile(r'\s*[-–|]\s*(?i:by)\s+' + _NAME),
    re.compile(r'\s+(?i:by)\s+' + _NAME),
    re.compile(r'\s*[-–|]\s*' + _NAME + r'\s*[-–|]'),
]

URL_AUTHOR_PATTERNS = [
    re.compile(r'/author/([^/?#]+)', re.IGNORECASE),
    re.compile(r'/by/([^/?#]+)', re.IGNORECASE),
]


def extract_author(url: Optional[str], title: Optional[str]) -> Optional[str]:
    """
    Recover an author name from the page title or URL.

    Title patterns are tried first, then author slugs in the URL
    ('/author/jane-doe' → 'Jane Doe'). Returns None when nothing matches;
    the renderers print that as "Unknown Author".
    """
    if title:
        for pattern in TITLE_AUTHOR_PATTERNS:
            match = pattern.search(title)
            if match:
                return match.group(1).strip()

    if url:
        for pattern in URL_AUTHOR_PATTERNS:
            match = pattern.search(url)
            if match:
                slug = unquote(match.group(1))
                name = re.sub(r'[-_]+', ' ', slug).strip()
                if name:
                    return re.sub(r'\b\w', lambda m: m.group(0).upper(), name)

    return None
