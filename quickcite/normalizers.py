"""
quickcite/normalizers.py

Field normalization helpers shared by every formatter:
- date parsing and style-specific date formats
- sentence case and short titles
- title / container-name extraction
- URL and DOI cleanup

Everything here is total: bad input is echoed back, never raised.
"""

import re
from collections import namedtuple
from datetime import datetime
from typing import Optional, Tuple
from urllib.parse import urlparse

from .models import CaptureRecord, CitationStyle
from .config import (
    DATE_FORMATS, MONTHS, MLA_MONTHS, NO_DATE, SHORT_TITLE_WORDS,
    get_site_name, get_gov_agency,
)

ParsedDate = namedtuple('ParsedDate', ['date', 'granularity'])


# =============================================================================
# DATES
# =============================================================================

def parse_date(value: Optional[str]) -> Optional[ParsedDate]:
    """
    Parse a date string in any of the common shapes pages and browsers use.

    Handles ISO-8601 (with or without time and zone), "March 1, 2024",
    "1 Mar. 2024", "Sept. 5, 2021", "2023-01", "2023" and ordinal days
    ("March 1st, 2024").

    Returns:
        ParsedDate(date, granularity) where granularity is 'day', 'month'
        or 'year'; None if the string can't be parsed.
    """
    if not value or not isinstance(value, str):
        return None

    clean = value.strip()
    clean = re.sub(r'(\d{1,2})(?:st|nd|rd|th)\b', r'\1', clean)
    clean = re.sub(r'\b([A-Za-z]{3,9})\.', r'\1', clean)  # "Mar." → "Mar"
    clean = re.sub(r'\bSept\b', 'Sep', clean, flags=re.IGNORECASE)
    clean = re.sub(r'\s+', ' ', clean)

    for fmt, granularity in DATE_FORMATS:
        try:
            return ParsedDate(datetime.strptime(clean, fmt).date(), granularity)
        except ValueError:
            continue
    return None


def extract_year(value: Optional[str]) -> Optional[str]:
    """Year of a date string, falling back to the first plausible 4-digit year."""
    parsed = parse_date(value)
    if parsed:
        return str(parsed.date.year)
    if value:
        match = re.search(r'\b(1[5-9]\d{2}|20\d{2})\b', value)
        if match:
            return match.group(1)
    return None


def format_date_for_style(value: Optional[str], style, year_only: bool = False) -> str:
    """
    Format a date string for a citation style.

    MLA:     15 Jan. 2023   (May, June, July unabbreviated)
    APA:     2023, January 15   (or bare 2023 when year_only)
    Chicago: January 15, 2023

    Partial dates keep what they have (month + year, or year). Unparseable
    strings are returned unchanged; None becomes ''.
    """
    if not value:
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return value.strip()

    d, granularity = parsed
    if year_only or granularity == 'year':
        return str(d.year)

    style = CitationStyle.from_string(style)
    if style is CitationStyle.MLA:
        month = MLA_MONTHS[d.month - 1]
        if granularity == 'month':
            return f"{month} {d.year}"
        return f"{d.day} {month} {d.year}"

    month = MONTHS[d.month - 1]
    if style is CitationStyle.APA:
        if granularity == 'month':
            return f"{d.year}, {month}"
        return f"{d.year}, {month} {d.day}"

    if granularity == 'month':
        return f"{month} {d.year}"
    return f"{month} {d.day}, {d.year}"


def publication_date(record: CaptureRecord) -> Optional[str]:
    """The source's own date: upload date for videos, else creation date."""
    if record.is_video and record.video_upload_date:
        return record.video_upload_date
    return record.creation_date or None


def citation_year(creation_date: Optional[str], timestamp: Optional[str]) -> str:
    """Year of the creation date, else of the capture timestamp, else 'n.d.'."""
    return extract_year(creation_date) or extract_year(timestamp) or NO_DATE


# =============================================================================
# TITLES
# =============================================================================

def to_sentence_case(title: Optional[str]) -> str:
    """
    APA sentence case: lowercase everything, capitalize the first character.

    Proper nouns are not preserved ("NASA Report" → "Nasa report").
    """
    if not title:
        return ""
    lower = title.strip().lower()
    return lower[:1].upper() + lower[1:]


def short_title(title: Optional[str], words: int = SHORT_TITLE_WORDS) -> str:
    """First few words of a title, with '...' if anything was cut."""
    if not title:
        return ""
    parts = title.split()
    if len(parts) > words:
        return " ".join(parts[:words]) + "..."
    return title.strip()


_TITLE_SEPARATOR = re.compile(r'\s[-–—]\s')


def parse_title_and_website(
    title: Optional[str],
    url: Optional[str],
    source_name: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Split a page title into (clean title, container name).

    "Deep Learning | Research Blog | by Jane Doe" → ("Deep Learning", "Research Blog")

    - An explicit source_name always wins as the container.
    - Otherwise the title is split on '|' (or ' - ' if there is no '|'), and
      the first later segment that isn't a "by <author>" fragment and is
      longer than 2 characters becomes the container.
    - Failing that, the container comes from the URL hostname.
    """
    raw = (title or "").strip()

    if '|' in raw:
        segments = [s.strip() for s in raw.split('|')]
    elif _TITLE_SEPARATOR.search(raw):
        segments = [s.strip() for s in _TITLE_SEPARATOR.split(raw)]
    else:
        segments = [raw]

    segments = [s for s in segments if s] or [raw]
    clean_title = segments[0]

    if source_name and source_name.strip():
        return clean_title, source_name.strip()

    for segment in segments[1:]:
        if re.match(r'^by\s', segment, re.IGNORECASE):
            continue
        if len(segment) > 2:
            return clean_title, segment

    return clean_title, container_from_url(url)


def container_from_url(url: Optional[str]) -> str:
    """Site name for a URL: known name, agency name, or 'Example.com'."""
    if not url:
        return ""
    try:
        host = (urlparse(url.strip()).hostname or "").lower()
    except ValueError:
        return ""
    if host.startswith('www.'):
        host = host[4:]
    if not host:
        return ""
    known = get_site_name(host) or get_gov_agency(host)
    if known:
        return known
    return host[:1].upper() + host[1:]


# =============================================================================
# URLS
# =============================================================================

def strip_scheme(url: Optional[str]) -> str:
    """'https://example.com/a' → 'example.com/a'"""
    if not url:
        return ""
    return re.sub(r'^https?://', '', url.strip(), flags=re.IGNORECASE)


def doi_url(doi: Optional[str]) -> str:
    """Normalize a DOI to its https://doi.org/ form."""
    if not doi:
        return ""
    doi = doi.strip()
    if doi.lower().startswith('http'):
        return doi
    doi = re.sub(r'^doi:\s*', '', doi, flags=re.IGNORECASE)
    return f"https://doi.org/{doi}"
