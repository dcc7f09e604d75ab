"""
quickcite/authors.py

Author string parsing and name helpers.

parse_authors() turns whatever free-text author string the page gave us
into an AuthorInfo. The formatters only ever consume AuthorInfo and the
name helpers below; they never re-parse the raw string.
"""

import re
import logging
from typing import List, Optional, Tuple

from .models import AuthorInfo
from .config import (
    CORPORATE_ACRONYM_PATTERN, CORPORATE_NAMES, CORPORATE_PATTERN, UNKNOWN_AUTHOR,
)

logger = logging.getLogger(__name__)

_CORPORATE_NAMES = frozenset(n.casefold() for n in CORPORATE_NAMES)


# =============================================================================
# PARSING
# =============================================================================

def is_corporate(name: str) -> bool:
    """
    Check a name against the organizational vocabulary.

    Acronyms must be in capitals. Brand names must be the whole string.
    """
    if not name:
        return False
    if name.strip().casefold() in _CORPORATE_NAMES:
        return True
    return bool(CORPORATE_PATTERN.search(name) or CORPORATE_ACRONYM_PATTERN.search(name))


def parse_authors(raw: Optional[str]) -> AuthorInfo:
    """
    Parse a free-text author string.

    Split priority:
    1. " and "
    2. " & "
    3. ";"  (a semicolon is never part of a single name)
    4. ","  (except a lone "Last, First")

    Examples:
        "Jane Doe and John Roe"        → 2 authors
        "Smith, John"                  → 1 author, kept pre-inverted
        "A, B, C, D"                   → 4 authors
        "Smith, John, and Mary Jones"  → 2 authors
        "World Health Organization"    → corporate, count 1
        None / "Unknown Author"        → no author
    """
    if raw is None:
        return AuthorInfo.none()

    clean = re.sub(r'\s+', ' ', raw).strip()
    clean = re.sub(r'^by\s+', '', clean, flags=re.IGNORECASE).strip(' ,;')
    if not clean or clean.lower() == UNKNOWN_AUTHOR.lower():
        return AuthorInfo.none()

    if is_corporate(clean):
        return AuthorInfo.corporate(clean)

    names = _split_names(clean)
    if not names:
        return AuthorInfo.none()

    logger.debug("[Authors] %r → %s", raw, names)
    return AuthorInfo.people(names)


def _split_names(raw: str) -> List[str]:
    if re.search(r'\s+and\s+', raw, re.IGNORECASE):
        parts = re.split(r',?\s+and\s+', raw, flags=re.IGNORECASE)
    elif re.search(r'\s&\s', raw):
        parts = re.split(r',?\s+&\s+', raw)
    else:
        parts = [raw]

    names = []
    for part in parts:
        names.extend(_split_list(part))
    return names


def _split_list(part: str) -> List[str]:
    """Split one and/&-delimited chunk on semicolons or commas."""
    part = part.strip(' ,;')
    if not part:
        return []

    if ';' in part:
        return [p.strip(' ,') for p in part.split(';') if p.strip(' ,')]

    tokens = [t.strip() for t in part.split(',') if t.strip()]
    if len(tokens) == 2 and _looks_inverted(tokens[0], tokens[1]):
        return [f"{tokens[0]}, {tokens[1]}"]
    return tokens


def _looks_inverted(left: str, right: str) -> bool:
    """'Smith' + 'John' or 'Smith' + 'John A.' reads as 'Last, First'."""
    return len(left.split()) == 1 and 1 <= len(right.split()) <= 2


# =============================================================================
# NAME HELPERS
# =============================================================================

def split_name(name: str) -> Tuple[str, str]:
    """
    Split a personal name into (first, last).

    Accepts both 'First Last' and pre-inverted 'Last, First'. A single
    token is treated as a surname with no given names.
    """
    name = name.strip()
    if ',' in name:
        last, first = name.split(',', 1)
        return first.strip(), last.strip()
    parts = name.split()
    if len(parts) > 1:
        return " ".join(parts[:-1]), parts[-1]
    return "", name


def invert_name(name: str) -> str:
    """'Jane Doe' → 'Doe, Jane'. Already inverted names come back unchanged."""
    first, last = split_name(name)
    if not first:
        return last
    return f"{last}, {first}"


def natural_name(name: str) -> str:
    """'Doe, Jane' → 'Jane Doe'. Names in natural order are unchanged."""
    first, last = split_name(name)
    return f"{first} {last}".strip()


def initials(first: str) -> str:
    """'Jane Mary' → 'J. M.'; 'Jean-Paul' → 'J.-P.'"""
    result = []
    for token in first.split():
        pieces = [p for p in token.split('-') if p]
        result.append("-".join(f"{p[0].upper()}." for p in pieces))
    return " ".join(result)


def apa_name(name: str) -> str:
    """'Jane Doe' → 'Doe, J.'"""
    first, last = split_name(name)
    if not first:
        return last
    return f"{last}, {initials(first)}"


def last_name(name: str) -> str:
    """Surname used for in-text citations."""
    return split_name(name)[1]
