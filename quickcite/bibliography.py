"""
quickcite/bibliography.py

Bibliography assembly: sort captured records by author surname, optionally
group them by source category, and render every entry in one style.

Sort key rules (applied to the raw author string):
- "Last, First"      → text before the first comma
- single token       → that token (mononym or corporate name)
- anything else      → the last whitespace-delimited token
- no author          → "Unknown Author" (so it sorts under "author")

Comparison ignores case and accents; ties keep their input order.
"""

import logging
import unicodedata
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .models import CaptureRecord, CitationStyle, SourceType
from .config import BIBLIOGRAPHY_HEADINGS, CATEGORY_ORDER, UNKNOWN_AUTHOR
from .router import classify_record, get_citation
from .formatters import get_formatter

logger = logging.getLogger(__name__)


# =============================================================================
# SORTING
# =============================================================================

def fold(text: str) -> str:
    """Accent- and case-insensitive form of a string for comparisons."""
    decomposed = unicodedata.normalize('NFKD', text)
    stripped = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def sort_key(author: Optional[str]) -> str:
    """Surname proxy for an author string (see module docstring)."""
    name = (author or "").strip() or UNKNOWN_AUTHOR
    if ',' in name:
        key = name.split(',', 1)[0]
    else:
        tokens = name.split()
        key = tokens[0] if len(tokens) == 1 else tokens[-1]
    return fold(key.strip())


def sort_records(records: Iterable[CaptureRecord]) -> List[CaptureRecord]:
    """Records ordered by author sort key. Stable."""
    return sorted(records, key=lambda r: sort_key(r.author))


def category_for(source_type: SourceType) -> str:
    """Section heading a source type is grouped under."""
    for heading, types in CATEGORY_ORDER:
        if source_type.value in types:
            return heading
    return CATEGORY_ORDER[-1][0]


# =============================================================================
# ASSEMBLY
# =============================================================================

@dataclass
class BibliographySection:
    """One category group (heading is None for an ungrouped list)."""
    heading: Optional[str]
    entries: List[str] = field(default_factory=list)


@dataclass
class Bibliography:
    """An ordered, optionally grouped bibliography in one style."""
    style: CitationStyle
    heading: str
    sections: List[BibliographySection] = field(default_factory=list)

    @property
    def entries(self) -> List[str]:
        return [entry for section in self.sections for entry in section.entries]

    @property
    def is_grouped(self) -> bool:
        return any(section.heading for section in self.sections)

    def to_text(self) -> str:
        """Heading, then entries separated by blank lines."""
        lines = [self.heading, ""]
        for section in self.sections:
            if section.heading:
                lines.extend([section.heading, ""])
            for entry in section.entries:
                lines.extend([entry, ""])
        return "\n".join(lines).rstrip() + "\n"

    def to_dict(self) -> Dict:
        return {
            'style': self.style.value,
            'heading': self.heading,
            'sections': [
                {'heading': s.heading, 'entries': list(s.entries)} for s in self.sections
            ],
        }


def assemble_bibliography(
    records: Iterable[CaptureRecord],
    style=None,
    group: bool = False,
    plain: bool = True,
) -> Bibliography:
    """
    Build a bibliography from captured records.

    Args:
        records: Records in any order
        style: Citation style (defaults to the configured style)
        group: Partition entries into category sections, in CATEGORY_ORDER,
            skipping empty categories
        plain: Strip the italics marker (<em>x</em> → *x*) from entries

    Returns:
        Bibliography whose sections hold the rendered entries
    """
    from .export import to_plain_text

    style = get_formatter(style).style
    ordered = sort_records(records)

    def render(record):
        full = get_citation(record, style).full
        return to_plain_text(full) if plain else full

    if not group:
        sections = [BibliographySection(None, [render(r) for r in ordered])]
    else:
        buckets: Dict[str, List[str]] = {heading: [] for heading, _ in CATEGORY_ORDER}
        for record in ordered:
            buckets[category_for(classify_record(record))].append(render(record))
        sections = [
            BibliographySection(heading, entries)
            for heading, entries in buckets.items()
            if entries
        ]

    logger.debug("[Bibliography] %d entries in %d section(s), %s",
                 sum(len(s.entries) for s in sections), len(sections), style.value)
    return Bibliography(style=style, heading=BIBLIOGRAPHY_HEADINGS[style.value], sections=sections)
