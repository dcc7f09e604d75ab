"""
quickcite/export.py

Rendering-surface helpers for contexts that can't carry rich text, plus
the extension's download formats:

- to_plain_text(): <em>Title</em> → *Title*, entities decoded
- export_quotes(): the "QUICKCITE - EXPORT" text file
- bibliography_text(): the "QUICKCITE - BIBLIOGRAPHY" text file
- bibliography_docx(): Word document with hanging-indent entries (python-docx)
- fill_signal_phrase(): "According to ${author}, ..." templates
"""

import io
import re
import html
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from string import Template
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Inches, Pt

from .models import CaptureRecord, CitationStyle
from .config import MONTHS, SIGNAL_PHRASES, UNKNOWN_AUTHOR
from .normalizers import parse_title_and_website
from .router import get_citation
from .bibliography import assemble_bibliography

logger = logging.getLogger(__name__)

RULE = "=" * 80
THIN_RULE = "-" * 80

DOCX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'


# =============================================================================
# PLAIN TEXT
# =============================================================================

_EMPHASIS = re.compile(r'<(em|i)>(.*?)</\1>', re.DOTALL | re.IGNORECASE)
_STRONG = re.compile(r'</?(?:b|strong)>', re.IGNORECASE)


def to_plain_text(citation: Optional[str]) -> str:
    """
    Strip rich-text markup from a citation string.

    Italic spans become *asterisked*, bold tags are dropped and HTML
    entities are decoded last, so an escaped '&lt;em&gt;' in a title
    stays literal text. The text inside a marked span is never lost.
    """
    if not citation:
        return ""
    text = _EMPHASIS.sub(lambda m: f"*{m.group(2)}*" if m.group(2) else "", citation)
    text = _STRONG.sub("", text)
    return html.unescape(text)


class TextRun(NamedTuple):
    text: str
    italic: bool = False
    bold: bool = False


_RUN = re.compile(r'<(i|em|b|strong)>(.*?)</\1>|([^<]+|<)', re.DOTALL | re.IGNORECASE)


def citation_runs(citation: Optional[str]) -> List[TextRun]:
    """
    Split a marked-up citation into Word runs.

    '<em>'/'<i>' spans become italic runs, '<b>'/'<strong>' spans bold
    ones; neighbouring plain text is merged into a single run. A '<' that
    opens no known tag stays literal.
    """
    runs: List[TextRun] = []
    for match in _RUN.finditer(citation or ""):
        tag, tagged, plain = match.groups()
        if plain:
            text = html.unescape(plain)
            if runs and not (runs[-1].italic or runs[-1].bold):
                runs[-1] = TextRun(runs[-1].text + text)
            else:
                runs.append(TextRun(text))
        elif tagged:
            tag = tag.lower()
            runs.append(TextRun(html.unescape(tagged), italic=tag in ('i', 'em'), bold=tag in ('b', 'strong')))
    return runs


# =============================================================================
# PREFERENCES
# =============================================================================

@dataclass
class ExportPreferences:
    """Which citation styles and metadata go into exported files."""
    include_mla: bool = True
    include_apa: bool = True
    include_chicago: bool = False
    include_metadata: bool = True
    sort_order: str = 'newest'  # 'newest' | 'oldest'

    _KEYS = {
        'include_mla': 'includeMLA',
        'include_apa': 'includeAPA',
        'include_chicago': 'includeChicago',
        'include_metadata': 'includeMetadata',
        'sort_order': 'sortOrder',
    }

    @property
    def styles(self) -> List[CitationStyle]:
        """Enabled styles in export order."""
        enabled = [
            (self.include_mla, CitationStyle.MLA),
            (self.include_apa, CitationStyle.APA),
            (self.include_chicago, CitationStyle.CHICAGO),
        ]
        return [style for on, style in enabled if on]

    def to_dict(self) -> Dict[str, Any]:
        return {self._KEYS[k]: v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "ExportPreferences":
        """Create from the extension's camelCase keys (snake_case also accepted)."""
        kwargs = {}
        for attr, wire in cls._KEYS.items():
            if d and wire in d:
                kwargs[attr] = d[wire]
            elif d and attr in d:
                kwargs[attr] = d[attr]
        prefs = cls(**kwargs)
        if prefs.sort_order not in ('newest', 'oldest'):
            prefs.sort_order = 'newest'
        return prefs


# =============================================================================
# TEXT EXPORTS
# =============================================================================

def format_export_time(moment: datetime) -> str:
    """'October 19, 2026 at 03:04 PM'"""
    return f"{MONTHS[moment.month - 1]} {moment.day}, {moment.year} at {moment:%I:%M %p}"


def export_quotes(
    records: Iterable[CaptureRecord],
    preferences: Optional[ExportPreferences] = None,
    exported_at: Optional[datetime] = None,
) -> str:
    """
    Build the plain-text quote export.

    Each quote gets its text, an optional metadata block and one citation
    per enabled style. Citations are plain text (italics as *asterisks*).
    """
    records = list(records)
    preferences = preferences or ExportPreferences()
    exported_at = exported_at or datetime.now()

    lines = [
        "QUICKCITE - EXPORT",
        f"Exported: {format_export_time(exported_at)}",
        f"Total Quotes: {len(records)}",
        RULE,
        "",
    ]

    for index, record in enumerate(records, 1):
        lines += [f"QUOTE {index}", THIN_RULE, ""]
        lines += ["Quote:", f'"{record.text}"', ""]

        if preferences.include_metadata:
            lines += [
                f"Source: {record.source_title or ''}",
                f"URL: {record.source_url or ''}",
                f"Saved: {record.access_date or ''}",
                f"Timestamp: {record.timestamp or ''}",
                "",
            ]

        for style in preferences.styles:
            citation = get_citation(record, style)
            lines += [f"{style.label} Format:", f"  {citation.plain}", ""]

        lines += [RULE, ""]

    logger.info("[Export] %d quotes exported", len(records))
    return "\n".join(lines)


def bibliography_text(
    records: Iterable[CaptureRecord],
    preferences: Optional[ExportPreferences] = None,
    generated_at: Optional[datetime] = None,
    group: bool = False,
) -> str:
    """Plain-text bibliography file with one section per enabled style."""
    records = list(records)
    preferences = preferences or ExportPreferences()
    generated_at = generated_at or datetime.now()

    lines = [
        "QUICKCITE - BIBLIOGRAPHY",
        f"Generated: {format_export_time(generated_at)}",
        f"Total Sources: {len(records)}",
        RULE,
        "",
    ]

    for style in preferences.styles:
        bibliography = assemble_bibliography(records, style, group=group)
        lines += [f"{style.label.upper()} {bibliography.heading.upper()}", RULE, ""]
        for section in bibliography.sections:
            if section.heading:
                lines += [section.heading, THIN_RULE, ""]
            for entry in section.entries:
                lines += [entry, ""]
        lines += [RULE, ""]

    return "\n".join(lines)


# =============================================================================
# WORD EXPORT
# =============================================================================

def bibliography_docx(records: Iterable[CaptureRecord], style=None, group: bool = False) -> bytes:
    """
    Build a .docx bibliography.

    Entries use a 0.5" hanging indent, Times New Roman 12pt, and <em>
    spans become italic runs.

    Returns:
        The document as bytes, ready for send_file()
    """
    bibliography = assemble_bibliography(records, style, group=group, plain=False)

    doc = Document()
    normal = doc.styles['Normal']
    normal.font.name = 'Times New Roman'
    normal.font.size = Pt(12)
    normal.element.rPr.rFonts.set(qn('w:eastAsia'), 'Times New Roman')

    heading = doc.add_heading(bibliography.heading, level=1)
    heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

    for section in bibliography.sections:
        if section.heading:
            doc.add_heading(section.heading, level=2)
        for entry in section.entries:
            paragraph = doc.add_paragraph()
            paragraph.paragraph_format.left_indent = Inches(0.5)
            paragraph.paragraph_format.first_line_indent = Inches(-0.5)
            for part in citation_runs(entry):
                run = paragraph.add_run(part.text)
                if part.italic:
                    run.italic = True
                if part.bold:
                    run.bold = True

    output = io.BytesIO()
    doc.save(output)
    logger.info("[Export] Word bibliography with %d entries", len(bibliography.entries))
    return output.getvalue()


# =============================================================================
# SIGNAL PHRASES
# =============================================================================

def fill_signal_phrase(template: str, record: Optional[CaptureRecord] = None) -> str:
    """
    Fill a signal-phrase template for a quote.

    Placeholders: ${author}, ${title}, ${quote}. Unknown placeholders are
    left as they are.
    """
    author = title = quote = None
    if record is not None:
        author = record.author
        title, _ = parse_title_and_website(record.source_title, record.source_url, record.source_name)
        quote = record.text
    return Template(template).safe_substitute(
        author=author or UNKNOWN_AUTHOR,
        title=title or 'Article Title',
        quote=quote or 'direct quote',
    )


def signal_phrases(record: Optional[CaptureRecord] = None) -> List[str]:
    """Every built-in signal phrase, filled for the record."""
    return [fill_signal_phrase(t, record) for t in SIGNAL_PHRASES]
