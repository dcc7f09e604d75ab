"""Tests for plain-text conversion, the download formats and signal phrases."""

import io
from datetime import datetime

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches

from quickcite.export import (
    ExportPreferences, TextRun, bibliography_docx, bibliography_text, citation_runs,
    export_quotes, fill_signal_phrase, format_export_time, signal_phrases, to_plain_text,
)
from quickcite.models import CitationStyle

EXPORTED_AT = datetime(2026, 10, 19, 15, 4)


class TestPlainText:

    def test_italics_become_asterisks(self):
        assert to_plain_text("<em>arXiv</em>, vol. 5") == "*arXiv*, vol. 5"
        assert to_plain_text("<i>Title</i>") == "*Title*"

    def test_bold_dropped_and_entities_decoded(self):
        assert to_plain_text("<b>Note</b> Smith &amp; Sons") == "Note Smith & Sons"

    def test_escaped_markup_stays_literal(self):
        assert to_plain_text("About &lt;em&gt; tags") == "About <em> tags"

    def test_empty(self):
        assert to_plain_text(None) == ""
        assert to_plain_text("") == ""

    def test_citation_runs(self):
        assert citation_runs('Doe. <em>Book</em>. <b>Bold</b> end') == [
            TextRun('Doe. '),
            TextRun('Book', italic=True),
            TextRun('. '),
            TextRun('Bold', bold=True),
            TextRun(' end'),
        ]

    def test_runs_keep_stray_angle_bracket_in_one_run(self):
        assert citation_runs("a < b &amp; c") == [TextRun("a < b & c")]
        assert citation_runs(None) == []


class TestPreferences:

    def test_defaults(self):
        prefs = ExportPreferences()
        assert prefs.styles == [CitationStyle.MLA, CitationStyle.APA]
        assert prefs.to_dict() == {
            'includeMLA': True,
            'includeAPA': True,
            'includeChicago': False,
            'includeMetadata': True,
            'sortOrder': 'newest',
        }

    def test_from_dict(self):
        prefs = ExportPreferences.from_dict({'includeChicago': True, 'include_mla': False, 'sortOrder': 'oldest'})
        assert prefs.styles == [CitationStyle.APA, CitationStyle.CHICAGO]
        assert prefs.sort_order == 'oldest'

    def test_invalid_sort_order_reset(self):
        assert ExportPreferences.from_dict({'sortOrder': 'sideways'}).sort_order == 'newest'
        assert ExportPreferences.from_dict(None) == ExportPreferences()


class TestTextExports:

    def test_export_time(self):
        assert format_export_time(EXPORTED_AT) == "October 19, 2026 at 03:04 PM"

    def test_export_quotes(self, arxiv_record, website_record):
        text = export_quotes([arxiv_record, website_record], exported_at=EXPORTED_AT)
        lines = text.split("\n")
        assert lines[:4] == [
            "QUICKCITE - EXPORT",
            "Exported: October 19, 2026 at 03:04 PM",
            "Total Quotes: 2",
            "=" * 80,
        ]
        assert "QUOTE 1" in lines and "QUOTE 2" in lines
        assert '"Sleep is important."' in lines
        assert "URL: https://www.healthline.com/tips" in lines
        assert "MLA Format:" in lines
        assert "APA Format:" in lines
        assert "Chicago Format:" not in lines
        assert '  Doe, Jane, and John Roe. "Deep Learning Survey." *arXiv*, vol. 5, no. 2, ' \
               'pp. 10-20, 15 Jan. 2023, https://doi.org/10.1234/abc. Accessed 1 Mar. 2024.' in lines

    def test_export_without_metadata(self, website_record):
        prefs = ExportPreferences(include_metadata=False, include_apa=False, include_chicago=True)
        text = export_quotes([website_record], prefs, EXPORTED_AT)
        assert "Source:" not in text
        assert "Chicago Format:" in text
        assert "APA Format:" not in text

    def test_bibliography_text(self, arxiv_record, epa_record):
        prefs = ExportPreferences(include_chicago=True)
        text = bibliography_text([arxiv_record, epa_record], prefs, EXPORTED_AT)
        assert text.startswith("QUICKCITE - BIBLIOGRAPHY\nGenerated: October 19, 2026 at 03:04 PM\nTotal Sources: 2\n")
        assert "MLA WORKS CITED" in text
        assert "APA REFERENCES" in text
        assert "CHICAGO BIBLIOGRAPHY" in text
        mla = text.index("MLA WORKS CITED")
        assert text.index("Unknown Author.", mla) < text.index("Doe, Jane, and John Roe.", mla)

    def test_grouped_bibliography_text(self, arxiv_record, epa_record):
        text = bibliography_text([arxiv_record, epa_record], ExportPreferences(include_apa=False),
                                 EXPORTED_AT, group=True)
        assert text.index("Academic Sources") < text.index("Government Documents")


class TestWordExport:

    def test_docx(self, arxiv_record, epa_record):
        data = bibliography_docx([arxiv_record, epa_record], CitationStyle.MLA)
        assert data[:2] == b"PK"

        doc = Document(io.BytesIO(data))
        heading = doc.paragraphs[0]
        assert heading.text == "Works Cited"
        assert heading.alignment == WD_ALIGN_PARAGRAPH.CENTER

        entries = [p for p in doc.paragraphs[1:] if p.text]
        assert entries[0].text.startswith("Unknown Author.")
        paper = entries[1]
        assert paper.text.startswith("Doe, Jane, and John Roe.")
        assert paper.paragraph_format.first_line_indent == Inches(-0.5)
        assert paper.paragraph_format.left_indent == Inches(0.5)
        italic = [r.text for r in paper.runs if r.italic]
        assert italic == ["arXiv"]

    def test_docx_grouped_headings(self, arxiv_record, epa_record):
        doc = Document(io.BytesIO(bibliography_docx([arxiv_record, epa_record], "apa", group=True)))
        texts = [p.text for p in doc.paragraphs]
        assert texts[0] == "References"
        assert "Academic Sources" in texts
        assert "Government Documents" in texts


class TestSignalPhrases:

    def test_fill(self, arxiv_record):
        assert fill_signal_phrase('According to ${author}, "${quote}"', arxiv_record) == \
            'According to Jane Doe and John Roe, "x"'

    def test_defaults_without_record(self):
        assert fill_signal_phrase('In "${title}," ${author} notes, "${quote}"') == \
            'In "Article Title," Unknown Author notes, "direct quote"'

    def test_unknown_placeholder_left_alone(self, arxiv_record):
        assert fill_signal_phrase("${author} (p. ${page})", arxiv_record) == "Jane Doe and John Roe (p. ${page})"

    def test_title_cleaned(self, website_record):
        phrases = signal_phrases(website_record)
        assert len(phrases) == 4
        assert 'As Jane Doe explains in "Ten Tips for Better Sleep," "Sleep is important."' in phrases
