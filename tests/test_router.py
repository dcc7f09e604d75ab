"""Tests for building source variants and the citation pipeline."""

from quickcite.models import (
    AcademicSource, AuthorInfo, CaptureRecord, Citation, CitationStyle,
    GovernmentSource, PatentSource, SourceType, VideoSource, WebsiteSource,
)
from quickcite.router import build_source, classify_record, get_citation, render_in_text


def test_academic_variant_carries_journal_fields(arxiv_record):
    source = build_source(arxiv_record)
    assert isinstance(source, AcademicSource)
    assert (source.volume, source.issue, source.pages, source.doi) == ("5", "2", "10-20", "10.1234/abc")
    assert source.container == "arXiv"
    assert source.citation_year == "2023"
    assert source.authors.count == 2


def test_government_variant_has_no_extra_fields(epa_record):
    source = build_source(epa_record)
    assert isinstance(source, GovernmentSource)
    assert not hasattr(source, "volume")
    assert source.title == "Official Statement"
    assert source.authors.is_empty
    assert source.citation_year == "n.d."


def test_video_author_falls_back_to_channel(video_record):
    source = build_source(video_record)
    assert isinstance(source, VideoSource)
    assert source.authors.authors == ("3Blue1Brown",)
    assert source.platform == "YouTube"
    assert source.publication_date == "2024-04-01"


def test_video_flag_forces_video_type():
    record = CaptureRecord(text="x", source_title="Clip", source_url="https://example.com/clip",
                           is_video=True, video_platform="Brightcove")
    assert classify_record(record) is SourceType.VIDEO
    assert build_source(record).platform == "Brightcove"


def test_explicit_type_and_authors_skip_detection(arxiv_record):
    source = build_source(arxiv_record, SourceType.WEBSITE, AuthorInfo.corporate("Acme"))
    assert isinstance(source, WebsiteSource)
    assert source.authors.authors == ("Acme",)


def test_patent_hint_from_url():
    record = CaptureRecord(text="x", source_title="Self-Driving Widget",
                           source_url="https://patents.google.com/patent/US1234567B2/en")
    source = build_source(record)
    assert isinstance(source, PatentSource)
    assert source.patent_number == "US1234567B2"


def test_access_date_falls_back_to_timestamp():
    record = CaptureRecord(text="x", source_title="Page", source_url="https://example.com",
                           timestamp="2024-03-01T10:00:00Z")
    source = build_source(record)
    assert source.access_date == "2024-03-01T10:00:00Z"
    assert source.citation_year == "2024"


def test_get_citation(arxiv_record):
    citation = get_citation(arxiv_record, "APA 7")
    assert isinstance(citation, Citation)
    assert citation.style is CitationStyle.APA
    assert citation.source_type is SourceType.ACADEMIC
    assert citation.in_text == "(Doe & Roe, 2023)"
    assert "<em>" not in citation.plain
    assert "*arXiv*" in citation.plain


def test_citation_to_dict(arxiv_record):
    data = get_citation(arxiv_record, "mla").to_dict()
    assert data["source_type"] == "academic"
    assert data["style"] == "mla"
    assert data["citation"].startswith("Doe, Jane, and John Roe.")
    assert data["in_text"] == "(Doe and Roe)"


def test_unknown_style_uses_default(arxiv_record):
    assert get_citation(arxiv_record, "harvard").style is CitationStyle.MLA


def test_render_in_text_with_given_authors(epa_record):
    assert render_in_text(epa_record, AuthorInfo.corporate("EPA"), "apa") == "(EPA, n.d.)"


def test_build_source_is_idempotent(website_record):
    assert build_source(website_record) == build_source(website_record)
