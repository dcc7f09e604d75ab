"""Tests for dates, titles and URL normalization."""

import datetime

import pytest

from quickcite.models import CaptureRecord, CitationStyle
from quickcite.normalizers import (
    citation_year, container_from_url, doi_url, extract_year,
    format_date_for_style, parse_date, parse_title_and_website,
    publication_date, short_title, strip_scheme, to_sentence_case,
)


class TestParseDate:

    @pytest.mark.parametrize("value,expected,granularity", [
        ("2023-01-15", datetime.date(2023, 1, 15), "day"),
        ("2024-03-01T12:00:00.000Z", datetime.date(2024, 3, 1), "day"),
        ("2024-03-01T12:00:00", datetime.date(2024, 3, 1), "day"),
        ("March 1, 2024", datetime.date(2024, 3, 1), "day"),
        ("March 1st, 2024", datetime.date(2024, 3, 1), "day"),
        ("1 Mar. 2024", datetime.date(2024, 3, 1), "day"),
        ("Sept. 5, 2021", datetime.date(2021, 9, 5), "day"),
        ("Friday, March 1, 2024", datetime.date(2024, 3, 1), "day"),
        ("3/1/2024", datetime.date(2024, 3, 1), "day"),
        ("2023-01", datetime.date(2023, 1, 1), "month"),
        ("January 2023", datetime.date(2023, 1, 1), "month"),
        ("2023", datetime.date(2023, 1, 1), "year"),
    ])
    def test_formats(self, value, expected, granularity):
        parsed = parse_date(value)
        assert parsed.date == expected
        assert parsed.granularity == granularity

    @pytest.mark.parametrize("value", [None, "", "sometime last spring", 42])
    def test_unparseable(self, value):
        assert parse_date(value) is None


class TestFormatDateForStyle:

    @pytest.mark.parametrize("style,expected", [
        (CitationStyle.MLA, "15 Jan. 2023"),
        (CitationStyle.APA, "2023, January 15"),
        (CitationStyle.CHICAGO, "January 15, 2023"),
        ("mla", "15 Jan. 2023"),
    ])
    def test_day(self, style, expected):
        assert format_date_for_style("2023-01-15", style) == expected

    @pytest.mark.parametrize("month,expected", [
        (5, "4 May 2023"),
        (6, "4 June 2023"),
        (7, "4 July 2023"),
        (9, "4 Sept. 2023"),
    ])
    def test_mla_unabbreviated_months(self, month, expected):
        assert format_date_for_style(f"2023-{month:02d}-04", CitationStyle.MLA) == expected

    def test_month_granularity(self):
        assert format_date_for_style("2023-01", CitationStyle.MLA) == "Jan. 2023"
        assert format_date_for_style("2023-01", CitationStyle.APA) == "2023, January"
        assert format_date_for_style("2023-01", CitationStyle.CHICAGO) == "January 2023"

    def test_year_only(self):
        assert format_date_for_style("2023", CitationStyle.MLA) == "2023"
        assert format_date_for_style("2023-01-15", CitationStyle.APA, year_only=True) == "2023"

    def test_unparseable_echoed(self):
        assert format_date_for_style("  sometime last spring ", CitationStyle.MLA) == "sometime last spring"

    def test_none(self):
        assert format_date_for_style(None, CitationStyle.APA) == ""


class TestYears:

    def test_extract_year(self):
        assert extract_year("2023-01-15") == "2023"
        assert extract_year("Updated in 1999 or so") == "1999"
        assert extract_year("no year") is None

    def test_citation_year_precedence(self):
        assert citation_year("2023-01-15", "2024-03-01T10:00:00Z") == "2023"
        assert citation_year(None, "2024-03-01T10:00:00Z") == "2024"
        assert citation_year(None, None) == "n.d."

    def test_publication_date_prefers_video_upload(self):
        record = CaptureRecord(text="x", source_url="u", creation_date="2020-01-01",
                               is_video=True, video_upload_date="2024-04-01")
        assert publication_date(record) == "2024-04-01"
        assert publication_date(CaptureRecord(text="x", source_url="u")) is None


class TestTitles:

    def test_sentence_case(self):
        assert to_sentence_case("NASA Report On Mars") == "Nasa report on mars"
        assert to_sentence_case(None) == ""

    def test_short_title(self):
        assert short_title("One Two Three Four Five") == "One Two Three Four..."
        assert short_title("One Two") == "One Two"
        assert short_title("") == ""

    def test_pipe_separated(self):
        title, container = parse_title_and_website(
            "Deep Learning | Research Blog | by Jane Doe", "https://example.com/a"
        )
        assert (title, container) == ("Deep Learning", "Research Blog")

    def test_dash_separated_skips_by_fragment(self):
        title, container = parse_title_and_website(
            "Article - by Jane Doe - The Site", "https://example.com/a"
        )
        assert (title, container) == ("Article", "The Site")

    def test_pipe_wins_over_dash(self):
        title, container = parse_title_and_website("A - B | Site", "https://example.com")
        assert (title, container) == ("A - B", "Site")

    def test_short_segment_ignored(self):
        assert parse_title_and_website("Page | UK", "https://www.example.com/")[1] == "Example.com"

    def test_explicit_source_name_wins(self):
        title, container = parse_title_and_website(
            "Story | BBC", "https://www.bbc.com/news/x", "BBC News Online"
        )
        assert (title, container) == ("Story", "BBC News Online")

    def test_container_from_url(self):
        assert container_from_url("https://www.example.com/a") == "Example.com"
        assert container_from_url("https://arxiv.org/abs/1") == "arXiv"
        assert container_from_url("https://www.cdc.gov/flu") == "Centers for Disease Control and Prevention"
        assert container_from_url(None) == ""

    def test_none_title(self):
        assert parse_title_and_website(None, "https://example.com") == ("", "Example.com")

    def test_leading_separator_skips_empty_segment(self):
        title, container = parse_title_and_website("| EPA", "https://www.epa.gov/x")
        assert title == "EPA"
        assert container == "Environmental Protection Agency"

    def test_empty_segments_between_separators(self):
        assert parse_title_and_website(" | Deep Learning | | Research Blog", "https://example.com") == (
            "Deep Learning", "Research Blog"
        )


class TestUrls:

    def test_strip_scheme(self):
        assert strip_scheme("https://example.com/a") == "example.com/a"
        assert strip_scheme("HTTP://example.com") == "example.com"

    @pytest.mark.parametrize("doi", ["10.1234/abc", "doi:10.1234/abc", "https://doi.org/10.1234/abc"])
    def test_doi_url(self, doi):
        assert doi_url(doi) == "https://doi.org/10.1234/abc"
