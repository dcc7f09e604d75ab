"""Shared fixtures: one captured record per interesting source type."""

import pytest

from quickcite.models import CaptureRecord


@pytest.fixture
def arxiv_record():
    """The two-author academic capture used throughout the docs."""
    return CaptureRecord(
        text="x",
        source_title="Deep Learning Survey",
        source_url="https://arxiv.org/abs/2301.00001",
        author="Jane Doe and John Roe",
        creation_date="2023-01-15",
        access_date="March 1, 2024",
        volume="5",
        issue="2",
        pages="10-20",
        doi="10.1234/abc",
    )


@pytest.fixture
def epa_record():
    """Government page with no author and no dates."""
    return CaptureRecord(
        text="x",
        author=None,
        source_title="Official Statement | EPA",
        source_url="https://www.epa.gov/statement",
    )


@pytest.fixture
def website_record():
    return CaptureRecord(
        text="Sleep is important.",
        source_title="Ten Tips for Better Sleep | Healthline",
        source_url="https://www.healthline.com/tips",
        author="Jane Doe",
        creation_date="2023-01-15",
        access_date="March 1, 2024",
        timestamp="2024-03-01T10:00:00Z",
    )


@pytest.fixture
def news_record():
    return CaptureRecord(
        text="The storm made landfall at noon.",
        source_title="Storm Hits Coast - The Daily Planet",
        source_url="https://dailyplanet.com/news/storm",
        author="Lois Lane",
        creation_date="2024-02-10",
        access_date="2024-02-11",
        timestamp="2024-02-11T08:30:00Z",
    )


@pytest.fixture
def book_record():
    return CaptureRecord(
        text="Premature optimization is the root of all evil.",
        source_title="The Art of Computer Programming, Third Edition",
        source_url="https://books.google.com/books?id=abc",
        author="Donald Knuth",
        publisher="Addison-Wesley",
        creation_date="1997",
        access_date="2024-03-01",
    )


@pytest.fixture
def video_record():
    return CaptureRecord(
        text="Attention is a weighted average.",
        source_title="How Transformers Work",
        source_url="https://www.youtube.com/watch?v=abc",
        is_video=True,
        video_channel="3Blue1Brown",
        video_upload_date="2024-04-01",
        access_date="2024-05-01",
    )


@pytest.fixture
def generic_record():
    """A record whose fields every template can use, whatever its type."""
    return CaptureRecord(
        text="x",
        source_title="Some Title",
        source_url="https://example.com/page",
        author="Jane Doe",
        access_date="March 1, 2024",
    )
