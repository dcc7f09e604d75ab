"""
quickcite/formatters/mla.py

MLA 9th Edition formatter.

MLA style characteristics:
- Author last name first for first author only
- Page-level titles in quotes, standalone works in italics
- Container (website, journal, publisher) in italics
- Volume and issue: vol. 45, no. 2
- URL without http(s)://, DOI as https://doi.org/...
- Always closes with "Accessed <date>."
"""

from typing import List, Optional

from .base import BaseFormatter, register_formatter
from ..authors import invert_name, natural_name
from ..config import UNKNOWN_AUTHOR
from ..models import AuthorInfo, CitationSource, CitationStyle, SourceType
from ..normalizers import doi_url, format_date_for_style, strip_scheme


@register_formatter(CitationStyle.MLA)
@register_formatter('MLA 9')
@register_formatter('MLA9')
class MLAFormatter(BaseFormatter):
    """MLA 9th Edition citation formatter."""

    style = CitationStyle.MLA

    templates = {
        SourceType.WEBSITE: 'format_website',
        SourceType.ACADEMIC: 'format_academic',
        SourceType.BOOK: 'format_book',
        SourceType.NEWS: 'format_website',
        SourceType.GOVERNMENT: 'format_website',
        SourceType.LEGAL: 'format_legal',
        SourceType.PATENT: 'format_patent',
        SourceType.STANDARD: 'format_standard',
        SourceType.VIDEO: 'format_video',
        SourceType.SOCIAL_MEDIA: 'format_social',
    }

    def format_authors(self, authors: AuthorInfo) -> str:
        """
        Format authors for MLA.

        Rules:
        - No author: Unknown Author
        - Corporate: as-is
        - 1 author: Last, First
        - 2 authors: Last, First, and First Last
        - 3+ authors: Last, First, et al.
        """
        if authors.count == 0:
            return UNKNOWN_AUTHOR
        if authors.is_corporate:
            return authors.authors[0]

        first = invert_name(authors.authors[0])
        if authors.count == 1:
            return first
        if authors.count == 2:
            return f"{first}, and {natural_name(authors.authors[1])}"
        return f"{first}, et al."

    def wrap_in_text(self, names: str, year: str) -> str:
        return f"({names})"

    # =========================================================================
    # TEMPLATES
    # =========================================================================

    def format_website(self, source: CitationSource) -> str:
        """
        Web page, news article or government page.

        Pattern:
        Last, First. "Page Title." Website Name, Day Month Year, URL. Accessed Day Month Year.
        """
        return self._assemble(
            source,
            self.quote_title(source.title),
            [self.italicize(source.container)],
        )

    def format_academic(self, source: CitationSource) -> str:
        """
        Journal article.

        Pattern:
        Last, First. "Title." Journal, vol. X, no. Y, pp. X-Y, Day Month Year, DOI. Accessed ...
        """
        elements = [self.italicize(source.container)]
        if source.volume:
            elements.append(f"vol. {source.volume}")
        if source.issue:
            elements.append(f"no. {source.issue}")
        if source.pages:
            elements.append(self.pages_label(source.pages))

        location = doi_url(source.doi) if source.doi else None
        return self._assemble(source, self.quote_title(source.title), elements, location)

    def format_book(self, source: CitationSource) -> str:
        """
        Pattern:
        Last, First. Title of Book. Publisher, Year, URL. Accessed ...
        """
        publisher = source.publisher or source.container
        return self._assemble(
            source,
            self.italic_title(source.title),
            [self.italicize(publisher)],
        )

    def format_legal(self, source: CitationSource) -> str:
        """Case name in italics, then the database it was read on."""
        return self._assemble(
            source,
            self.italic_title(source.title),
            [self.italicize(source.container)],
        )

    def format_patent(self, source: CitationSource) -> str:
        elements = [self.italicize(source.container)]
        if not self.mentions(source.title, source.patent_number):
            elements.append(f"Patent {source.patent_number}")
        return self._assemble(source, self.quote_title(source.title), elements)

    def format_standard(self, source: CitationSource) -> str:
        elements = [self.italicize(source.container)]
        if not self.mentions(source.title, source.designation):
            elements.append(source.designation)
        return self._assemble(source, self.italic_title(source.title), elements)

    def format_video(self, source: CitationSource) -> str:
        """
        Pattern:
        Last, First. "Video Title." YouTube, uploaded by Channel, Day Month Year, URL. Accessed ...
        """
        elements = [self.italicize(source.platform or source.container)]
        if source.channel:
            elements.append(f"uploaded by {source.channel}")
        return self._assemble(source, self.quote_title(source.title), elements)

    def format_social(self, source: CitationSource) -> str:
        return self._assemble(
            source,
            self.quote_title(source.title),
            [self.italicize(source.platform or source.container)],
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _assemble(
        self,
        source: CitationSource,
        title: str,
        elements: List[str],
        location: Optional[str] = None,
    ) -> str:
        """
        Author. Title. Container elements, date, location. Accessed date.

        The container elements, publication date and location form a single
        comma-separated block closed by a period.
        """
        block = list(elements)
        block.append(format_date_for_style(source.publication_date, self.style))
        block.append(location or strip_scheme(source.url))
        container = self.join(block, ", ")

        parts = [
            self.end(self.format_authors(source.authors)),
            title,
            self.end(container),
            self.accessed(source),
        ]
        return self.join(parts)

    def accessed(self, source: CitationSource) -> str:
        """'Accessed 1 Mar. 2024.' (empty only when no access date is known)."""
        date = format_date_for_style(source.access_date, self.style)
        if not date:
            return ""
        return self.end(f"Accessed {date}")
