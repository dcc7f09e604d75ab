"""
quickcite/formatters/chicago.py

Chicago Manual of Style (17th ed.) citation formatter, bibliography form.
This is the default style for history and humanities.

Uses <em> tags for italics.
"""

from typing import List

from .base import BaseFormatter, register_formatter
from ..authors import invert_name, natural_name
from ..models import AuthorInfo, CitationSource, CitationStyle, SourceType
from ..normalizers import doi_url, format_date_for_style


@register_formatter(CitationStyle.CHICAGO)
@register_formatter('Chicago Manual of Style')
@register_formatter('CMS')
class ChicagoFormatter(BaseFormatter):
    """
    Chicago Manual of Style formatter.

    Notes-Bibliography style, bibliography entries.

    Format patterns:
    - Web page: Author. "Title." Site. Month Day, Year. URL.
    - Journal: Author. "Title." Journal Vol, no. Issue (Year): Pages. DOI.
    - Book: Author. Title. Publisher, Year. URL.
    - Newspaper: Author. "Title." Newspaper, Month Day, Year. URL.
    - Video: Author. "Title." YouTube video. Posted by Channel. Date. URL.

    Sources without an author start with the title; Chicago never prints
    "Unknown Author".
    """

    style = CitationStyle.CHICAGO

    templates = {
        SourceType.WEBSITE: 'format_website',
        SourceType.ACADEMIC: 'format_academic',
        SourceType.BOOK: 'format_book',
        SourceType.NEWS: 'format_news',
        SourceType.GOVERNMENT: 'format_website',
        SourceType.LEGAL: 'format_legal',
        SourceType.PATENT: 'format_patent',
        SourceType.STANDARD: 'format_standard',
        SourceType.VIDEO: 'format_video',
        SourceType.SOCIAL_MEDIA: 'format_social',
    }

    def format_authors(self, authors: AuthorInfo) -> str:
        """
        Chicago author list.

        - No author: '' (clause omitted)
        - Corporate: as-is
        - 1 author: Last, First
        - 2 authors: Last, First, and First Last
        - 3+ authors: Last, First, et al.
        """
        if authors.count == 0:
            return ""
        if authors.is_corporate:
            return authors.authors[0]

        first = invert_name(authors.authors[0])
        if authors.count == 1:
            return first
        if authors.count == 2:
            return f"{first}, and {natural_name(authors.authors[1])}"
        return f"{first}, et al."

    def wrap_in_text(self, names: str, year: str) -> str:
        return f"({names} {year})"

    # =========================================================================
    # TEMPLATES
    # =========================================================================

    def format_website(self, source: CitationSource) -> str:
        """
        Author. "Title." Site. Month Day, Year. URL.

        Undated pages get "Accessed Month Day, Year." instead.
        """
        date = self._date(source)
        if not date and source.access_date:
            date = f"Accessed {format_date_for_style(source.access_date, self.style)}"
        return self._assemble(source, [
            self.quote_title(source.title),
            self.end(source.container),
            self.end(date),
        ])

    def format_academic(self, source: CitationSource) -> str:
        """
        Chicago journal article format:
        Author. "Title." <em>Journal</em> Vol, no. Issue (Year): Pages. https://doi.org/xxx.
        """
        journal = self.italicize(source.container)
        if source.volume:
            journal = self.join([journal, source.volume])
        if source.issue:
            journal = self.join([journal, f"no. {source.issue}"], ", ")
        year = self._year(source)
        if year:
            journal = self.join([journal, f"({year})"])
        if source.pages:
            journal += f": {source.pages}"

        location = doi_url(source.doi) if source.doi else source.url
        return self._assemble(source, [
            self.quote_title(source.title),
            self.end(journal),
        ], location)

    def format_book(self, source: CitationSource) -> str:
        """
        Chicago book format:
        Author. <em>Title</em>. Publisher, Year. URL.
        """
        publisher = source.publisher or source.container
        return self._assemble(source, [
            self.italic_title(source.title),
            self.end(self.join([publisher, self._year(source)], ", ")),
        ])

    def format_news(self, source: CitationSource) -> str:
        """Author. "Title." <em>Newspaper</em>, Month Day, Year. URL."""
        return self._assemble(source, [
            self.quote_title(source.title),
            self.end(self.join([self.italicize(source.container), self._date(source)], ", ")),
        ])

    def format_legal(self, source: CitationSource) -> str:
        return self._assemble(source, [
            self.italic_title(source.title),
            self.end(self.join([source.container, self._date(source)], ", ")),
        ])

    def format_patent(self, source: CitationSource) -> str:
        number = ""
        if not self.mentions(source.title, source.patent_number):
            number = self.end(f"Patent {source.patent_number}")
        return self._assemble(source, [
            self.quote_title(source.title),
            number,
            self.end(self.join([source.container, self._date(source)], ", ")),
        ])

    def format_standard(self, source: CitationSource) -> str:
        designation = ""
        if not self.mentions(source.title, source.designation):
            designation = self.end(source.designation)
        return self._assemble(source, [
            self.italic_title(source.title),
            designation,
            self.end(self.join([source.container, self._year(source)], ", ")),
        ])

    def format_video(self, source: CitationSource) -> str:
        """Author. "Title." YouTube video. Posted by Channel. Month Day, Year. URL."""
        platform = source.platform or source.container
        return self._assemble(source, [
            self.quote_title(source.title),
            f"{platform} video." if platform else "",
            self.end(f"Posted by {source.channel}") if source.channel else "",
            self.end(self._date(source)),
        ])

    def format_social(self, source: CitationSource) -> str:
        platform = source.platform or source.container
        return self._assemble(source, [
            self.quote_title(source.title),
            self.end(self.join([f"{platform} post" if platform else "", self._date(source)], ", ")),
        ])

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _assemble(self, source: CitationSource, parts: List[str], location: str = None) -> str:
        """Author clause (if any), the template's parts, then the URL with a final period."""
        author = self.format_authors(source.authors)
        url = location if location is not None else source.url
        return self.join([self.end(author)] + parts + [self.end(url)])

    def _date(self, source: CitationSource) -> str:
        return format_date_for_style(source.publication_date, self.style)

    def _year(self, source: CitationSource) -> str:
        """Publication year, or nothing when the source is undated."""
        if source.publication_date:
            return format_date_for_style(source.publication_date, self.style, year_only=True)
        return ""
