"""
quickcite/formatters/apa.py

APA 7th Edition citation formatter.
Common in psychology, education, and social sciences.

Uses <em> tags for italics.
"""

from typing import List, Optional

from .base import BaseFormatter, register_formatter
from ..authors import apa_name
from ..config import UNKNOWN_AUTHOR
from ..models import AuthorInfo, CitationSource, CitationStyle, SourceType
from ..normalizers import doi_url, format_date_for_style, to_sentence_case

# Sources dated to the day in the reference list; the rest get a bare year
_DATED_TYPES = {
    SourceType.WEBSITE,
    SourceType.NEWS,
    SourceType.VIDEO,
    SourceType.SOCIAL_MEDIA,
}


@register_formatter(CitationStyle.APA)
@register_formatter('APA 7')
@register_formatter('APA7')
class APAFormatter(BaseFormatter):
    """
    APA 7th Edition formatter.

    Format patterns:
    - Journal: Author, A. A., & Author, B. B. (Year). Title. Journal, Vol(Issue), pages. DOI
    - Book: Author, A. A. (Year). Title. Publisher. URL
    - Newspaper: Author, A. A. (Year, Month Day). Title. Newspaper. URL
    - Web page: Author, A. A. (Year, Month Day). Title. Site. URL
    - Video: Author. (Year, Month Day). Title [Video]. YouTube. URL

    In-text: (Author, Year), (Doe & Roe, Year), (Doe et al., Year)
    """

    style = CitationStyle.APA
    in_text_conjunction = "&"

    templates = {
        SourceType.WEBSITE: 'format_standalone',
        SourceType.ACADEMIC: 'format_academic',
        SourceType.BOOK: 'format_book',
        SourceType.NEWS: 'format_news',
        SourceType.GOVERNMENT: 'format_standalone',
        SourceType.LEGAL: 'format_legal',
        SourceType.PATENT: 'format_patent',
        SourceType.STANDARD: 'format_standard',
        SourceType.VIDEO: 'format_video',
        SourceType.SOCIAL_MEDIA: 'format_social',
    }

    def format_authors(self, authors: AuthorInfo) -> str:
        """
        APA author list (Last, F. M.).

        - No author: Unknown Author
        - 2 authors: Doe, J., & Roe, J.
        - 3+ authors: Doe, J., et al.
        """
        if authors.count == 0:
            return UNKNOWN_AUTHOR
        if authors.is_corporate:
            return authors.authors[0]

        first = apa_name(authors.authors[0])
        if authors.count == 1:
            return first
        if authors.count == 2:
            return f"{first}, & {apa_name(authors.authors[1])}"
        return f"{first}, et al."

    def wrap_in_text(self, names: str, year: str) -> str:
        return f"({names}, {year})"

    # =========================================================================
    # TEMPLATES
    # =========================================================================

    def format_standalone(self, source: CitationSource) -> str:
        """
        Web page or government report: the title is the standalone work.

        Author, A. A. (Year, Month Day). <em>Title of page</em>. Site. URL
        """
        return self._assemble(
            source,
            self.italic_title(to_sentence_case(source.title)),
            [source.container],
        )

    def format_academic(self, source: CitationSource) -> str:
        """
        APA journal article format:
        Author, A. A. (Year). Title of article. <em>Journal</em>, <em>Vol</em>(Issue), pages. https://doi.org/xxx
        """
        journal = self.italicize(source.container)
        if source.volume:
            journal = self.join([journal, self.italicize(source.volume)], ", ")
            if source.issue:
                journal += f"({source.issue})"
        elif source.issue:
            journal = self.join([journal, f"({source.issue})"], ", ")
        if source.pages:
            journal = self.join([journal, source.pages], ", ")

        location = doi_url(source.doi) if source.doi else None
        return self._assemble(
            source,
            self.end(to_sentence_case(source.title)),
            [journal],
            location,
        )

    def format_book(self, source: CitationSource) -> str:
        """
        APA book format:
        Author, A. A. (Year). <em>Title of book</em>. Publisher. URL
        """
        return self._assemble(
            source,
            self.italic_title(to_sentence_case(source.title)),
            [source.publisher or source.container],
        )

    def format_news(self, source: CitationSource) -> str:
        """
        Author, A. A. (Year, Month Day). Title of article. <em>Newspaper</em>. URL
        """
        return self._assemble(
            source,
            self.end(to_sentence_case(source.title)),
            [self.italicize(source.container)],
        )

    def format_legal(self, source: CitationSource) -> str:
        """Case names keep their capitalization."""
        return self._assemble(
            source,
            self.italic_title(source.title),
            [source.container],
        )

    def format_patent(self, source: CitationSource) -> str:
        elements = [source.container]
        if not self.mentions(source.title, source.patent_number):
            elements.insert(0, f"Patent No. {source.patent_number}")
        return self._assemble(
            source,
            self.italic_title(to_sentence_case(source.title)),
            elements,
        )

    def format_standard(self, source: CitationSource) -> str:
        title = self.italicize(to_sentence_case(source.title))
        if title and not self.mentions(source.title, source.designation):
            title += f" ({source.designation})"
        return self._assemble(source, self.end(title), [source.container])

    def format_video(self, source: CitationSource) -> str:
        """
        Channel. (Year, Month Day). <em>Title of video</em> [Video]. YouTube. URL
        """
        title = self.italicize(to_sentence_case(source.title))
        if title:
            title = f"{title} [Video]."
        return self._assemble(source, title, [source.platform or source.container])

    def format_social(self, source: CitationSource) -> str:
        title = to_sentence_case(source.title)
        if title:
            title = f"{title} [Post]."
        return self._assemble(source, title, [source.platform or source.container])

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
        Author (Date). Title. Container. URL

        A container identical to the author (corporate sites) is dropped.
        The URL is never followed by a period.
        """
        author = self.format_authors(source.authors)
        parts = [f"{author} ({self.date_clause(source)}).", title]

        for element in elements:
            if element and element != author:
                parts.append(self.end(element))

        parts.append(location or source.url)
        return self.join(parts)

    def date_clause(self, source: CitationSource) -> str:
        """(2023, January 15) for dated web content, else (2023) / (n.d.)."""
        if source.source_type in _DATED_TYPES and source.publication_date:
            date = format_date_for_style(source.publication_date, self.style)
            if date:
                return date
        return source.citation_year
