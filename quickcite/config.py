"""
quickcite/config.py

Configuration, constants, and shared vocabularies.
"""

import os
import re
from typing import Dict, List, Tuple

# =============================================================================
# ENVIRONMENT SETTINGS
# =============================================================================

DEFAULT_STYLE = os.environ.get('QUICKCITE_DEFAULT_STYLE', 'mla')
LOG_LEVEL = os.environ.get('QUICKCITE_LOG_LEVEL', 'INFO')
SECRET_KEY = os.environ.get('SECRET_KEY', 'quickcite-dev-key-change-in-production')

# =============================================================================
# CITATION CONSTANTS
# =============================================================================

UNKNOWN_AUTHOR = "Unknown Author"
NO_DATE = "n.d."
SHORT_TITLE_WORDS = 4

ITALIC_OPEN = "<em>"
ITALIC_CLOSE = "</em>"

# =============================================================================
# DATES
# =============================================================================

MONTHS: List[str] = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]

# MLA abbreviations; May, June and July are never abbreviated
MLA_MONTHS: List[str] = [
    'Jan.', 'Feb.', 'Mar.', 'Apr.', 'May', 'June',
    'July', 'Aug.', 'Sept.', 'Oct.', 'Nov.', 'Dec.',
]

# Formats tried in order by normalizers.parse_date, with their granularity
DATE_FORMATS: List[Tuple[str, str]] = [
    ('%Y-%m-%dT%H:%M:%S.%f%z', 'day'),
    ('%Y-%m-%dT%H:%M:%S%z', 'day'),
    ('%Y-%m-%dT%H:%M:%S.%f', 'day'),
    ('%Y-%m-%dT%H:%M:%S', 'day'),
    ('%Y-%m-%dT%H:%M', 'day'),
    ('%Y-%m-%d', 'day'),
    ('%Y/%m/%d', 'day'),
    ('%m/%d/%Y', 'day'),
    ('%B %d, %Y', 'day'),
    ('%b %d, %Y', 'day'),
    ('%B %d %Y', 'day'),
    ('%b %d %Y', 'day'),
    ('%d %B %Y', 'day'),
    ('%d %b %Y', 'day'),
    ('%A, %B %d, %Y', 'day'),
    ('%Y-%m', 'month'),
    ('%B %Y', 'month'),
    ('%b %Y', 'month'),
    ('%Y', 'year'),
]

# =============================================================================
# GOVERNMENT SIGNALS
# =============================================================================

# Hostname suffixes (country variants included)
GOV_TLDS: Tuple[str, ...] = (
    '.gov', '.mil', '.gov.uk', '.gov.au', '.gc.ca', '.gov.in', '.gov.nz',
    '.gouv.fr', '.gob.es', '.gob.mx', '.gov.br', '.go.jp', '.gov.sg',
    '.gov.za', '.gov.ie', '.europa.eu',
)

GOV_AGENCY_TOKENS: List[str] = [
    'EPA', 'FDA', 'CDC', 'NIH', 'NASA', 'NOAA', 'FBI', 'CIA', 'DHS', 'DOJ',
    'FTC', 'FCC', 'SEC', 'USDA', 'IRS', 'GAO', 'CBO', 'OSHA', 'FEMA',
    'Department of', 'Ministry of', 'Bureau of', 'Office of the',
    'White House', 'Congress', 'Senate', 'Parliament', 'Federal Reserve',
    'European Commission', 'United Nations',
]

GOV_DOCUMENT_KEYWORDS: List[str] = [
    'report', 'regulation', 'executive order', 'statute', 'federal register',
    'bill', 'act',
]

# Registry suffixes under a country code (co.uk, com.au): the registered
# name sits one label further left
SECOND_LEVEL_SUFFIXES: Tuple[str, ...] = ('co', 'com', 'org', 'net', 'ac', 'edu', 'gov', 'or', 'ne')

# Hostname -> agency name, used as container name for .gov pages
GOV_AGENCY_MAP: Dict[str, str] = {
    'fda.gov': 'U.S. Food and Drug Administration',
    'cdc.gov': 'Centers for Disease Control and Prevention',
    'nih.gov': 'National Institutes of Health',
    'epa.gov': 'Environmental Protection Agency',
    'energy.gov': 'U.S. Department of Energy',
    'whitehouse.gov': 'The White House',
    'congress.gov': 'U.S. Congress',
    'justice.gov': 'U.S. Department of Justice',
    'state.gov': 'U.S. Department of State',
    'ed.gov': 'U.S. Department of Education',
    'census.gov': 'U.S. Census Bureau',
    'bls.gov': 'Bureau of Labor Statistics',
    'nasa.gov': 'NASA',
    'noaa.gov': 'National Oceanic and Atmospheric Administration',
    'federalregister.gov': 'Federal Register',
    'loc.gov': 'Library of Congress',
    'archives.gov': 'National Archives',
}

# =============================================================================
# LEGAL SIGNALS
# =============================================================================

LEGAL_DOMAINS: List[str] = [
    'courtlistener.com',
    'oyez.org',
    'case.law',
    'justia.com',
    'supremecourt.gov',
    'law.cornell.edu',
    'findlaw.com',
    'casetext.com',
    'leagle.com',
    'bailii.org',
    'canlii.org',
    'westlaw.com',
    'lexisnexis.com',
]

LEGAL_REPORTER_PATTERNS: List[str] = [
    r'\b\d+\s+U\.\s?S\.\s+\d+',                   # 388 U.S. 1
    r'\b\d+\s+S\.\s?Ct\.\s+\d+',                  # 93 S. Ct. 705
    r'\b\d+\s+F\.\s?(?:2d|3d|4th)\s+\d+',         # 159 F.2d 169
    r'\b\d+\s+F\.\s?Supp\.\s?(?:2d|3d)?\s*\d+',   # 400 F. Supp. 2d 707
    r'\b\d+\s+[A-Z]\.(?:2d|3d)\s+\d+',            # 355 A.2d 647
    r'\[\d{4}\]\s+[A-Z]{2,}\s+\d+',               # [2024] UKSC 12
]

LEGAL_VOCABULARY: List[str] = [
    'plaintiff', 'defendant', 'ruling', 'tribunal', 'court of appeals',
    'supreme court', 'appellant', 'appellee',
]

# =============================================================================
# PATENT SIGNALS
# =============================================================================

PATENT_DOMAINS: List[str] = [
    'patents.google.com',
    'uspto.gov',
    'patft.uspto.gov',
    'ppubs.uspto.gov',
    'patentscope.wipo.int',
    'worldwide.espacenet.com',
    'espacenet.com',
    'freepatentsonline.com',
]

PATENT_NUMBER_PATTERNS: List[str] = [
    r'\bUS\s?\d{1,2},\d{3},\d{3}(?:\s?[A-Z]\d)?\b',           # US 1,234,567
    r'\b(?:US|EP|WO|CN|JP|KR|DE|GB|FR|CA)\s?(?:\d{4}/)?\d{6,}(?:\s?[A-C]\d?)?\b',  # EP 1234567 A1
]

PATENT_VOCABULARY: List[str] = ['patent', 'inventor', 'issued', 'filed']

# =============================================================================
# STANDARDS SIGNALS
# =============================================================================

STANDARDS_DOMAINS: List[str] = [
    'ieee.org',
    'standards.ieee.org',
    'iso.org',
    'ansi.org',
    'astm.org',
    'iec.ch',
    'nist.gov',
    'ietf.org',
    'rfc-editor.org',
    'w3.org',
]

STANDARDS_BODIES: Tuple[str, ...] = (
    'IEEE', 'ISO', 'ANSI', 'ASTM', 'IEC', 'NIST', 'IETF', 'W3C',
)

STANDARD_DESIGNATION_PATTERN = (
    r'\b(?:' + '|'.join(STANDARDS_BODIES) + r')(?:/[A-Z]+)?\s+(?:RFC\s?|SP\s?)?[\d][\w.:\-]*'
)

STANDARD_VOCABULARY: List[str] = ['standard', 'specification', 'guideline', 'code']

# =============================================================================
# VIDEO AND SOCIAL PLATFORMS
# =============================================================================

VIDEO_URL_PATTERNS: List[Tuple[str, str]] = [
    (r'(?:^|\.|//)youtube\.com/(?:watch\?|shorts/|embed/)', 'YouTube'),
    (r'(?:^|//)youtu\.be/[\w-]+', 'YouTube'),
    (r'(?:^|\.|//)vimeo\.com/(?:video/)?\d+', 'Vimeo'),
    (r'(?:^|\.|//)dailymotion\.com/video/', 'Dailymotion'),
    (r'(?:^|//)dai\.ly/', 'Dailymotion'),
    (r'(?:^|\.|//)ted\.com/talks/', 'TED'),
    (r'(?:^|\.|//)twitch\.tv/videos/\d+', 'Twitch'),
]

SOCIAL_MEDIA_DOMAINS: Dict[str, str] = {
    'twitter.com': 'Twitter',
    'x.com': 'X',
    'facebook.com': 'Facebook',
    'fb.com': 'Facebook',
    'instagram.com': 'Instagram',
    'linkedin.com': 'LinkedIn',
    'tiktok.com': 'TikTok',
}

# =============================================================================
# ACADEMIC, BOOK AND NEWS SIGNALS
# =============================================================================

ACADEMIC_URL_TOKENS: List[str] = ['arxiv', 'doi.org', '/doi/']
ACADEMIC_TLDS: Tuple[str, ...] = ('.edu', '.ac.uk', '.edu.au', '.ac.jp')
ACADEMIC_TITLE_KEYWORDS: List[str] = ['journal', 'research', 'study']

BOOK_TITLE_KEYWORDS: List[str] = ['book', 'chapter', 'edition']
BOOK_DOMAINS: List[str] = [
    'books.google.com',
    'goodreads.com',
    'openlibrary.org',
    'worldcat.org',
    'gutenberg.org',
    'archive.org/details',
    'amazon.com/dp',
]

NEWS_TITLE_KEYWORDS: List[str] = ['news', 'report', 'breaking']

# =============================================================================
# CONTAINER NAMES
# =============================================================================

# Hostname -> display name used when no container is found in the title
KNOWN_SITE_NAMES: Dict[str, str] = {
    'arxiv.org': 'arXiv',
    'doi.org': 'DOI',
    'jstor.org': 'JSTOR',
    'pubmed.ncbi.nlm.nih.gov': 'PubMed',
    'ncbi.nlm.nih.gov': 'PubMed Central',
    'sciencedirect.com': 'ScienceDirect',
    'nature.com': 'Nature',
    'researchgate.net': 'ResearchGate',
    'nytimes.com': 'The New York Times',
    'washingtonpost.com': 'The Washington Post',
    'wsj.com': 'The Wall Street Journal',
    'theguardian.com': 'The Guardian',
    'bbc.com': 'BBC News',
    'bbc.co.uk': 'BBC News',
    'reuters.com': 'Reuters',
    'apnews.com': 'Associated Press',
    'cnn.com': 'CNN',
    'npr.org': 'NPR',
    'en.wikipedia.org': 'Wikipedia',
    'medium.com': 'Medium',
    'books.google.com': 'Google Books',
    'patents.google.com': 'Google Patents',
    'youtube.com': 'YouTube',
    'youtu.be': 'YouTube',
    'vimeo.com': 'Vimeo',
    'ted.com': 'TED',
    'github.com': 'GitHub',
    'stackoverflow.com': 'Stack Overflow',
}

# =============================================================================
# CORPORATE AUTHORS
# =============================================================================

CORPORATE_KEYWORDS: List[str] = [
    # Legal suffixes
    'Inc', 'LLC', 'Ltd', 'Corp', 'Corporation', 'Company', 'Co.', 'GmbH', 'PLC',
    # Institutions
    'University', 'Institute', 'Foundation', 'Agency', 'Department',
    'Committee', 'Association', 'Society', 'Council', 'Organization',
    'Organisation', 'Center', 'Centre', 'Commission', 'Ministry', 'Bureau',
    'Board', 'Office', 'Administration', 'Group', 'Press', 'Staff',
    'Team', 'Editors', 'Editorial',
]

# Matched case-sensitively: "WHO" is an organisation, "Who" is not
CORPORATE_ACRONYMS: List[str] = [
    'EPA', 'FDA', 'CDC', 'NIH', 'NASA', 'NOAA', 'WHO', 'UN', 'UNESCO',
    'UNICEF', 'OECD', 'IMF', 'FBI', 'IEEE', 'ISO', 'W3C', 'IETF',
    'IBM', 'BBC', 'CNN',
]

# Brand names double as surnames ("Fiona Apple"), so they only count when
# they are the entire author string
CORPORATE_NAMES: List[str] = [
    'Google', 'Microsoft', 'Apple', 'Amazon', 'Meta', 'OpenAI',
    'Reuters', 'Wikipedia',
]

CORPORATE_PATTERN = re.compile(
    r'(?<![\w])(?:' + '|'.join(re.escape(k) for k in CORPORATE_KEYWORDS) + r')(?![\w])',
    re.IGNORECASE,
)

CORPORATE_ACRONYM_PATTERN = re.compile(
    r'(?<![\w])(?:' + '|'.join(re.escape(k) for k in CORPORATE_ACRONYMS) + r')(?![\w])'
)

# =============================================================================
# BIBLIOGRAPHY
# =============================================================================

BIBLIOGRAPHY_HEADINGS: Dict[str, str] = {
    'mla': 'Works Cited',
    'apa': 'References',
    'chicago': 'Bibliography',
}

# Fixed order of category sections; each lists the source types it groups
CATEGORY_ORDER: List[Tuple[str, Tuple[str, ...]]] = [
    ('Academic Sources', ('academic',)),
    ('Books', ('book',)),
    ('News Articles', ('news',)),
    ('Government Documents', ('government',)),
    ('Legal Sources', ('legal',)),
    ('Patents and Standards', ('patent', 'standard')),
    ('Videos and Social Media', ('video', 'social_media')),
    ('Websites', ('website',)),
]

# =============================================================================
# SIGNAL PHRASES
# =============================================================================

SIGNAL_PHRASES: List[str] = [
    'According to ${author}, "${quote}"',
    'As ${author} explains in "${title}," "${quote}"',
    '${author} argues that "${quote}"',
    'In "${title}," ${author} notes, "${quote}"',
]

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_gov_agency(domain: str) -> str:
    """Get government agency name from a hostname, or '' if unknown."""
    domain = domain.lower().replace('www.', '')
    for key, agency in GOV_AGENCY_MAP.items():
        if domain == key or domain.endswith('.' + key):
            return agency
    return ''


def get_site_name(domain: str) -> str:
    """Look up a display name for a known hostname, or '' if unknown."""
    domain = domain.lower().replace('www.', '')
    for key, name in KNOWN_SITE_NAMES.items():
        if domain == key or domain.endswith('.' + key):
            return name
    return ''
