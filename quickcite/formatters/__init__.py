"""
quickcite/formatters/__init__.py

Citation formatters package. Importing it registers every style.
"""

from .base import (
    BaseFormatter,
    register_formatter,
    registered_styles,
    get_formatter,
)
from .mla import MLAFormatter
from .apa import APAFormatter
from .chicago import ChicagoFormatter

__all__ = [
    'BaseFormatter',
    'register_formatter',
    'registered_styles',
    'get_formatter',
    'MLAFormatter',
    'APAFormatter',
    'ChicagoFormatter',
]
