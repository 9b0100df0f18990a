"""
wiki_path - Core Library

Finds a short chain of hyperlinks between two Wikipedia articles by searching
outward from both ends at once.
"""

from .config import SearchConfig
from .exceptions import (
    LinkSourceError,
    SearchTimeoutError,
    SearchValidationError,
    WikiPathException,
)
from .models import Direction, SearchOutcome, SearchResult

__all__ = [
    'SearchConfig',
    'WikiPathException',
    'LinkSourceError',
    'SearchTimeoutError',
    'SearchValidationError',
    'Direction',
    'SearchOutcome',
    'SearchResult',
]
