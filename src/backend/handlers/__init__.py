"""
Backend request handlers.

Handlers sit between the HTTP routes and the wiki_path core and decide how
each outcome is reported to the client.
"""

from .search_handler import SearchHandler

__all__ = ['SearchHandler']
