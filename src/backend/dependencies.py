from typing import Dict

from fastapi import Request
from backend.handlers import SearchHandler
from wiki_path.wikipedia import LinkCache

def get_search_handler(request: Request) -> SearchHandler:
    """Dependency provider to get the shared SearchHandler instance."""
    return request.app.state.search_handler

def get_link_caches(request: Request) -> Dict[str, LinkCache]:
    """Dependency provider to get the link caches, keyed by search direction."""
    return request.app.state.link_caches
