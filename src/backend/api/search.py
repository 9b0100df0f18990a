from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Dict
import logging

from backend.dependencies import get_link_caches, get_search_handler
from backend.handlers import SearchHandler
from backend.models.api_models import (
    CacheStatsResponse,
    SearchRequest,
    SearchStatusResponse,
)
from wiki_path.wikipedia import LinkCache

router = APIRouter(prefix="/api/wiki-path", tags=["search"])
logger = logging.getLogger(__name__)

@router.post("")
async def find_path(
    request: SearchRequest,
    handler: SearchHandler = Depends(get_search_handler)
) -> JSONResponse:
    """
    Find a chain of links from the start article to the end article.

    Searches outward from both articles at once and returns the first path found
    within the depth and time budget.
    """
    response = await handler.handle(request.start_article, request.end_article)
    return JSONResponse(status_code=response.status_code, content=response.to_content())

@router.get("/status", response_model=SearchStatusResponse)
async def get_search_status(
    handler: SearchHandler = Depends(get_search_handler),
    caches: Dict[str, LinkCache] = Depends(get_link_caches)
) -> SearchStatusResponse:
    """
    Get the active search settings and link cache statistics.
    """
    cache_stats = {}
    for direction, cache in caches.items():
        stats = cache.get_stats()
        cache_stats[direction] = CacheStatsResponse(
            size=stats.size,
            hits=stats.hits,
            misses=stats.misses,
            expirations=stats.expirations,
            evictions=stats.evictions,
            hit_rate=stats.hit_rate,
        )

    search = handler.search
    return SearchStatusResponse(
        max_depth=search.max_depth,
        batch_size=search.batch_size,
        deadline_seconds=handler.deadline_seconds,
        backlinks=search.backward_source is not search.forward_source,
        caches=cache_stats,
    )
