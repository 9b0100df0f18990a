import logging
from typing import Optional

from wiki_path.exceptions import SearchTimeoutError, SearchValidationError
from wiki_path.models import SearchOutcome
from wiki_path.solver import BidirectionalSearch, NO_PATH_MESSAGE
from wiki_path.utils.wiki_helpers import is_blank

from backend.models.api_models import SearchResponse

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "Start and end articles are required"
TIMEOUT_MESSAGE = "Search timed out"
ERROR_MESSAGE = "Error processing request"


class SearchHandler:
    """
    Runs path searches for the web layer.

    This is the only place search outcomes become user-visible responses:
    found and exhausted searches are 200s, missing articles a 400, an expired
    deadline a 408 and anything unexpected a 500.
    """

    def __init__(self, search: BidirectionalSearch, deadline_seconds: float = 15.0):
        self.search = search
        self.deadline_seconds = deadline_seconds

    async def handle(self, start: Optional[str], end: Optional[str]) -> SearchResponse:
        """Validate the request, run the search under the deadline and map the outcome."""
        if is_blank(start) or is_blank(end):
            logger.warning(f"Rejected search request: start={start!r}, end={end!r}")
            return SearchResponse(status_code=400, message=REQUIRED_MESSAGE)

        try:
            result = await self.search.find_path(start, end, deadline_seconds=self.deadline_seconds)
        except SearchValidationError as e:
            return SearchResponse(status_code=400, message=e.message)
        except SearchTimeoutError:
            return SearchResponse(status_code=408, message=TIMEOUT_MESSAGE)
        except Exception as e:
            logger.error(f"Unexpected error searching '{start}' -> '{end}': {e}", exc_info=True)
            return SearchResponse(status_code=500, message=ERROR_MESSAGE)

        if result.outcome == SearchOutcome.FOUND:
            logger.info(f"Path found: {start} -> {end} ({result.path_length} steps, "
                        f"{result.computation_time_ms:.1f}ms)")
            return SearchResponse(status_code=200, path=result.path)

        return SearchResponse(status_code=200, path=[], message=result.message or NO_PATH_MESSAGE)
