"""
Bidirectional path search between two articles.

Both directions are expanded in lockstep rounds, concurrently. The search ends as
soon as either direction finds an article the other side has already visited,
when a frontier runs dry or reaches the depth cap, or when the deadline passes.
"""

import asyncio
import logging
import time
from typing import List, Optional

from wiki_path.exceptions import SearchTimeoutError, SearchValidationError
from wiki_path.models import Direction, SearchOutcome, SearchResult, SearchState
from wiki_path.solver.frontier import FrontierExpander
from wiki_path.utils.wiki_helpers import clean_title, is_blank, title_key
from wiki_path.wikipedia.link_source import LinkSource

logger = logging.getLogger(__name__)

NO_PATH_MESSAGE = "No path found"


class BidirectionalSearch:
    """
    Finds a short link path between two articles.

    The path is not guaranteed to be the shortest one: the first meeting detected
    by either direction wins.
    """

    def __init__(
        self,
        forward_source: LinkSource,
        backward_source: Optional[LinkSource] = None,
        max_depth: int = 2,
        batch_size: int = 5,
    ):
        """
        Args:
            forward_source: Links followed from the start article
            backward_source: Links followed from the end article; defaults to
                forward_source, i.e. the end article's outbound links
            max_depth: Maximum depth explored per direction
            batch_size: Concurrent link fetches per batch
        """
        self.forward_source = forward_source
        self.backward_source = backward_source if backward_source is not None else forward_source
        self.expander = FrontierExpander(max_depth=max_depth, batch_size=batch_size)

    @property
    def max_depth(self) -> int:
        return self.expander.max_depth

    @property
    def batch_size(self) -> int:
        return self.expander.batch_size

    async def find_path(self, start: str, end: str, deadline_seconds: float = 15.0) -> SearchResult:
        """
        Run a search that must finish within `deadline_seconds`.

        Raises:
            SearchValidationError: If either article is missing
            SearchTimeoutError: If the deadline passes first; in-flight fetches are cancelled
        """
        self._validate(start, end)
        deadline = asyncio.get_running_loop().time() + deadline_seconds
        try:
            return await asyncio.wait_for(self.search(start, end, deadline=deadline), timeout=deadline_seconds)
        except asyncio.TimeoutError:
            logger.warning(f"Search '{start}' -> '{end}' timed out after {deadline_seconds}s")
            raise SearchTimeoutError(f"Search timed out after {deadline_seconds}s") from None

    async def search(self, start: str, end: str, deadline: Optional[float] = None) -> SearchResult:
        """
        Search for a path from `start` to `end`.

        Args:
            start: Starting article title
            end: Target article title
            deadline: Optional event-loop time after which no new round starts

        Returns:
            A FOUND result with the path, or an EXHAUSTED result with a message
        """
        self._validate(start, end)
        start_time = time.time()
        start, end = clean_title(start), clean_title(end)
        start_key, end_key = title_key(start), title_key(end)
        logger.info(f"Finding path from '{start}' to '{end}'")

        if start_key == end_key:
            return self._result(SearchOutcome.FOUND, start_time, path=[start])

        forward = SearchState.seeded(Direction.FORWARD, self.forward_source, start, start_key)
        backward = SearchState.seeded(Direction.BACKWARD, self.backward_source, end, end_key)

        rounds = 0
        while forward.queue and backward.queue:
            if self._at_depth_cap(forward) and self._at_depth_cap(backward):
                break
            if deadline is not None and asyncio.get_running_loop().time() >= deadline:
                raise SearchTimeoutError("Search timed out")

            rounds += 1
            logger.debug(f"Round {rounds}: forward queue={len(forward.queue)}, "
                         f"backward queue={len(backward.queue)}")

            path = await self._run_round(forward, backward)
            if path is not None:
                result = self._result(SearchOutcome.FOUND, start_time, path=path, rounds=rounds)
                logger.info(f"Path found in {result.computation_time_ms:.0f}ms after {rounds} rounds: "
                            f"{' -> '.join(path)}")
                return result

        result = self._result(SearchOutcome.EXHAUSTED, start_time, message=NO_PATH_MESSAGE, rounds=rounds)
        logger.info(f"No path from '{start}' to '{end}' within depth {self.max_depth} "
                    f"({rounds} rounds, forward visited={len(forward.visited)}, "
                    f"backward visited={len(backward.visited)})")
        return result

    async def _run_round(self, forward: SearchState, backward: SearchState) -> Optional[List[str]]:
        """Expand both directions concurrently; the first one to report a meeting wins."""
        tasks = [
            asyncio.ensure_future(self.expander.expand(forward, backward.visited)),
            asyncio.ensure_future(self.expander.expand(backward, forward.visited)),
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                path = await next_done
                if path is not None:
                    return path
            return None
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    def _at_depth_cap(self, state: SearchState) -> bool:
        depth = state.current_depth
        return depth is not None and depth >= self.max_depth

    @staticmethod
    def _validate(start: str, end: str) -> None:
        if is_blank(start) or is_blank(end):
            raise SearchValidationError("Start and end articles are required")

    @staticmethod
    def _result(
        outcome: SearchOutcome,
        start_time: float,
        path: Optional[List[str]] = None,
        message: Optional[str] = None,
        rounds: int = 0,
    ) -> SearchResult:
        return SearchResult(
            outcome=outcome,
            path=path or [],
            message=message,
            computation_time_ms=(time.time() - start_time) * 1000,
            rounds=rounds,
        )
