"""
One BFS level of one search direction.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from wiki_path.models import Direction, FrontierItem, SearchState
from wiki_path.utils.wiki_helpers import title_key

logger = logging.getLogger(__name__)


class FrontierExpander:
    """
    Advances a direction's frontier by exactly one depth level.

    Items at the current depth are expanded in batches of `batch_size`; the links
    of every item in a batch are fetched concurrently, and the next batch only
    starts once the previous one has finished. Each link is checked against the
    opposite direction's visited map first, so the first meeting found wins even
    if a shorter one exists later in the same level.
    """

    def __init__(self, max_depth: int = 2, batch_size: int = 5):
        if max_depth < 0:
            raise ValueError("max_depth must not be negative")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.max_depth = max_depth
        self.batch_size = batch_size

    async def expand(
        self,
        state: SearchState,
        other_visited: Dict[str, List[str]],
    ) -> Optional[List[str]]:
        """
        Expand the current depth of `state`.

        Args:
            state: The search state to expand, mutated in place
            other_visited: The opposite direction's visited map, only read

        Returns:
            Full start-to-end path if the frontiers met, otherwise None
        """
        depth = state.current_depth
        if depth is None:
            return None

        current_level: List[FrontierItem] = []
        while state.queue and state.queue[0].depth == depth:
            current_level.append(state.queue.popleft())

        if depth >= self.max_depth:
            logger.debug(f"{state.direction.value} frontier reached depth cap {self.max_depth}, "
                         f"dropping {len(current_level)} pages")
            return None

        state.rounds += 1
        logger.debug(f"Expanding {state.direction.value} depth {depth} with {len(current_level)} pages")

        next_level: List[FrontierItem] = []
        for i in range(0, len(current_level), self.batch_size):
            batch = current_level[i:i + self.batch_size]
            batch_results = await asyncio.gather(
                *[self._expand_item(item, state, other_visited) for item in batch]
            )

            for meeting_path, discovered in batch_results:
                if meeting_path is not None:
                    return meeting_path
                next_level.extend(discovered)

        state.queue.extend(next_level)
        logger.debug(f"After expansion: {state.direction.value} visited={len(state.visited)}, "
                     f"queue={len(state.queue)}")
        return None

    async def _expand_item(
        self,
        item: FrontierItem,
        state: SearchState,
        other_visited: Dict[str, List[str]],
    ) -> Tuple[Optional[List[str]], List[FrontierItem]]:
        links = await state.source.fetch_links(item.article)
        discovered: List[FrontierItem] = []

        for link in links:
            key = title_key(link)

            other_path = other_visited.get(key)
            if other_path is not None:
                path = self._join_paths(state.direction, list(item.path), other_path)
                logger.info(f"Frontiers met at '{link}' while expanding '{item.article}' "
                            f"({state.direction.value}, depth {item.depth})")
                return path, discovered

            if key not in state.visited:
                new_path = item.path + (link,)
                state.visited[key] = list(new_path)
                discovered.append(FrontierItem(article=link, path=new_path, depth=item.depth + 1))

        return None, discovered

    @staticmethod
    def _join_paths(direction: Direction, own_path: List[str], other_path: List[str]) -> List[str]:
        """Combine the expanding item's path with the opposite side's recorded path."""
        if direction == Direction.FORWARD:
            return own_path + list(reversed(other_path))
        return list(other_path) + list(reversed(own_path))
