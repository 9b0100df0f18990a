"""
Data models for bidirectional path search.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, List, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from wiki_path.wikipedia.link_source import LinkSource


class Direction(str, Enum):
    """Which end of the search a frontier grows from."""
    FORWARD = "forward"
    BACKWARD = "backward"


class SearchOutcome(str, Enum):
    """How a completed search ended. Timeouts and invalid input raise instead."""
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class FrontierItem:
    """An article waiting to be expanded, with the path that reached it."""
    article: str
    path: Tuple[str, ...]
    depth: int


@dataclass
class SearchState:
    """Tracks state for one direction of bidirectional search."""
    direction: Direction
    source: "LinkSource"
    # title_key(article) -> first path from this direction's root to the article
    visited: Dict[str, List[str]] = field(default_factory=dict)
    queue: Deque[FrontierItem] = field(default_factory=deque)
    rounds: int = 0

    @classmethod
    def seeded(cls, direction: Direction, source: "LinkSource", root: str, root_key: str) -> "SearchState":
        """Create a state holding only the root article at depth 0."""
        state = cls(direction=direction, source=source)
        state.visited[root_key] = [root]
        state.queue.append(FrontierItem(article=root, path=(root,), depth=0))
        return state

    @property
    def current_depth(self) -> Optional[int]:
        """Depth of the next item to expand, or None when the frontier is empty."""
        return self.queue[0].depth if self.queue else None


class SearchResult(BaseModel):
    """Result of a completed search."""
    outcome: SearchOutcome = Field(..., description="How the search ended")
    path: List[str] = Field(default_factory=list, description="Article titles from start to end inclusive")
    message: Optional[str] = Field(None, description="Explanation when no path is returned")
    computation_time_ms: float = Field(0.0, description="Time taken by the search in milliseconds")
    rounds: int = Field(0, description="Expansion rounds run before the search ended")

    @property
    def path_length(self) -> int:
        """Number of hops in the path, or -1 when there is none."""
        return len(self.path) - 1 if self.path else -1
