"""
Pytest configuration and shared fixtures.
"""

import asyncio
import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

import pytest

from wiki_path.exceptions import LinkSourceError
from wiki_path.wikipedia import LinkCache, LinkSource

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


class StubLinkSource(LinkSource):
    """In-memory link source serving a fixed graph."""

    def __init__(
        self,
        graph: Dict[str, List[str]],
        cache: Optional[LinkCache] = None,
        delays: Optional[Dict[str, float]] = None,
        hang: Iterable[str] = (),
        fail: Iterable[str] = (),
    ):
        super().__init__(cache)
        self.graph = graph
        self.delays = delays or {}
        self.hang = set(hang)
        self.fail = set(fail)
        self.calls: Counter = Counter()

    async def _query_links(self, article: str) -> List[str]:
        self.calls[article] += 1
        if article in self.hang:
            await asyncio.Event().wait()
        if article in self.delays:
            await asyncio.sleep(self.delays[article])
        else:
            # Yield like a real network call would
            await asyncio.sleep(0)
        if article in self.fail:
            raise LinkSourceError(f"Simulated failure for '{article}'")
        return list(self.graph.get(article, []))


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def link_cache(fake_clock: FakeClock) -> LinkCache:
    """Fresh cache on a fake clock for each test."""
    return LinkCache(ttl_seconds=3600, max_entries=100, clock=fake_clock)

@pytest.fixture
def diamond_graph() -> Dict[str, List[str]]:
    """A -> B, C -> D, with outbound links."""
    return {
        "A": ["B", "C"],
        "B": ["D"],
        "C": ["D"],
        "D": [],
    }

@pytest.fixture
def diamond_backlinks() -> Dict[str, List[str]]:
    """Reverse of `diamond_graph`: the articles linking to each article."""
    return {
        "A": [],
        "B": ["A"],
        "C": ["A"],
        "D": ["B", "C"],
    }
