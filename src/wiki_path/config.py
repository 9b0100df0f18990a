import os
from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = "wiki-path/0.1 (https://github.com/wiki-path/wiki-path)"


class SearchConfig(BaseModel):
    """Configuration for path searches and the Wikipedia link provider."""

    # Search budgets
    deadline_seconds: float = Field(15.0, gt=0, description="Wall-clock budget for one search")
    max_depth: int = Field(2, ge=0, description="Maximum depth explored per direction")
    batch_size: int = Field(5, ge=1, description="Concurrent link fetches per batch")

    # Link cache
    cache_ttl_seconds: float = Field(3600.0, gt=0, description="Seconds a cached link list stays fresh")
    cache_max_entries: int = Field(10000, ge=1, description="LRU cap on cached articles")

    # Wikipedia provider
    link_limit: int = Field(500, ge=1, le=500, description="Maximum links requested per article")
    language: str = "en"
    namespace: int = 0
    request_timeout_seconds: float = Field(10.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    use_backlinks: bool = True

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Create config from environment variables."""
        return cls(
            deadline_seconds=float(os.getenv("WIKI_PATH_DEADLINE_SECONDS", "15")),
            max_depth=int(os.getenv("WIKI_PATH_MAX_DEPTH", "2")),
            batch_size=int(os.getenv("WIKI_PATH_BATCH_SIZE", "5")),
            cache_ttl_seconds=float(os.getenv("WIKI_PATH_CACHE_TTL_SECONDS", "3600")),
            cache_max_entries=int(os.getenv("WIKI_PATH_CACHE_MAX_ENTRIES", "10000")),
            link_limit=int(os.getenv("WIKI_PATH_LINK_LIMIT", "500")),
            language=os.getenv("WIKI_PATH_LANGUAGE", "en"),
            namespace=int(os.getenv("WIKI_PATH_NAMESPACE", "0")),
            request_timeout_seconds=float(os.getenv("WIKI_PATH_REQUEST_TIMEOUT_SECONDS", "10")),
            user_agent=os.getenv("WIKI_PATH_USER_AGENT", DEFAULT_USER_AGENT),
            use_backlinks=os.getenv("WIKI_PATH_USE_BACKLINKS", "true").lower() == "true",
            log_level=os.getenv("WIKI_PATH_LOG_LEVEL", "INFO"),
        )

# Global config instance
config = SearchConfig.from_env()
