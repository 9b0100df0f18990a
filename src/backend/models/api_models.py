from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

# API Request Models
class SearchRequest(BaseModel):
    """Request to find a link path between two articles."""
    model_config = ConfigDict(populate_by_name=True)

    # Presence is checked by the search handler so missing titles map to a 400
    start_article: Optional[str] = Field(None, alias="startArticle", description="Starting Wikipedia article title")
    end_article: Optional[str] = Field(None, alias="endArticle", description="Target Wikipedia article title")

# API Response Models
class SearchResponse(BaseModel):
    """Outcome of a search, with the HTTP status it maps to."""
    status_code: int = Field(..., description="HTTP status for this outcome")
    path: Optional[List[str]] = Field(None, description="Article titles from start to end inclusive")
    message: Optional[str] = Field(None, description="Explanation when there is no path")

    def to_content(self) -> Dict:
        """JSON body sent to the client."""
        return self.model_dump(exclude={"status_code"}, exclude_none=True)

class CacheStatsResponse(BaseModel):
    """Link cache counters for one search direction."""
    size: int
    hits: int
    misses: int
    expirations: int
    evictions: int
    hit_rate: float

class SearchStatusResponse(BaseModel):
    """Current search settings and cache state."""
    max_depth: int
    batch_size: int
    deadline_seconds: float
    backlinks: bool
    caches: Dict[str, CacheStatsResponse]
