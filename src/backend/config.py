import os
from typing import List

from pydantic import BaseModel, Field


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class BackendConfig(BaseModel):
    """Settings for serving the path-search API."""

    host: str = "127.0.0.1"
    port: int = Field(8080, ge=1, le=65535)
    debug: bool = False
    log_level: str = "INFO"

    # Browser clients may call the API from any page unless narrowed
    cors_origins: List[str] = ["*"]

    @classmethod
    def from_env(cls) -> "BackendConfig":
        """Create config from environment variables."""
        return cls(
            host=os.getenv("WIKI_PATH_API_HOST", "127.0.0.1"),
            port=int(os.getenv("WIKI_PATH_API_PORT", "8080")),
            debug=os.getenv("WIKI_PATH_API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("WIKI_PATH_LOG_LEVEL", "INFO"),
            cors_origins=_split_origins(os.getenv("WIKI_PATH_API_CORS_ORIGINS", "*")),
        )

# Global config instance
config = BackendConfig.from_env()
