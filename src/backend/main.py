import logging
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import config
from backend.api.search import router as search_router
from backend.handlers import SearchHandler
from backend.handlers.search_handler import ERROR_MESSAGE, REQUIRED_MESSAGE
from wiki_path.config import config as search_config
from wiki_path.models import Direction
from wiki_path.solver import BidirectionalSearch
from wiki_path.wikipedia import LinkCache, WikipediaLinkSource

# Configure unified logging to match wiki_path style
from wiki_path.logging_config import setup_logging
setup_logging(level=config.log_level)

logger = logging.getLogger(__name__)

def _make_link_source(direction: Direction, cache: LinkCache) -> WikipediaLinkSource:
    return WikipediaLinkSource(
        cache=cache,
        direction=direction,
        language=search_config.language,
        link_limit=search_config.link_limit,
        namespace=search_config.namespace,
        timeout=search_config.request_timeout_seconds,
        user_agent=search_config.user_agent,
    )

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info("Starting Wiki Path API...")

    # Caches live for the whole process so link lists are reused across searches
    link_caches = {
        Direction.FORWARD.value: LinkCache(
            ttl_seconds=search_config.cache_ttl_seconds,
            max_entries=search_config.cache_max_entries,
        )
    }
    forward_source = _make_link_source(Direction.FORWARD, link_caches[Direction.FORWARD.value])
    backward_source = None
    if search_config.use_backlinks:
        link_caches[Direction.BACKWARD.value] = LinkCache(
            ttl_seconds=search_config.cache_ttl_seconds,
            max_entries=search_config.cache_max_entries,
        )
        backward_source = _make_link_source(Direction.BACKWARD, link_caches[Direction.BACKWARD.value])

    search = BidirectionalSearch(
        forward_source,
        backward_source,
        max_depth=search_config.max_depth,
        batch_size=search_config.batch_size,
    )
    logger.info(f"BidirectionalSearch created (max_depth={search.max_depth}, "
                f"batch_size={search.batch_size}, backlinks={backward_source is not None})")

    app.state.link_caches = link_caches
    app.state.search_handler = SearchHandler(search, deadline_seconds=search_config.deadline_seconds)

    logger.info("Wiki Path API startup complete")

    yield

    logger.info("Shutting down Wiki Path API...")
    await forward_source.aclose()
    if backward_source is not None:
        await backward_source.aclose()
    logger.info("Wiki Path API shutdown complete")

# Create FastAPI app
app = FastAPI(
    title="Wiki Path API",
    description="API for finding chains of links between Wikipedia articles",
    version="0.1.0",
    debug=config.debug,
    lifespan=lifespan
)

# Routers and Middleware
app.include_router(search_router)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Wiki Path API",
        "version": "0.1.0",
        "features": [
            "Bidirectional link-path search",
            "Cached Wikipedia link lookups",
        ],
        "docs": "/docs",
        "health": "/health",
        "search": "/api/wiki-path"
    }

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "wiki-path-api",
        "version": "0.1.0"
    }

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are reported like missing articles."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"message": REQUIRED_MESSAGE})

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logging.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": ERROR_MESSAGE}
    )

if __name__ == "__main__":
    uvicorn.run(
        "backend.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="info"
    )
