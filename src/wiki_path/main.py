import asyncio
import logging

import typer

from wiki_path.config import config
from wiki_path.exceptions import SearchTimeoutError, SearchValidationError
from wiki_path.models import Direction, SearchOutcome, SearchResult
from wiki_path.solver import BidirectionalSearch
from wiki_path.wikipedia import LinkCache, WikipediaLinkSource


app = typer.Typer()


@app.command()
def main(
    start: str = typer.Argument(..., help="Title of the article to start from."),
    end: str = typer.Argument(..., help="Title of the article to reach."),
    max_depth: int = typer.Option(
        config.max_depth,
        "--max-depth",
        "-d",
        help="Maximum depth explored from each end.",
    ),
    batch_size: int = typer.Option(
        config.batch_size,
        "--batch-size",
        "-b",
        help="Number of articles whose links are fetched concurrently.",
    ),
    timeout: float = typer.Option(
        config.deadline_seconds,
        "--timeout",
        "-t",
        help="Seconds before the search gives up.",
    ),
    backlinks: bool = typer.Option(
        config.use_backlinks,
        "--backlinks/--no-backlinks",
        help="Search backward from the end article through the pages linking to it.",
    ),
    log_level: str = typer.Option(config.log_level, "--log-level", help="Log level."),
):
    """
    Find a chain of links from START to END on Wikipedia.
    """
    from wiki_path.logging_config import setup_logging

    setup_logging(level=log_level)
    logger = logging.getLogger(__name__)

    try:
        result = asyncio.run(run_search_async(start, end, max_depth, batch_size, timeout, backlinks))
    except SearchValidationError as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=2)
    except SearchTimeoutError as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=3)

    if result.outcome != SearchOutcome.FOUND:
        typer.echo(result.message or "No path found", err=True)
        raise typer.Exit(code=1)

    logger.info(f"Found a {result.path_length}-hop path in {result.computation_time_ms:.0f}ms")
    typer.echo(" -> ".join(result.path))


async def run_search_async(
    start: str,
    end: str,
    max_depth: int,
    batch_size: int,
    timeout: float,
    backlinks: bool,
) -> SearchResult:
    """Build link sources from the global config and run one search."""
    def make_source(direction: Direction) -> WikipediaLinkSource:
        return WikipediaLinkSource(
            cache=LinkCache(ttl_seconds=config.cache_ttl_seconds, max_entries=config.cache_max_entries),
            direction=direction,
            language=config.language,
            link_limit=config.link_limit,
            namespace=config.namespace,
            timeout=config.request_timeout_seconds,
            user_agent=config.user_agent,
        )

    forward_source = make_source(Direction.FORWARD)
    backward_source = make_source(Direction.BACKWARD) if backlinks else None

    search = BidirectionalSearch(
        forward_source,
        backward_source,
        max_depth=max_depth,
        batch_size=batch_size,
    )
    return await search.find_path(start, end, deadline_seconds=timeout)


if __name__ == "__main__":
    app()
