"""Cursor-following retrieval of a gist's comment collection."""

from .errors import PaginationError
from .github import GistClient
from .logging_config import create_execution_logger
from .models import Comment

DEFAULT_MAX_PAGES = 100


def accumulate(
    accumulated: tuple[Comment, ...], page: list[Comment]
) -> tuple[Comment, ...]:
    """Return a new accumulator with the page appended in fetch order."""
    return accumulated + tuple(page)


def fetch_all_comments(
    client: GistClient,
    gist_id: str,
    max_pages: int = DEFAULT_MAX_PAGES,
    execution_id: str | None = None,
) -> list[Comment]:
    """Fetch every comment page and return the comments oldest first.

    Pages are followed through the rel="next" cursor until a page has none.
    The concatenated pages are then reversed as a whole; no sort by
    timestamp is applied.

    Args:
        client: Client performing the page requests
        gist_id: Gist identifier
        max_pages: Upper bound on the number of page requests

    Returns:
        All comments, reversed from API order

    Raises:
        PaginationError: If the cursor repeats a URL or exceeds max_pages
        RemoteRequestError, DecodingError: From any page request
    """
    logger = create_execution_logger("paginator", execution_id)

    url: str | None = client.comments_url(gist_id)
    accumulated: tuple[Comment, ...] = ()
    visited: set[str] = set()
    pages = 0

    while url is not None:
        if url in visited:
            raise PaginationError(f"Comment cursor for gist {gist_id} revisited {url}")
        if pages >= max_pages:
            raise PaginationError(
                f"Comment cursor for gist {gist_id} exceeded {max_pages} pages"
            )
        visited.add(url)

        page, next_url = client.fetch_comments_page(url)
        pages += 1
        accumulated = accumulate(accumulated, page)
        logger.log_page_fetch(url, pages, len(page))
        url = next_url

    logger.info(
        "Fetched all comments",
        gist_id=gist_id,
        page=pages,
        items_count=len(accumulated),
    )
    return list(reversed(accumulated))
