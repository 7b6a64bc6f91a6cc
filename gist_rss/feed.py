"""Feed assembly from a gist and its ordered comments."""

import re
from datetime import datetime

from dateutil import parser as date_parser

from .config import GitHubConfig
from .content import render_safe
from .errors import TimestampFormatError
from .logging_config import create_execution_logger
from .models import Comment, Feed, FeedItem, Gist

RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T([01]\d|2[0-3]):[0-5]\d:[0-5]\d(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)

TITLE_MONTH_FORMAT = "%b"


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC3339 date-time into an aware datetime.

    Raises:
        TimestampFormatError: If the value is not an RFC3339 date-time
    """
    if not isinstance(value, str) or not RFC3339_RE.match(value):
        raise TimestampFormatError(value)
    try:
        return date_parser.isoparse(value)
    except ValueError as e:
        # Right shape, impossible calendar values
        raise TimestampFormatError(value) from e


def format_comment_title(login: str, created: datetime) -> str:
    """Item title, e.g. "alice commented on 02 Jan 2006"."""
    # strftime("%Y") does not pad years below 1000 on every platform
    month = created.strftime(TITLE_MONTH_FORMAT)
    return f"{login} commented on {created.day:02d} {month} {created.year:04d}"


def comment_link(gist_link: str, comment_id: int) -> str:
    return f"{gist_link}#gistcomment-{comment_id}"


def build_feed(
    gist_id: str,
    gist: Gist,
    comments: list[Comment],
    web_url: str = GitHubConfig.web_url,
    execution_id: str | None = None,
) -> Feed:
    """Assemble the feed model.

    Items keep the order of the comments handed in. Every timestamp is
    parsed before anything is returned, so one bad value fails the whole feed.

    Args:
        gist_id: Gist identifier, used for the canonical link
        gist: Gist metadata
        comments: Comments in the order they should appear
        web_url: Base of canonical gist links

    Raises:
        TimestampFormatError: If any updated_at is not RFC3339
    """
    logger = create_execution_logger("feed_builder", execution_id)

    link = f"{web_url.rstrip('/')}/{gist_id}"
    created = parse_timestamp(gist.updated_at)

    items = []
    for comment in comments:
        comment_created = parse_timestamp(comment.updated_at)
        items.append(
            FeedItem(
                title=format_comment_title(comment.author_login, comment_created),
                link=comment_link(link, comment.id),
                description=render_safe(comment.body),
                author=comment.author_login,
                created=comment_created,
            )
        )

    logger.info("Feed assembled", gist_id=gist_id, items_count=len(items))
    return Feed(
        title=gist.description,
        link=link,
        author=gist.owner_login,
        created=created,
        items=tuple(items),
    )
