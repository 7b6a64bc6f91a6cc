"""RSS 2.0 serialization of the assembled feed."""

import re
import sys
import xml.etree.ElementTree as ET
from datetime import datetime
from email.utils import format_datetime
from typing import TextIO

from .errors import SerializationError
from .logging_config import create_execution_logger
from .models import Feed, FeedItem

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Characters outside the XML 1.0 Char production.
ILLEGAL_XML_CHARS_RE = re.compile(
    r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _text(value) -> str:
    if not isinstance(value, str):
        raise SerializationError(f"Expected text, got {type(value).__name__}")
    match = ILLEGAL_XML_CHARS_RE.search(value)
    if match:
        raise SerializationError(
            f"Character {match.group()!r} cannot be represented in XML"
        )
    return value


def _date(value) -> str:
    if not isinstance(value, datetime):
        raise SerializationError(f"Expected datetime, got {type(value).__name__}")
    # RFC 1123 with numeric zone
    return format_datetime(value)


def _element(parent: ET.Element, tag: str, text: str, **attrib) -> ET.Element:
    element = ET.SubElement(parent, tag, attrib)
    element.text = text
    return element


def _item_element(channel: ET.Element, item: FeedItem) -> None:
    element = ET.SubElement(channel, "item")
    _element(element, "title", _text(item.title))
    _element(element, "link", _text(item.link))
    _element(element, "description", _text(item.description))
    _element(element, "author", _text(item.author))
    _element(element, "guid", _text(item.link), isPermaLink="true")
    _element(element, "pubDate", _date(item.created))


def to_rss(feed: Feed) -> str:
    """Serialize a feed as an RSS 2.0 document.

    Item descriptions are HTML and are written as escaped text.

    Raises:
        SerializationError: If the feed holds values RSS cannot carry
    """
    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    _element(channel, "title", _text(feed.title))
    _element(channel, "link", _text(feed.link))
    _element(channel, "description", _text(feed.title))
    _element(channel, "managingEditor", _text(feed.author))
    _element(channel, "pubDate", _date(feed.created))

    for item in feed.items:
        _item_element(channel, item)

    try:
        body = ET.tostring(rss, encoding="unicode")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not serialize feed: {e}") from e

    return XML_DECLARATION + body


def write_feed(
    feed: Feed, stream: TextIO | None = None, execution_id: str | None = None
) -> None:
    """Serialize the feed and write it verbatim to a stream.

    Without a stream the document goes to standard output as UTF-8 bytes,
    whatever encoding the locale gives sys.stdout. Nothing is written when
    serialization fails.
    """
    logger = create_execution_logger("emitter", execution_id)
    document = to_rss(feed)

    if stream is None:
        sys.stdout.flush()
        sys.stdout.buffer.write(document.encode("utf-8"))
        sys.stdout.buffer.flush()
    else:
        stream.write(document)
        stream.flush()

    logger.info("Feed written", items_count=len(feed.items))
