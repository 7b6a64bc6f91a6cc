"""Data models for gist-rss."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _login(account: Any) -> str:
    # Anonymous gists have no owner and deleted accounts come back as null.
    if isinstance(account, dict):
        return account.get("login") or ""
    return ""


def _require_object(payload: Any, what: str) -> dict:
    if not isinstance(payload, dict):
        raise ValueError(f"expected {what} object, got {type(payload).__name__}")
    if not isinstance(payload.get("updated_at"), str):
        raise ValueError(f"{what} is missing updated_at")
    return payload


@dataclass(frozen=True)
class Gist:
    """A shared snippet as returned by GET /gists/{id}."""

    description: str
    owner_login: str
    updated_at: str

    @classmethod
    def from_dict(cls, payload: Any) -> "Gist":
        """Decode a gist JSON object.

        Raises:
            ValueError: If the payload does not have the gist shape
        """
        payload = _require_object(payload, "gist")
        return cls(
            description=payload.get("description") or "",
            owner_login=_login(payload.get("owner")),
            updated_at=payload["updated_at"],
        )


@dataclass(frozen=True)
class Comment:
    """One gist comment as returned by GET /gists/{id}/comments."""

    id: int
    body: str
    author_login: str
    updated_at: str

    @classmethod
    def from_dict(cls, payload: Any) -> "Comment":
        """Decode a comment JSON object.

        Raises:
            ValueError: If the payload does not have the comment shape
        """
        payload = _require_object(payload, "comment")
        comment_id = payload.get("id")
        # bool is an int subclass but never a valid id
        if not isinstance(comment_id, int) or isinstance(comment_id, bool):
            raise ValueError(f"comment id must be an integer, got {comment_id!r}")
        return cls(
            id=comment_id,
            body=payload.get("body") or "",
            author_login=_login(payload.get("user")),
            updated_at=payload["updated_at"],
        )


@dataclass(frozen=True)
class FeedItem:
    """One feed entry derived from a single comment."""

    title: str
    link: str
    description: str
    author: str
    created: datetime


@dataclass(frozen=True)
class Feed:
    """Serializer-agnostic feed assembled from a gist and its comments."""

    title: str
    link: str
    author: str
    created: datetime
    items: tuple[FeedItem, ...] = ()
