from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Union

from pydantic import ValidationError

from app.schemas.search import Creator, SearchResult

logger = logging.getLogger(__name__)

SEARCH_ERROR_MESSAGE = "Failed to search creators. Please try again."


@dataclass(frozen=True, slots=True)
class Idle:
    status: ClassVar[Literal["idle"]] = "idle"


@dataclass(frozen=True, slots=True)
class Loading:
    query: str
    status: ClassVar[Literal["loading"]] = "loading"


@dataclass(frozen=True, slots=True)
class Success:
    result: SearchResult
    query: str
    status: ClassVar[Literal["success"]] = "success"


@dataclass(frozen=True, slots=True)
class Error:
    message: str
    query: str
    status: ClassVar[Literal["error"]] = "error"


SearchState = Union[Idle, Loading, Success, Error]


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _clean_creator(item: dict[str, Any]) -> dict[str, Any]:
    out = dict(item)
    for key in ("followerCount", "follower_count"):
        if key in out and out[key] is not None and not _is_count(out[key]):
            out.pop(key)
    if "verified" in out and not isinstance(out["verified"], bool):
        out.pop("verified")
    return out


def normalize_search_result(payload: Any) -> SearchResult:
    """Coerce a provider payload into a ``SearchResult`` without raising.

    Missing or mistyped top-level fields fall back to empty/zero/false, and
    creator entries that cannot be read are dropped.
    """
    data = payload if isinstance(payload, dict) else {}

    creators: list[Creator] = []
    raw_creators = data.get("creators")
    if isinstance(raw_creators, list):
        for item in raw_creators:
            if not isinstance(item, dict):
                logger.warning("Dropping non-object creator entry: %r", item)
                continue
            try:
                creators.append(Creator.model_validate(_clean_creator(item)))
            except ValidationError as exc:
                logger.warning("Dropping malformed creator entry id=%r: %s", item.get("id"), exc)

    total_count = data.get("totalCount")
    has_more = data.get("hasMore")
    return SearchResult(
        creators=tuple(creators),
        total_count=total_count if _is_count(total_count) else 0,
        has_more=has_more if isinstance(has_more, bool) else False,
    )
