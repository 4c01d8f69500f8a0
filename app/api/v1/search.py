from __future__ import annotations

import logging
import time
import uuid

from fastapi import APIRouter, HTTPException, Query, Request

from app.schemas.search import SearchResult
from app.services.creators import search_creators

router = APIRouter(prefix="/search", tags=["search"])
logger = logging.getLogger(__name__)


@router.get(
    "/creators",
    response_model=SearchResult,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def search_creators_endpoint(
    request: Request,
    q: str = Query(default=""),
    page: int = Query(default=1),
    limit: int = Query(default=10),
) -> SearchResult:
    request_id = str(uuid.uuid4())
    started = time.perf_counter()
    ctx = {"request_id": request_id, "path": request.url.path}
    logger.info(
        "Search API request received",
        extra={**ctx, "user_agent": request.headers.get("user-agent")},
    )

    if not q.strip():
        logger.warning("Empty search query provided", extra=ctx)
        raise HTTPException(status_code=400, detail="Search query is required")
    if page < 1 or limit < 1 or limit > 100:
        logger.warning("Invalid pagination parameters page=%s limit=%s", page, limit, extra=ctx)
        raise HTTPException(status_code=400, detail="Invalid pagination parameters")

    try:
        creators, total = search_creators(q, page=page, limit=limit)
    except Exception as exc:
        logger.exception("Search API request failed", extra=ctx)
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    result = SearchResult(creators=tuple(creators), total_count=total, has_more=page * limit < total)
    logger.info(
        "Search completed q=%r results=%s total=%s duration_ms=%.1f",
        q,
        len(creators),
        total,
        (time.perf_counter() - started) * 1000,
        extra=ctx,
    )
    return result
