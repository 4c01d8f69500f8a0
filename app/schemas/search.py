from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Creator(_CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    description: str = ""
    avatar: str | None = None
    verified: bool | None = None
    follower_count: int | None = Field(default=None, ge=0)


class SearchResult(_CamelModel):
    creators: tuple[Creator, ...] = ()
    total_count: int = Field(default=0, ge=0)
    has_more: bool = False
