import uuid
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    # Fixed width so text ordering matches chronological ordering
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


class Link(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    short_link: str
    url: str
    created_at: datetime

    @classmethod
    def new(cls, short_link: str, url: str) -> "Link":
        return cls(
            id=str(uuid.uuid4()),
            short_link=short_link,
            url=url,
            created_at=utcnow(),
        )

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return format_timestamp(value)


class LinkCreate(BaseModel):
    short_link: str
    url: str = Field(..., min_length=1)


class LinkUpdate(BaseModel):
    url: str = Field(..., min_length=1)


class PageMeta(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int


class PaginatedLinks(BaseModel):
    data: List[Link]
    pagination: PageMeta


class MessageResponse(BaseModel):
    message: str
