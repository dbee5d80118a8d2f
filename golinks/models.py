from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from .database import Base
from .schemas import format_timestamp


class ISOTimestamp(TypeDecorator):
    """Timezone-aware datetime stored as fixed-width ISO-8601 text."""

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[str]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return format_timestamp(value)

    def process_result_value(self, value: Optional[str], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return datetime.fromisoformat(value)


class LinkRecord(Base):
    __tablename__ = "golinks"

    short_link: Mapped[str] = mapped_column(String, primary_key=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(ISOTimestamp, index=True, nullable=False)
