from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from typing import Optional, List

from .models import LinkRecord
from .schemas import Link

# Callers own the transaction: nothing here commits.


async def insert_link(db: AsyncSession, link: Link) -> LinkRecord:
    record = LinkRecord(
        id=link.id,
        short_link=link.short_link,
        url=link.url,
        created_at=link.created_at,
    )
    db.add(record)
    await db.flush()
    return record


async def get_link_by_short_link(db: AsyncSession, short_link: str) -> Optional[LinkRecord]:
    result = await db.execute(select(LinkRecord).where(LinkRecord.short_link == short_link))
    return result.scalar_one_or_none()


async def list_links(db: AsyncSession) -> List[LinkRecord]:
    result = await db.execute(
        select(LinkRecord).order_by(LinkRecord.created_at.asc(), LinkRecord.short_link.asc())
    )
    return list(result.scalars().all())


async def update_link_url(db: AsyncSession, short_link: str, url: str) -> bool:
    result = await db.execute(
        update(LinkRecord)
        .where(LinkRecord.short_link == short_link)
        .values(url=url)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


async def delete_link(db: AsyncSession, short_link: str) -> bool:
    result = await db.execute(
        delete(LinkRecord)
        .where(LinkRecord.short_link == short_link)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0
