import logging
from typing import Dict, List

from ..errors import ConflictError, NotFoundError
from ..locks import ReadWriteLock
from ..schemas import Link
from .base import LinkBackend

logger = logging.getLogger(__name__)


class MemoryBackend(LinkBackend):
    """Process-local backend: a dict keyed by short link behind a readers-writer lock."""

    name = "memory"

    def __init__(self):
        self._links: Dict[str, Link] = {}
        self._lock = ReadWriteLock()

    async def create(self, short_link: str, url: str) -> Link:
        async with self._lock.write():
            if short_link in self._links:
                raise ConflictError(f"Golink {short_link} already exists")
            link = Link.new(short_link, url)
            self._links[short_link] = link
        return link.model_copy()

    async def get(self, short_link: str) -> Link:
        async with self._lock.read():
            link = self._links.get(short_link)
            if link is None:
                raise NotFoundError(f"Golink {short_link} not found")
            return link.model_copy()

    async def list(self) -> List[Link]:
        async with self._lock.read():
            return [link.model_copy() for link in self._links.values()]

    async def update(self, short_link: str, url: str) -> Link:
        async with self._lock.write():
            current = self._links.get(short_link)
            if current is None:
                raise NotFoundError(f"Golink {short_link} not found")
            updated = current.model_copy(update={"url": url})
            self._links[short_link] = updated
        return updated.model_copy()

    async def delete(self, short_link: str) -> None:
        async with self._lock.write():
            if self._links.pop(short_link, None) is None:
                raise NotFoundError(f"Golink {short_link} not found")

    async def close(self) -> None:
        logger.info(f"Discarding {len(self._links)} in-memory golinks")
        self._links.clear()
