"""Link registry facade: validation, backend delegation and pagination."""

import logging
from typing import List, Optional, Union

from .backends.base import LinkBackend
from .errors import InvalidFormatError
from .pagination import paginate
from .schemas import Link, PaginatedLinks
from .validation import LinkNameValidator

logger = logging.getLogger(__name__)


class LinkRegistry:
    """Single entry point for every link operation.

    Names are validated before the backend is touched, so an invalid short
    link is never stored. Backend errors (conflict, not found, unavailable)
    propagate unchanged.
    """

    def __init__(self, backend: LinkBackend, validator: Optional[LinkNameValidator] = None):
        self.backend = backend
        self.validator = validator or LinkNameValidator()

    async def create(self, short_link: str, url: str) -> Link:
        if not self.validator.validate(short_link):
            logger.info("Rejected malformed golink", extra={"short_link": short_link})
            raise InvalidFormatError(
                f"Invalid golink pattern. Must match '{self.validator.pattern}'"
            )
        link = await self.backend.create(short_link, url)
        logger.info("Created golink", extra={"short_link": short_link})
        return link

    async def get(self, short_link: str) -> Link:
        return await self.backend.get(short_link)

    async def list_links(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        paginated: Optional[bool] = None,
    ) -> Union[List[Link], PaginatedLinks]:
        """Return every link, or one page of them.

        Pagination applies when either ``page`` or ``page_size`` is given, or
        when ``paginated`` forces it (the HTTP layer does so for parameters
        that were present but unparseable).
        """
        links = await self.backend.list()
        if paginated is None:
            paginated = page is not None or page_size is not None
        if not paginated:
            return links
        window, meta = paginate(links, page, page_size)
        return PaginatedLinks(data=window, pagination=meta)

    async def update(self, short_link: str, url: str) -> Link:
        link = await self.backend.update(short_link, url)
        logger.info("Updated golink", extra={"short_link": short_link})
        return link

    async def delete(self, short_link: str) -> None:
        await self.backend.delete(short_link)
        logger.info("Deleted golink", extra={"short_link": short_link})
