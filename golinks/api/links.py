from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from typing import List, Optional, Union

from ..errors import NotFoundError
from ..observability import REDIRECT_TOTAL, REDIRECT_404_TOTAL
from ..registry import LinkRegistry
from ..schemas import Link, LinkCreate, LinkUpdate, MessageResponse, PaginatedLinks

router = APIRouter()


def get_registry(request: Request) -> LinkRegistry:
    return request.app.state.registry


def parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@router.post("/golinks", response_model=Link, status_code=status.HTTP_201_CREATED)
async def create_golink(
    link_in: LinkCreate,
    registry: LinkRegistry = Depends(get_registry),
):
    return await registry.create(link_in.short_link, link_in.url)


@router.get("/golinks", response_model=Union[PaginatedLinks, List[Link]])
async def list_golinks(
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    registry: LinkRegistry = Depends(get_registry),
):
    # A present but unparseable parameter still selects the paginated shape
    return await registry.list_links(
        page=parse_int(page),
        page_size=parse_int(page_size),
        paginated=page is not None or page_size is not None,
    )


@router.get("/golinks/{short_link:path}", response_model=Link)
async def get_golink(
    short_link: str,
    registry: LinkRegistry = Depends(get_registry),
):
    return await registry.get(short_link)


@router.put("/golinks/{short_link:path}", response_model=Link)
async def update_golink(
    short_link: str,
    link_in: LinkUpdate,
    registry: LinkRegistry = Depends(get_registry),
):
    return await registry.update(short_link, link_in.url)


@router.delete("/golinks/{short_link:path}", response_model=MessageResponse)
async def delete_golink(
    short_link: str,
    registry: LinkRegistry = Depends(get_registry),
):
    await registry.delete(short_link)
    return MessageResponse(message="Golink deleted successfully")


@router.get("/go/{name}")
async def redirect_golink(
    name: str,
    registry: LinkRegistry = Depends(get_registry),
):
    try:
        link = await registry.get(f"go/{name}")
    except NotFoundError:
        REDIRECT_404_TOTAL.inc()
        raise
    REDIRECT_TOTAL.inc()
    return RedirectResponse(url=link.url)
