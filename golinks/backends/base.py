from abc import ABC, abstractmethod
from typing import List

from ..schemas import Link


class LinkBackend(ABC):
    """Storage shared by the registry. Reads always return copies."""

    name = "abstract"

    async def init(self) -> None:
        pass

    async def close(self) -> None:
        pass

    @abstractmethod
    async def create(self, short_link: str, url: str) -> Link:
        pass

    @abstractmethod
    async def get(self, short_link: str) -> Link:
        pass

    # Insertion order, fresh snapshot per call
    @abstractmethod
    async def list(self) -> List[Link]:
        pass

    @abstractmethod
    async def update(self, short_link: str, url: str) -> Link:
        pass

    @abstractmethod
    async def delete(self, short_link: str) -> None:
        pass
