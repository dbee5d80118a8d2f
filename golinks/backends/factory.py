from ..config import Settings
from .base import LinkBackend
from .memory import MemoryBackend
from .sql import SQLBackend


def create_backend(settings: Settings) -> LinkBackend:
    """Pick the storage backend named by ``settings.USE_DATABASE``."""
    if settings.USE_DATABASE:
        return SQLBackend.from_settings(settings)
    return MemoryBackend()
