"""Store selection by configured backend."""
from typing import Optional
from socialpulse.common.config import settings
from socialpulse.common.logger import setup_logger
from socialpulse.store.base import CommentStore
from socialpulse.store.memory_store import MemoryStore

logger = setup_logger(__name__)


def create_store(backend: Optional[str] = None) -> CommentStore:
    backend = (backend or settings.STORE_BACKEND).lower()
    logger.info(f"Using {backend} store")
    if backend == "memory":
        return MemoryStore()
    if backend == "redis":
        from socialpulse.store.redis_store import RedisStore
        return RedisStore()
    raise ValueError(f"Unknown store backend: {backend}")
