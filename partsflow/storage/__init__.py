from partsflow.core.config import Settings
from partsflow.db.session import build_engine
from partsflow.storage.base import Storage
from partsflow.storage.memory import MemStorage
from partsflow.storage.sql import SqlStorage

STORAGE_BACKENDS = ("memory", "sql")


def build_storage(settings: Settings) -> Storage:
    normalized = (settings.storage_backend or "").strip().lower()
    if normalized == "memory":
        return MemStorage()
    if normalized == "sql":
        return SqlStorage(build_engine(settings.database_url, settings))
    available = ", ".join(STORAGE_BACKENDS)
    raise ValueError(f"Unknown storage backend '{settings.storage_backend}'. Available: {available}")
