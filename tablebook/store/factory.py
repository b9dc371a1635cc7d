from ..catalog import Catalog
from .base import ReservationStore
from .memory import MemoryStore
from .sql import SqlStore


def build_store(config, catalog: Catalog) -> ReservationStore:
    backend = config["STORE_BACKEND"]
    timeout = config["STORE_TIMEOUT"]
    if backend == "sql":
        return SqlStore(catalog, timeout=timeout, conflict_retries=config["STORE_CONFLICT_RETRIES"])
    if backend == "memory":
        return MemoryStore(catalog, timeout=timeout)
    raise ValueError(f"Unknown STORE_BACKEND {backend!r}; expected 'sql' or 'memory'.")
