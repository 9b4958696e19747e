"""
Per-project generation status.

The store lives in process memory only: statuses vanish on restart and are not
shared between workers. Callers depend on `StatusStore`, so a durable backend
can replace `InMemoryStatusStore` without touching them.
"""
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from models import GenerationStatus


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class StatusStore(ABC):

    @abstractmethod
    def get(self, project_id: str) -> Optional[GenerationStatus]:
        ...

    @abstractmethod
    def set(self, project_id: str, status: GenerationStatus) -> GenerationStatus:
        ...

    def update(self, project_id: str, **fields) -> GenerationStatus:
        """Writes a new status record stamped with the current time."""
        status = GenerationStatus(**fields, updatedAt=utc_now_iso())
        return self.set(project_id, status)


class InMemoryStatusStore(StatusStore):

    def __init__(self):
        self._statuses: Dict[str, GenerationStatus] = {}
        self._lock = threading.Lock()

    def get(self, project_id: str) -> Optional[GenerationStatus]:
        with self._lock:
            return self._statuses.get(project_id)

    def set(self, project_id: str, status: GenerationStatus) -> GenerationStatus:
        with self._lock:
            self._statuses[project_id] = status
        return status

    def __len__(self):
        with self._lock:
            return len(self._statuses)
