import json
import os
from typing import Optional

from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import SnapshotCorrupt
from app.core.logger import logger
from app.models.booking import LifecycleState


class SnapshotStore:
    """
    Durable copy of the lifecycle buckets: a JSON document whose only key
    holds {pending, ongoing, done}. Reads and writes are synchronous.
    """

    def __init__(self, path: str = settings.SNAPSHOT_PATH, key: str = settings.SNAPSHOT_KEY):
        self.path = path
        self.key = key

    def _read(self) -> Optional[LifecycleState]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
            return LifecycleState.model_validate(document[self.key])
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValidationError) as e:
            raise SnapshotCorrupt(f"{self.path}: {e}") from e

    def load(self) -> Optional[LifecycleState]:
        """Returns the stored buckets, or None when absent or unreadable."""
        try:
            state = self._read()
        except SnapshotCorrupt as e:
            logger.error(f"❌ Snapshot corrupt, starting from empty buckets: {e}")
            return None
        if state is None:
            logger.info(f"📭 No snapshot at {self.path}")
        return state

    def save(self, state: LifecycleState) -> bool:
        """Best-effort write; failures are logged and reported as False."""
        tmp_path = f"{self.path}.tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump({self.key: state.model_dump(mode="json")}, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"❌ Failed to write snapshot {self.path}: {e}")
            return False


class MemorySnapshotStore:
    """In-process snapshot store, for tests and ephemeral runs."""

    def __init__(self, state: Optional[LifecycleState] = None):
        self.state = state.model_copy(deep=True) if state else None
        self.saves = 0

    def load(self) -> Optional[LifecycleState]:
        return self.state.model_copy(deep=True) if self.state else None

    def save(self, state: LifecycleState) -> bool:
        self.state = state.model_copy(deep=True)
        self.saves += 1
        return True
