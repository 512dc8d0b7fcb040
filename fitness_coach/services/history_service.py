import json
import os
import tempfile
import time
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from fitness_coach.config import config
from fitness_coach.models.schemas import WorkoutSummary
from fitness_coach.utils.logging_utils import logger

_history_adapter = TypeAdapter(List[WorkoutSummary])


class HistoryStore:
    """
    Append-only workout history kept as a JSON list on disk.
    The history is only read back for display. Writes replace the file
    atomically; an unreadable file is moved aside before the next append.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def append_workout_summary(self, summary: WorkoutSummary):
        """Add one completed workout to the end of the history file"""
        history = self._read()
        if history is None:
            self._quarantine()
            history = []
        history.append(summary)

        payload = [item.model_dump(mode="json") for item in history]
        self._write_atomic(json.dumps(payload, indent=2))
        logger.info(f"Workout summary saved ({len(history)} workouts in {self.path})")

    def load_workout_history(self) -> List[WorkoutSummary]:
        """Return all stored summaries, oldest first"""
        history = self._read()
        return history if history is not None else []

    def _read(self) -> Optional[List[WorkoutSummary]]:
        """Stored summaries, [] when there is no file, None when it cannot be parsed"""
        if not self.path.exists():
            return []

        try:
            return _history_adapter.validate_json(self.path.read_bytes())
        except ValidationError as e:
            logger.error(f"Unreadable workout history {self.path}: {e}")
            return None

    def _quarantine(self):
        backup = self.path.with_name(f"{self.path.name}.corrupt-{int(time.time())}")
        self.path.replace(backup)
        logger.warning(f"Moved unreadable workout history to {backup}")

    def _write_atomic(self, text: str):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w") as f:
                f.write(text)
            tmp_path.replace(self.path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise

# Global service instance
history_store = HistoryStore(config.history_path)
