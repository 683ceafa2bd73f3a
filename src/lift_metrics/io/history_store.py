"""
JSONL-based storage for workout and wellness records.

A data directory holds one file per record kind, one JSON object per line:

    workouts.jsonl   {"date": ..., "exercises": [{"exercise_id": ..., "sets": [...]}]}
    sleep.jsonl      {"startTime": ..., "duration": ..., "quality": ...}
    stress.jsonl     {"date": ..., "level": ...}
    hydration.jsonl  {"date": ..., "amount": ...}

Only the workouts file is required; missing wellness files read as empty.
"""

import os
from pathlib import Path
from typing import Any, Callable, TypeVar

from ..core.metrics import sort_history
from ..core.models import HydrationSample, SleepSample, StressSample, WorkoutRecord
from .serializers import (
    ValidationError,
    dict_to_hydration_sample,
    dict_to_sleep_sample,
    dict_to_stress_sample,
    dict_to_workout_record,
    parse_jsonl_line,
)

T = TypeVar("T")

DATA_DIR_NAME = ".lift-metrics"
WORKOUTS_FILE = "workouts.jsonl"
SLEEP_FILE = "sleep.jsonl"
STRESS_FILE = "stress.jsonl"
HYDRATION_FILE = "hydration.jsonl"


def get_default_data_dir() -> Path:
    """Return ~/.lift-metrics (may not exist)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / DATA_DIR_NAME


class RecordStore:
    """
    Read-only access to the JSONL files in a data directory.
    """

    def __init__(self, data_dir: str | Path):
        """
        Args:
            data_dir: Directory containing the JSONL files
        """
        self.data_dir = Path(data_dir)

    @property
    def workouts_path(self) -> Path:
        return self.data_dir / WORKOUTS_FILE

    def exists(self) -> bool:
        """Check if the workouts file exists."""
        return self.workouts_path.exists()

    def _read(
        self,
        file_name: str,
        convert: Callable[[dict[str, Any]], T],
        required: bool = False,
    ) -> list[T]:
        """
        Parse every non-blank line of a JSONL file.

        Raises:
            FileNotFoundError: If a required file doesn't exist
            ValidationError: If a line is invalid (message has file and line)
        """
        path = self.data_dir / file_name
        if not path.exists():
            if required:
                raise FileNotFoundError(f"Data file not found: {path}")
            return []

        items: list[T] = []
        with open(path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    items.append(convert(parse_jsonl_line(line)))
                except ValidationError as e:
                    raise ValidationError(f"Error parsing line {line_num} in {path}: {e}") from e
        return items

    def load_workouts(self) -> list[WorkoutRecord]:
        """
        Load all workouts, sorted by date.

        Raises:
            FileNotFoundError: If workouts.jsonl doesn't exist
            ValidationError: If data is invalid
        """
        return sort_history(self._read(WORKOUTS_FILE, dict_to_workout_record, required=True))

    def load_sleep(self) -> list[SleepSample]:
        samples = self._read(SLEEP_FILE, dict_to_sleep_sample)
        return sorted(samples, key=lambda s: s.timestamp)

    def load_stress(self) -> list[StressSample]:
        samples = self._read(STRESS_FILE, dict_to_stress_sample)
        return sorted(samples, key=lambda s: s.timestamp)

    def load_hydration(self) -> list[HydrationSample]:
        return self._read(HYDRATION_FILE, dict_to_hydration_sample)
