"""
JSON persistence for completion history.

History and aggregates live in one file, results.json, inside the
configured results directory (default ~/.stepwise/). Records are stored
most recent first.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from loguru import logger

from .models import Aggregates, CompletionRecord

# Default results directory
RESULTS_DIR = Path.home() / ".stepwise"
RESULTS_FILE = "results.json"


class JsonResultsRepository:
    """
    Results repository backed by a JSON file.

    The file is read once on construction and rewritten on every append.
    In-memory state only changes after the write succeeded.
    """

    def __init__(self, results_dir: Optional[Path] = None, points_per_level: int = 50):
        self.results_dir = Path(results_dir or RESULTS_DIR)
        self.filepath = self.results_dir / RESULTS_FILE
        self._records: list[CompletionRecord] = []
        self._aggregates = Aggregates(points_per_level=points_per_level)
        self._load()

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected an object, got {type(data).__name__}")
            records = [CompletionRecord.from_dict(entry) for entry in data.get("history", [])]
            aggregates = self._aggregates
            if data.get("aggregates"):
                aggregates = Aggregates.from_dict(data["aggregates"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            # Keep the unreadable file for inspection instead of overwriting it
            corrupt = self.filepath.with_suffix(".corrupt.json")
            self.filepath.replace(corrupt)
            logger.warning(f"Could not read {self.filepath} ({e}); moved to {corrupt}")
            return
        self._records = records
        self._aggregates = aggregates

    def _write(self, records: list[CompletionRecord], aggregates: Aggregates) -> Path:
        self.results_dir.mkdir(parents=True, exist_ok=True)
        payload = {
            "history": [record.to_dict() for record in records],
            "aggregates": aggregates.to_dict(),
        }
        tmp = self.filepath.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        tmp.replace(self.filepath)
        return self.filepath

    def append(self, record: CompletionRecord, aggregates: Aggregates) -> None:
        records = [record, *self._records]
        self._write(records, aggregates)
        self._records = records
        self._aggregates = aggregates

    def history(self, session_id: str | None = None) -> list[CompletionRecord]:
        return [r for r in self._records if session_id is None or r.session_id == session_id]

    def load_aggregates(self) -> Aggregates:
        return self._aggregates

    def clear(self) -> int:
        """Remove all history. Returns the number of records dropped."""
        removed = len(self._records)
        self._records = []
        self._aggregates = Aggregates(points_per_level=self._aggregates.points_per_level)
        if self.filepath.exists():
            self.filepath.unlink()
        return removed
