"""Data access layer for the persisted snapshot and rollover marker"""

import json
import logging
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.domain.models import FinancialData
from finance_tracker.domain.serialization import data_from_dict, data_to_dict
from finance_tracker.infrastructure.database.models import KeyValueEntry
from finance_tracker.infrastructure.observability.metrics import storage_fallback_counter

DATA_KEY = "finances_data"
MARKER_KEY = "last_processed_month"

logger = logging.getLogger(__name__)


class SnapshotRepository:
    """
    Repository for the two independent stored values.

    Reads never fail: a missing or malformed value falls back to its default
    (empty dataset, empty marker). Writes replace the whole value.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get(self, key: str) -> Optional[str]:
        entry = self.db.get(KeyValueEntry, key)
        return entry.value if entry else None

    def _put(self, key: str, value: str) -> None:
        entry = self.db.get(KeyValueEntry, key)
        if entry is None:
            self.db.add(KeyValueEntry(key=key, value=value))
        else:
            entry.value = value
        self.db.flush()

    def load_data(self) -> FinancialData:
        raw = self._get(DATA_KEY)
        if raw is None:
            return FinancialData()
        try:
            return data_from_dict(json.loads(raw))
        except (KeyError, TypeError, ValueError) as e:
            storage_fallback_counter.labels(key=DATA_KEY).inc()
            logger.warning(f"Stored snapshot is malformed, using empty dataset: {e}")
            return FinancialData()

    def save_data(self, data: FinancialData) -> None:
        self._put(DATA_KEY, json.dumps(data_to_dict(data), ensure_ascii=False))

    def load_marker(self) -> str:
        raw = self._get(MARKER_KEY)
        if raw is None:
            return ""
        try:
            marker = json.loads(raw)
        except ValueError as e:
            storage_fallback_counter.labels(key=MARKER_KEY).inc()
            logger.warning(f"Stored rollover marker is malformed, ignoring it: {e}")
            return ""
        if not isinstance(marker, str):
            storage_fallback_counter.labels(key=MARKER_KEY).inc()
            logger.warning(f"Stored rollover marker is not a string: {marker!r}")
            return ""
        return marker

    def save_marker(self, marker: str) -> None:
        self._put(MARKER_KEY, json.dumps(marker))
