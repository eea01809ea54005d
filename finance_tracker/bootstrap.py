"""Startup step: run the month rollover once before serving"""

import time
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.domain.models import RolloverResult
from finance_tracker.domain.rollover import process_month_rollover
from finance_tracker.infrastructure.database.repositories import SnapshotRepository
from finance_tracker.infrastructure.observability.logging import log_rollover
from finance_tracker.infrastructure.observability.metrics import record_rollover


def run_startup_rollover(db: Session, today: Optional[date] = None) -> RolloverResult:
    """
    Load snapshot and marker, accrue due installments, persist on change.

    Snapshot and marker are written together in one commit, and only when
    the rollover flipped something.
    """
    start_time = time.time()
    repo = SnapshotRepository(db)

    result = process_month_rollover(repo.load_data(), repo.load_marker(), today)
    if result.changes_made:
        try:
            repo.save_data(result.updated_data)
            repo.save_marker(result.new_last_processed_month)
            db.commit()
        except Exception:
            db.rollback()
            raise

    duration_ms = (time.time() - start_time) * 1000
    record_rollover(result.changes_made, result.installments_accrued)
    log_rollover(
        result.changes_made,
        result.installments_accrued,
        result.new_last_processed_month,
        duration_ms,
    )
    return result
