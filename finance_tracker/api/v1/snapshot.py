"""Shared read-modify-write flow for routes that mutate the snapshot"""

import logging
from typing import Callable

from fastapi import HTTPException
from sqlalchemy.orm import Session

from finance_tracker.domain.exceptions import (
    EntityNotFoundError,
    InvalidEntryError,
    InvalidPurchaseError,
    MalformedPeriodError,
)
from finance_tracker.domain.models import FinancialData
from finance_tracker.infrastructure.database.repositories import SnapshotRepository
from finance_tracker.infrastructure.observability.logging import log_mutation
from finance_tracker.infrastructure.observability.metrics import record_mutation


def apply_mutation(
    db: Session,
    request_id: str,
    operation: str,
    mutate: Callable[[FinancialData], FinancialData],
    entity_id: str | None = None,
) -> FinancialData:
    """
    Load the snapshot, apply one mutation, write the whole new snapshot.

    Returns the new snapshot. Domain errors become 404/422 responses and
    nothing is written.
    """
    repo = SnapshotRepository(db)
    try:
        updated = mutate(repo.load_data())
        repo.save_data(updated)
        db.commit()

    except EntityNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except (InvalidPurchaseError, InvalidEntryError, MalformedPeriodError) as e:
        db.rollback()
        logging.warning(f"Rejected {operation}: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error in {operation}: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_mutation(operation)
    log_mutation(request_id, operation, entity_id)
    return updated
