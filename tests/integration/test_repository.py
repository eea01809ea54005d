"""Integration tests for snapshot storage and the startup rollover"""

import json
import pytest
from datetime import date
from sqlalchemy.orm import Session
from finance_tracker.bootstrap import run_startup_rollover
from finance_tracker.domain.models import FinancialData
from finance_tracker.infrastructure.database.models import KeyValueEntry
from finance_tracker.infrastructure.database.repositories import (
    DATA_KEY,
    MARKER_KEY,
    SnapshotRepository,
)


def test_missing_values_fall_back_to_defaults(db: Session):
    repo = SnapshotRepository(db)

    assert repo.load_data() == FinancialData()
    assert repo.load_marker() == ""


def test_snapshot_and_marker_round_trip(db: Session, sample_data):
    repo = SnapshotRepository(db)
    repo.save_data(sample_data)
    repo.save_marker("2024-03-01")
    db.commit()

    assert repo.load_data() == sample_data
    assert repo.load_marker() == "2024-03-01"


def test_save_replaces_whole_snapshot(db: Session, sample_data):
    repo = SnapshotRepository(db)
    repo.save_data(sample_data)
    repo.save_data(FinancialData())
    db.commit()

    assert repo.load_data() == FinancialData()
    assert db.query(KeyValueEntry).count() == 1


def test_malformed_values_fall_back_to_defaults(db: Session):
    db.add(KeyValueEntry(key=DATA_KEY, value="{not json"))
    db.add(KeyValueEntry(key=MARKER_KEY, value="42"))
    db.commit()
    repo = SnapshotRepository(db)

    assert repo.load_data() == FinancialData()
    assert repo.load_marker() == ""


def test_structurally_invalid_snapshot_falls_back(db: Session):
    db.add(KeyValueEntry(key=DATA_KEY, value='{"cards": [{"name": "no id"}]}'))
    db.commit()

    assert SnapshotRepository(db).load_data() == FinancialData()


def test_startup_rollover_persists_changes(db: Session, sample_data):
    repo = SnapshotRepository(db)
    repo.save_data(sample_data)
    db.commit()

    result = run_startup_rollover(db, today=date(2024, 3, 20))

    assert result.changes_made is True
    stored = repo.load_data()
    assert stored.cards[0].purchases[0].installments[1].paid is True
    assert stored.cards[0].purchases[0].paid_installments_count == 2
    assert repo.load_marker() == "2024-03-01"


def test_startup_rollover_runs_once_per_month(db: Session, sample_data):
    repo = SnapshotRepository(db)
    repo.save_data(sample_data)
    db.commit()

    run_startup_rollover(db, today=date(2024, 3, 20))
    second = run_startup_rollover(db, today=date(2024, 3, 25))

    assert second.changes_made is False
    assert repo.load_marker() == "2024-03-01"


def test_startup_rollover_without_changes_keeps_marker(db: Session):
    result = run_startup_rollover(db, today=date(2024, 3, 20))

    assert result.changes_made is False
    assert db.get(KeyValueEntry, MARKER_KEY) is None


@pytest.mark.parametrize(
    "month_year,due_date",
    [("2024-13", 5), ("garbage", 5), ("2024-02", 0)],
)
def test_startup_rollover_survives_corrupt_snapshot(db: Session, month_year, due_date):
    """A snapshot with a bad period key or due day loads as empty instead of failing startup"""
    snapshot = {
        "cards": [
            {
                "id": "c1",
                "name": "Nubank",
                "dueDate": due_date,
                "purchases": [
                    {
                        "id": "p1",
                        "purchaseDate": "2024-01-15",
                        "store": "Loja",
                        "item": "100",
                        "totalInstallments": 1,
                        "installments": [{"monthYear": month_year, "amount": "100", "paid": False}],
                    }
                ],
            }
        ]
    }
    db.add(KeyValueEntry(key=DATA_KEY, value=json.dumps(snapshot)))
    db.commit()

    result = run_startup_rollover(db, today=date(2024, 3, 20))

    assert result.changes_made is False
    assert SnapshotRepository(db).load_data() == FinancialData()
