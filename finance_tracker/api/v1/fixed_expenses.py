"""/v1/fixed-expenses - recurring monthly expenses"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from finance_tracker.api.dependencies import get_request_id, get_today
from finance_tracker.api.v1.schemas import FixedExpenseRequest, FixedExpenseResponse
from finance_tracker.api.v1.snapshot import apply_mutation
from finance_tracker.domain import ledger
from finance_tracker.infrastructure.database.repositories import SnapshotRepository
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.utils.date_utils import year_month

router = APIRouter()


def _find(data, expense_id: str) -> FixedExpenseResponse:
    return FixedExpenseResponse.from_domain(next(e for e in data.fixed_expenses if e.id == expense_id))


@router.get("/fixed-expenses", response_model=List[FixedExpenseResponse])
def list_fixed_expenses(db: Session = Depends(get_db)):
    data = SnapshotRepository(db).load_data()
    return [FixedExpenseResponse.from_domain(e) for e in data.fixed_expenses]


@router.post("/fixed-expenses", response_model=FixedExpenseResponse, status_code=201)
def create_fixed_expense(body: FixedExpenseRequest, request: Request, db: Session = Depends(get_db)):
    data = apply_mutation(
        db,
        get_request_id(request),
        "add_fixed_expense",
        lambda d: ledger.add_fixed_expense(
            d, description=body.description, amount=body.amount, due_date=body.due_date
        ),
    )
    return FixedExpenseResponse.from_domain(data.fixed_expenses[-1])


@router.put("/fixed-expenses/{expense_id}", response_model=FixedExpenseResponse)
def edit_fixed_expense(
    expense_id: str,
    body: FixedExpenseRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    data = apply_mutation(
        db,
        get_request_id(request),
        "update_fixed_expense",
        lambda d: ledger.update_fixed_expense(
            d, expense_id, description=body.description, amount=body.amount, due_date=body.due_date
        ),
        expense_id,
    )
    return _find(data, expense_id)


@router.delete("/fixed-expenses/{expense_id}", status_code=204)
def remove_fixed_expense(expense_id: str, request: Request, db: Session = Depends(get_db)):
    apply_mutation(
        db,
        get_request_id(request),
        "delete_fixed_expense",
        lambda d: ledger.delete_fixed_expense(d, expense_id),
        expense_id,
    )
    return Response(status_code=204)


@router.post("/fixed-expenses/{expense_id}/toggle", response_model=FixedExpenseResponse)
def toggle_fixed_expense(
    expense_id: str,
    request: Request,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Mark the expense paid (or unpaid again) for the current month"""
    target = year_month(today)
    data = apply_mutation(
        db,
        get_request_id(request),
        "toggle_fixed_expense_paid",
        lambda d: ledger.toggle_fixed_expense_paid(d, expense_id, target),
        expense_id,
    )
    return _find(data, expense_id)
