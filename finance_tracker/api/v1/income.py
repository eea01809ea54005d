"""/v1/income - income entries"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from finance_tracker.api.dependencies import get_request_id
from finance_tracker.api.v1.schemas import IncomeRequest, IncomeResponse
from finance_tracker.api.v1.snapshot import apply_mutation
from finance_tracker.domain import ledger
from finance_tracker.infrastructure.database.repositories import SnapshotRepository
from finance_tracker.infrastructure.database.session import get_db

router = APIRouter()


@router.get("/income", response_model=List[IncomeResponse])
def list_income(db: Session = Depends(get_db)):
    data = SnapshotRepository(db).load_data()
    return [IncomeResponse.from_domain(i) for i in data.income]


@router.post("/income", response_model=IncomeResponse, status_code=201)
def create_income(body: IncomeRequest, request: Request, db: Session = Depends(get_db)):
    data = apply_mutation(
        db,
        get_request_id(request),
        "add_income",
        lambda d: ledger.add_income(d, date=body.date, description=body.description, amount=body.amount),
    )
    return IncomeResponse.from_domain(data.income[-1])


@router.put("/income/{income_id}", response_model=IncomeResponse)
def edit_income(income_id: str, body: IncomeRequest, request: Request, db: Session = Depends(get_db)):
    data = apply_mutation(
        db,
        get_request_id(request),
        "update_income",
        lambda d: ledger.update_income(
            d, income_id, date=body.date, description=body.description, amount=body.amount
        ),
        income_id,
    )
    return IncomeResponse.from_domain(next(i for i in data.income if i.id == income_id))


@router.delete("/income/{income_id}", status_code=204)
def remove_income(income_id: str, request: Request, db: Session = Depends(get_db)):
    apply_mutation(
        db,
        get_request_id(request),
        "delete_income",
        lambda d: ledger.delete_income(d, income_id),
        income_id,
    )
    return Response(status_code=204)
