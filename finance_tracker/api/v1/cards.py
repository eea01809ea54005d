"""/v1/cards - credit cards, their purchases and installments"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from finance_tracker.api.dependencies import get_request_id
from finance_tracker.api.v1.schemas import (
    CardRequest,
    CardResponse,
    PurchaseRequest,
    PurchaseResponse,
)
from finance_tracker.api.v1.snapshot import apply_mutation
from finance_tracker.domain import ledger
from finance_tracker.infrastructure.database.repositories import SnapshotRepository
from finance_tracker.infrastructure.database.session import get_db

router = APIRouter()


@router.get("/cards", response_model=List[CardResponse])
def list_cards(db: Session = Depends(get_db)):
    data = SnapshotRepository(db).load_data()
    return [CardResponse.from_domain(c) for c in data.cards]


@router.post("/cards", response_model=CardResponse, status_code=201)
def create_card(body: CardRequest, request: Request, db: Session = Depends(get_db)):
    data = apply_mutation(
        db,
        get_request_id(request),
        "add_card",
        lambda d: ledger.add_card(d, name=body.name, due_date=body.due_date),
    )
    return CardResponse.from_domain(data.cards[-1])


@router.put("/cards/{card_id}", response_model=CardResponse)
def edit_card(card_id: str, body: CardRequest, request: Request, db: Session = Depends(get_db)):
    data = apply_mutation(
        db,
        get_request_id(request),
        "update_card",
        lambda d: ledger.update_card(d, card_id, name=body.name, due_date=body.due_date),
        card_id,
    )
    return CardResponse.from_domain(ledger.find_card(data, card_id))


@router.delete("/cards/{card_id}", status_code=204)
def remove_card(card_id: str, request: Request, db: Session = Depends(get_db)):
    """Delete a card and every purchase on it"""
    apply_mutation(
        db,
        get_request_id(request),
        "delete_card",
        lambda d: ledger.delete_card(d, card_id),
        card_id,
    )
    return Response(status_code=204)


@router.post("/cards/{card_id}/purchases", response_model=PurchaseResponse, status_code=201)
def create_purchase(card_id: str, body: PurchaseRequest, request: Request, db: Session = Depends(get_db)):
    """
    Add a purchase; the installment schedule is generated from the item
    amounts, installment count and purchase date.
    """
    data = apply_mutation(
        db,
        get_request_id(request),
        "add_purchase",
        lambda d: ledger.add_purchase(
            d,
            card_id,
            purchase_date=body.purchase_date,
            store=body.store,
            item=body.item,
            total_installments=body.total_installments,
        ),
        card_id,
    )
    return PurchaseResponse.from_domain(ledger.find_card(data, card_id).purchases[-1])


@router.put("/cards/{card_id}/purchases/{purchase_id}", response_model=PurchaseResponse)
def edit_purchase(
    card_id: str,
    purchase_id: str,
    body: PurchaseRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    data = apply_mutation(
        db,
        get_request_id(request),
        "update_purchase",
        lambda d: ledger.update_purchase(
            d,
            card_id,
            purchase_id,
            purchase_date=body.purchase_date,
            store=body.store,
            item=body.item,
            total_installments=body.total_installments,
        ),
        purchase_id,
    )
    return PurchaseResponse.from_domain(ledger.find_purchase(ledger.find_card(data, card_id), purchase_id))


@router.delete("/cards/{card_id}/purchases/{purchase_id}", status_code=204)
def remove_purchase(card_id: str, purchase_id: str, request: Request, db: Session = Depends(get_db)):
    apply_mutation(
        db,
        get_request_id(request),
        "delete_purchase",
        lambda d: ledger.delete_purchase(d, card_id, purchase_id),
        purchase_id,
    )
    return Response(status_code=204)


@router.post(
    "/cards/{card_id}/purchases/{purchase_id}/installments/{month_year}/toggle",
    response_model=PurchaseResponse,
)
def toggle_installment(
    card_id: str,
    purchase_id: str,
    month_year: str,
    request: Request,
    db: Session = Depends(get_db),
):
    data = apply_mutation(
        db,
        get_request_id(request),
        "toggle_installment_paid",
        lambda d: ledger.toggle_installment_paid(d, card_id, purchase_id, month_year),
        purchase_id,
    )
    return PurchaseResponse.from_domain(ledger.find_purchase(ledger.find_card(data, card_id), purchase_id))
