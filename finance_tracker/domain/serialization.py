"""Snapshot serialization to and from the stored JSON document

Field names follow the stored format (camelCase). Amounts are written as
decimal strings; numeric JSON values are accepted on read.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from finance_tracker.domain.models import (
    Card,
    FinancialData,
    FixedExpense,
    Income,
    Installment,
    Purchase,
)
from finance_tracker.utils.date_utils import parse_period


def _amount(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def _period(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Invalid period key: {value!r}")
    parse_period(value)
    return value


def _due_day(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 31:
        raise ValueError(f"Due day must be between 1 and 31, got {value!r}")
    return value


def _paid(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Invalid paid flag: {value!r}")
    return value


def data_to_dict(data: FinancialData) -> Dict[str, Any]:
    return {
        "income": [
            {
                "id": i.id,
                "date": i.date.isoformat(),
                "description": i.description,
                "amount": str(i.amount),
            }
            for i in data.income
        ],
        "fixedExpenses": [
            {
                "id": e.id,
                "description": e.description,
                "amount": str(e.amount),
                "dueDate": e.due_date,
                "paidMonths": list(e.paid_months),
            }
            for e in data.fixed_expenses
        ],
        "cards": [
            {
                "id": c.id,
                "name": c.name,
                "dueDate": c.due_date,
                "purchases": [
                    {
                        "id": p.id,
                        "purchaseDate": p.purchase_date.isoformat(),
                        "store": p.store,
                        "item": p.item,
                        "totalInstallments": p.total_installments,
                        "paidInstallmentsCount": p.paid_installments_count,
                        "installments": [
                            {
                                "monthYear": inst.month_year,
                                "amount": str(inst.amount),
                                "paid": inst.paid,
                            }
                            for inst in p.installments
                        ],
                    }
                    for p in c.purchases
                ],
            }
            for c in data.cards
        ],
    }


def data_from_dict(raw: Dict[str, Any]) -> FinancialData:
    """
    Rebuild a snapshot from its stored document.

    A stored paidInstallmentsCount is ignored: the count is derived from the
    installment flags. Period keys, due days and paid flags are validated
    so a corrupt value is rejected here instead of failing later in the
    rollover or in report formatting.

    Raises:
        KeyError, TypeError, ValueError: On missing or malformed fields
    """
    if not isinstance(raw, dict):
        raise TypeError("Stored snapshot must be a JSON object")

    income = tuple(
        Income(
            id=str(i["id"]),
            date=date.fromisoformat(i["date"]),
            description=str(i["description"]),
            amount=_amount(i["amount"]),
        )
        for i in raw.get("income", [])
    )
    fixed_expenses = tuple(
        FixedExpense(
            id=str(e["id"]),
            description=str(e["description"]),
            amount=_amount(e["amount"]),
            due_date=_due_day(e["dueDate"]),
            paid_months=tuple(dict.fromkeys(_period(m) for m in e.get("paidMonths", []))),
        )
        for e in raw.get("fixedExpenses", [])
    )
    cards = tuple(
        Card(
            id=str(c["id"]),
            name=str(c["name"]),
            due_date=_due_day(c["dueDate"]),
            purchases=tuple(
                Purchase(
                    id=str(p["id"]),
                    purchase_date=date.fromisoformat(p["purchaseDate"]),
                    store=str(p["store"]),
                    item=str(p["item"]),
                    total_installments=int(p["totalInstallments"]),
                    installments=tuple(
                        Installment(
                            month_year=_period(inst["monthYear"]),
                            amount=_amount(inst["amount"]),
                            paid=_paid(inst["paid"]),
                        )
                        for inst in p.get("installments", [])
                    ),
                )
                for p in c.get("purchases", [])
            ),
        )
        for c in raw.get("cards", [])
    )
    return FinancialData(income=income, fixed_expenses=fixed_expenses, cards=cards)
