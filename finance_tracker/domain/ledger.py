"""Ledger operations - every mutation returns a new FinancialData snapshot

The input snapshot is never modified. Generated fields (ids, paid months,
installment schedules) are assigned here, never taken from callers.
"""

import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Tuple, TypeVar

from finance_tracker.domain.exceptions import EntityNotFoundError, InvalidEntryError
from finance_tracker.domain.installments import carry_over_paid, generate_installments
from finance_tracker.domain.models import (
    Card,
    FinancialData,
    FixedExpense,
    Income,
    Purchase,
)
from finance_tracker.utils.date_utils import parse_period

T = TypeVar("T")


def _new_id() -> str:
    return str(uuid.uuid4())


def _check_amount(amount: Decimal) -> Decimal:
    if not isinstance(amount, Decimal) or not amount.is_finite():
        raise InvalidEntryError(f"Invalid amount: {amount!r}")
    return amount


def _check_day(day: int) -> int:
    if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 31:
        raise InvalidEntryError(f"Due day must be between 1 and 31, got {day!r}")
    return day


def _replace_by_id(
    items: Tuple[T, ...],
    item_id: str,
    update: Callable[[T], T],
    kind: str,
) -> Tuple[T, ...]:
    found = False
    updated = []
    for item in items:
        if item.id == item_id:
            found = True
            item = update(item)
        updated.append(item)
    if not found:
        raise EntityNotFoundError(f"{kind} not found: {item_id}")
    return tuple(updated)


def _remove_by_id(items: Tuple[T, ...], item_id: str, kind: str) -> Tuple[T, ...]:
    remaining = tuple(item for item in items if item.id != item_id)
    if len(remaining) == len(items):
        raise EntityNotFoundError(f"{kind} not found: {item_id}")
    return remaining


def find_card(data: FinancialData, card_id: str) -> Card:
    for card in data.cards:
        if card.id == card_id:
            return card
    raise EntityNotFoundError(f"Card not found: {card_id}")


def find_purchase(card: Card, purchase_id: str) -> Purchase:
    for purchase in card.purchases:
        if purchase.id == purchase_id:
            return purchase
    raise EntityNotFoundError(f"Purchase not found: {purchase_id}")


# Income


def add_income(data: FinancialData, *, date: date, description: str, amount: Decimal) -> FinancialData:
    income = Income(id=_new_id(), date=date, description=description, amount=_check_amount(amount))
    return replace(data, income=data.income + (income,))


def update_income(
    data: FinancialData,
    income_id: str,
    *,
    date: date,
    description: str,
    amount: Decimal,
) -> FinancialData:
    _check_amount(amount)
    income = _replace_by_id(
        data.income,
        income_id,
        lambda i: replace(i, date=date, description=description, amount=amount),
        "Income",
    )
    return replace(data, income=income)


def delete_income(data: FinancialData, income_id: str) -> FinancialData:
    return replace(data, income=_remove_by_id(data.income, income_id, "Income"))


# Fixed expenses


def add_fixed_expense(
    data: FinancialData,
    *,
    description: str,
    amount: Decimal,
    due_date: int,
) -> FinancialData:
    expense = FixedExpense(
        id=_new_id(),
        description=description,
        amount=_check_amount(amount),
        due_date=_check_day(due_date),
        paid_months=(),
    )
    return replace(data, fixed_expenses=data.fixed_expenses + (expense,))


def update_fixed_expense(
    data: FinancialData,
    expense_id: str,
    *,
    description: str,
    amount: Decimal,
    due_date: int,
) -> FinancialData:
    """Update editable fields; paid months are kept"""
    _check_amount(amount)
    _check_day(due_date)
    expenses = _replace_by_id(
        data.fixed_expenses,
        expense_id,
        lambda e: replace(e, description=description, amount=amount, due_date=due_date),
        "Fixed expense",
    )
    return replace(data, fixed_expenses=expenses)


def delete_fixed_expense(data: FinancialData, expense_id: str) -> FinancialData:
    return replace(
        data,
        fixed_expenses=_remove_by_id(data.fixed_expenses, expense_id, "Fixed expense"),
    )


def toggle_fixed_expense_paid(data: FinancialData, expense_id: str, period: str) -> FinancialData:
    """Add the period to paid months, or remove it if already there"""
    parse_period(period)

    def toggle(expense: FixedExpense) -> FixedExpense:
        if period in expense.paid_months:
            months = tuple(m for m in expense.paid_months if m != period)
        else:
            months = expense.paid_months + (period,)
        return replace(expense, paid_months=months)

    expenses = _replace_by_id(data.fixed_expenses, expense_id, toggle, "Fixed expense")
    return replace(data, fixed_expenses=expenses)


# Cards


def add_card(data: FinancialData, *, name: str, due_date: int) -> FinancialData:
    card = Card(id=_new_id(), name=name, due_date=_check_day(due_date), purchases=())
    return replace(data, cards=data.cards + (card,))


def update_card(data: FinancialData, card_id: str, *, name: str, due_date: int) -> FinancialData:
    _check_day(due_date)
    cards = _replace_by_id(
        data.cards,
        card_id,
        lambda c: replace(c, name=name, due_date=due_date),
        "Card",
    )
    return replace(data, cards=cards)


def delete_card(data: FinancialData, card_id: str) -> FinancialData:
    """Remove a card together with all of its purchases"""
    return replace(data, cards=_remove_by_id(data.cards, card_id, "Card"))


# Purchases


def _update_card_purchases(
    data: FinancialData,
    card_id: str,
    update: Callable[[Tuple[Purchase, ...]], Tuple[Purchase, ...]],
) -> FinancialData:
    cards = _replace_by_id(
        data.cards,
        card_id,
        lambda c: replace(c, purchases=update(c.purchases)),
        "Card",
    )
    return replace(data, cards=cards)


def add_purchase(
    data: FinancialData,
    card_id: str,
    *,
    purchase_date: date,
    store: str,
    item: str,
    total_installments: int,
) -> FinancialData:
    """
    Add a purchase with a freshly generated installment schedule.

    Raises:
        InvalidPurchaseError: Before anything is built if the item or count is invalid
        EntityNotFoundError: Unknown card
    """
    installments = generate_installments(item, total_installments, purchase_date)
    purchase = Purchase(
        id=_new_id(),
        purchase_date=purchase_date,
        store=store,
        item=item,
        total_installments=total_installments,
        installments=tuple(installments),
    )
    return _update_card_purchases(data, card_id, lambda purchases: purchases + (purchase,))


def update_purchase(
    data: FinancialData,
    card_id: str,
    purchase_id: str,
    *,
    purchase_date: date,
    store: str,
    item: str,
    total_installments: int,
) -> FinancialData:
    """
    Regenerate the schedule from the new fields.

    The number of installments already paid carries over to the earliest
    installments of the new schedule (capped at the new total).
    """
    installments = generate_installments(item, total_installments, purchase_date)

    def rebuild(purchase: Purchase) -> Purchase:
        return replace(
            purchase,
            purchase_date=purchase_date,
            store=store,
            item=item,
            total_installments=total_installments,
            installments=tuple(carry_over_paid(installments, purchase.paid_installments_count)),
        )

    return _update_card_purchases(
        data,
        card_id,
        lambda purchases: _replace_by_id(purchases, purchase_id, rebuild, "Purchase"),
    )


def delete_purchase(data: FinancialData, card_id: str, purchase_id: str) -> FinancialData:
    return _update_card_purchases(
        data,
        card_id,
        lambda purchases: _remove_by_id(purchases, purchase_id, "Purchase"),
    )


def toggle_installment_paid(
    data: FinancialData,
    card_id: str,
    purchase_id: str,
    month_year: str,
) -> FinancialData:
    """Flip the paid flag of the installment in the given period"""
    parse_period(month_year)

    def toggle(purchase: Purchase) -> Purchase:
        if not any(inst.month_year == month_year for inst in purchase.installments):
            raise EntityNotFoundError(f"Installment not found: {purchase_id} {month_year}")
        return replace(
            purchase,
            installments=tuple(
                replace(inst, paid=not inst.paid) if inst.month_year == month_year else inst
                for inst in purchase.installments
            ),
        )

    return _update_card_purchases(
        data,
        card_id,
        lambda purchases: _replace_by_id(purchases, purchase_id, toggle, "Purchase"),
    )
