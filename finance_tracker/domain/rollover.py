"""Month rollover - automatic accrual of card installments past their due date"""

from dataclasses import replace
from datetime import date
from typing import Optional

from finance_tracker.domain.models import Card, FinancialData, Purchase, RolloverResult
from finance_tracker.utils.date_utils import (
    first_day_of_month,
    local_today,
    period_due_date,
    year_month_day,
)


def _accrue_purchase(purchase: Purchase, card: Card, today: date) -> tuple[Purchase, int]:
    """Flip unpaid installments whose due date has passed. Returns (purchase, flips)."""
    if purchase.is_fully_paid:
        return purchase, 0

    paid_count = purchase.paid_installments_count
    flips = 0
    installments = list(purchase.installments)

    for index, inst in enumerate(purchase.installments):
        if paid_count >= purchase.total_installments:
            break
        if inst.paid:
            continue
        if period_due_date(inst.month_year, card.due_date) < today:
            installments[index] = replace(inst, paid=True)
            paid_count += 1
            flips += 1

    if not flips:
        return purchase, 0
    return replace(purchase, installments=tuple(installments)), flips


def process_month_rollover(
    data: FinancialData,
    last_processed_month: str,
    today: Optional[date] = None,
) -> RolloverResult:
    """
    Mark card installments as paid once their due date has passed.

    Runs at most once per calendar month, gated by the marker:
    - current month key = first day of today's month ("YYYY-MM-01")
    - marker >= current key (string compare) -> no-op
    - marker advances only when at least one installment was flipped

    Fixed expenses are never accrued automatically. Due days past the end of
    a month snap to its last day, so a card's due date in the previous month
    has always passed by the time today is in the current month; only the
    installment's own due date gates accrual.
    """
    today = today or local_today()
    current_month_key = year_month_day(first_day_of_month(today))

    if last_processed_month >= current_month_key:
        return RolloverResult(
            updated_data=data,
            new_last_processed_month=last_processed_month,
            changes_made=False,
        )

    total_flips = 0
    updated_cards = []
    for card in data.cards:
        updated_purchases = []
        for purchase in card.purchases:
            updated, flips = _accrue_purchase(purchase, card, today)
            total_flips += flips
            updated_purchases.append(updated)
        updated_cards.append(replace(card, purchases=tuple(updated_purchases)))

    if not total_flips:
        return RolloverResult(
            updated_data=data,
            new_last_processed_month=last_processed_month,
            changes_made=False,
        )

    return RolloverResult(
        updated_data=replace(data, cards=tuple(updated_cards)),
        new_last_processed_month=current_month_key,
        changes_made=True,
        installments_accrued=total_flips,
    )
