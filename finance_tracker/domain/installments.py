"""Installment schedule generation for card purchases"""

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import List

from finance_tracker.domain.exceptions import InvalidPurchaseError
from finance_tracker.domain.models import Installment
from finance_tracker.utils.date_utils import add_months, year_month

CENT = Decimal("0.01")


def parse_item_amounts(item: str) -> List[Decimal]:
    """
    Parse the comma-separated sub-amounts of a purchase item.

    "50.00,25.50" -> [Decimal("50.00"), Decimal("25.50")]

    Raises:
        InvalidPurchaseError: On empty, unparsable, non-finite or negative parts
    """
    if not item or not item.strip():
        raise InvalidPurchaseError("Purchase item must contain at least one amount")

    amounts = []
    for raw in item.split(","):
        part = raw.strip()
        try:
            amount = Decimal(part)
        except InvalidOperation as e:
            raise InvalidPurchaseError(f"Invalid amount in purchase item: {part!r}") from e
        if not amount.is_finite() or amount < 0:
            raise InvalidPurchaseError(f"Invalid amount in purchase item: {part!r}")
        amounts.append(amount)
    return amounts


def item_total(item: str) -> Decimal:
    return sum(parse_item_amounts(item), Decimal("0"))


def generate_installments(
    item: str,
    total_installments: int,
    purchase_date: date,
) -> List[Installment]:
    """
    Generate monthly installments for a card purchase.

    Requirements:
    - Installment i falls in the month of purchase_date + (i + 1) months
    - Equal cent amounts; the last installment absorbs the rounding remainder
    - All installments start unpaid

    Example:
        "100,50" over 3 from 2024-01-15 -> 50.00 in 2024-02, 2024-03, 2024-04
        "100" over 3 -> [33.33, 33.33, 33.34]
    """
    if isinstance(total_installments, bool) or not isinstance(total_installments, int):
        raise InvalidPurchaseError("Installment count must be an integer")
    if total_installments < 1:
        raise InvalidPurchaseError("Installment count must be at least 1")

    total = item_total(item).quantize(CENT)
    if total <= 0:
        raise InvalidPurchaseError("Purchase total must be greater than zero")

    base_amount = (total / total_installments).quantize(CENT, rounding=ROUND_DOWN)
    remainder = total - base_amount * total_installments

    installments = []
    for i in range(total_installments):
        # Last installment absorbs remainder to ensure exact total
        amount = base_amount + (remainder if i == total_installments - 1 else Decimal("0"))
        installments.append(
            Installment(
                month_year=year_month(add_months(purchase_date, i + 1)),
                amount=amount,
                paid=False,
            )
        )

    return installments


def carry_over_paid(installments: List[Installment], previously_paid: int) -> List[Installment]:
    """
    Mark the earliest installments of a regenerated schedule as paid.

    Used when a purchase is edited: the number of installments already paid
    survives the edit and the paid flags stay consistent with that count.
    """
    paid = min(max(previously_paid, 0), len(installments))
    return [
        Installment(month_year=inst.month_year, amount=inst.amount, paid=index < paid)
        for index, inst in enumerate(installments)
    ]
