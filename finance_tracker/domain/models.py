"""Domain models - pure Python dataclasses representing the financial snapshot

Every model is frozen: mutations build new values with ``dataclasses.replace``
so the whole snapshot can be swapped in a single assignment.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Tuple


@dataclass(frozen=True)
class Income:
    """Money received on a given day"""

    id: str
    date: date
    description: str
    amount: Decimal


@dataclass(frozen=True)
class FixedExpense:
    """Recurring monthly expense, paid per period key"""

    id: str
    description: str
    amount: Decimal
    due_date: int  # day of month, 1-31
    paid_months: Tuple[str, ...] = ()  # "YYYY-MM" keys, no duplicates


@dataclass(frozen=True)
class Installment:
    """Single monthly fraction of a card purchase"""

    month_year: str  # "YYYY-MM"
    amount: Decimal
    paid: bool = False


@dataclass(frozen=True)
class Purchase:
    """Credit card purchase split into monthly installments"""

    id: str
    purchase_date: date
    store: str
    item: str  # comma-separated sub-amounts, e.g. "50.00,25.50"
    total_installments: int
    installments: Tuple[Installment, ...] = ()

    @property
    def paid_installments_count(self) -> int:
        """Derived from the installment flags, never stored independently"""
        return sum(1 for inst in self.installments if inst.paid)

    @property
    def is_fully_paid(self) -> bool:
        return self.paid_installments_count >= self.total_installments

    @property
    def total_amount(self) -> Decimal:
        return sum((inst.amount for inst in self.installments), Decimal("0"))


@dataclass(frozen=True)
class Card:
    """Credit card owning its purchases"""

    id: str
    name: str
    due_date: int  # day of month, 1-31
    purchases: Tuple[Purchase, ...] = ()


@dataclass(frozen=True)
class FinancialData:
    """Root aggregate - the entire persisted snapshot"""

    income: Tuple[Income, ...] = ()
    fixed_expenses: Tuple[FixedExpense, ...] = ()
    cards: Tuple[Card, ...] = ()


@dataclass(frozen=True)
class RolloverResult:
    """Output of the month rollover"""

    updated_data: FinancialData
    new_last_processed_month: str
    changes_made: bool
    installments_accrued: int = 0


@dataclass(frozen=True)
class Totals:
    """Dashboard totals for one reference period"""

    period: str
    total_income: Decimal
    total_paid_fixed_expenses_this_month: Decimal
    total_paid_card_expenses_this_month: Decimal
    total_paid_this_month: Decimal
    total_paid_expenses: Decimal
    balance: Decimal
    to_pay_this_month: Decimal


@dataclass(frozen=True)
class CardSummary:
    """Per-card amounts for the reference period"""

    card_id: str
    card_name: str
    due_date: int
    pending_this_month: Decimal
    paid_this_month: Decimal
    open_purchases: int


@dataclass(frozen=True)
class PendingInstallment:
    """Unpaid installment flattened for reporting"""

    card_name: str
    purchase_item: str
    month_year: str
    amount: Decimal


@dataclass(frozen=True)
class HistoryEntry:
    """Paid fixed-expense month or paid installment"""

    type: str  # "fixed_expense" | "card_installment"
    description: str
    period: str
    amount: Decimal


@dataclass(frozen=True)
class Report:
    """Full report over the whole snapshot"""

    pending_installments: Tuple[PendingInstallment, ...]
    payment_history: Tuple[HistoryEntry, ...]
    future_projections: Dict[str, Decimal] = field(default_factory=dict)
