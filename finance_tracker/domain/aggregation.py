"""Aggregation engine - totals and reports derived from the snapshot

Every function is pure: it reads the snapshot and the reference date and
recomputes from scratch on each call.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from finance_tracker.domain.models import (
    CardSummary,
    FinancialData,
    HistoryEntry,
    Installment,
    PendingInstallment,
    Report,
    Totals,
)
from finance_tracker.utils.date_utils import local_today, year_month

ZERO = Decimal("0")

FIXED_EXPENSE = "fixed_expense"
CARD_INSTALLMENT = "card_installment"


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def _all_installments(data: FinancialData) -> List[Installment]:
    return [
        inst
        for card in data.cards
        for purchase in card.purchases
        for inst in purchase.installments
    ]


def calculate_totals(data: FinancialData, reference_date: Optional[date] = None) -> Totals:
    """
    Dashboard totals for the reference date's period.

    - Income and all-time paid expenses are unconditioned by date
    - "This month" figures only look at the reference period key
    - Fixed expenses count once per paid month
    """
    period = year_month(reference_date or local_today())
    installments = _all_installments(data)

    total_income = _sum(i.amount for i in data.income)

    paid_fixed_this_month = _sum(
        e.amount for e in data.fixed_expenses if period in e.paid_months
    )
    paid_cards_this_month = _sum(
        i.amount for i in installments if i.month_year == period and i.paid
    )

    total_paid_expenses = _sum(
        e.amount * len(e.paid_months) for e in data.fixed_expenses
    ) + _sum(i.amount for i in installments if i.paid)

    to_pay_this_month = _sum(
        e.amount for e in data.fixed_expenses if period not in e.paid_months
    ) + _sum(i.amount for i in installments if i.month_year == period and not i.paid)

    return Totals(
        period=period,
        total_income=total_income,
        total_paid_fixed_expenses_this_month=paid_fixed_this_month,
        total_paid_card_expenses_this_month=paid_cards_this_month,
        total_paid_this_month=paid_fixed_this_month + paid_cards_this_month,
        total_paid_expenses=total_paid_expenses,
        balance=total_income - total_paid_expenses,
        to_pay_this_month=to_pay_this_month,
    )


def summarize_cards(data: FinancialData, reference_date: Optional[date] = None) -> List[CardSummary]:
    """Per-card pending and paid amounts for the reference period"""
    period = year_month(reference_date or local_today())
    summaries = []
    for card in data.cards:
        current = [
            inst
            for purchase in card.purchases
            for inst in purchase.installments
            if inst.month_year == period
        ]
        summaries.append(
            CardSummary(
                card_id=card.id,
                card_name=card.name,
                due_date=card.due_date,
                pending_this_month=_sum(i.amount for i in current if not i.paid),
                paid_this_month=_sum(i.amount for i in current if i.paid),
                open_purchases=sum(1 for p in card.purchases if not p.is_fully_paid),
            )
        )
    return summaries


def pending_installments(data: FinancialData) -> List[PendingInstallment]:
    """All unpaid installments, past and future, oldest period first"""
    pending = [
        PendingInstallment(
            card_name=card.name,
            purchase_item=purchase.item,
            month_year=inst.month_year,
            amount=inst.amount,
        )
        for card in data.cards
        for purchase in card.purchases
        for inst in purchase.installments
        if not inst.paid
    ]
    return sorted(pending, key=lambda p: p.month_year)


def payment_history(data: FinancialData) -> List[HistoryEntry]:
    """Paid fixed-expense months and paid installments, most recent period first"""
    history = [
        HistoryEntry(
            type=FIXED_EXPENSE,
            description=expense.description,
            period=month,
            amount=expense.amount,
        )
        for expense in data.fixed_expenses
        for month in expense.paid_months
    ]
    history.extend(
        HistoryEntry(
            type=CARD_INSTALLMENT,
            description=f"{card.name} - {purchase.item}",
            period=inst.month_year,
            amount=inst.amount,
        )
        for card in data.cards
        for purchase in card.purchases
        for inst in purchase.installments
        if inst.paid
    )
    return sorted(history, key=lambda h: h.period, reverse=True)


def future_projections(data: FinancialData) -> Dict[str, Decimal]:
    """Installment total per period regardless of paid status, ascending by period"""
    projections: Dict[str, Decimal] = {}
    for inst in _all_installments(data):
        projections[inst.month_year] = projections.get(inst.month_year, ZERO) + inst.amount
    return dict(sorted(projections.items()))


def build_report(data: FinancialData) -> Report:
    return Report(
        pending_installments=tuple(pending_installments(data)),
        payment_history=tuple(payment_history(data)),
        future_projections=future_projections(data),
    )
