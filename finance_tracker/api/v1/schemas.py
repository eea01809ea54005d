"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from finance_tracker.domain.models import (
    Card,
    CardSummary,
    FixedExpense,
    HistoryEntry,
    Income,
    PendingInstallment,
    Purchase,
    Totals,
)
from finance_tracker.utils.formatters import format_currency, format_date, format_month_year


class IncomeRequest(BaseModel):
    """Request body for POST/PUT /v1/income"""

    date: date
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., allow_inf_nan=False)


class IncomeResponse(BaseModel):
    id: str
    date: date
    date_display: str
    description: str
    amount: Decimal

    @classmethod
    def from_domain(cls, income: Income) -> "IncomeResponse":
        return cls(
            id=income.id,
            date=income.date,
            date_display=format_date(income.date.isoformat()),
            description=income.description,
            amount=income.amount,
        )


class FixedExpenseRequest(BaseModel):
    """Request body for POST/PUT /v1/fixed-expenses"""

    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., allow_inf_nan=False)
    due_date: int = Field(..., ge=1, le=31, description="Day of month")


class FixedExpenseResponse(BaseModel):
    id: str
    description: str
    amount: Decimal
    due_date: int
    paid_months: List[str]

    @classmethod
    def from_domain(cls, expense: FixedExpense) -> "FixedExpenseResponse":
        return cls(
            id=expense.id,
            description=expense.description,
            amount=expense.amount,
            due_date=expense.due_date,
            paid_months=list(expense.paid_months),
        )


class CardRequest(BaseModel):
    """Request body for POST/PUT /v1/cards"""

    name: str = Field(..., min_length=1)
    due_date: int = Field(..., ge=1, le=31, description="Day of month")


class PurchaseRequest(BaseModel):
    """Request body for POST/PUT /v1/cards/{card_id}/purchases"""

    purchase_date: date
    store: str = Field(..., min_length=1)
    item: str = Field(..., min_length=1, description="Comma-separated amounts, e.g. 50.00,25.50")
    total_installments: int = Field(..., ge=1)


class InstallmentSchema(BaseModel):
    """Single installment in a purchase schedule"""

    month_year: str
    amount: Decimal
    paid: bool


class PurchaseResponse(BaseModel):
    id: str
    purchase_date: date
    purchase_date_display: str
    store: str
    item: str
    total_installments: int
    paid_installments_count: int
    total_amount: Decimal
    installments: List[InstallmentSchema]

    @classmethod
    def from_domain(cls, purchase: Purchase) -> "PurchaseResponse":
        return cls(
            id=purchase.id,
            purchase_date=purchase.purchase_date,
            purchase_date_display=format_date(purchase.purchase_date.isoformat()),
            store=purchase.store,
            item=purchase.item,
            total_installments=purchase.total_installments,
            paid_installments_count=purchase.paid_installments_count,
            total_amount=purchase.total_amount,
            installments=[
                InstallmentSchema(month_year=i.month_year, amount=i.amount, paid=i.paid)
                for i in purchase.installments
            ],
        )


class CardResponse(BaseModel):
    id: str
    name: str
    due_date: int
    purchases: List[PurchaseResponse]

    @classmethod
    def from_domain(cls, card: Card) -> "CardResponse":
        return cls(
            id=card.id,
            name=card.name,
            due_date=card.due_date,
            purchases=[PurchaseResponse.from_domain(p) for p in card.purchases],
        )


class CardSummarySchema(BaseModel):
    card_id: str
    card_name: str
    due_date: int
    pending_this_month: Decimal
    paid_this_month: Decimal
    open_purchases: int

    @classmethod
    def from_domain(cls, summary: CardSummary) -> "CardSummarySchema":
        return cls(
            card_id=summary.card_id,
            card_name=summary.card_name,
            due_date=summary.due_date,
            pending_this_month=summary.pending_this_month,
            paid_this_month=summary.paid_this_month,
            open_purchases=summary.open_purchases,
        )


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    period: str
    total_income: Decimal
    total_paid_fixed_expenses_this_month: Decimal
    total_paid_card_expenses_this_month: Decimal
    total_paid_this_month: Decimal
    total_paid_expenses: Decimal
    balance: Decimal
    to_pay_this_month: Decimal
    cards: List[CardSummarySchema]

    @classmethod
    def from_domain(cls, totals: Totals, cards: List[CardSummary]) -> "DashboardResponse":
        return cls(
            period=totals.period,
            total_income=totals.total_income,
            total_paid_fixed_expenses_this_month=totals.total_paid_fixed_expenses_this_month,
            total_paid_card_expenses_this_month=totals.total_paid_card_expenses_this_month,
            total_paid_this_month=totals.total_paid_this_month,
            total_paid_expenses=totals.total_paid_expenses,
            balance=totals.balance,
            to_pay_this_month=totals.to_pay_this_month,
            cards=[CardSummarySchema.from_domain(c) for c in cards],
        )


class PendingInstallmentSchema(BaseModel):
    card_name: str
    purchase_item: str
    month_year: str
    month_label: str
    amount: Decimal
    amount_display: str

    @classmethod
    def from_domain(cls, pending: PendingInstallment) -> "PendingInstallmentSchema":
        return cls(
            card_name=pending.card_name,
            purchase_item=pending.purchase_item,
            month_year=pending.month_year,
            month_label=format_month_year(pending.month_year),
            amount=pending.amount,
            amount_display=format_currency(pending.amount),
        )


class HistoryEntrySchema(BaseModel):
    type: str
    description: str
    period: str
    month_label: str
    amount: Decimal
    amount_display: str

    @classmethod
    def from_domain(cls, entry: HistoryEntry) -> "HistoryEntrySchema":
        return cls(
            type=entry.type,
            description=entry.description,
            period=entry.period,
            month_label=format_month_year(entry.period),
            amount=entry.amount,
            amount_display=format_currency(entry.amount),
        )


class ProjectionSchema(BaseModel):
    month_year: str
    month_label: str
    amount: Decimal
    amount_display: str


class ReportResponse(BaseModel):
    """Response for GET /v1/report"""

    pending_installments: List[PendingInstallmentSchema]
    payment_history: List[HistoryEntrySchema]
    future_projections: List[ProjectionSchema]


class AdviceRequest(BaseModel):
    """Request body for POST /v1/advice"""

    question: str = Field(..., min_length=1, max_length=2000)
