"""GET /v1/dashboard and GET /v1/report - derived totals and reports"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finance_tracker.api.dependencies import get_today
from finance_tracker.api.v1.schemas import (
    DashboardResponse,
    HistoryEntrySchema,
    PendingInstallmentSchema,
    ProjectionSchema,
    ReportResponse,
)
from finance_tracker.domain.aggregation import build_report, calculate_totals, summarize_cards
from finance_tracker.infrastructure.database.repositories import SnapshotRepository
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.utils.formatters import format_currency, format_month_year

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    reference_date: Optional[date] = Query(None, description="Defaults to today"),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """
    Totals for the reference month.

    Recomputed from the stored snapshot on every call.
    """
    data = SnapshotRepository(db).load_data()
    reference = reference_date or today
    return DashboardResponse.from_domain(
        calculate_totals(data, reference),
        summarize_cards(data, reference),
    )


@router.get("/report", response_model=ReportResponse)
def get_report(db: Session = Depends(get_db)):
    """
    Pending installments (oldest first), payment history (most recent
    first) and installment projections per month (ascending).
    """
    report = build_report(SnapshotRepository(db).load_data())
    return ReportResponse(
        pending_installments=[PendingInstallmentSchema.from_domain(p) for p in report.pending_installments],
        payment_history=[HistoryEntrySchema.from_domain(h) for h in report.payment_history],
        future_projections=[
            ProjectionSchema(
                month_year=period,
                month_label=format_month_year(period),
                amount=amount,
                amount_display=format_currency(amount),
            )
            for period, amount in report.future_projections.items()
        ],
    )
