"""Unit tests for totals and reports"""

from datetime import date
from decimal import Decimal
from finance_tracker.domain.aggregation import (
    CARD_INSTALLMENT,
    FIXED_EXPENSE,
    build_report,
    calculate_totals,
    future_projections,
    payment_history,
    pending_installments,
    summarize_cards,
)
from finance_tracker.domain.models import FinancialData, FixedExpense, Income

MARCH = date(2024, 3, 15)


def test_calculate_totals_income_and_paid_fixed_expense():
    """Test balance with one income and one fixed expense paid this month"""
    data = FinancialData(
        income=(Income(id="i", date=date(2024, 3, 1), description="Salary", amount=Decimal("1000")),),
        fixed_expenses=(
            FixedExpense(id="f", description="Rent", amount=Decimal("200"), due_date=10, paid_months=("2024-03",)),
        ),
    )

    totals = calculate_totals(data, MARCH)

    assert totals.period == "2024-03"
    assert totals.total_income == Decimal("1000")
    assert totals.total_paid_fixed_expenses_this_month == Decimal("200")
    assert totals.balance == Decimal("800")
    assert totals.to_pay_this_month == Decimal("0")


def test_calculate_totals_sample(sample_data):
    totals = calculate_totals(sample_data, MARCH)

    assert totals.total_income == Decimal("3000.00")
    assert totals.total_paid_fixed_expenses_this_month == Decimal("1200.00")
    assert totals.total_paid_card_expenses_this_month == Decimal("0")
    assert totals.total_paid_this_month == Decimal("1200.00")
    # Rent twice, internet once, February installment
    assert totals.total_paid_expenses == Decimal("2550.00")
    assert totals.balance == Decimal("450.00")
    # Internet not paid for March + open March installment
    assert totals.to_pay_this_month == Decimal("150.00")


def test_calculate_totals_paid_installment_this_month(sample_data):
    totals = calculate_totals(sample_data, date(2024, 2, 20))

    assert totals.total_paid_card_expenses_this_month == Decimal("50.00")
    assert totals.total_paid_fixed_expenses_this_month == Decimal("1300.00")
    assert totals.total_paid_this_month == Decimal("1350.00")
    assert totals.to_pay_this_month == Decimal("0")


def test_calculate_totals_empty_dataset():
    totals = calculate_totals(FinancialData(), MARCH)

    assert totals.total_income == 0
    assert totals.total_paid_expenses == 0
    assert totals.balance == 0
    assert totals.to_pay_this_month == 0
    assert totals.total_paid_this_month == 0


def test_summarize_cards(sample_data):
    summaries = summarize_cards(sample_data, MARCH)

    assert len(summaries) == 1
    assert summaries[0].card_name == "Nubank"
    assert summaries[0].pending_this_month == Decimal("50.00")
    assert summaries[0].paid_this_month == Decimal("0")
    assert summaries[0].open_purchases == 1


def test_pending_installments_sorted_ascending(sample_data):
    pending = pending_installments(sample_data)

    assert [p.month_year for p in pending] == ["2024-03", "2024-04"]
    assert pending[0].card_name == "Nubank"
    assert pending[0].purchase_item == "100,50"


def test_payment_history_sorted_descending(sample_data):
    history = payment_history(sample_data)

    periods = [h.period for h in history]
    assert periods == sorted(periods, reverse=True)
    assert len(history) == 4
    assert history[0].type == FIXED_EXPENSE
    assert history[0].period == "2024-03"
    installment_entries = [h for h in history if h.type == CARD_INSTALLMENT]
    assert len(installment_entries) == 1
    assert installment_entries[0].description == "Nubank - 100,50"
    assert installment_entries[0].period == "2024-02"


def test_future_projections_include_paid_and_unpaid(sample_data):
    projections = future_projections(sample_data)

    assert list(projections) == ["2024-02", "2024-03", "2024-04"]
    assert all(amount == Decimal("50.00") for amount in projections.values())


def test_build_report_empty_dataset():
    report = build_report(FinancialData())

    assert report.pending_installments == ()
    assert report.payment_history == ()
    assert report.future_projections == {}
