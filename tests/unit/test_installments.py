"""Unit tests for installment schedule generation"""

import pytest
from datetime import date
from decimal import Decimal
from finance_tracker.domain.exceptions import InvalidPurchaseError
from finance_tracker.domain.installments import (
    carry_over_paid,
    generate_installments,
    parse_item_amounts,
)


def test_generate_installments_sums_item_amounts():
    """Test "100,50" over 3 from 2024-01-15"""
    installments = generate_installments("100,50", 3, date(2024, 1, 15))

    assert len(installments) == 3
    assert all(inst.amount == Decimal("50.00") for inst in installments)
    assert [inst.month_year for inst in installments] == ["2024-02", "2024-03", "2024-04"]
    assert all(inst.paid is False for inst in installments)


def test_generate_installments_rounding():
    """Test last installment absorbs remainder"""
    installments = generate_installments("100", 3, date(2024, 1, 15))

    assert [inst.amount for inst in installments] == [
        Decimal("33.33"),
        Decimal("33.33"),
        Decimal("33.34"),
    ]
    assert sum(inst.amount for inst in installments) == Decimal("100.00")


def test_generate_installments_single():
    installments = generate_installments("89.90", 1, date(2024, 6, 3))

    assert len(installments) == 1
    assert installments[0].amount == Decimal("89.90")
    assert installments[0].month_year == "2024-07"


def test_generate_installments_month_end_purchase():
    """Test a purchase on the 31st still yields consecutive months"""
    installments = generate_installments("120", 4, date(2024, 1, 31))

    assert [inst.month_year for inst in installments] == ["2024-02", "2024-03", "2024-04", "2024-05"]


def test_generate_installments_crosses_year():
    installments = generate_installments("300", 3, date(2024, 11, 20))

    assert [inst.month_year for inst in installments] == ["2024-12", "2025-01", "2025-02"]


@pytest.mark.parametrize("count", [0, -2])
def test_generate_installments_rejects_non_positive_count(count):
    with pytest.raises(InvalidPurchaseError):
        generate_installments("100", count, date(2024, 1, 15))


@pytest.mark.parametrize("item", ["", "abc", "100,", "10,-5", "NaN", "Infinity", "0"])
def test_generate_installments_rejects_invalid_item(item):
    with pytest.raises(InvalidPurchaseError):
        generate_installments(item, 2, date(2024, 1, 15))


def test_parse_item_amounts_strips_whitespace():
    assert parse_item_amounts(" 50.00, 25.50 ") == [Decimal("50.00"), Decimal("25.50")]


def test_carry_over_paid_marks_earliest():
    installments = generate_installments("400", 4, date(2024, 1, 15))

    carried = carry_over_paid(installments, 2)

    assert [inst.paid for inst in carried] == [True, True, False, False]


def test_carry_over_paid_capped_at_new_total():
    installments = generate_installments("200", 2, date(2024, 1, 15))

    carried = carry_over_paid(installments, 5)

    assert all(inst.paid for inst in carried)
