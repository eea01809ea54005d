"""Display formatting for amounts and periods (pt-BR)"""

from decimal import Decimal, ROUND_HALF_UP

from finance_tracker.config import settings
from finance_tracker.utils.date_utils import parse_day, parse_period

MONTH_NAMES = [
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
]


def format_currency(amount: Decimal) -> str:
    """Decimal(1234.5) -> "R$ 1.234,50" """
    value = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    text = f"{abs(value):,.2f}"  # 1,234.50
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{settings.currency_symbol} {text}"


def format_date(day_key: str) -> str:
    """"2024-07-15" -> "15/07/2024" """
    if not day_key:
        return ""
    d = parse_day(day_key)
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def format_month_year(period: str) -> str:
    """"2024-07" -> "julho de 2024" """
    if not period:
        return ""
    year, month = parse_period(period)
    return f"{MONTH_NAMES[month - 1]} de {year}"
