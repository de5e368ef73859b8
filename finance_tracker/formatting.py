"""Display helpers. Rounding to cents happens here and nowhere else."""

from decimal import ROUND_HALF_UP, Decimal

from finance_tracker.models.entry import Totals


CENT = Decimal("0.01")


def format_amount(value: Decimal, symbol: str = "$") -> str:
    """
    Render an amount with two decimals and thousands separators.

    format_amount(Decimal("954.5"))   -> "$954.50"
    format_amount(Decimal("-12.5"))   -> "-$12.50"
    """
    rounded = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def format_totals(totals: Totals, symbol: str = "$") -> dict[str, str]:
    return {
        "total_income": format_amount(totals.total_income, symbol),
        "total_expense": format_amount(totals.total_expense, symbol),
        "net_balance": format_amount(totals.net_balance, symbol),
    }
