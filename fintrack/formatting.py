"""Display formatting for amounts, percentages and trends.

Amounts arrive in minor units and are shown in major units.
"""

from fintrack.domain.report import trend_is_improving

DEFAULT_CURRENCY_SYMBOL = "₹"


def format_currency(amount: float, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format an amount in minor units as currency with thousands separators.

    Args:
        amount: Amount in minor units (may be fractional for averages).
        symbol: Currency symbol prefix.

    Returns:
        String like "₹1,234.50" or "-₹20.00".
    """
    major = abs(amount) / 100
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{major:,.2f}"


def format_signed_currency(amount: float, is_income: bool, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format a transaction amount with rich colour markup and +/- sign."""
    if is_income:
        return f"[green]+{format_currency(amount, symbol)}[/green]"
    return f"[red]-{format_currency(amount, symbol)}[/red]"


def format_percentage(percentage: float) -> str:
    """Format a percentage with one decimal place."""
    return f"{percentage:.1f}%"


def trend_style(trend_pct: float) -> str:
    """Rich style for a spending trend: green when spending is flat or down."""
    return "green" if trend_is_improving(trend_pct) else "red"


def format_trend(trend_pct: float) -> str:
    """Format a spending trend with an arrow and colour markup."""
    arrow = "↓" if trend_is_improving(trend_pct) else "↑"
    style = trend_style(trend_pct)
    return f"[{style}]{arrow} {format_percentage(abs(trend_pct))}[/{style}]"
