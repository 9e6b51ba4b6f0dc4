"""
Display formatting helpers.
"""


def format_price(price: float) -> str:
    """
    Format a price as a USD currency string with two decimals.

    Examples:
        >>> format_price(1234.567)
        '$1,234.57'
        >>> format_price(50)
        '$50.00'
    """
    sign = "-" if price < 0 else ""
    return f"{sign}${abs(price):,.2f}"


def format_quantity(quantity: float, max_decimals: int = 8) -> str:
    """Format a coin quantity, dropping insignificant trailing zeros."""
    text = f"{quantity:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
