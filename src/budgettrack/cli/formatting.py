"""Display formatting helpers for the CLI."""

from decimal import Decimal, ROUND_HALF_UP


def format_inr(amount: Decimal) -> str:
    """Format an amount as whole rupees with Indian digit grouping.

    Examples: 479.05 -> "₹479", 123456.5 -> "₹1,23,457".
    """
    rounded = int(Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    digits = str(abs(rounded))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        # Lakh and crore groups are two digits wide
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"{sign}₹{digits}"


def format_amount(amount: Decimal) -> str:
    """Format an exact amount with two decimals."""
    return f"{Decimal(amount):,.2f}"
