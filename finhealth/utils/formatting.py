"""INR renderings used inside recommendation strings."""
from __future__ import annotations

CRORE = 10_000_000
LAKH = 100_000


def group_indian(amount: float) -> str:
    """Indian digit grouping: 123456 -> '1,23,456', 45000.5 -> '45,000.5'."""
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    text = f"{amount:.3f}".rstrip("0").rstrip(".")
    whole, _, frac = text.partition(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return sign + whole + ("." + frac if frac else "")


def format_amount(amount: float) -> str:
    """Long form used by the basic quiz: '₹2.7 Lakhs', '₹1.2 Crores'."""
    if amount >= CRORE:
        return f"₹{amount / CRORE:.1f} Crores"
    if amount >= LAKH:
        return f"₹{amount / LAKH:.1f} Lakhs"
    return f"₹{group_indian(amount)}"


def format_inr(amount: float) -> str:
    """Dashboard form: '₹1.25 Cr', '₹7.50 L', '₹45,000'."""
    if amount >= CRORE:
        return f"₹{amount / CRORE:.2f} Cr"
    if amount >= LAKH:
        return f"₹{amount / LAKH:.2f} L"
    return f"₹{group_indian(amount)}"
