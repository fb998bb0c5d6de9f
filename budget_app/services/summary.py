"""
Summary aggregation over an owner's transactions.

Amounts are summed as Decimals built from their float repr, so totals are exact
for the two-decimal values users enter and nothing is rounded until the
figures are presented.
"""
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ..schemas import CategoryBreakdownItem, SummaryResponse
from .transaction_store import filter_transactions

CENT = Decimal("0.01")


def _cents(value: Decimal) -> Decimal:
    """Round half-up to cents, with enough precision for any magnitude"""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _money(value: Decimal) -> float:
    return float(_cents(value))


def summarize(transactions: Iterable) -> SummaryResponse:
    """Reduce transaction records (anything with type, amount and category) to a summary"""
    total_income = Decimal(0)
    total_expenses = Decimal(0)
    count = 0
    breakdown = {}

    for transaction in transactions:
        amount = Decimal(repr(transaction.amount))
        count += 1
        if transaction.type == "income":
            total_income += amount
        elif transaction.type == "expense":
            total_expenses += amount

        key = (transaction.category, transaction.type)
        total, items = breakdown.get(key, (Decimal(0), 0))
        breakdown[key] = (total + amount, items + 1)

    ordered = sorted(breakdown.items(), key=lambda item: (item[0][1], item[0][0]))

    # Balance comes from the rounded totals so the three figures always agree
    income_cents = _cents(total_income)
    expense_cents = _cents(total_expenses)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, income_cents.adjusted() + 3, expense_cents.adjusted() + 3)
        balance = income_cents - expense_cents

    return SummaryResponse(
        total_income=float(income_cents),
        total_expenses=float(expense_cents),
        balance=float(balance),
        transaction_count=count,
        category_breakdown=[
            CategoryBreakdownItem(category=category, type=kind, total=_money(total), count=items)
            for (category, kind), (total, items) in ordered
        ]
    )


def get_summary(
    db: Session,
    user_id: str,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None
) -> SummaryResponse:
    transactions = filter_transactions(db, user_id, date_from=date_from, date_to=date_to).all()
    return summarize(transactions)
