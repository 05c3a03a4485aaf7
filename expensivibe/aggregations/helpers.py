"""
Aggregation Helpers

DESIGN DECISION: Every derived view is a pure function of an in-memory
collection. Nothing here touches the store, so the same inputs always
give the same outputs and charts can be tested without storage.

Calendar questions ("which month", "which day") are answered in local
time: aware datetimes are converted to the local zone (or an explicit
tz), naive datetimes are taken as local wall-clock time already.
"""

import calendar
from collections import defaultdict
from datetime import date, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, Field

from expensivibe.models.entities import Expense, Task


T = TypeVar("T")

ZERO = Decimal("0")


class CompletionSplit(BaseModel):
    """Completed vs. not-completed task counts."""

    completed: int = Field(ge=0)
    pending: int = Field(ge=0)

    @property
    def total(self) -> int:
        return self.completed + self.pending


class DailyTotal(BaseModel):
    """Spend on one calendar day."""

    day: date
    label: str = Field(..., description="Two-digit day of month, e.g. '07'")
    total: Decimal


def to_local(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Naive local wall-clock time for a datetime."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


def completion_split(tasks: Iterable[Task]) -> CompletionSplit:
    completed = 0
    pending = 0
    for task in tasks:
        if task.completed:
            completed += 1
        else:
            pending += 1
    return CompletionSplit(completed=completed, pending=pending)


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


def category_totals(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """
    Sum of amounts per category.

    Keys are ordered by the first occurrence of each category.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount
    return totals


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """
    First and last instant of a month, as naive local datetimes.

    The end is the last microsecond of the last day, so both bounds are
    inclusive.
    """
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59, 999999)
    return start, end


def filter_month(
    expenses: Iterable[Expense],
    year: int,
    month: int,
    tz: Optional[tzinfo] = None,
) -> list[Expense]:
    """Expenses dated within the month, both ends inclusive."""
    start, end = month_bounds(year, month)
    return [
        expense
        for expense in expenses
        if start <= to_local(expense.date, tz) <= end
    ]


def daily_totals(
    expenses: Iterable[Expense],
    year: int,
    month: int,
    tz: Optional[tzinfo] = None,
) -> list[DailyTotal]:
    """
    One entry for every calendar day of the month, zero-filled.

    Expenses are matched to days by local calendar date, regardless of
    time of day.
    """
    by_day: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for expense in filter_month(expenses, year, month, tz):
        by_day[to_local(expense.date, tz).date()] += expense.amount

    last_day = calendar.monthrange(year, month)[1]
    results = []
    for day_number in range(1, last_day + 1):
        day = date(year, month, day_number)
        results.append(
            DailyTotal(day=day, label=f"{day_number:02d}", total=by_day[day])
        )
    return results


def sort_by_date_desc(
    expenses: Iterable[Expense],
    tz: Optional[tzinfo] = None,
) -> list[Expense]:
    """Newest first."""
    return sorted(expenses, key=lambda e: to_local(e.date, tz), reverse=True)


def recent(items: Sequence[T], limit: int = 5) -> list[T]:
    """The first `limit` items, in stored order (the dashboard's "recent" lists)."""
    return list(items[:max(0, limit)])


def format_currency(amount: Union[Decimal, float, int], symbol: str = "RM") -> str:
    """
    Format an amount with two decimals and thousands separators.

    format_currency(Decimal("1234.5")) -> "RM1,234.50"
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
