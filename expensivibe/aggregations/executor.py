"""
Dashboard Query Execution

DESIGN DECISION: The dashboard reads through this class, never straight
from storage. It fetches fresh collections from the repositories and runs
the pure helpers over them, so every view is a consistent snapshot of
the document at the time of the call.

GUARANTEES:
- Only reports what is stored
- Empty collections give zero counts and empty totals, not errors
"""

from datetime import tzinfo
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from expensivibe.aggregations.helpers import (
    CompletionSplit,
    DailyTotal,
    category_totals,
    completion_split,
    daily_totals,
    filter_month,
    format_currency,
    recent,
    sort_by_date_desc,
    total_amount,
)
from expensivibe.models.entities import Expense, Note, Task
from expensivibe.repositories import (
    ExpenseRepository,
    NoteRepository,
    TaskRepository,
)


class DashboardSummary(BaseModel):
    """Everything the overview page shows."""

    task_count: int = Field(ge=0)
    tasks: CompletionSplit
    note_count: int = Field(ge=0)
    expense_count: int = Field(ge=0)
    total_expenses: Decimal
    total_expenses_display: str
    expenses_by_category: dict[str, Decimal] = Field(default_factory=dict)
    recent_tasks: list[Task] = Field(default_factory=list)
    recent_notes: list[Note] = Field(default_factory=list)


class MonthOverview(BaseModel):
    """Expense view for one calendar month."""

    year: int
    month: int = Field(ge=1, le=12)
    expenses: list[Expense] = Field(
        default_factory=list,
        description="Expenses of the month, newest first"
    )
    total: Decimal
    total_display: str
    by_category: dict[str, Decimal] = Field(default_factory=dict)
    by_day: list[DailyTotal] = Field(default_factory=list)


class DashboardQueries:
    """
    Builds dashboard and expense-chart views from the repositories.
    """

    def __init__(
        self,
        tasks: TaskRepository,
        notes: NoteRepository,
        expenses: ExpenseRepository,
        currency_symbol: str = "RM",
        recent_limit: int = 5,
    ):
        self._tasks = tasks
        self._notes = notes
        self._expenses = expenses
        self._currency_symbol = currency_symbol
        self._recent_limit = recent_limit

    def summary(self) -> DashboardSummary:
        tasks = self._tasks.get_all()
        notes = self._notes.get_all()
        expenses = self._expenses.get_all()
        total = total_amount(expenses)

        return DashboardSummary(
            task_count=len(tasks),
            tasks=completion_split(tasks),
            note_count=len(notes),
            expense_count=len(expenses),
            total_expenses=total,
            total_expenses_display=format_currency(total, self._currency_symbol),
            expenses_by_category=category_totals(expenses),
            recent_tasks=recent(tasks, self._recent_limit),
            recent_notes=recent(notes, self._recent_limit),
        )

    def month_overview(
        self,
        year: int,
        month: int,
        tz: Optional[tzinfo] = None,
    ) -> MonthOverview:
        """Totals and chart series for the expenses of one month."""
        monthly = filter_month(self._expenses.get_all(), year, month, tz)
        total = total_amount(monthly)

        return MonthOverview(
            year=year,
            month=month,
            expenses=sort_by_date_desc(monthly, tz),
            total=total,
            total_display=format_currency(total, self._currency_symbol),
            by_category=category_totals(monthly),
            by_day=daily_totals(monthly, year, month, tz),
        )
