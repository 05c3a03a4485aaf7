"""Aggregation package: pure helpers and the dashboard query layer."""

from expensivibe.aggregations.helpers import (
    CompletionSplit,
    DailyTotal,
    category_totals,
    completion_split,
    daily_totals,
    filter_month,
    format_currency,
    month_bounds,
    recent,
    sort_by_date_desc,
    to_local,
    total_amount,
)
from expensivibe.aggregations.executor import (
    DashboardQueries,
    DashboardSummary,
    MonthOverview,
)

__all__ = [
    "CompletionSplit",
    "DailyTotal",
    "DashboardQueries",
    "DashboardSummary",
    "MonthOverview",
    "category_totals",
    "completion_split",
    "daily_totals",
    "filter_month",
    "format_currency",
    "month_bounds",
    "recent",
    "sort_by_date_desc",
    "to_local",
    "total_amount",
]
