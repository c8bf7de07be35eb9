from expensify.aggregation.aggregator import (
    ALL_CATEGORIES,
    ChartGeometry,
    average_per_transaction,
    breakdown_by_category,
    chart_slices,
    filter_expenses,
    percent_of_total,
    summarize,
    total,
    total_for_date,
    total_for_month,
)

__all__ = [
    "ALL_CATEGORIES",
    "ChartGeometry",
    "average_per_transaction",
    "breakdown_by_category",
    "chart_slices",
    "filter_expenses",
    "percent_of_total",
    "summarize",
    "total",
    "total_for_date",
    "total_for_month",
]
