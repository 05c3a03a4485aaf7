"""
Expensivibe - Source Package

Local data core of a personal productivity dashboard: tasks, notes,
expenses and theme settings kept in one JSON document, plus the
aggregations behind the dashboard and expense charts.

DESIGN PRINCIPLES:
1. One document, written whole
2. Storage layer is swappable
3. Failures degrade to "keep previous state" or "fall back to default"
4. Derived views are pure functions
"""

__version__ = "1.0.0"
__author__ = "Expensivibe Team"
