"""
Expensify - Source Package

A personal expense tracker: sign in, record expenses, and see where the
money went.

DESIGN PRINCIPLES:
1. The in-memory collection is the source of truth
2. Aggregation is pure and recomputed on every change
3. Validate at the door, never after
4. Storage and auth are swappable collaborators
"""

__version__ = "1.0.0"
__author__ = "Expensify Team"
