"""
Personal Finance Tracker - Source Package

Records expenses, fixed costs and income per calendar month and
categorizes them into user-defined areas by keyword.

DESIGN PRINCIPLES:
1. Matching is computed on read, never stored on a record
2. Every area is reported, even at zero
3. Totals are conserved across the area partition
4. The core is pure; storage and audit live at the edge
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
