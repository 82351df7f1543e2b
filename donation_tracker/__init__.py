"""
Donation Tracker - Source Package

A local-only tracker for personal donation income and expenses.

DESIGN PRINCIPLES:
1. One explicit store object, passed to whoever needs it
2. Totals are always recomputed from the stored list
3. Storage failures degrade quietly, they never crash the app
4. Every mutation is logged
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Donation Tracker Team"
