"""
Minibank Ledger

An in-memory banking ledger with savings, checking and premium accounts,
Decimal money arithmetic and all-or-nothing transfers between accounts.
"""

__version__ = "1.0.0"
