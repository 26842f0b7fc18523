"""
Utility helpers for Split Ledger.
"""
