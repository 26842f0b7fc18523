"""
Core infrastructure for Split Ledger: configuration, logging and exceptions.
"""
