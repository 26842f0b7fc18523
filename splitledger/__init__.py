"""
Split Ledger - balance engine for shared group expenses.

Turns expense and settlement records into a per-member debt picture.
"""

__version__ = "1.0.0"

from .services import (
    distribute,
    build_ledger,
    project_user_summary,
    project_group_summary,
)

__all__ = [
    "distribute",
    "build_ledger",
    "project_user_summary",
    "project_group_summary",
]
