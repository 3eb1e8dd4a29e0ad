"""
flownodes Utilities

Common utilities used across the nodes.
"""

from .dates import parse_date, split_date

__all__ = [
    "parse_date",
    "split_date",
]
