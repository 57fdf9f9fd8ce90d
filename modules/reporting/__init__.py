"""
Reporting Module
================
CSV rendering, locale formatting and multi-day report merging.
"""

from .csv_codec import header_cell, merge, render, write_csv
from .formatting import ValueFormatter, check_delimiter

__all__ = [
    "header_cell",
    "merge",
    "render",
    "write_csv",
    "ValueFormatter",
    "check_delimiter",
]
