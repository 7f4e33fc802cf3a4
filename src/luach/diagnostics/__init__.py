"""Diagnostics package.

Light-weight printed tables and self-checks for the calendar engines,
reachable through `luach pretty-month`, `luach new-years` and `luach diag`.
"""

__all__ = ["pretty_month", "new_years_table", "round_trip", "parsha_table"]
