"""Export services."""

from .csv import export_customers_csv, export_filename

__all__ = [
    "export_customers_csv",
    "export_filename",
]
