"""Customer service helpers."""

from .records import filter_customers, new_customer, new_customer_id, whatsapp_link_for
from .stats import compute_dashboard_stats

__all__ = [
    "compute_dashboard_stats",
    "filter_customers",
    "new_customer",
    "new_customer_id",
    "whatsapp_link_for",
]
