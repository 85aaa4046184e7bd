"""Customer analytics helpers."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from ...models.domain import Customer, VisitStatus


def compute_dashboard_stats(customers: Iterable[Customer]) -> dict:
    customers = list(customers)
    status_counts: Counter[VisitStatus] = Counter(customer.visit_status for customer in customers)

    # Counter keeps first-seen order, which the chart uses for its bars.
    region_counts: Counter[str] = Counter()
    for customer in customers:
        region_counts[customer.main_region] += 1

    return {
        "totalCustomers": len(customers),
        "visitsDone": status_counts[VisitStatus.DONE],
        "visitsPostponed": status_counts[VisitStatus.POSTPONED],
        "visitsPending": status_counts[VisitStatus.NOT_DONE],
        "regionCounts": [{"name": name, "count": count} for name, count in region_counts.items()],
    }
