"""Domain models for customer and region records."""

from dataclasses import dataclass, field
from enum import Enum


class VisitStatus(str, Enum):
    """Weekly visit state of a customer, stored as its display label."""

    NOT_DONE = "لم تتم"
    DONE = "تمت الزيارة"
    POSTPONED = "مؤجل"


@dataclass(slots=True)
class Customer:
    """A shop visited by the field team."""

    id: str
    shop_name: str
    phone: str
    manager_name: str = ""
    main_region: str = ""
    sub_region: str = ""
    whatsapp_link: str = ""
    map_link: str = ""
    visit_status: VisitStatus = VisitStatus.NOT_DONE


@dataclass(slots=True)
class Region:
    """A main region and its ordered sub-region names."""

    id: str
    name: str
    subregions: list[str] = field(default_factory=list)
