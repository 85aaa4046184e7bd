"""Starter region taxonomy written into a freshly created local store."""

from __future__ import annotations

from ..models.domain import Region


def starter_regions() -> list[Region]:
    return [
        Region(id="1", name="دهوك", subregions=["ملا عيدان", "مالطا", "نوهدرا سنتر", "السياحية", "حي العسكري"]),
        Region(id="2", name="دوميز", subregions=["مجمع دوميز 1", "مجمع دوميز 2", "الحي الصناعي"]),
        Region(id="3", name="سيميل", subregions=["سيميل سنتر", "كيستي", "شاريا"]),
        Region(id="4", name="شيلادزي", subregions=["سنتر", "افرخى", "بازيفى"]),
    ]
