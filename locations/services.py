# -*- coding: utf-8 -*-
# locations/services.py
# Purpose:
# Resolve geocoded address payloads (Google Places style keys) into
# City rows, creating Country / Area / City on first sight.

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from django.db import transaction

from locations.models import Area, City, Country


logger = logging.getLogger("marketplace.locations")

_COORD_QUANT = Decimal("0.000001")


def _clean(value: Any) -> str:
    return str(value or "").strip()


def _coord(value: Any) -> Optional[Decimal]:
    raw = _clean(value)
    if not raw:
        return None
    try:
        return Decimal(raw).quantize(_COORD_QUANT)
    except InvalidOperation:
        return None


class LocationService:
    @transaction.atomic
    def create_city_with_relations(self, data: Mapping[str, Any]) -> Optional[City]:
        """
        Returns None when the payload carries no city (locality) name.
        """
        city_name = _clean(data.get("city"))
        if not city_name:
            return None

        country = None
        country_name = _clean(data.get("country"))
        if country_name:
            country, _ = Country.objects.get_or_create(name=country_name)

        area = None
        area_name = _clean(data.get("administrative_area_level_1"))
        if area_name:
            area, _ = Area.objects.get_or_create(name=area_name, country=country)

        city, created = City.objects.get_or_create(
            name=city_name,
            area=area,
            country=country,
            defaults={"lat": _coord(data.get("lat")), "lng": _coord(data.get("lng"))},
        )
        if created:
            logger.info("Created city %s (%s)", city.pk, city.full_name)
        return city
