# -*- coding: utf-8 -*-
# projects/filters.py
# Purpose:
# Listing filters. Raw request parameters are parsed once into
# ProjectListingParams; each stage then receives only its own value and
# narrows the queryset. A stage whose value is absent is skipped.

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple

from django.conf import settings
from django.contrib.contenttypes.models import ContentType
from django.db.models import Exists, OuterRef, Q

from common.coerce import as_int, as_list
from localization.models import Translation

from .goals import Goal
from .models import Partner, Project


logger = logging.getLogger("marketplace.projects")

ORDERS = ("asc", "desc")
DEFAULT_ORDER = "desc"

STATUS_VALUES = (Project.Status.DRAFT, Project.Status.OPEN)

# Bucket edges are inclusive on both sides of 2 and 3, so 50000 sits in both.
BUDGET_BUCKETS = {
    1: Q(budget__lt=10000),
    2: Q(budget__gte=10000, budget__lte=50000),
    3: Q(budget__gte=50000, budget__lte=100000),
    4: Q(budget__gt=100000),
}

# Selecting every goal is the same as selecting none.
ALL_GOAL_TOKENS = frozenset(str(goal.value) for goal in Goal)

SEARCH_FIELDS = ("name", "small_description", "description")


@dataclass(frozen=True)
class CityParams:
    administrative_area_level_1: Optional[str] = None
    locality: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_raw(cls, value: Any) -> Optional["CityParams"]:
        if isinstance(value, (str, bytes)):
            try:
                value = json.loads(value)
            except ValueError:
                return None
        if not isinstance(value, Mapping):
            return None

        def _text(key: str) -> Optional[str]:
            raw = value.get(key)
            if raw is None:
                return None
            raw = str(raw).strip()
            return raw or None

        params = cls(
            administrative_area_level_1=_text("administrative_area_level_1"),
            locality=_text("locality"),
            country=_text("country"),
        )
        if not (params.administrative_area_level_1 or params.locality or params.country):
            return None
        return params


@dataclass(frozen=True)
class ProjectListingParams:
    """
    Validated listing parameters. Invalid or missing values are stored
    as the "absent" value of their type (None, empty tuple, "", False).
    """

    international: bool = False
    city: Optional[CityParams] = None
    status: Optional[int] = None
    project_area: Tuple[int, ...] = ()
    budget: Optional[int] = None
    goal: Tuple[str, ...] = ()
    project_role: Tuple[int, ...] = ()
    time_in_release: Optional[int] = None
    price_range: Optional[Tuple[int, int]] = None
    search: str = ""
    order: str = DEFAULT_ORDER

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "ProjectListingParams":
        """
        Accepts a QueryDict or a plain dict. Never raises.
        """
        if raw is None:
            return cls()

        status = as_int(raw.get("status"))
        budget = as_int(raw.get("budget"))

        price_range = None
        if raw.get("price_range_min") is not None and raw.get("price_range_max") is not None:
            low, high = as_int(raw.get("price_range_min")), as_int(raw.get("price_range_max"))
            if low is not None and high is not None:
                price_range = (low, high)

        order = str(raw.get("order") or "").lower()

        return cls(
            international=as_int(raw.get("international")) == 1,
            city=CityParams.from_raw(raw.get("city")),
            status=status if status in STATUS_VALUES else None,
            project_area=_int_tuple(as_list(raw, "project_area")),
            budget=budget if budget in BUDGET_BUCKETS else None,
            goal=tuple(str(token).strip() for token in as_list(raw, "goal") if str(token).strip()),
            project_role=_int_tuple(as_list(raw, "project_role")),
            time_in_release=as_int(raw.get("time_in_release")),
            price_range=price_range,
            search=str(raw.get("search") or "").strip(),
            order=order if order in ORDERS else DEFAULT_ORDER,
        )


def _int_tuple(values) -> Tuple[int, ...]:
    out = []
    for value in values:
        number = as_int(value)
        if number is not None:
            out.append(number)
    return tuple(out)


def _translations_of(column_names, **lookups):
    return Translation.objects.filter(
        owner_type=ContentType.objects.get_for_model(Project),
        owner_id=OuterRef("pk"),
        column_name__in=column_names,
        **lookups,
    )


# ------------------------------------------------------------
# Stages
# ------------------------------------------------------------

def filter_international(qs, enabled: bool):
    return qs.filter(
        Exists(_translations_of(("name",), locale=settings.INTERNATIONAL_LOCALE).exclude(value=""))
    )


def filter_city(qs, city: CityParams):
    if city.administrative_area_level_1:
        return qs.filter(city__area__name=city.administrative_area_level_1)
    if city.locality:
        return qs.filter(city__name=city.locality)
    return qs.filter(city__country__name=city.country)


def filter_status(qs, status: int):
    return qs.filter(status=status)


def filter_project_area(qs, area_ids: Tuple[int, ...]):
    through = Project.areas.through
    return qs.filter(Exists(through.objects.filter(project_id=OuterRef("pk"), projectarea_id__in=area_ids)))


def filter_budget(qs, bucket: int):
    return qs.filter(BUDGET_BUCKETS[bucket])


def filter_goal(qs, tokens: Tuple[str, ...]):
    if set(tokens) == ALL_GOAL_TOKENS:
        return qs
    matches = Q()
    for token in tokens:
        matches |= Q(goal__contains=token)
    return qs.filter(matches)


def filter_project_role(qs, role_ids: Tuple[int, ...]):
    return qs.filter(Exists(Partner.objects.filter(project_id=OuterRef("pk"), role_id__in=role_ids)))


def filter_time_in_release(qs, time_in_release: int):
    return qs.filter(time_in_release=time_in_release)


def filter_price_range(qs, price_range: Tuple[int, int]):
    low, high = price_range
    return qs.filter(budget__gte=low, budget__lte=high)


def filter_search(qs, term: str):
    base = Q()
    for field in SEARCH_FIELDS:
        base |= Q(**{f"{field}__icontains": term})
    translated = _translations_of(SEARCH_FIELDS, locale__in=settings.SEARCH_LOCALES, value__icontains=term)
    return qs.filter(base | Q(Exists(translated)))


Stage = Callable[[Any, Any], Any]

# Applied in this order; each entry reads one ProjectListingParams field.
STAGES: Tuple[Tuple[str, Stage], ...] = (
    ("international", filter_international),
    ("city", filter_city),
    ("status", filter_status),
    ("project_area", filter_project_area),
    ("budget", filter_budget),
    ("goal", filter_goal),
    ("project_role", filter_project_role),
    ("time_in_release", filter_time_in_release),
    ("price_range", filter_price_range),
    ("search", filter_search),
)


def _is_absent(value) -> bool:
    return value is None or value is False or value == "" or value == ()


def apply_filters(qs, params: ProjectListingParams):
    applied = []
    for name, stage in STAGES:
        value = getattr(params, name)
        if _is_absent(value):
            continue
        qs = stage(qs, value)
        applied.append(name)
    logger.debug("Listing filters applied: %s", applied or "none")
    return qs.ordered(params.order)
