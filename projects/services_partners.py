# -*- coding: utf-8 -*-
# projects/services_partners.py
# Purpose:
# Reconcile a project's partners / vacancies with a slot-based form
# payload:
#
#   partner: {"id": [...], "role": [...], "<locale>": {"description": [...]}}
#   vacancy: {"id": [...], "<locale>": {"name": [...], "description": [...]}}
#
# Slot i is made of the i-th entry of every list. Existing rows named by
# `id[i]` are updated, other slots create rows, and rows of the project
# that are not in the payload are removed.

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from django.conf import settings

from common.coerce import as_int
from localization.fields import LocalizedField, other_locales, supported_locales
from localization.services import LocalizationService

from .models import Partner, Vacancy


logger = logging.getLogger("marketplace.projects")


def _slot_value(payload: Mapping, locale: str, field: str, index: int) -> Optional[str]:
    per_locale = payload.get(locale)
    if not isinstance(per_locale, Mapping):
        return None
    values = per_locale.get(field) or []
    if isinstance(values, str):
        values = [values]
    return values[index] if index < len(values) else None


def _slot_values(payload: Mapping, field: str, index: int) -> Dict[str, Optional[str]]:
    return {
        locale: _slot_value(payload, locale, field, index)
        for locale in supported_locales()
        if isinstance(payload.get(locale), Mapping)
    }


def _primary_text(values: Mapping[str, Optional[str]]) -> str:
    primary = settings.PRIMARY_LOCALE
    return LocalizedField(values).resolve(primary, other_locales(primary)) or ""


def _list(payload: Mapping, key: str) -> List[Any]:
    values = payload.get(key) or []
    if isinstance(values, (list, tuple)):
        return list(values)
    return [values]


def _slot_count(payload: Mapping, fields: Sequence[str]) -> int:
    count = len(_list(payload, "id"))
    for locale in supported_locales():
        per_locale = payload.get(locale)
        if not isinstance(per_locale, Mapping):
            continue
        for field in fields:
            count = max(count, len(per_locale.get(field) or []))
    return count


class _SlotRepository:
    model = None
    payload_key = ""

    def __init__(self, localization_service: Optional[LocalizationService] = None):
        self.localization_service = localization_service or LocalizationService()

    def _payload(self, data: Mapping) -> Mapping:
        payload = data.get(self.payload_key)
        return payload if isinstance(payload, Mapping) else {}

    def _existing(self, project_id, ids: List[Any], index: int):
        row_id = as_int(ids[index]) if index < len(ids) else None
        if row_id is None:
            return None
        return self.model.objects.filter(project_id=project_id, pk=row_id).first()

    def _remove_except(self, project_id, kept_ids: List[int]) -> int:
        deleted, _ = self.model.objects.filter(project_id=project_id).exclude(pk__in=kept_ids).delete()
        return deleted

    def remove_all(self, project_id) -> int:
        return self._remove_except(project_id, [])


class PartnerRepository(_SlotRepository):
    model = Partner
    payload_key = "partner"

    def create_or_update(self, data: Mapping, project_id) -> List[Partner]:
        payload = self._payload(data)
        ids = _list(payload, "id")
        roles = _list(payload, "role")

        kept = []
        for index, raw_role in enumerate(roles):
            role_id = as_int(raw_role)
            if not role_id:
                continue

            partner = self._existing(project_id, ids, index) or Partner(project_id=project_id)
            descriptions = _slot_values(payload, "description", index)
            partner.role_id = role_id
            partner.description = _primary_text(descriptions)
            partner.save()

            self.localization_service.save_lang_fields(
                Partner.translatable, {"description": descriptions}, partner
            )
            kept.append(partner)

        removed = self._remove_except(project_id, [partner.pk for partner in kept])
        logger.debug("Project %s partners: kept=%s removed=%s", project_id, len(kept), removed)
        return kept


class VacancyRepository(_SlotRepository):
    model = Vacancy
    payload_key = "vacancy"

    def create_or_update(self, data: Mapping, project_id) -> List[Vacancy]:
        payload = self._payload(data)
        ids = _list(payload, "id")

        kept = []
        for index in range(_slot_count(payload, Vacancy.translatable)):
            names = _slot_values(payload, "name", index)
            if not any(names.values()):
                continue

            descriptions = _slot_values(payload, "description", index)
            vacancy = self._existing(project_id, ids, index) or Vacancy(project_id=project_id)
            vacancy.name = _primary_text(names)
            vacancy.description = _primary_text(descriptions)
            vacancy.save()

            self.localization_service.save_lang_fields(
                Vacancy.translatable, {"name": names, "description": descriptions}, vacancy
            )
            kept.append(vacancy)

        removed = self._remove_except(project_id, [vacancy.pk for vacancy in kept])
        logger.debug("Project %s vacancies: kept=%s removed=%s", project_id, len(kept), removed)
        return kept
