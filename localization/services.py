# -*- coding: utf-8 -*-
# localization/services.py
# Purpose:
# Write side of the per-locale text store.

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from django.contrib.contenttypes.models import ContentType
from django.db import models

from localization.fields import supported_locales
from localization.models import Translation


logger = logging.getLogger("marketplace.localization")


class LocalizationService:
    def _owner_filter(self, owner: models.Model) -> dict:
        return {
            "owner_type": ContentType.objects.get_for_model(owner, for_concrete_model=True),
            "owner_id": owner.pk,
        }

    def get(self, owner: models.Model, field: str, locale: str) -> Optional[str]:
        row = (
            Translation.objects
            .filter(column_name=field, locale=locale, **self._owner_filter(owner))
            .only("value")
            .first()
        )
        return row.value if row else None

    def set(self, owner: models.Model, field: str, locale: str, value: Optional[str]) -> None:
        """
        Upsert one value. Blank values remove the row so that "present"
        always means "non-empty".
        """
        lookup = {"column_name": field, "locale": locale, **self._owner_filter(owner)}
        if value is None or str(value) == "":
            Translation.objects.filter(**lookup).delete()
            return
        Translation.objects.update_or_create(defaults={"value": str(value)}, **lookup)

    def save_lang_fields(self, fields: Iterable[str], data: Mapping, owner: models.Model) -> None:
        """
        `data[field]` is a {locale: value} mapping; locales missing from
        the mapping are left untouched.
        """
        fields = tuple(fields)
        locales = supported_locales()
        for field in fields:
            per_locale = data.get(field)
            if not isinstance(per_locale, Mapping):
                continue
            for locale in locales:
                if locale in per_locale:
                    self.set(owner, field, locale, per_locale[locale])

        logger.debug("Saved localized fields %s for %s:%s", list(fields), owner._meta.label, owner.pk)

    def delete_for(self, owner: models.Model) -> int:
        deleted, _ = Translation.objects.filter(**self._owner_filter(owner)).delete()
        return deleted
