# -*- coding: utf-8 -*-
# localization/mixins.py

from __future__ import annotations

from typing import List, Optional

from django.conf import settings

from localization.fields import LocalizedField, current_locale, other_locales, supported_locales


class TranslatableMixin:
    """
    Read side of per-locale attributes for models carrying a
    `translations` GenericRelation.

    The primary locale falls back to the record's own column, which holds
    the denormalised primary-locale text.
    """

    translatable: tuple = ()

    def _translation_rows(self) -> list:
        if self.pk is None:
            return []
        return list(self.translations.all())

    def get_translated_attribute(self, attribute: str, locale: str) -> Optional[str]:
        for row in self._translation_rows():
            if row.column_name == attribute and row.locale == locale:
                return row.value
        if locale == settings.PRIMARY_LOCALE:
            return getattr(self, attribute, None)
        return None

    def localized(self, attribute: str) -> LocalizedField:
        return LocalizedField(
            {locale: self.get_translated_attribute(attribute, locale) for locale in supported_locales()}
        )

    def lang_fallback_order(self, locale: str) -> List[str]:
        return other_locales(locale)

    def get_lang_attribute(self, attribute: str) -> str:
        """
        Value in the active locale, else the first non-empty value in
        `lang_fallback_order()`, else "".
        """
        locale = current_locale()
        return self.localized(attribute).resolve(locale, self.lang_fallback_order(locale))
