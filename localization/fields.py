# -*- coding: utf-8 -*-
# localization/fields.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from django.conf import settings
from django.utils import translation


def supported_locales() -> List[str]:
    return [code for code, _ in settings.LANGUAGES]


def current_locale() -> str:
    lang = translation.get_language() or settings.LANGUAGE_CODE
    return lang.split("-")[0].lower()


def other_locales(locale: Optional[str] = None) -> List[str]:
    """Supported locales except `locale`, in settings order."""
    locale = locale or current_locale()
    return [code for code in supported_locales() if code != locale]


@dataclass(frozen=True)
class LocalizedField:
    """
    Per-locale values of a single attribute.

    `resolve()` walks the preferred locale and then the fallback list and
    returns the first non-empty value, or "" when every locale is blank.
    """

    values: Mapping[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload) -> "LocalizedField":
        if not isinstance(payload, Mapping):
            return cls({})
        return cls({str(k): v for k, v in payload.items() if k in supported_locales()})

    def get(self, locale: str) -> Optional[str]:
        return self.values.get(locale)

    def resolve(self, preferred: str, fallback_order: Iterable[str]) -> str:
        for locale in [preferred, *fallback_order]:
            value = self.values.get(locale)
            if value:
                return value
        return ""

    def as_dict(self) -> Dict[str, Optional[str]]:
        return dict(self.values)
