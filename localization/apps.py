# -*- coding: utf-8 -*-
# localization/apps.py

from __future__ import annotations

from django.apps import AppConfig


class LocalizationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "localization"
