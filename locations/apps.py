# -*- coding: utf-8 -*-
# locations/apps.py

from __future__ import annotations

from django.apps import AppConfig


class LocationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "locations"
