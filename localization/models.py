# -*- coding: utf-8 -*-
# localization/models.py

from __future__ import annotations

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models


class Translation(models.Model):
    """
    One localized value: (owner type, owner id, column, locale) -> text.

    Owners expose the rows through a GenericRelation named `translations`,
    which lets listings prefetch them and filters query them.
    """

    owner_type = models.ForeignKey(
        ContentType,
        on_delete=models.CASCADE,
        related_name="+",
    )
    owner_id = models.PositiveBigIntegerField()
    owner = GenericForeignKey("owner_type", "owner_id")

    column_name = models.CharField(max_length=64)
    locale = models.CharField(max_length=8)
    value = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["owner_type", "owner_id"], name="translation_owner_idx"),
            models.Index(fields=["column_name", "locale"], name="translation_column_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["owner_type", "owner_id", "column_name", "locale"],
                name="uniq_translation_per_locale",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.owner_type_id}:{self.owner_id}:{self.column_name}:{self.locale}"
