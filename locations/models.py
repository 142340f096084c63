# -*- coding: utf-8 -*-
# locations/models.py

from __future__ import annotations

from django.db import models


class Country(models.Model):
    name = models.CharField(max_length=120, unique=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "countries"

    def __str__(self) -> str:
        return self.name


class Area(models.Model):
    """
    First-level administrative area (region / oblast / state).
    """

    name = models.CharField(max_length=120)
    country = models.ForeignKey(
        Country,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="areas",
    )

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["name", "country"], name="uniq_area_per_country"),
        ]

    def __str__(self) -> str:
        return self.name


class City(models.Model):
    name = models.CharField(max_length=120)
    area = models.ForeignKey(
        Area,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="cities",
    )
    country = models.ForeignKey(
        Country,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="cities",
    )

    lat = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    lng = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "cities"

    def __str__(self) -> str:
        return self.name

    @property
    def full_name(self) -> str:
        parts = [
            self.name,
            self.area.name if self.area_id else "",
            self.country.name if self.country_id else "",
        ]
        return ", ".join(p for p in parts if p)
