# locations/admin.py
# -*- coding: utf-8 -*-

from django.contrib import admin

from locations.models import Area, City, Country


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


@admin.register(Area)
class AreaAdmin(admin.ModelAdmin):
    list_display = ("name", "country")
    list_filter = ("country",)
    search_fields = ("name",)


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ("name", "area", "country", "lat", "lng")
    list_filter = ("country",)
    search_fields = ("name", "area__name", "country__name")
    list_select_related = ("area", "country")
