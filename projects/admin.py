# -*- coding: utf-8 -*-
# projects/admin.py

from __future__ import annotations

from django.contrib import admin
from django.contrib import messages
from django.db import transaction
from django.utils.html import format_html

from .models import PartnerRole, Project, ProjectArea, ProjectPhoto, Vacancy


class ProjectPhotoInline(admin.TabularInline):
    model = ProjectPhoto
    extra = 0
    readonly_fields = ("image", "created_at")
    fields = ("image", "created_at")


class VacancyInline(admin.TabularInline):
    model = Vacancy
    extra = 0
    fields = ("name", "description")


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """
    Projects (soft-deleted ones are hidden by the default manager).
    """

    list_display = ("name", "slug", "owner", "status", "budget", "is_published", "goal", "created_at")
    list_filter = ("is_published", "status")
    search_fields = ("name", "slug", "owner__email")
    ordering = ("-created_at",)
    readonly_fields = ("slug", "goal", "views", "created_at", "updated_at", "deleted_at", "site_link")
    raw_id_fields = ("owner",)
    autocomplete_fields = ("city",)
    filter_horizontal = ("areas",)
    inlines = (ProjectPhotoInline, VacancyInline)
    actions = ["unpublish_projects"]

    @admin.display(description="Site")
    def site_link(self, obj: Project):
        if not obj.site:
            return "-"
        return format_html('<a href="{}" target="_blank" rel="noopener">{}</a>', obj.site, obj.site)

    @admin.action(description="Unpublish selected projects")
    def unpublish_projects(self, request, queryset):
        with transaction.atomic():
            updated = queryset.update(is_published=False)
        self.message_user(request, f"Unpublished {updated} project(s).", level=messages.SUCCESS)


@admin.register(ProjectArea)
class ProjectAreaAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


@admin.register(PartnerRole)
class PartnerRoleAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)
