# accounts/admin.py
# -*- coding: utf-8 -*-

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from accounts.models import InvestorResume, SpecialistResume, User, UserSetting, UserVerification


class UserSettingInline(admin.StackedInline):
    """
    Contact visibility flags. Checked means hidden from other users.
    """
    model = UserSetting
    can_delete = False
    extra = 0
    fields = ("surname", "email", "phone", "facebook", "linkedin")


class UserVerificationInline(admin.TabularInline):
    model = UserVerification
    extra = 0
    readonly_fields = ("created_at",)
    fields = ("status", "created_at")
    ordering = ("-created_at",)


@admin.register(User)
class MarketplaceUserAdmin(UserAdmin):
    """
    Marketplace accounts.

    - `role_id` is the authorization role; `last_role_id` is the persona
      the user currently acts as.
    - Soft-deleted users are hidden (default manager).
    """

    list_display = ("username", "email", "name", "surname", "role_id", "last_role_id", "is_active", "deleted_at")
    list_filter = ("role_id", "last_role_id", "is_active", "is_superuser")
    search_fields = ("username", "email", "name", "surname", "phone")
    ordering = ("username",)

    fieldsets = (
        (None, {"fields": ("username", "email", "password")}),
        ("Profile", {"fields": ("name", "surname", "phone", "linkedin", "facebook", "avatar", "locale", "city")}),
        ("Personas", {"fields": ("role_id", "last_role_id")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined", "deleted_at")}),
    )
    readonly_fields = ("deleted_at",)
    autocomplete_fields = ("city",)

    inlines = (UserSettingInline, UserVerificationInline)


@admin.register(InvestorResume)
class InvestorResumeAdmin(admin.ModelAdmin):
    list_display = ("user", "is_published", "updated_at")
    list_filter = ("is_published",)
    search_fields = ("user__username", "user__email")


@admin.register(SpecialistResume)
class SpecialistResumeAdmin(admin.ModelAdmin):
    list_display = ("user", "updated_at")
    search_fields = ("user__username", "user__email")
