# accounts/models.py
from __future__ import annotations

from typing import List, Optional

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.contrib.contenttypes.fields import GenericRelation
from django.core.cache import cache
from django.db import models
from django.utils.translation import gettext

from accounts.enums import Role
from chats.models import ChatRoom, ChatUserRoom
from common.softdelete import SoftDeleteManagerMixin, SoftDeleteModel
from localization.mixins import TranslatableMixin
from localization.models import Translation


def _request_role_message(role: str) -> str:
    return gettext("To create a request you need an active %(role)s profile.") % {"role": role}


class UserManager(SoftDeleteManagerMixin, DjangoUserManager):
    use_in_migrations = False


class User(TranslatableMixin, SoftDeleteModel, AbstractUser):
    """
    Marketplace account.

    - `role_id` is the static authorization role.
    - `last_role_id` is the persona the user is currently acting as.
    - `name` / `surname` hold the primary-locale text; other locales live
      in `translations`.
    """

    AVATAR_PATH = settings.USER_AVATAR_PATH
    DEFAULT_AVATAR = settings.DEFAULT_AVATAR

    translatable = ("name", "surname")

    email = models.EmailField(unique=True)

    name = models.CharField(max_length=150, blank=True, default="")
    surname = models.CharField(max_length=150, blank=True, default="")

    phone = models.CharField(max_length=40, blank=True, default="")
    linkedin = models.CharField(max_length=255, blank=True, default="")
    facebook = models.CharField(max_length=255, blank=True, default="")

    role_id = models.PositiveSmallIntegerField(choices=Role.choices, default=Role.NEWLY)
    last_role_id = models.PositiveSmallIntegerField(
        choices=Role.choices,
        null=True,
        blank=True,
        default=Role.NEWLY,
    )

    avatar = models.CharField(max_length=255, default=settings.DEFAULT_AVATAR)
    locale = models.CharField(max_length=8, blank=True, default="uk")
    preferences = models.JSONField(default=dict, blank=True)

    city = models.ForeignKey(
        "locations.City",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
    )

    translations = GenericRelation(
        Translation,
        content_type_field="owner_type",
        object_id_field="owner_id",
    )

    objects = UserManager()
    all_objects = UserManager(with_trashed=True)

    class Meta(AbstractUser.Meta):
        pass

    # ------------------------------------------------------------
    # Localisation
    # ------------------------------------------------------------

    def lang_fallback_order(self, locale: str) -> List[str]:
        # Reverse of Project.lang_fallback_order.
        return list(reversed(super().lang_fallback_order(locale)))

    def preferred_locale(self) -> str:
        return self.locale

    @property
    def full_name(self) -> str:
        return f"{self.get_lang_attribute('name')} {self.get_lang_attribute('surname')}"

    def get_full_name_with_restriction(self) -> str:
        out = self.get_lang_attribute("name")
        if not self.setting.surname:
            out += " " + self.get_lang_attribute("surname")
        return out

    @property
    def full_address(self) -> str:
        return self.city.full_name if self.city_id else ""

    # ------------------------------------------------------------
    # Personas
    # ------------------------------------------------------------

    def update_last_role_id(self, role_id: int) -> None:
        self.last_role_id = role_id
        self.save(update_fields=["last_role_id"])

    def is_specialist(self) -> bool:
        return self.last_role_id == Role.SPECIALIST

    def is_initiator(self) -> bool:
        return self.last_role_id == Role.INITIATOR

    def is_investor(self) -> bool:
        return self.last_role_id == Role.INVESTOR

    def is_newly(self) -> bool:
        return self.last_role_id == Role.NEWLY

    def is_admin(self) -> bool:
        return self.role_id == Role.ADMIN or self.is_superuser

    def has_cabinet_access(self) -> bool:
        return self.last_role_id is not None and self.last_role_id != Role.NEWLY

    # ------------------------------------------------------------
    # Presence / verification
    # ------------------------------------------------------------

    def online_cache_key(self) -> str:
        return f"user-is-online-{self.pk}"

    def is_online(self) -> bool:
        return cache.get(self.online_cache_key()) is not None

    @property
    def last_verification(self) -> Optional["UserVerification"]:
        prefetched = getattr(self, "latest_verifications", None)
        if prefetched is not None:
            return prefetched[0] if prefetched else None
        return self.verifications.order_by("-created_at", "-id").first()

    def is_verified(self) -> bool:
        verification = self.last_verification
        return verification.is_verified() if verification else False

    def get_profile_fullness_percentage(self) -> int:
        fields = [
            self.get_lang_attribute("name"),
            self.get_lang_attribute("surname"),
            self.email,
            self.phone,
            self.linkedin,
            self.facebook,
            self.avatar,
        ]
        filled = sum(1 for value in fields if value)
        return round(filled / len(fields) * 100)

    # ------------------------------------------------------------
    # Contact visibility (UserSetting flags mean "hidden")
    # ------------------------------------------------------------

    def can_browse_surname(self) -> bool:
        return not self.setting.surname

    def can_browse_email(self) -> bool:
        return not self.setting.email

    def can_browse_phone(self) -> bool:
        return not self.setting.phone

    def can_browse_facebook(self) -> bool:
        return not self.setting.facebook and bool(self.facebook)

    def can_browse_linkedin(self) -> bool:
        return not self.setting.linkedin and bool(self.linkedin)

    # ------------------------------------------------------------
    # Role entities
    # ------------------------------------------------------------

    def has_active_projects(self) -> bool:
        return self.projects.filter(is_published=True).exists()

    def has_active_investor_resume(self) -> bool:
        return InvestorResume.objects.filter(user=self, is_published=True).exists()

    def has_active_specialist_resume(self) -> bool:
        return SpecialistResume.objects.filter(user=self).exists()

    def has_active_or_inactive_project(self) -> bool:
        return self.projects.exists()

    def has_active_or_inactive_investor_resume(self) -> bool:
        return InvestorResume.objects.filter(user=self).exists()

    def has_active_or_inactive_specialist_resume(self) -> bool:
        return SpecialistResume.objects.filter(user=self).exists()

    def get_error_message_if_no_role_entity_present(self) -> str:
        """
        Empty string when the active persona has the entity it needs
        (published project / resume) to open a chat request.
        """
        if self.last_role_id == Role.SPECIALIST and not self.has_active_specialist_resume():
            return _request_role_message(gettext("specialist"))
        if self.last_role_id == Role.INVESTOR and not self.has_active_investor_resume():
            return _request_role_message(gettext("investor"))
        if self.last_role_id == Role.INITIATOR and not self.has_active_projects():
            return _request_role_message(gettext("initiator"))
        if self.last_role_id == Role.NEWLY:
            return _request_role_message("")
        return ""

    def has_default_avatar(self) -> bool:
        return self.avatar == self.DEFAULT_AVATAR

    # ------------------------------------------------------------
    # Chat outcomes
    # ------------------------------------------------------------

    def _count_rooms_with_outcome(self, outcome: int) -> int:
        return (
            ChatRoom.objects
            .with_member(self)
            .with_outcome_count(outcome)
            .filter(outcome_count=2)
            .count()
        )

    def get_count_of_success_chat_user_rooms(self) -> int:
        return self._count_rooms_with_outcome(ChatUserRoom.Outcome.SUCCEEDED)

    def get_count_of_non_success_chat_user_rooms(self) -> int:
        return self._count_rooms_with_outcome(ChatUserRoom.Outcome.FAILED)


class UserSetting(models.Model):
    """
    Per-user contact visibility. True hides the field from other users.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="setting",
    )

    surname = models.BooleanField(default=False)
    email = models.BooleanField(default=False)
    phone = models.BooleanField(default=False)
    facebook = models.BooleanField(default=False)
    linkedin = models.BooleanField(default=False)

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Setting:{self.user_id}"


class UserVerification(models.Model):
    class Status(models.IntegerChoices):
        PENDING = 1, "Pending"
        VERIFIED = 2, "Verified"
        REJECTED = 3, "Rejected"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="verifications",
    )
    status = models.PositiveSmallIntegerField(choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def is_verified(self) -> bool:
        return self.status == self.Status.VERIFIED

    def __str__(self) -> str:
        return f"Verification:{self.user_id}:{self.get_status_display()}"


class InvestorResume(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="investor_resume",
    )
    is_published = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"InvestorResume:{self.user_id}"


class SpecialistResume(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="specialist_resume",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"SpecialistResume:{self.user_id}"
