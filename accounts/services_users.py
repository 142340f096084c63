# -*- coding: utf-8 -*-
# accounts/services_users.py
# Purpose:
# User aggregate writes (profile, contact settings, avatar, localized
# name) and a few read helpers used by the admin and chat flows.

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.db import transaction
from django.db.models import Exists, OuterRef

from accounts.models import User
from accounts.signals import ensure_user_setting
from chats.models import ChatRoom, ChatUserRoom
from common.coerce import as_int
from localization.fields import LocalizedField, current_locale
from localization.services import LocalizationService
from locations.services import LocationService
from uploads.services import ImageStore


logger = logging.getLogger("marketplace.accounts")

# Keys handled by dedicated steps, never copied onto the row directly.
EXCLUDED_KEYS = (
    "name",
    "surname",
    "avatar",
    "country",
    "city",
    "administrative_area_level_1",
    "lat",
    "lng",
)

FILLABLE = ("email", "phone", "linkedin", "facebook", "last_role_id")


class UserRepository:
    def __init__(
        self,
        image_store: Optional[ImageStore] = None,
        localization_service: Optional[LocalizationService] = None,
        location_service: Optional[LocationService] = None,
    ):
        self.image_store = image_store or ImageStore()
        self.localization_service = localization_service or LocalizationService()
        self.location_service = location_service or LocationService()

    # ------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------

    def get_by_id(self, user_id) -> Optional[User]:
        return User.objects.filter(pk=user_id).prefetch_related("translations").first()

    def get_all_for_admin(self):
        return User.objects.only("id", "name", "surname").prefetch_related("translations").order_by("id")

    def get_users_subscribed_for_project(self, project):
        """
        Non-owner members of the project's rooms where exactly one
        request has been accepted.
        """
        rooms = (
            ChatRoom.objects
            .for_relation(ChatRoom.RelationType.PROJECT, project.pk)
            .with_accepted_request_count()
            .filter(accepted_request_count=1)
            .values("pk")
        )
        return (
            User.objects
            .filter(Exists(ChatUserRoom.objects.filter(user=OuterRef("pk"), room__in=rooms)))
            .exclude(pk=project.owner_id)
            .order_by("id")
        )

    # ------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------

    def _form_data(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        locale = current_locale()
        formed = {key: data[key] for key in FILLABLE if key in data and key not in EXCLUDED_KEYS}
        if "last_role_id" in formed:
            formed["last_role_id"] = as_int(formed["last_role_id"])

        formed["name"] = LocalizedField.from_payload(data.get("name")).get(settings.PRIMARY_LOCALE) or ""
        formed["surname"] = LocalizedField.from_payload(data.get("surname")).get(settings.PRIMARY_LOCALE) or ""
        formed["preferences"] = {"locale": locale}
        formed["locale"] = locale

        city = self.location_service.create_city_with_relations(data)
        if city is not None:
            formed["city"] = city
        return formed

    def _update_settings(self, user: User, data: Mapping[str, Any]) -> None:
        setting = ensure_user_setting(user)
        setting.surname = data.get("hide_surname") is not None
        setting.save(update_fields=["surname", "updated_at"])

    def _update_avatar(self, user: User, data: Mapping[str, Any]) -> None:
        avatar = data.get("avatar")
        if not avatar:
            return
        if not user.has_default_avatar():
            self.image_store.delete(user.avatar)
        user.avatar = self.image_store.store(avatar, User.AVATAR_PATH)
        user.save(update_fields=["avatar"])

    @transaction.atomic
    def update(self, user: User, data: Mapping[str, Any]) -> User:
        """
        Apply a profile form to `user`:

        1. allowlisted scalar fields, primary-locale name/surname, locale
           preference and resolved city;
        2. the "hide surname" contact setting;
        3. a replacement avatar (the previous file is removed unless it
           is the shared default);
        4. per-locale name/surname.

        Any failure rolls the whole update back.
        """
        for field, value in self._form_data(data).items():
            setattr(user, field, value)
        user.save()

        self._update_settings(user, data)
        self._update_avatar(user, data)
        self.localization_service.save_lang_fields(User.translatable, data, user)

        logger.info("Updated user %s", user.pk)
        return user

    def update_password(self, user_id, raw_password: str) -> int:
        return User.objects.filter(pk=user_id).update(password=make_password(raw_password))

    def update_avatar_with_user_id(self, user_id, image) -> int:
        reference = self.image_store.store(image, User.AVATAR_PATH)
        return User.objects.filter(pk=user_id).update(avatar=reference)

    def update_avatar_to_default(self, user: User) -> bool:
        user.avatar = User.DEFAULT_AVATAR
        user.save(update_fields=["avatar"])
        return True
