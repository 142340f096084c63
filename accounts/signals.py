# -*- coding: utf-8 -*-
# accounts/signals.py

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import receiver

from accounts.models import UserSetting


UserModel = get_user_model()

logger = logging.getLogger("marketplace.accounts")


def ensure_user_setting(user) -> UserSetting:
    setting, created = UserSetting.objects.get_or_create(user=user)
    if created:
        logger.debug("Seeded visibility settings for user %s", user.pk)
    return setting


@receiver(post_save, sender=UserModel)
def user_post_create(sender, instance, created: bool, **kwargs) -> None:
    if not created:
        return
    ensure_user_setting(instance)
