# -*- coding: utf-8 -*-
# accounts/management/commands/backfill_user_settings.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import UserSetting


class Command(BaseCommand):
    help = "Create missing UserSetting rows (contact visibility) for existing users."

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()
        missing = User.all_objects.filter(setting__isnull=True)

        created = 0
        for user in missing.iterator():
            UserSetting.objects.create(user=user)
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Created {created} user setting row(s)."))
