from __future__ import annotations

from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from accounts.models import User, UserSetting
from chats.tests.helpers import make_user
from projects.models import Project


class BackfillUserSettingsTests(TestCase):
    def test_creates_missing_rows_only(self):
        keep = make_user("keep")
        lost = make_user("lost")
        UserSetting.objects.filter(user=lost).delete()
        lost.delete()  # trashed users are backfilled too

        out = StringIO()
        call_command("backfill_user_settings", stdout=out)

        self.assertIn("Created 1", out.getvalue())
        self.assertEqual(UserSetting.objects.filter(user__in=[keep.pk, lost.pk]).count(), 2)


class AdminSmokeTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(username="root", email="root@example.com", password="pw")
        self.client.force_login(self.admin)

    def test_changelists_render(self):
        owner = make_user("adm_owner")
        Project.objects.create(owner=owner, slug="adm-1", name="Admin visible")

        for name in (
            "admin:accounts_user_changelist",
            "admin:projects_project_changelist",
            "admin:projects_projectarea_changelist",
            "admin:projects_partnerrole_changelist",
            "admin:chats_chatroom_changelist",
            "admin:locations_city_changelist",
        ):
            resp = self.client.get(reverse(name))
            self.assertEqual(resp.status_code, 200, name)

    def test_project_change_page(self):
        project = Project.objects.create(owner=make_user("adm_owner2"), slug="adm-2", site="https://x.example.com")
        resp = self.client.get(project.get_admin_view_link())
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "https://x.example.com")
