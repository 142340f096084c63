from __future__ import annotations

from unittest.mock import MagicMock

from django.contrib.auth.hashers import check_password
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.utils import translation

from accounts.enums import Role
from accounts.models import User
from accounts.services_users import UserRepository
from chats.models import ChatRoom
from chats.tests.helpers import make_user, open_room
from localization.services import LocalizationService
from projects.models import Project


class UserRepositoryUpdateTests(TestCase):
    def setUp(self):
        self.user = make_user("upd", phone="111")
        self.image_store = MagicMock()
        self.image_store.store.return_value = "public/users/avatars/new.png"
        self.repo = UserRepository(image_store=self.image_store)

    def _payload(self, **extra):
        data = {
            "name": {"uk": "Іван", "en": "Ivan"},
            "surname": {"uk": "Петренко", "en": "Petrenko"},
            "phone": "+380000000",
            "email": "ivan@example.com",
        }
        data.update(extra)
        return data

    def test_update_applies_fields_and_translations(self):
        with translation.override("en"):
            self.repo.update(self.user, self._payload())

        user = User.objects.get(pk=self.user.pk)
        self.assertEqual(user.name, "Іван")
        self.assertEqual(user.surname, "Петренко")
        self.assertEqual(user.phone, "+380000000")
        self.assertEqual(user.email, "ivan@example.com")
        self.assertEqual(user.locale, "en")
        self.assertEqual(user.preferences, {"locale": "en"})
        self.assertEqual(LocalizationService().get(user, "name", "en"), "Ivan")

    def test_update_ignores_non_fillable_keys(self):
        self.repo.update(self.user, self._payload(role_id=Role.ADMIN, password="plain", avatar=None))
        user = User.objects.get(pk=self.user.pk)
        self.assertEqual(user.role_id, Role.SPECIALIST)
        self.assertTrue(user.check_password("pw"))
        self.image_store.store.assert_not_called()

    def test_hide_surname_flag(self):
        self.repo.update(self.user, self._payload(hide_surname="on"))
        self.assertTrue(User.objects.get(pk=self.user.pk).setting.surname)

        self.repo.update(self.user, self._payload())
        self.assertFalse(User.objects.get(pk=self.user.pk).setting.surname)

    def test_city_resolved_from_address(self):
        self.repo.update(self.user, self._payload(city="Dnipro", country="Ukraine"))
        user = User.objects.get(pk=self.user.pk)
        self.assertEqual(user.city.name, "Dnipro")
        self.assertEqual(user.full_address, "Dnipro, Ukraine")

    def test_new_avatar_keeps_default_file(self):
        upload = SimpleUploadedFile("me.png", b"png")
        self.repo.update(self.user, self._payload(avatar=upload))

        self.image_store.delete.assert_not_called()
        self.image_store.store.assert_called_once_with(upload, User.AVATAR_PATH)
        self.assertEqual(User.objects.get(pk=self.user.pk).avatar, "public/users/avatars/new.png")

    def test_new_avatar_replaces_uploaded_file(self):
        self.user.avatar = "public/users/avatars/old.png"
        self.user.save()
        self.repo.update(self.user, self._payload(avatar=SimpleUploadedFile("me.png", b"png")))
        self.image_store.delete.assert_called_once_with("public/users/avatars/old.png")

    def test_failure_rolls_back_profile(self):
        self.image_store.store.side_effect = OSError("disk full")
        with self.assertRaises(OSError):
            self.repo.update(self.user, self._payload(avatar=SimpleUploadedFile("me.png", b"png")))
        user = User.objects.get(pk=self.user.pk)
        self.assertEqual(user.phone, "111")
        self.assertIsNone(LocalizationService().get(user, "name", "en"))


class UserRepositoryHelperTests(TestCase):
    def setUp(self):
        self.repo = UserRepository(image_store=MagicMock())

    def test_update_password(self):
        user = make_user("pw_user")
        self.assertEqual(self.repo.update_password(user.pk, "n3w-secret"), 1)
        user.refresh_from_db()
        self.assertTrue(check_password("n3w-secret", user.password))

    def test_avatar_helpers(self):
        user = make_user("av_user")
        self.repo.image_store.store.return_value = "public/users/avatars/a.png"
        self.repo.update_avatar_with_user_id(user.pk, SimpleUploadedFile("a.png", b"x"))
        user.refresh_from_db()
        self.assertEqual(user.avatar, "public/users/avatars/a.png")

        self.assertTrue(self.repo.update_avatar_to_default(user))
        user.refresh_from_db()
        self.assertTrue(user.has_default_avatar())

    def test_get_by_id_skips_trashed(self):
        user = make_user("gone")
        self.assertEqual(self.repo.get_by_id(user.pk), user)
        user.delete()
        self.assertIsNone(self.repo.get_by_id(user.pk))
        self.assertTrue(User.all_objects.filter(pk=user.pk).exists())

    def test_get_users_subscribed_for_project(self):
        owner = make_user("owner", role=Role.INITIATOR)
        subscriber = make_user("sub")
        pending = make_user("pending")
        project = Project.objects.create(owner=owner, name="P", slug="p-1")

        open_room(
            ChatRoom.RelationType.PROJECT,
            project.pk,
            [(subscriber, Role.SPECIALIST), (owner, Role.INITIATOR)],
            request=True,
        )
        open_room(
            ChatRoom.RelationType.PROJECT,
            project.pk,
            [(pending, Role.SPECIALIST), (owner, Role.INITIATOR)],
            request=None,
        )

        self.assertEqual(list(self.repo.get_users_subscribed_for_project(project)), [subscriber])
        self.assertEqual(list(self.repo.get_all_for_admin()), [owner, subscriber, pending])
