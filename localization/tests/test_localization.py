from __future__ import annotations

from django.test import SimpleTestCase, TestCase
from django.utils import translation

from localization.fields import LocalizedField, current_locale, other_locales
from localization.models import Translation
from localization.services import LocalizationService
from projects.models import ProjectArea


class LocalizedFieldTests(SimpleTestCase):
    def test_resolve_prefers_requested_locale(self):
        field = LocalizedField({"uk": "Привіт", "en": "Hello"})
        self.assertEqual(field.resolve("en", ["uk", "ru"]), "Hello")

    def test_resolve_walks_fallback_in_order_and_skips_blanks(self):
        field = LocalizedField({"uk": "", "ru": "Привет", "en": "Hello"})
        self.assertEqual(field.resolve("uk", ["ru", "en"]), "Привет")
        self.assertEqual(field.resolve("uk", ["en", "ru"]), "Hello")

    def test_resolve_all_blank_returns_empty_string(self):
        self.assertEqual(LocalizedField({"uk": None, "en": ""}).resolve("uk", ["en", "ru"]), "")

    def test_from_payload_drops_unknown_locales_and_non_mappings(self):
        field = LocalizedField.from_payload({"uk": "a", "de": "b"})
        self.assertEqual(field.as_dict(), {"uk": "a"})
        self.assertEqual(LocalizedField.from_payload("plain").as_dict(), {})

    def test_current_and_other_locales(self):
        with translation.override("ru"):
            self.assertEqual(current_locale(), "ru")
            self.assertEqual(other_locales(), ["uk", "en"])


class LocalizationServiceTests(TestCase):
    def setUp(self):
        self.service = LocalizationService()
        self.area = ProjectArea.objects.create(name="ІТ")

    def test_set_get_and_overwrite(self):
        self.service.set(self.area, "name", "en", "IT")
        self.service.set(self.area, "name", "en", "Tech")
        self.assertEqual(self.service.get(self.area, "name", "en"), "Tech")
        self.assertEqual(Translation.objects.count(), 1)

    def test_blank_value_removes_row(self):
        self.service.set(self.area, "name", "en", "IT")
        self.service.set(self.area, "name", "en", "")
        self.assertIsNone(self.service.get(self.area, "name", "en"))
        self.assertEqual(Translation.objects.count(), 0)

    def test_save_lang_fields_leaves_missing_locales_alone(self):
        self.service.set(self.area, "name", "ru", "ИТ")
        self.service.save_lang_fields(("name",), {"name": {"uk": "ІТ", "en": "IT"}}, self.area)
        self.assertEqual(self.service.get(self.area, "name", "ru"), "ИТ")
        self.assertEqual(self.service.get(self.area, "name", "en"), "IT")

    def test_delete_for_owner(self):
        self.service.save_lang_fields(("name",), {"name": {"uk": "ІТ", "en": "IT"}}, self.area)
        other = ProjectArea.objects.create(name="Агро")
        self.service.set(other, "name", "en", "Agro")
        self.assertEqual(self.service.delete_for(self.area), 2)
        self.assertEqual(self.service.get(other, "name", "en"), "Agro")


class TranslatableMixinTests(TestCase):
    def setUp(self):
        self.area = ProjectArea.objects.create(name="Медицина")
        LocalizationService().set(self.area, "name", "en", "Medicine")

    def test_primary_locale_falls_back_to_column(self):
        area = ProjectArea.objects.get(pk=self.area.pk)
        self.assertEqual(area.get_translated_attribute("name", "uk"), "Медицина")
        self.assertIsNone(area.get_translated_attribute("name", "ru"))

    def test_get_lang_attribute_uses_active_locale_then_fallback(self):
        area = ProjectArea.objects.prefetch_related("translations").get(pk=self.area.pk)
        with translation.override("en"):
            self.assertEqual(area.get_lang_attribute("name"), "Medicine")
        with translation.override("ru"):
            # ru missing: uk is first among the remaining locales
            self.assertEqual(area.get_lang_attribute("name"), "Медицина")
