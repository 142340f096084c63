from __future__ import annotations

from django.test import TestCase

from chats.tests.helpers import make_user
from localization.services import LocalizationService
from projects.models import Partner, PartnerRole, Project, Vacancy
from projects.services_partners import PartnerRepository, VacancyRepository


class SlotReconciliationTests(TestCase):
    def setUp(self):
        self.project = Project.objects.create(owner=make_user("slots"), slug="slots-1")
        self.role = PartnerRole.objects.create(name="Юрист")

    def test_partner_slots_without_role_are_skipped(self):
        data = {"partner": {"role": ["", str(self.role.pk)], "en": {"description": ["x", "Lawyer"]}}}
        (partner,) = PartnerRepository().create_or_update(data, self.project.pk)
        self.assertEqual(partner.role, self.role)
        # no uk text in the slot: base column takes the first locale that has one
        self.assertEqual(partner.description, "Lawyer")
        self.assertEqual(LocalizationService().get(partner, "description", "en"), "Lawyer")

    def test_foreign_ids_are_not_reused(self):
        other = Project.objects.create(owner=make_user("other"), slug="slots-2")
        foreign = Partner.objects.create(project=other, role=self.role)
        data = {"partner": {"id": [str(foreign.pk)], "role": [str(self.role.pk)]}}

        (partner,) = PartnerRepository().create_or_update(data, self.project.pk)
        self.assertNotEqual(partner.pk, foreign.pk)
        self.assertTrue(Partner.objects.filter(pk=foreign.pk, project=other).exists())

    def test_vacancy_names_in_any_locale(self):
        data = {
            "vacancy": {
                "uk": {"name": ["", "Бухгалтер"], "description": ["", "Облік"]},
                "en": {"name": ["Designer", ""], "description": ["UI", ""]},
            }
        }
        vacancies = VacancyRepository().create_or_update(data, self.project.pk)
        self.assertEqual([v.name for v in vacancies], ["Designer", "Бухгалтер"])
        self.assertEqual(vacancies[0].get_translated_attribute("description", "en"), "UI")

    def test_remove_all_drops_translations(self):
        data = {"vacancy": {"en": {"name": ["Designer"]}}}
        (vacancy,) = VacancyRepository().create_or_update(data, self.project.pk)
        VacancyRepository().remove_all(self.project.pk)
        self.assertFalse(Vacancy.objects.exists())
        self.assertIsNone(LocalizationService().get(vacancy, "name", "en"))
