from __future__ import annotations

import json

from django.http import QueryDict
from django.test import SimpleTestCase, TestCase

from chats.tests.helpers import make_user
from localization.services import LocalizationService
from locations.services import LocationService
from projects.filters import (
    CityParams,
    ProjectListingParams,
    apply_filters,
    filter_budget,
    filter_city,
    filter_goal,
    filter_international,
    filter_price_range,
    filter_project_area,
    filter_project_role,
    filter_search,
)
from projects.models import Partner, PartnerRole, Project, ProjectArea


class ListingParamsTests(SimpleTestCase):
    def test_none_and_empty_give_defaults(self):
        self.assertEqual(ProjectListingParams.from_raw(None), ProjectListingParams())
        self.assertEqual(ProjectListingParams.from_raw({}), ProjectListingParams())

    def test_invalid_values_are_dropped(self):
        params = ProjectListingParams.from_raw(
            {
                "status": "7",
                "budget": "five",
                "order": "sideways",
                "international": "0",
                "price_range_min": "10",
                "price_range_max": "lots",
                "search": "   ",
                "city": "{not json",
                "project_area": ["x", "3"],
            }
        )
        self.assertIsNone(params.status)
        self.assertIsNone(params.budget)
        self.assertEqual(params.order, "desc")
        self.assertFalse(params.international)
        self.assertIsNone(params.price_range)
        self.assertEqual(params.search, "")
        self.assertIsNone(params.city)
        self.assertEqual(params.project_area, (3,))

    def test_query_dict_lists_and_scalars(self):
        raw = QueryDict(
            "goal[]=1&goal[]=3&status=2&budget=4&order=asc&international=1"
            "&price_range_min=100&price_range_max=500&time_in_release=2&project_role=5"
        )
        params = ProjectListingParams.from_raw(raw)
        self.assertEqual(params.goal, ("1", "3"))
        self.assertEqual(params.status, 2)
        self.assertEqual(params.budget, 4)
        self.assertEqual(params.order, "asc")
        self.assertTrue(params.international)
        self.assertEqual(params.price_range, (100, 500))
        self.assertEqual(params.time_in_release, 2)
        self.assertEqual(params.project_role, (5,))

    def test_price_range_needs_both_bounds(self):
        self.assertIsNone(ProjectListingParams.from_raw({"price_range_min": "1"}).price_range)

    def test_city_blob(self):
        params = ProjectListingParams.from_raw({"city": json.dumps({"locality": "Lviv", "country": None})})
        self.assertEqual(params.city, CityParams(locality="Lviv"))
        self.assertIsNone(ProjectListingParams.from_raw({"city": "{}"}).city)


class FilterStageTests(TestCase):
    def setUp(self):
        self.owner = make_user("f_owner")
        self.counter = 0

    def _project(self, **fields):
        self.counter += 1
        fields.setdefault("is_published", True)
        return Project.objects.create(owner=self.owner, slug=f"p-{self.counter}", **fields)

    def _ids(self, qs):
        return set(qs.values_list("pk", flat=True))

    def test_budget_buckets_boundaries(self):
        low = self._project(budget=9999)
        ten = self._project(budget=10000)
        fifty = self._project(budget=50000)
        hundred = self._project(budget=100000)
        above = self._project(budget=100001)
        qs = Project.objects.all()

        self.assertEqual(self._ids(filter_budget(qs, 1)), {low.pk})
        self.assertEqual(self._ids(filter_budget(qs, 2)), {ten.pk, fifty.pk})
        self.assertEqual(self._ids(filter_budget(qs, 3)), {fifty.pk, hundred.pk})
        self.assertEqual(self._ids(filter_budget(qs, 4)), {above.pk})

    def test_goal_full_set_means_no_filter(self):
        projects = [self._project(goal=goal) for goal in ("1", "2", "1,3", "")]
        qs = Project.objects.all()

        self.assertEqual(self._ids(filter_goal(qs, ("3", "1", "2"))), {p.pk for p in projects})
        self.assertEqual(self._ids(filter_goal(qs, ("2", "3"))), {projects[1].pk, projects[2].pk})

    def test_city_precedence(self):
        locations = LocationService()
        lviv = locations.create_city_with_relations(
            {"city": "Lviv", "administrative_area_level_1": "Lviv Oblast", "country": "Ukraine"}
        )
        kyiv = locations.create_city_with_relations(
            {"city": "Kyiv", "administrative_area_level_1": "Kyiv", "country": "Ukraine"}
        )
        in_lviv = self._project(city=lviv)
        in_kyiv = self._project(city=kyiv)
        qs = Project.objects.all()

        both = CityParams(administrative_area_level_1="Lviv Oblast", locality="Kyiv")
        self.assertEqual(self._ids(filter_city(qs, both)), {in_lviv.pk})
        self.assertEqual(self._ids(filter_city(qs, CityParams(locality="Kyiv"))), {in_kyiv.pk})
        self.assertEqual(self._ids(filter_city(qs, CityParams(country="Ukraine"))), {in_lviv.pk, in_kyiv.pk})

    def test_international_needs_non_empty_english_name(self):
        english = self._project(name="Проєкт")
        russian = self._project(name="Проект")
        LocalizationService().set(english, "name", "en", "Project")
        LocalizationService().set(russian, "name", "ru", "Проект")

        self.assertEqual(self._ids(filter_international(Project.objects.all(), True)), {english.pk})

    def test_search_matches_base_columns_or_translations(self):
        by_column = self._project(name="Еко ферма", small_description="solar farm")
        by_translation = self._project(name="Сад")
        LocalizationService().set(by_translation, "description", "en", "Orchard with Solar panels")
        self._project(name="Інше", description="solar")  # matches base description
        ukrainian_only = self._project(name="Сонце")
        LocalizationService().set(ukrainian_only, "description", "uk", "solar")

        ids = self._ids(filter_search(Project.objects.all(), "solar"))
        self.assertIn(by_column.pk, ids)
        self.assertIn(by_translation.pk, ids)
        self.assertNotIn(ukrainian_only.pk, ids)
        self.assertEqual(len(ids), 3)

    def test_area_and_role_filters_do_not_duplicate_rows(self):
        it, agro = ProjectArea.objects.create(name="IT"), ProjectArea.objects.create(name="Agro")
        dev = PartnerRole.objects.create(name="Developer")
        project = self._project()
        project.areas.set([it, agro])
        Partner.objects.create(project=project, role=dev)
        Partner.objects.create(project=project, role=dev)
        self._project()

        qs = Project.objects.all()
        self.assertEqual(list(filter_project_area(qs, (it.pk, agro.pk)).values_list("pk", flat=True)), [project.pk])
        self.assertEqual(list(filter_project_role(qs, (dev.pk,)).values_list("pk", flat=True)), [project.pk])

    def test_price_range_inclusive(self):
        a = self._project(budget=100)
        b = self._project(budget=200)
        self._project(budget=201)
        self.assertEqual(self._ids(filter_price_range(Project.objects.all(), (100, 200))), {a.pk, b.pk})

    def test_apply_filters_composes_and_orders(self):
        first = self._project(status=Project.Status.OPEN, budget=5000)
        second = self._project(status=Project.Status.OPEN, budget=7000)
        self._project(status=Project.Status.DRAFT, budget=5000)

        params = ProjectListingParams.from_raw({"status": "2", "budget": "1", "order": "asc"})
        self.assertEqual(list(apply_filters(Project.objects.all(), params)), [first, second])

        params = ProjectListingParams.from_raw({"status": "2"})
        self.assertEqual(list(apply_filters(Project.objects.all(), params)), [second, first])
