# -*- coding: utf-8 -*-
# projects/services_projects.py
# Purpose:
# Project aggregate: create / update (areas, localized text, photos,
# partners, vacancies, derived goal), listing and lookups, photo cleanup.

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping, Optional

from django.conf import settings
from django.core.paginator import Page, Paginator
from django.db import transaction
from django.db.models import Max
from django.utils.text import slugify

from common.coerce import as_flag, as_int, as_list
from localization.fields import LocalizedField, supported_locales
from localization.services import LocalizationService
from locations.services import LocationService
from uploads.services import ImageStore

from .filters import ProjectListingParams, apply_filters
from .goals import Goal, GoalSet
from .models import Project, ProjectPhoto
from .querysets import attach_user_chat_rooms
from .services_partners import PartnerRepository, VacancyRepository
from .signals import project_created, project_updated


logger = logging.getLogger("marketplace.projects")

# Order used to pick the base text for slugs.
SLUG_LOCALES = ("uk", "ru", "en")

DEFAULT_SLUG = "project"
SLUG_BASE_LENGTH = 240


class ProjectRepository:
    def __init__(
        self,
        image_store: Optional[ImageStore] = None,
        localization_service: Optional[LocalizationService] = None,
        location_service: Optional[LocationService] = None,
        partner_repository: Optional[PartnerRepository] = None,
        vacancy_repository: Optional[VacancyRepository] = None,
    ):
        self.image_store = image_store or ImageStore()
        self.localization_service = localization_service or LocalizationService()
        self.location_service = location_service or LocationService()
        self.partner_repository = partner_repository or PartnerRepository(self.localization_service)
        self.vacancy_repository = vacancy_repository or VacancyRepository(self.localization_service)

    # ------------------------------------------------------------
    # Slugs / localized text
    # ------------------------------------------------------------

    def get_existing_lang(self, values: Any) -> str:
        field = LocalizedField.from_payload(values)
        for locale in SLUG_LOCALES:
            if field.get(locale):
                return field.get(locale)
        return ""

    def make_slug(self, name: str) -> str:
        """
        slugify(name) plus "-N", where N is one more than the number of
        projects (trashed included) already using that base.

        Two concurrent creates can pick the same N; the unique index on
        `slug` rejects the second one.
        """
        base = slugify(name or "", allow_unicode=True)[:SLUG_BASE_LENGTH].strip("-") or DEFAULT_SLUG
        taken = Project.all_objects.filter(slug__regex=rf"^{re.escape(base)}(-[0-9]+)?$").count()
        return f"{base}-{taken + 1}"

    def save_lang_fields(self, data: Mapping[str, Any], project: Project) -> None:
        self.localization_service.save_lang_fields(Project.translatable, data, project)

    # ------------------------------------------------------------
    # Create / update
    # ------------------------------------------------------------

    def _form_data(self, data: Mapping[str, Any], user_id) -> Dict[str, Any]:
        primary = settings.PRIMARY_LOCALE

        def _primary(field: str) -> str:
            return LocalizedField.from_payload(data.get(field)).get(primary) or ""

        formed = {
            "owner_id": user_id,
            "name": _primary("name"),
            "small_description": _primary("small_description"),
            "description": _primary("description"),
            "site": data.get("site") or "",
            "goal": GoalSet.from_iterable(as_list(data, "goal")).encode(),
            "in_work": data.get("in_work") or "",
            "status": as_int(data.get("status")),
            "budget": max(as_int(data.get("budget")) or 0, 0),
            "time_in_release": as_int(data.get("time_in_release")),
            "receive_messages": as_flag(data.get("receive_messages")),
            "is_published": as_flag(data.get("is_published")),
            "full_address": data.get("autocomplete_search") or "",
        }

        city = self.location_service.create_city_with_relations(data)
        if city is not None:
            formed["city_id"] = city.pk
        return formed

    def _dispatch(self, signal, project: Project) -> None:
        transaction.on_commit(lambda: signal.send(sender=Project, project=project))

    def _save_project_areas(self, data: Mapping[str, Any], project: Project) -> None:
        # Absent key leaves areas alone; an empty list clears them.
        if "project_area" not in data and "project_area[]" not in data:
            return
        area_ids = [area_id for area_id in (as_int(v) for v in as_list(data, "project_area")) if area_id]
        project.areas.set(area_ids)

    def _save_photos(self, data: Mapping[str, Any], project: Project) -> None:
        for photo in as_list(data, "photo"):
            if not photo:
                continue
            reference = self.image_store.store(photo, ProjectPhoto.IMAGE_PATH)
            ProjectPhoto.objects.create(project=project, image=reference)

    def _save_partners_and_vacancies(self, data: Mapping[str, Any], project: Project) -> None:
        partner = data.get("partner")
        if not isinstance(partner, Mapping):
            partner = {}
        roles = as_list(partner, "role")
        if (roles and roles[0]) or len(as_list(partner, "id")) > 1:
            self.partner_repository.create_or_update(data, project.pk)
        else:
            self.partner_repository.remove_all(project.pk)

        vacancy = data.get("vacancy")
        if not isinstance(vacancy, Mapping):
            vacancy = {}
        first_names = []
        for locale in supported_locales():
            per_locale = vacancy.get(locale)
            names = as_list(per_locale, "name") if isinstance(per_locale, Mapping) else []
            first_names.append(names[0] if names else None)
        if any(first_names) or len(as_list(vacancy, "id")) > 1:
            self.vacancy_repository.create_or_update(data, project.pk)
        else:
            self.vacancy_repository.remove_all(project.pk)

    def _force_fill_goal_if_have_vacancies(self, project: Project) -> None:
        if project.vacancies.exists():
            project.add_goal(Goal.TEAM)
        else:
            project.remove_goal(Goal.TEAM)

    @transaction.atomic
    def create_or_update(self, data: Mapping[str, Any], user_id, project_id=None) -> Project:
        """
        Create a project (project_id=None) or update an existing one.

        Steps: scalar fields and city, then areas, localized text, new
        photos, partners and vacancies, and finally the "has open roles"
        goal derived from the vacancies just saved. Everything runs in
        one transaction; published projects emit project_created /
        project_updated after commit.
        """
        formed = self._form_data(data, user_id)

        if project_id is not None:
            project = Project.objects.get(pk=project_id)
            for field, value in formed.items():
                setattr(project, field, value)
            project.save()
            if project.is_published:
                self._dispatch(project_updated, project)
            action = "Updated"
        else:
            formed["slug"] = self.make_slug(self.get_existing_lang(data.get("name")))
            project = Project.objects.create(**formed)
            if project.is_published:
                self._dispatch(project_created, project)
            action = "Created"

        self._save_project_areas(data, project)
        self.save_lang_fields(data, project)
        self._save_photos(data, project)
        self._save_partners_and_vacancies(data, project)
        self._force_fill_goal_if_have_vacancies(project)

        logger.info("%s project %s (%s) for user %s", action, project.pk, project.slug, user_id)
        return project

    # ------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------

    def paginate_projects_with_all_relation(
        self,
        user_id=None,
        params: Optional[Mapping[str, Any]] = None,
        user=None,
        page=1,
    ) -> Page:
        """
        One page of listing cards.

        - `user_id`: only that owner's projects (drafts included);
          otherwise only published ones.
        - `params`: raw filter parameters (see ProjectListingParams).
        - `user`: viewer; restricts to projects the viewer has requested
          and attaches `user_chat_rooms`.
        """
        qs = Project.objects.all()
        qs = qs.owned_by(user_id) if user_id is not None else qs.published()
        qs = apply_filters(qs, ProjectListingParams.from_raw(params))
        qs = qs.where_specialist_or_investor_rooms(user).with_all_relation().with_live_owner()

        page_obj = Paginator(qs, Project.PAGINATE_COUNT).get_page(page)
        page_obj.object_list = attach_user_chat_rooms(page_obj.object_list, user)
        return page_obj

    def get_published_by_slug(self, slug: str, user=None) -> Project:
        """
        Detail lookup. Soft-deleted projects still resolve while their
        owner is active. Raises Project.DoesNotExist.
        """
        project = (
            Project.all_objects
            .filter(slug=slug)
            .with_live_owner()
            .with_all_relation()
            .with_user_chat_room(user)
            .get()
        )
        attach_user_chat_rooms([project], user)
        return project

    def get_users_by_slug(self, slug: str, user_id) -> Project:
        return Project.objects.owned_by(user_id).filter(slug=slug).with_all_relation().get()

    def get_max_price_range_value(self) -> int:
        return Project.objects.aggregate(value=Max("budget"))["value"] or 0

    # ------------------------------------------------------------
    # Photos / deletion
    # ------------------------------------------------------------

    def clean_up_file(self, photo: Optional[ProjectPhoto]) -> bool:
        if photo is None:
            return False
        self.image_store.delete(photo.image)
        photo.delete()
        return True

    @transaction.atomic
    def remove_file(self, project_id, photo_id) -> bool:
        photo = ProjectPhoto.objects.filter(project_id=project_id, pk=photo_id).first()
        return self.clean_up_file(photo)

    def clean_up(self, project: Project) -> bool:
        photos = list(project.photos.all())
        if not photos:
            return False
        for photo in photos:
            self.clean_up_file(photo)
        return True

    @transaction.atomic
    def delete(self, project_id) -> Project:
        project = Project.objects.get(pk=project_id)
        project.delete()
        logger.info("Deleted project %s (%s)", project.pk, project.slug)
        return project
