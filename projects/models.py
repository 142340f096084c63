# -*- coding: utf-8 -*-
# projects/models.py

from __future__ import annotations

from django.conf import settings
from django.contrib.contenttypes.fields import GenericRelation
from django.db import models
from django.urls import reverse

from chats.models import ChatRoom
from common.softdelete import SoftDeleteModel
from localization.mixins import TranslatableMixin
from localization.models import Translation

from .goals import GoalSet
from .querysets import ProjectManager


def _translations():
    return GenericRelation(
        Translation,
        content_type_field="owner_type",
        object_id_field="owner_id",
    )


class ProjectArea(TranslatableMixin, models.Model):
    """
    Industry / field tag. Listings filter on it (many-to-many).
    """

    translatable = ("name",)

    name = models.CharField(max_length=255)
    translations = _translations()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class PartnerRole(TranslatableMixin, models.Model):
    translatable = ("name",)

    name = models.CharField(max_length=255)
    translations = _translations()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Project(TranslatableMixin, SoftDeleteModel):
    """
    Marketplace listing owned by an initiator.

    - `name`, `small_description` and `description` hold the primary-locale
      text (search and admin); every locale lives in `translations`.
    - `goal` is the stored form of a GoalSet ("1,3").
    - `slug` is unique across live and soft-deleted rows.
    """

    PAGINATE_COUNT = settings.PROJECTS_PER_PAGE

    translatable = ("name", "small_description", "description")

    class Status(models.IntegerChoices):
        DRAFT = 1, "Draft"
        OPEN = 2, "Open"

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="projects",
    )
    city = models.ForeignKey(
        "locations.City",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="projects",
    )
    areas = models.ManyToManyField(ProjectArea, blank=True, related_name="projects")

    name = models.CharField(max_length=255, blank=True, default="")
    small_description = models.TextField(blank=True, default="")
    description = models.TextField(blank=True, default="")

    site = models.CharField(max_length=255, blank=True, default="")
    goal = models.CharField(max_length=64, blank=True, default="")
    in_work = models.CharField(max_length=255, blank=True, default="")
    status = models.PositiveSmallIntegerField(choices=Status.choices, null=True, blank=True)
    budget = models.PositiveBigIntegerField(default=0)
    time_in_release = models.PositiveSmallIntegerField(null=True, blank=True)
    receive_messages = models.BooleanField(default=False)
    is_published = models.BooleanField(default=False)

    slug = models.SlugField(max_length=255, unique=True, allow_unicode=True)
    full_address = models.CharField(max_length=500, blank=True, default="")
    views = models.PositiveIntegerField(default=0)

    translations = _translations()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProjectManager()
    all_objects = ProjectManager(with_trashed=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["is_published", "created_at"], name="project_published_idx"),
        ]

    def __str__(self) -> str:
        return self.name or self.slug

    # ------------------------------------------------------------
    # Display
    # ------------------------------------------------------------

    @property
    def status_in_words(self) -> str:
        return self.get_status_display() if self.status else ""

    def get_admin_view_link(self) -> str:
        return reverse("admin:projects_project_change", args=[self.pk])

    def is_same_slug(self, slug: str) -> bool:
        return self.slug == slug

    # ------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------

    @property
    def goals(self) -> GoalSet:
        return GoalSet.parse(self.goal)

    def has_goal(self, goal_id) -> bool:
        return goal_id in self.goals

    def _store_goals(self, goals: GoalSet) -> None:
        encoded = goals.encode()
        if encoded == self.goal:
            return
        self.goal = encoded
        self.save(update_fields=["goal", "updated_at"])

    def add_goal(self, goal_id) -> None:
        self._store_goals(self.goals.with_goal(goal_id))

    def remove_goal(self, goal_id) -> None:
        self._store_goals(self.goals.without_goal(goal_id))

    # ------------------------------------------------------------
    # Chats / contact visibility
    # ------------------------------------------------------------

    @property
    def chat_rooms(self):
        return ChatRoom.objects.for_relation(ChatRoom.RelationType.PROJECT, self.pk)

    def is_user_project(self, viewer) -> bool:
        viewer_id = getattr(viewer, "pk", None)
        return viewer_id is not None and self.owner_id == viewer_id

    def check_has_active_chat(self, viewer) -> bool:
        if getattr(viewer, "pk", None) is None:
            return False
        return self.chat_rooms.active_chat(viewer).exists()

    def has_active_chat(self, viewer) -> bool:
        """
        True when `viewer` has an accepted request on someone else's
        project. Uses rooms attached by the listing query when present.
        """
        if self.is_user_project(viewer):
            return False
        rooms = getattr(self, "user_chat_rooms", None)
        if rooms is not None:
            return len(rooms) > 0
        return self.check_has_active_chat(viewer)

    def _active_chat_room_count(self, viewer) -> int:
        count = getattr(self, "active_chat_room_count", None)
        if count is not None:
            return count
        if getattr(viewer, "pk", None) is None:
            return 0
        return self.chat_rooms.active_chat(viewer).count()

    def _can_browse(self, owner_check: str, viewer) -> bool:
        owner_allows = getattr(self.owner, owner_check)()
        if self.is_user_project(viewer):
            return owner_allows
        return owner_allows or self._active_chat_room_count(viewer) > 0

    def can_browse_surname(self, viewer=None) -> bool:
        return self._can_browse("can_browse_surname", viewer)

    def can_browse_email(self, viewer=None) -> bool:
        return self._can_browse("can_browse_email", viewer)

    def can_browse_phone(self, viewer=None) -> bool:
        return self._can_browse("can_browse_phone", viewer)

    def can_browse_facebook(self, viewer=None) -> bool:
        return self._can_browse("can_browse_facebook", viewer)

    def can_browse_linkedin(self, viewer=None) -> bool:
        return self._can_browse("can_browse_linkedin", viewer)


class ProjectPhoto(models.Model):
    IMAGE_PATH = settings.PROJECT_PHOTO_PATH

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="photos")
    image = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.image


class Partner(TranslatableMixin, models.Model):
    """
    Partner slot the project is looking for, typed by PartnerRole.
    """

    translatable = ("description",)

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="partners")
    role = models.ForeignKey(
        PartnerRole,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="partners",
    )
    description = models.TextField(blank=True, default="")
    translations = _translations()

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"Partner:{self.project_id}:{self.role_id}"


class Vacancy(TranslatableMixin, models.Model):
    translatable = ("name", "description")

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="vacancies")
    name = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")
    translations = _translations()

    class Meta:
        ordering = ["id"]
        verbose_name_plural = "vacancies"

    def __str__(self) -> str:
        return self.name
