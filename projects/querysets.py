# -*- coding: utf-8 -*-
# projects/querysets.py

from __future__ import annotations

from typing import Iterable

from django.db.models import Count, Exists, IntegerField, OuterRef, Prefetch, Subquery, Value
from django.db.models.functions import Coalesce

from accounts.enums import Role
from accounts.models import UserVerification
from chats.models import ChatRoom
from common.softdelete import SoftDeleteManager, SoftDeleteQuerySet


def _is_viewer(user) -> bool:
    return user is not None and getattr(user, "pk", None) is not None


def _project_rooms():
    return ChatRoom.objects.filter(
        relation_type=ChatRoom.RelationType.PROJECT,
        relation_id=OuterRef("pk"),
    )


class ProjectQuerySet(SoftDeleteQuerySet):
    def published(self):
        return self.filter(is_published=True)

    def owned_by(self, user_id):
        return self.filter(owner_id=user_id)

    def with_live_owner(self):
        return self.filter(owner__deleted_at__isnull=True)

    def ordered(self, order: str = "desc"):
        if order == "asc":
            return self.order_by("created_at", "id")
        return self.order_by("-created_at", "-id")

    def with_all_relation(self):
        """
        Everything a listing card or detail page renders, in a fixed
        number of queries.
        """
        return self.select_related(
            "city",
            "city__area",
            "city__country",
            "owner",
            "owner__setting",
        ).prefetch_related(
            "translations",
            "photos",
            "areas__translations",
            "partners__translations",
            "partners__role__translations",
            "vacancies__translations",
            "owner__translations",
            Prefetch(
                "owner__verifications",
                queryset=UserVerification.objects.order_by("-created_at", "-id"),
                to_attr="latest_verifications",
            ),
        )

    def with_user_chat_room(self, user):
        """
        Annotate `active_chat_room_count`: rooms on the project where
        `user` holds an accepted request. 0 without a viewer.
        """
        if not _is_viewer(user):
            return self.annotate(active_chat_room_count=Value(0, output_field=IntegerField()))

        counts = (
            _project_rooms()
            .active_chat(user)
            .order_by()
            .values("relation_id")
            .annotate(n=Count("pk"))
            .values("n")
        )
        return self.annotate(
            active_chat_room_count=Coalesce(Subquery(counts, output_field=IntegerField()), 0)
        )

    def where_specialist_or_investor_rooms(self, user):
        """
        With a viewer, keep only projects where the viewer has an
        accepted or still pending request.
        """
        qs = self
        if _is_viewer(user):
            qs = qs.filter(Exists(_project_rooms().active_or_pending_chat(user)))
        return qs.with_user_chat_room(user)


class ProjectManager(SoftDeleteManager.from_queryset(ProjectQuerySet)):
    pass


def attach_user_chat_rooms(projects: Iterable, user) -> list:
    """
    Set `user_chat_rooms` on each project: the viewer's active rooms
    (accepted request, current persona) that also have an initiator on
    the other side.
    """
    projects = list(projects)
    if not _is_viewer(user):
        for project in projects:
            project.user_chat_rooms = []
        return projects

    rooms = []
    ids = [project.pk for project in projects]
    if ids:
        rooms = (
            ChatRoom.objects
            .filter(relation_type=ChatRoom.RelationType.PROJECT, relation_id__in=ids)
            .active_chat(user)
            .with_counterpart(user, Role.INITIATOR)
            .order_by("id")
        )

    by_project = {}
    for room in rooms:
        by_project.setdefault(room.relation_id, []).append(room)
    for project in projects:
        project.user_chat_rooms = by_project.get(project.pk, [])
    return projects
