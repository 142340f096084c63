# chats/models.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from django.apps import apps
from django.conf import settings
from django.db import models
from django.db.models import Count, Exists, IntegerField, OuterRef, Q, Subquery
from django.db.models.functions import Coalesce

from accounts.enums import Role


class ChatRoomQuerySet(models.QuerySet):
    """
    Chat state predicates used by listings and access checks.

    A room is attached to exactly one relation (see ChatRoom.RelationType);
    a user "acts" in a room through the membership carrying their current
    persona (`last_role_id`).
    """

    def for_relation(self, relation_type: str, relation_id):
        return self.filter(relation_type=relation_type, relation_id=relation_id)

    def with_member(self, user, role_id=None):
        memberships = ChatUserRoom.objects.filter(room=OuterRef("pk"), user=user)
        if role_id is not None:
            memberships = memberships.filter(role_id=role_id)
        return self.filter(Exists(memberships))

    def with_counterpart(self, user, role_id):
        """Rooms where someone other than `user` takes part as `role_id`."""
        return self.filter(
            Exists(ChatUserRoom.objects.filter(room=OuterRef("pk"), role_id=role_id).exclude(user=user))
        )

    def active_chat(self, user):
        """
        Rooms where `user` (as their current persona) has a request that
        the counterpart accepted.
        """
        return self.with_member(user, user.last_role_id).filter(
            Exists(
                ChatMessage.objects.filter(
                    room=OuterRef("pk"),
                    type_id=ChatMessage.Type.REQUEST,
                    is_accepted=True,
                )
            )
        )

    def active_or_pending_chat(self, user):
        """Like active_chat(), but an unanswered request also counts."""
        return self.with_member(user, user.last_role_id).filter(
            Exists(
                ChatMessage.objects.filter(
                    Q(is_accepted=True) | Q(is_accepted__isnull=True),
                    room=OuterRef("pk"),
                    type_id=ChatMessage.Type.REQUEST,
                )
            )
        )

    def with_accepted_request_count(self):
        accepted = (
            ChatMessage.objects
            .filter(room=OuterRef("pk"), type_id=ChatMessage.Type.REQUEST, is_accepted=True)
            .order_by()
            .values("room")
            .annotate(n=Count("pk"))
            .values("n")
        )
        return self.annotate(
            accepted_request_count=Coalesce(Subquery(accepted, output_field=IntegerField()), 0)
        )

    def with_outcome_count(self, outcome: int):
        members = (
            ChatUserRoom.objects
            .filter(room=OuterRef("pk"), is_succeeded=outcome)
            .order_by()
            .values("room")
            .annotate(n=Count("pk"))
            .values("n")
        )
        return self.annotate(outcome_count=Coalesce(Subquery(members, output_field=IntegerField()), 0))


class ChatRoom(models.Model):
    """
    Conversation attached to one marketplace entity.

    The attachment is a tagged union: `relation_type` names the entity
    kind, `relation_id` its primary key.
    """

    class RelationType(models.TextChoices):
        PROJECT = "project", "Project"
        INVESTOR_RESUME = "investor_resume", "Investor resume"
        SPECIALIST_RESUME = "specialist_resume", "Specialist resume"

    RELATION_MODELS = {
        RelationType.PROJECT: "projects.Project",
        RelationType.INVESTOR_RESUME: "accounts.InvestorResume",
        RelationType.SPECIALIST_RESUME: "accounts.SpecialistResume",
    }

    relation_type = models.CharField(max_length=32, choices=RelationType.choices)
    relation_id = models.PositiveBigIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ChatRoomQuerySet.as_manager()

    class Meta:
        indexes = [
            models.Index(fields=["relation_type", "relation_id"], name="chatroom_relation_idx"),
        ]

    def __str__(self) -> str:
        return f"ChatRoom:{self.pk}:{self.relation_type}:{self.relation_id}"

    def resolve_relation(self):
        model = apps.get_model(self.RELATION_MODELS[self.relation_type])
        manager = getattr(model, "all_objects", model._default_manager)
        return manager.filter(pk=self.relation_id).first()


class ChatUserRoom(models.Model):
    """
    Membership of a user in a room, under one persona.
    """

    class Outcome(models.IntegerChoices):
        NONE = 0, "None"
        SUCCEEDED = 1, "Succeeded"
        FAILED = 2, "Failed"

    room = models.ForeignKey(
        ChatRoom,
        on_delete=models.CASCADE,
        related_name="user_rooms",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="user_rooms",
    )
    role_id = models.PositiveSmallIntegerField(choices=Role.choices)
    is_succeeded = models.PositiveSmallIntegerField(choices=Outcome.choices, default=Outcome.NONE)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["room", "user"], name="uniq_user_per_room"),
        ]

    def __str__(self) -> str:
        return f"{self.room_id}:{self.user_id}:{self.role_id}"


class ChatMessage(models.Model):
    class Type(models.IntegerChoices):
        TEXT = 1, "Text"
        REQUEST = 2, "Request"

    room = models.ForeignKey(
        ChatRoom,
        on_delete=models.CASCADE,
        related_name="messages",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="chat_messages",
    )
    type_id = models.PositiveSmallIntegerField(choices=Type.choices, default=Type.TEXT)
    text = models.TextField(blank=True, default="")

    # Requests only: None = pending, True = accepted, False = declined
    is_accepted = models.BooleanField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["room", "created_at"], name="chatmessage_room_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room_id}:{self.pk}:{self.get_type_id_display()}"
