from __future__ import annotations

from django.contrib.auth import get_user_model

from accounts.enums import Role
from chats.models import ChatMessage, ChatRoom, ChatUserRoom


_UNSET = object()


def make_user(username: str, role=Role.SPECIALIST, **extra):
    User = get_user_model()
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="pw",
        role_id=role,
        last_role_id=role,
        **extra,
    )


def open_room(relation_type, relation_id, members, request=_UNSET):
    """
    members: [(user, role_id), ...]. The first member sends the request.
    request: True accepted, False declined, None pending; omit for no
    request at all.
    """
    room = ChatRoom.objects.create(relation_type=relation_type, relation_id=relation_id)
    for user, role_id in members:
        ChatUserRoom.objects.create(room=room, user=user, role_id=role_id)
    if request is not _UNSET:
        ChatMessage.objects.create(
            room=room,
            user=members[0][0],
            type_id=ChatMessage.Type.REQUEST,
            text="Let's talk",
            is_accepted=request,
        )
    return room
