# chats/admin.py
from django.contrib import admin
from .models import ChatMessage, ChatRoom, ChatUserRoom


class ChatUserRoomInline(admin.TabularInline):
    model = ChatUserRoom
    extra = 0
    fields = ("user", "role_id", "is_succeeded", "created_at")
    readonly_fields = ("created_at",)
    raw_id_fields = ("user",)


class ChatMessageInline(admin.TabularInline):
    """
    Inline messages under a room.
    Read-only to avoid accidental edits.
    """
    model = ChatMessage
    extra = 0
    can_delete = False
    readonly_fields = ("user", "type_id", "text", "is_accepted", "created_at")
    fields = ("created_at", "user", "type_id", "is_accepted", "text")
    ordering = ("created_at",)


@admin.register(ChatRoom)
class ChatRoomAdmin(admin.ModelAdmin):
    list_display = ("id", "relation_type", "relation_id", "created_at", "updated_at")
    list_filter = ("relation_type",)
    search_fields = ("relation_id",)
    ordering = ("-updated_at",)
    readonly_fields = ("created_at", "updated_at")

    inlines = (ChatUserRoomInline, ChatMessageInline)
