from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ChatRoom",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("relation_type", models.CharField(choices=[("project", "Project"), ("investor_resume", "Investor resume"), ("specialist_resume", "Specialist resume")], max_length=32)),
                ("relation_id", models.PositiveBigIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["relation_type", "relation_id"], name="chatroom_relation_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ChatUserRoom",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role_id", models.PositiveSmallIntegerField(choices=[(1, "Admin"), (2, "Newly registered"), (3, "Specialist"), (4, "Investor"), (5, "Initiator")])),
                ("is_succeeded", models.PositiveSmallIntegerField(choices=[(0, "None"), (1, "Succeeded"), (2, "Failed")], default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("room", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="user_rooms", to="chats.chatroom")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="user_rooms", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("room", "user"), name="uniq_user_per_room"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ChatMessage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type_id", models.PositiveSmallIntegerField(choices=[(1, "Text"), (2, "Request")], default=1)),
                ("text", models.TextField(blank=True, default="")),
                ("is_accepted", models.BooleanField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("room", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="messages", to="chats.chatroom")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="chat_messages", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["room", "created_at"], name="chatmessage_room_idx"),
                ],
            },
        ),
    ]
