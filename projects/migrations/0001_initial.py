from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("locations", "0001_initial"),
        ("localization", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ProjectArea",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="PartnerRole",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("small_description", models.TextField(blank=True, default="")),
                ("description", models.TextField(blank=True, default="")),
                ("site", models.CharField(blank=True, default="", max_length=255)),
                ("goal", models.CharField(blank=True, default="", max_length=64)),
                ("in_work", models.CharField(blank=True, default="", max_length=255)),
                ("status", models.PositiveSmallIntegerField(blank=True, choices=[(1, "Draft"), (2, "Open")], null=True)),
                ("budget", models.PositiveBigIntegerField(default=0)),
                ("time_in_release", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("receive_messages", models.BooleanField(default=False)),
                ("is_published", models.BooleanField(default=False)),
                ("slug", models.SlugField(allow_unicode=True, max_length=255, unique=True)),
                ("full_address", models.CharField(blank=True, default="", max_length=500)),
                ("views", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("areas", models.ManyToManyField(blank=True, related_name="projects", to="projects.projectarea")),
                ("city", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="projects", to="locations.city")),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="projects", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["is_published", "created_at"], name="project_published_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProjectPhoto",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("image", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="photos", to="projects.project")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Partner",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.TextField(blank=True, default="")),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="partners", to="projects.project")),
                ("role", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="partners", to="projects.partnerrole")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Vacancy",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="vacancies", to="projects.project")),
            ],
            options={
                "ordering": ["id"],
                "verbose_name_plural": "vacancies",
            },
        ),
    ]
