from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
    ]

    operations = [
        migrations.CreateModel(
            name="Translation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("owner_id", models.PositiveBigIntegerField()),
                ("column_name", models.CharField(max_length=64)),
                ("locale", models.CharField(max_length=8)),
                ("value", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner_type", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="+", to="contenttypes.contenttype")),
            ],
            options={
                "indexes": [
                    models.Index(fields=["owner_type", "owner_id"], name="translation_owner_idx"),
                    models.Index(fields=["column_name", "locale"], name="translation_column_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("owner_type", "owner_id", "column_name", "locale"), name="uniq_translation_per_locale"),
                ],
            },
        ),
    ]
