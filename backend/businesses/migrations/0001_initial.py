from django.db import migrations, models

import businesses.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Business",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(max_length=120, unique=True)),
                ("name", models.CharField(max_length=100)),
                ("whatsapp", models.CharField(max_length=15)),
                ("instagram", models.CharField(blank=True, max_length=64, null=True)),
                ("services", models.JSONField(blank=True, default=list)),
                ("edit_token", models.CharField(db_index=True, max_length=64)),
                ("theme", models.JSONField(default=businesses.models.default_theme_data)),
                ("profile", models.JSONField(default=businesses.models.default_profile_data)),
                ("links", models.JSONField(blank=True, default=list)),
                ("layout", models.JSONField(default=businesses.models.default_layout_data)),
                ("version", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
