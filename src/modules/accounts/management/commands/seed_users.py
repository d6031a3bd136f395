from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.accounts.constants import Role
from modules.accounts.models import User

DEFAULT_USERS = [
    ("admin@company.com", "admin123", Role.ADMIN, "Admin User"),
    ("frame@company.com", "frame123", Role.FRAME_CUTTING, "Frame Cutter"),
    ("mesh@company.com", "mesh123", Role.MESH_CUTTING, "Mesh Cutter"),
    ("quality@company.com", "quality123", Role.QUALITY, "Quality Control"),
]


class Command(BaseCommand):
    help = "Create the default staff accounts (one per role). Existing emails are skipped."

    def handle(self, *args, **options):
        created = 0
        for email, password, role, name in DEFAULT_USERS:
            if User.objects.filter(email=email).exists():
                self.stdout.write(f"  - {email} already exists, skipping")
                continue
            User.objects.create_user(email, password=password, role=role, name=name)
            created += 1
            self.stdout.write(f"  + {email} ({role})")

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: created={created}, skipped={len(DEFAULT_USERS) - created}"
            )
        )
