"""
Demo data management command.

Creates a super-admin, two regular users and a few IP address records.
Records are created through the service layer so each one has its
creation activity.
Run: python manage.py seed_demo
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.audit.context import RequestContext
from apps.ip_addresses import services
from apps.users.models import Role, User

DEMO_PASSWORD = "password"

DEMO_USERS = [
    ("admin@example.com", "Super Admin", Role.SUPER_ADMIN),
    ("alice@example.com", "Alice", Role.USER),
    ("bob@example.com", "Bob", Role.USER),
]

DEMO_RECORDS = {
    "alice@example.com": [
        {"ip_address": "192.168.1.10", "label": "Office router", "comment": "Main floor"},
        {"ip_address": "10.0.0.5", "label": "Build server"},
    ],
    "bob@example.com": [
        {"ip_address": "2001:db8::1", "label": "IPv6 gateway", "comment": "Lab network"},
    ],
}


class Command(BaseCommand):
    help = "Seed demo users and IP address records"

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default=DEMO_PASSWORD,
            help="Password set on every created demo user",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        users = {}
        for email, name, role in DEMO_USERS:
            user = User.objects.filter(email=email).first()
            if user is None:
                user = User.objects.create_user(
                    email=email, password=options["password"], name=name, role=role
                )
                self.stdout.write(f"Created {role} {email}")
            else:
                self.stdout.write(f"User {email} already exists, skipping")
            users[email] = user

        created = 0
        for email, records in DEMO_RECORDS.items():
            owner = users[email]
            if owner.ip_addresses.exists():
                continue
            context = RequestContext(actor=owner)
            for data in records:
                services.create_ip_address(context, data)
                created += 1

        self.stdout.write(self.style.SUCCESS(f"Seeded {created} IP address records"))
