from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.audit.models import Activity
from apps.ip_addresses.models import IpAddress
from apps.users.models import User


class SeedDemoCommandTests(TestCase):
    def test_seed_creates_users_records_and_activities(self):
        call_command("seed_demo", stdout=StringIO())

        self.assertTrue(User.objects.get(email="admin@example.com").is_super_admin)
        self.assertEqual(IpAddress.objects.count(), 3)
        self.assertEqual(
            Activity.objects.filter(description="IP address has been created").count(), 3
        )

    def test_seed_is_idempotent(self):
        call_command("seed_demo", stdout=StringIO())
        call_command("seed_demo", stdout=StringIO())

        self.assertEqual(User.objects.count(), 3)
        self.assertEqual(IpAddress.objects.count(), 3)
