from django.test import TestCase

from apps.audit.models import Activity
from apps.users.models import User


class ActivityImmutabilityTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email="audit_test_user@example.com",
            password="password123",
            name="Audit Test User",
        )

        self.activity = Activity.objects.create(
            log_name="default",
            description="TEST_EVENT",
            causer_type="User",
            causer_id=self.user.id,
            properties={"session_id": "test-session"},
        )

    def test_bulk_update_is_blocked(self):
        with self.assertRaises(ValueError):
            Activity.objects.filter(pk=self.activity.pk).update(description="MODIFIED")

    def test_bulk_delete_is_blocked(self):
        with self.assertRaises(ValueError):
            Activity.objects.filter(pk=self.activity.pk).delete()

    def test_instance_save_after_create_is_blocked(self):
        self.activity.description = "MODIFIED"
        with self.assertRaises(ValueError):
            self.activity.save()

        self.activity.refresh_from_db()
        self.assertEqual(self.activity.description, "TEST_EVENT")

    def test_instance_delete_is_blocked(self):
        with self.assertRaises(ValueError):
            self.activity.delete()
        self.assertTrue(Activity.objects.filter(pk=self.activity.pk).exists())

    def test_session_id_property_reads_properties(self):
        self.assertEqual(self.activity.session_id, "test-session")
        bare = Activity.objects.create(description="No session")
        self.assertIsNone(bare.session_id)
        self.assertEqual(bare.properties, {})
