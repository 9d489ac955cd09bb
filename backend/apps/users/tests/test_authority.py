"""
Authority tests: no privilege escalation via the API.
"""

from django.test import TestCase
from rest_framework.test import APIClient

from apps.users.models import Role, User


class AuthoritySmokeTests(TestCase):
    """Super-admins cannot be created via API."""

    def setUp(self):
        self.client = APIClient()
        User.objects.create_superuser(
            email="admin_authority_test@example.com",
            password="testpass123",
            name="Admin",
        )
        r = self.client.post(
            "/api/v1/auth/login",
            {"email": "admin_authority_test@example.com", "password": "testpass123"},
            format="json",
        )
        self.assertEqual(r.status_code, 200, r.data)
        self.token = r.data["data"]["token"]

    def test_cannot_create_super_admin_via_api(self):
        """POST /api/v1/users/ with role=super-admin must return 422 and reject."""
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token}")
        r = self.client.post(
            "/api/v1/users/",
            {
                "email": "would_be_admin@example.com",
                "password": "pass12345",
                "name": "Admin",
                "role": Role.SUPER_ADMIN,
            },
            format="json",
        )
        self.assertEqual(r.status_code, 422, r.data)
        self.assertEqual(
            r.data["error"]["details"]["role"][0],
            "Cannot create super-admin users via API",
        )
        self.assertFalse(User.objects.filter(email="would_be_admin@example.com").exists())

    def test_role_in_request_does_not_grant_access(self):
        """Role comes from the authenticated user, never from headers or params."""
        user = User.objects.create_user(
            email="plain@example.com", password="testpass123", name="Plain"
        )
        self.client.force_authenticate(user)
        r = self.client.get(
            "/api/v1/audit-logs/", {"role": Role.SUPER_ADMIN}, HTTP_X_ROLE=Role.SUPER_ADMIN
        )
        self.assertEqual(r.status_code, 403)
