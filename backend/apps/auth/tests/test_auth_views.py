"""
API tests for apps.auth.views: token login, logout, refresh, current user,
registration.
"""

from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken

from apps.audit.models import Activity
from apps.users.models import Role, User


class TokenAuthTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email="token@example.com", password="password123", name="Token User"
        )

    def _login(self, **extra):
        payload = {"email": "token@example.com", "password": "password123"}
        payload.update(extra)
        response = self.client.post("/api/v1/auth/login", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return response.data["data"]

    def test_login_returns_token_pair_and_user(self):
        data = self._login(device_name="laptop")
        self.assertEqual(data["token_type"], "Bearer")
        self.assertTrue(data["token"])
        self.assertTrue(data["refresh"])
        self.assertIsNotNone(data["expires_at"])
        self.assertEqual(data["user"]["email"], "token@example.com")

    def test_login_with_bad_credentials_is_401(self):
        response = self.client.post(
            "/api/v1/auth/login",
            {"email": "token@example.com", "password": "nope-nope"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(
            response.data["error"]["message"], "The provided credentials are incorrect."
        )
        self.assertFalse(Activity.objects.exists())

    def test_login_validation_error_is_422(self):
        response = self.client.post(
            "/api/v1/auth/login", {"email": "not-an-email"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertIn("password", response.data["error"]["details"])

    def test_current_user_reports_token_expiry(self):
        data = self._login()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['token']}")

        response = self.client.get("/api/v1/auth/user")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.data["data"]
        self.assertEqual(body["user"]["id"], self.user.id)
        self.assertFalse(body["is_super_admin"])
        self.assertEqual(body["token_expires_at"], data["expires_at"])

    def test_logout_blacklists_refresh_token(self):
        data = self._login()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['token']}")

        response = self.client.post(
            "/api/v1/auth/logout", {"refresh_token": data["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(BlacklistedToken.objects.count(), 1)

        self.client.credentials()
        response = self.client.post(
            "/api/v1/auth/refresh", {"refresh_token": data["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_revoke_all(self):
        first = self._login()
        self._login()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {first['token']}")

        response = self.client.post(
            "/api/v1/auth/logout", {"revoke_all": True}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(BlacklistedToken.objects.count(), 2)

    def test_logout_with_foreign_refresh_token_is_403(self):
        User.objects.create_user(
            email="victim@example.com", password="password123", name="Victim"
        )
        victim = self.client.post(
            "/api/v1/auth/login",
            {"email": "victim@example.com", "password": "password123"},
            format="json",
        ).data["data"]
        mine = self._login()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {mine['token']}")

        response = self.client.post(
            "/api/v1/auth/logout", {"refresh_token": victim["refresh"]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(BlacklistedToken.objects.exists())

    def test_refresh_rotates_tokens(self):
        data = self._login()
        response = self.client.post(
            "/api/v1/auth/refresh", {"refresh_token": data["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotEqual(response.data["data"]["refresh"], data["refresh"])

    def test_refresh_with_garbage_is_401(self):
        response = self.client.post(
            "/api/v1/auth/refresh", {"refresh_token": "garbage"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_requires_authentication(self):
        response = self.client.post("/api/v1/auth/logout", {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class RegisterTests(APITestCase):
    def test_register_creates_regular_user(self):
        response = self.client.post(
            "/api/v1/auth/register",
            {
                "email": "new@example.com",
                "password": "password123",
                "name": "New",
                "role": Role.SUPER_ADMIN,
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        user = User.objects.get(email="new@example.com")
        self.assertEqual(user.role, Role.USER)
        self.assertTrue(user.check_password("password123"))

    def test_register_duplicate_email_is_422(self):
        User.objects.create_user(email="dup@example.com", password="password123")
        response = self.client.post(
            "/api/v1/auth/register",
            {"email": "dup@example.com", "password": "password123", "name": "Dup"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertIn("email", response.data["error"]["details"])
