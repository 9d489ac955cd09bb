"""
End-to-end session correlation: every activity recorded between a login
and its logout carries the same session id.
"""

from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from apps.audit import services
from apps.audit.sessions import SESSION_KEY, TOKEN_CLAIM
from apps.users.models import User


class WebSessionCorrelationTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email="web@example.com", password="password123", name="Web User"
        )

    def test_login_create_logout_share_one_session(self):
        response = self.client.post(
            "/auth/login",
            {"email": "web@example.com", "password": "password123"},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        session_id = self.client.session[SESSION_KEY]

        response = self.client.post(
            "/api/v1/ip-addresses/",
            {"ip_address": "10.1.1.1", "label": "Web box"},
            format="json",
        )
        self.assertEqual(response.status_code, 201, response.data)

        response = self.client.post("/auth/logout", format="json")
        self.assertEqual(response.status_code, 200, response.data)

        activities = list(services.list_for_session(session_id))
        self.assertEqual(
            [a.description for a in activities],
            ["User logged out", "IP address has been created", "User logged in"],
        )
        self.assertTrue(all(a.causer_id == self.user.id for a in activities))
        self.assertEqual(activities[-1].properties["method"], "session")

    def test_each_login_gets_a_new_session(self):
        credentials = {"email": "web@example.com", "password": "password123"}
        self.client.post("/auth/login", credentials, format="json")
        first = self.client.session[SESSION_KEY]
        self.client.post("/auth/logout", format="json")
        self.client.post("/auth/login", credentials, format="json")
        second = self.client.session[SESSION_KEY]
        self.assertNotEqual(first, second)

    def test_failed_login_records_nothing(self):
        response = self.client.post(
            "/auth/login",
            {"email": "web@example.com", "password": "wrong-password"},
            format="json",
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"]["code"], "UNAUTHORIZED")
        self.assertFalse(services.list_all().exists())


class ApiTokenCorrelationTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email="api@example.com", password="password123", name="Api User"
        )

    def _login(self):
        response = self.client.post(
            "/api/v1/auth/login",
            {"email": "api@example.com", "password": "password123"},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        return response.data["data"]

    def test_token_carries_session_claim(self):
        data = self._login()
        session_id = AccessToken(data["token"])[TOKEN_CLAIM]

        login_event = services.list_for_session(session_id).get()
        self.assertEqual(login_event.description, "User logged in via API")
        self.assertEqual(login_event.properties["method"], "api_token")

    def test_login_create_logout_share_one_session(self):
        data = self._login()
        session_id = AccessToken(data["token"])[TOKEN_CLAIM]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['token']}")

        response = self.client.post(
            "/api/v1/ip-addresses/",
            {"ip_address": "2001:db8::10", "label": "Api box"},
            format="json",
        )
        self.assertEqual(response.status_code, 201, response.data)

        response = self.client.post(
            "/api/v1/auth/logout", {"refresh_token": data["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, 200, response.data)

        self.assertEqual(
            [a.description for a in services.list_for_session(session_id)],
            [
                "User logged out via API",
                "IP address has been created",
                "User logged in via API",
            ],
        )

    def test_refresh_keeps_session_and_records_event(self):
        data = self._login()
        session_id = AccessToken(data["token"])[TOKEN_CLAIM]

        response = self.client.post(
            "/api/v1/auth/refresh", {"refresh_token": data["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, 200, response.data)
        refreshed = response.data["data"]
        self.assertEqual(AccessToken(refreshed["token"])[TOKEN_CLAIM], session_id)
        self.assertEqual(
            services.list_for_session(session_id).first().description,
            "User refreshed API token",
        )
