"""
API tests for apps.audit.views.

Covers listing, filters, per-user / per-record / per-session views, single
entry lookup and access control.
"""

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.audit import services
from apps.audit.context import RequestContext
from apps.ip_addresses.models import IpAddress
from apps.users.models import Role, User


class AuditViewTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="password123",
            name="Admin",
            role=Role.SUPER_ADMIN,
        )
        self.user = User.objects.create_user(
            email="user@example.com", password="password123", name="Regular"
        )
        self.record = IpAddress.objects.create(
            ip_address="172.16.0.1", label="Switch", user=self.user
        )
        context = RequestContext(actor=self.user, session_id="sess-views")
        self.login = services.append_activity(
            context, "User logged in", log_name=services.AUTH_LOG_NAME
        )
        self.created = services.append_activity(
            context, "IP address has been created", subject=self.record
        )
        self.client.force_authenticate(self.admin)

    def test_list_returns_page_with_log_names(self):
        response = self.client.get(reverse("audit:list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["count"], 2)
        self.assertEqual(body["results"][0]["id"], self.created.id)
        self.assertEqual(body["results"][0]["causer"]["email"], "user@example.com")
        self.assertEqual(body["logNames"], ["authentication", "default"])

    def test_list_pagination_links_keep_filters(self):
        response = self.client.get(
            reverse("audit:list"), {"per_page": 1, "search": "e"}
        )
        body = response.json()
        self.assertEqual(body["perPage"], 1)
        self.assertIn("search=e", body["next"])
        self.assertIn("page=2", body["next"])
        self.assertIsNone(body["previous"])

    def test_list_filter_by_log_name(self):
        response = self.client.get(reverse("audit:list"), {"log_name": "authentication"})
        ids = [row["id"] for row in response.json()["results"]]
        self.assertEqual(ids, [self.login.id])

    def test_invalid_filter_is_422(self):
        response = self.client.get(reverse("audit:list"), {"causer_id": "abc"})
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_user_activities(self):
        url = reverse("audit:user", kwargs={"userId": self.user.id})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["count"], 2)

    def test_ip_address_history(self):
        url = reverse("audit:ip-address", kwargs={"ipAddressId": self.record.id})
        response = self.client.get(url)
        ids = [row["id"] for row in response.json()["results"]]
        self.assertEqual(ids, [self.created.id])

    def test_session_activities(self):
        url = reverse("audit:session", kwargs={"sessionId": "sess-views"})
        response = self.client.get(url)
        self.assertEqual(response.json()["count"], 2)
        self.assertEqual(response.json()["results"][0]["sessionId"], "sess-views")

    def test_show_resolves_subject(self):
        url = reverse("audit:show", kwargs={"activityId": self.created.id})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()["data"]
        self.assertEqual(data["subject"]["ip_address"], "172.16.0.1")
        self.assertEqual(data["causer"]["name"], "Regular")

    def test_show_missing_is_404(self):
        url = reverse("audit:show", kwargs={"activityId": 999999})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["error"]["code"], "NOT_FOUND")

    def test_regular_user_is_forbidden(self):
        self.client.force_authenticate(self.user)
        for url in (
            reverse("audit:list"),
            reverse("audit:user", kwargs={"userId": self.user.id}),
            reverse("audit:show", kwargs={"activityId": self.login.id}),
        ):
            response = self.client.get(url)
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, url)
            self.assertEqual(response.json()["error"]["code"], "FORBIDDEN")

    def test_unauthenticated_is_401(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse("audit:list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_no_mutation_routes(self):
        url = reverse("audit:show", kwargs={"activityId": self.login.id})
        self.assertEqual(
            self.client.delete(url).status_code, status.HTTP_405_METHOD_NOT_ALLOWED
        )
        self.assertEqual(
            self.client.put(url, {"description": "x"}, format="json").status_code,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        )
        self.assertTrue(services.list_all().filter(pk=self.login.id).exists())
