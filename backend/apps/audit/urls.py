"""
URL routing for audit log endpoints. GET only; no update or delete routes.
"""

from django.urls import path
from apps.audit import views

app_name = "audit"

urlpatterns = [
    path("", views.list_audit_logs, name="list"),
    path("user/<int:userId>", views.list_user_activities, name="user"),
    path(
        "ip-address/<int:ipAddressId>",
        views.list_ip_address_history,
        name="ip-address",
    ),
    path("session/<str:sessionId>", views.list_session_activities, name="session"),
    path("<int:activityId>", views.get_audit_log, name="show"),
]
