"""
URL routing for IP address endpoints.
"""

from django.urls import path
from apps.ip_addresses import views

app_name = "ip_addresses"

urlpatterns = [
    path("", views.list_or_create_ip_addresses, name="list-or-create"),
    path(
        "<int:ipAddressId>",
        views.get_update_or_delete_ip_address,
        name="detail",
    ),
]
