from django.urls import include, path

urlpatterns = [
    path("health/", include("health.urls")),
    # Session-cookie login/logout for the web client
    path("auth/", include("apps.auth.session_urls")),
    # API v1
    path("api/v1/auth/", include("apps.auth.urls")),
    path("api/v1/users/", include("apps.users.urls")),
    path("api/v1/ip-addresses/", include("apps.ip_addresses.urls")),
    path("api/v1/audit-logs/", include("apps.audit.urls")),
]
