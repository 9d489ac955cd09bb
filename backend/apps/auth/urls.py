"""
URL routing for token authentication endpoints (/api/v1/auth/).
"""

from django.urls import path
from apps.auth import views

app_name = "api-auth"

urlpatterns = [
    path("login", views.login, name="login"),
    path("logout", views.logout, name="logout"),
    path("refresh", views.refresh, name="refresh"),
    path("user", views.current_user, name="user"),
    path("register", views.register, name="register"),
]
