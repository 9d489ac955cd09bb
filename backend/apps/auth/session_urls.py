"""
URL routing for session-cookie authentication (/auth/).
"""

from django.urls import path
from apps.auth import views

app_name = "session-auth"

urlpatterns = [
    path("login", views.session_login_view, name="login"),
    path("logout", views.session_logout_view, name="logout"),
]
