"""
User model for the IP address inventory.

Fields: id, email, name, role, password, created_at, updated_at.
Email unique and used as the login identifier. Role choices user, super-admin.
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models

from . import services


class Role(models.TextChoices):
    USER = "user", "User"
    SUPER_ADMIN = "super-admin", "Super Admin"


class UserManager(BaseUserManager):
    """Custom user manager."""

    def create_user(self, email, password=None, name=None, role=Role.USER, **extra_fields):
        return services.create_user(
            user_model=self.model,
            email=self.normalize_email(email),
            password=password,
            name=name,
            role=role,
            using=self._db,
            **extra_fields,
        )

    def create_superuser(self, email, password=None, **extra_fields):
        return services.create_superuser(
            user_model=self.model,
            email=self.normalize_email(email),
            password=password,
            using=self._db,
            **extra_fields,
        )


class User(AbstractBaseUser):
    """Custom User model with email login and role field."""

    email = models.EmailField(max_length=255, unique=True)
    name = models.CharField(max_length=255)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    objects = UserManager()

    class Meta:
        db_table = "users"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(role__in=["user", "super-admin"]),
                name="valid_role",
            )
        ]

    def __str__(self):
        return self.email

    @property
    def is_super_admin(self):
        return services.user_is_super_admin(user=self)
