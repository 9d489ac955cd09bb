"""
Service-layer functions for the Users app.

This module exists to keep models passive:
- No business logic in models
- No permission logic in models
- Persistence orchestration (create/save) lives here
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type

logger = logging.getLogger(__name__)

SUPER_ADMIN_ROLE = "super-admin"


def create_user(
    *,
    user_model: Type[Any],
    email: str,
    password: Optional[str] = None,
    name: Optional[str] = None,
    role: str = "user",
    using: Optional[str] = None,
    **extra_fields: Any,
):
    """
    Create and persist a user.

    The display name falls back to the local part of the email address.
    """
    if not email:
        raise ValueError("The email field must be set")

    user = user_model(
        email=email,
        name=name or email.split("@", 1)[0],
        role=role,
        **extra_fields,
    )
    user.set_password(password)
    if using is None:
        user.save()
    else:
        user.save(using=using)

    logger.info(
        "user_created",
        extra={"operation": "CREATE_USER", "entity_id": str(user.pk), "role": role},
    )
    return user


def create_superuser(
    *,
    user_model: Type[Any],
    email: str,
    password: Optional[str] = None,
    using: Optional[str] = None,
    **extra_fields: Any,
):
    """Create a user holding the super-admin role."""
    extra_fields.setdefault("role", SUPER_ADMIN_ROLE)
    return create_user(
        user_model=user_model,
        email=email,
        password=password,
        using=using,
        **extra_fields,
    )


def user_is_super_admin(*, user: Any) -> bool:
    return user.role == SUPER_ADMIN_ROLE
