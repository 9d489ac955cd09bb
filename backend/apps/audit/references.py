"""
Polymorphic subject / causer references.

Activities store a ``(type tag, id)`` pair instead of a foreign key. The
tag is resolved back to a model through this explicit lookup table.
"""

from typing import NamedTuple, Optional

from django.apps import apps

IP_ADDRESS = "IpAddress"
USER = "User"

# type tag -> (app label.model, public fields)
REFERENCE_TYPES = {
    IP_ADDRESS: ("ip_addresses.IpAddress", ["id", "ip_address", "label", "comment", "user_id"]),
    USER: ("users.User", ["id", "name", "email"]),
}


class Reference(NamedTuple):
    type: str
    id: int


def reference_for(instance) -> Optional[Reference]:
    """Return the (type tag, id) pair for a registered model instance."""
    if instance is None:
        return None
    label = instance._meta.label
    for type_tag, (model_label, _fields) in REFERENCE_TYPES.items():
        if model_label == label:
            return Reference(type_tag, instance.pk)
    raise ValueError(f"{label} is not a registered activity reference type")


def resolve(type_tag, object_id):
    """Load the referenced instance, or None when unknown or deleted."""
    if not type_tag or object_id is None or type_tag not in REFERENCE_TYPES:
        return None
    model = apps.get_model(REFERENCE_TYPES[type_tag][0])
    return model.objects.filter(pk=object_id).first()


def resolve_many(type_tag, object_ids):
    """Bulk variant of resolve(): returns ``{id: instance}``."""
    ids = {object_id for object_id in object_ids if object_id is not None}
    if not ids or type_tag not in REFERENCE_TYPES:
        return {}
    model = apps.get_model(REFERENCE_TYPES[type_tag][0])
    return model.objects.in_bulk(ids)


def to_dict(type_tag, instance):
    if instance is None:
        return None
    fields = REFERENCE_TYPES[type_tag][1]
    return {field: getattr(instance, field) for field in fields}
