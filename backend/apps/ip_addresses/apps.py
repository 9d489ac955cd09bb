from django.apps import AppConfig


class IpAddressesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.ip_addresses"
    label = "ip_addresses"
