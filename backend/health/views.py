import logging

from django.apps import apps
from django.core.cache import caches
from django.db import DatabaseError, connection
from django.db.migrations.executor import MigrationExecutor
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class LiveView(APIView):
    """Liveness probe: process is running. No DB or external deps."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({"status": "alive"})


class ReadyView(APIView):
    """Readiness probe: DB, migrations, cache, activity log table."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        checks = self._run_checks()
        overall = "ready" if all(v == "ok" for v in checks.values()) else "not_ready"
        status_code = 200 if overall == "ready" else 503
        return Response({"status": overall, "checks": checks}, status=status_code)

    def _run_checks(self):
        checks = {}

        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1;")
            checks["database"] = "ok"
        except DatabaseError:
            logger.exception("readiness_check_failed", extra={"check": "database"})
            checks["database"] = "error"

        try:
            executor = MigrationExecutor(connection)
            plan = executor.migration_plan(executor.loader.graph.leaf_nodes())
            checks["migrations"] = "ok" if not plan else "pending"
        except DatabaseError:
            logger.exception("readiness_check_failed", extra={"check": "migrations"})
            checks["migrations"] = "error"

        cache = caches["default"]
        cache.set("health_check", "ok", timeout=5)
        checks["cache"] = "ok" if cache.get("health_check") == "ok" else "error"

        # Activity log must be readable for the audit trail to work
        try:
            Activity = apps.get_model("audit", "Activity")
            Activity.objects.exists()
            checks["activity_log"] = "ok"
        except DatabaseError:
            logger.exception("readiness_check_failed", extra={"check": "activity_log"})
            checks["activity_log"] = "error"

        return checks
