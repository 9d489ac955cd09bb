from rest_framework.throttling import UserRateThrottle


class MutationUserThrottle(UserRateThrottle):
    """Rate limit writes per user; reads are never throttled."""

    scope = "mutation_user"

    def allow_request(self, request, view):
        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            return super().allow_request(request, view)
        return True
