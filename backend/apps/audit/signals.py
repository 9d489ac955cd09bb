"""
Receivers tying Django's session login/logout signals to the audit trail.
"""

from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.dispatch import receiver

from apps.audit import recorder
from apps.audit.context import RequestContext
from apps.audit.sessions import begin_session


@receiver(user_logged_in, dispatch_uid="audit_log_successful_login")
def log_successful_login(sender, request, user, **kwargs):
    if request is None:
        return
    session_id = begin_session(getattr(request, "session", None))
    context = RequestContext.from_request(request, actor=user).with_session(session_id)
    recorder.record_login(context, method=recorder.METHOD_SESSION)


@receiver(user_logged_out, dispatch_uid="audit_log_successful_logout")
def log_successful_logout(sender, request, user, **kwargs):
    # Logout of an anonymous session carries no actor to credit
    if request is None or user is None:
        return
    context = RequestContext.from_request(request, actor=user)
    recorder.record_logout(context, method=recorder.METHOD_SESSION)
