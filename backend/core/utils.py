"""Audit trail helpers shared by the admin and commerce views"""
import logging

from .models import AuditLog

logger = logging.getLogger(__name__)


def get_client_ip(request):
    """First address in X-Forwarded-For, falling back to REMOTE_ADDR"""
    meta = getattr(request, 'META', None)
    if not meta:
        return None
    forwarded = meta.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip() or None
    return meta.get('REMOTE_ADDR') or None


def _acting_user(request, user):
    actor = user or getattr(request, 'user', None)
    if actor is not None and actor.is_authenticated:
        return actor
    return None


def create_audit_log(request=None, action=None, model_name=None, object_id=None,
                     changes=None, user=None, object_name=None, object_reference=None):
    """
    Record who did what to which object.

    `user` overrides the request user (for commands and background work).
    Returns the AuditLog, or None when required fields are missing or the
    write fails; the caller's operation is never interrupted.
    """
    if not (action and model_name and object_id):
        logger.warning(
            f"Audit log skipped: action={action}, model_name={model_name}, object_id={object_id}"
        )
        return None

    try:
        return AuditLog.objects.create(
            user=_acting_user(request, user),
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            object_name=object_name,
            object_reference=object_reference,
            changes=changes or {},
            ip_address=get_client_ip(request),
        )
    except Exception as e:
        logger.error(f"Failed to create audit log for {model_name} {object_id}: {str(e)}")
        return None
