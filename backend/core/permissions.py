from rest_framework.permissions import BasePermission


class IsPlatformAdmin(BasePermission):
    """Staff users and the configured admin usernames"""
    message = 'Admin access required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_platform_admin)
