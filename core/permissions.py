from rest_framework.permissions import BasePermission, SAFE_METHODS

from .policies import ADMIN_ROLES, authorize


class HasRole(BasePermission):
    """
    Role gate driven by the view.

    Views declare ``required_roles`` (applies to every method) or
    ``required_roles_by_method = {"post": ADMIN_ROLES, ...}``. Methods with
    no entry only need a session; views listing ``public_methods`` let those
    through anonymously.
    """

    def has_permission(self, request, view):
        method = request.method.lower()
        if method in getattr(view, "public_methods", ()):
            return True

        by_method = getattr(view, "required_roles_by_method", None) or {}
        roles = by_method.get(method, getattr(view, "required_roles", None))

        # Raises NotAuthenticated / PermissionDenied with our messages
        authorize(request.user, roles=roles, login_message=getattr(view, "login_required_message", None))
        return True


class IsAdminRole(HasRole):
    """Admin or owner for every method."""

    def has_permission(self, request, view):
        authorize(request.user, roles=ADMIN_ROLES)
        return True


class ReadOnlyOrAdmin(HasRole):
    """Anyone may read; writes need an admin role."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        authorize(request.user, roles=ADMIN_ROLES)
        return True
