from rest_framework.permissions import BasePermission

from .models import User


class HasRole(BasePermission):
    """
    Grants access to authenticated, active users whose role is listed
    in `allowed_roles`.
    """
    allowed_roles = ()
    message = "You do not have permission to perform this action"

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.is_active
            and user.role in self.allowed_roles
        )


class IsAdminRole(HasRole):
    allowed_roles = (User.ADMIN,)
    message = "Admin access required"


class IsOwnerRole(HasRole):
    allowed_roles = (User.OWNER,)
    message = "Owner access required"
