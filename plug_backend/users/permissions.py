# users/permissions.py

from rest_framework.permissions import BasePermission


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.
    """

    allowed_roles = set()

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) in self.allowed_roles
        )


# ---------------- ROLE PERMISSIONS ----------------
class IsAdmin(HasRole):
    allowed_roles = {"admin"}


class IsCashier(HasRole):
    allowed_roles = {"cashier"}


class IsCashierOrAdmin(HasRole):
    """
    Point-of-sale entry is open to cashiers and admins.
    """

    allowed_roles = {"cashier", "admin"}
