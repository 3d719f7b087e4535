from rest_framework import permissions


class IsAdminOperator(permissions.BasePermission):
    """Only operators with role=ADMIN (bill runs, master deletions)."""
    message = "Admin only."

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.is_admin


class IsAdminForDelete(permissions.BasePermission):
    """Any operator may read and write; only admins may delete."""
    message = "Only admins may delete master records."

    def has_permission(self, request, view):
        if request.method != "DELETE":
            return True
        return request.user.is_authenticated and request.user.is_admin
