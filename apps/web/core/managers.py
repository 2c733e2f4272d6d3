"""
Custom managers for per-user data.

UserScopedManager filters queries to the requesting user's rows.
"""

from typing import TYPE_CHECKING, Any, TypeVar

from django.db import models

if TYPE_CHECKING:
    from django.http import HttpRequest

_T = TypeVar("_T", bound=models.Model)


class UserScopedManager(models.Manager[_T]):
    """
    Manager that filters by the owning user.

    Usage in views:
        # Only the signed-in customer's orders
        orders = Order.objects.for_user(request).all()

    SECURITY: Always use for_user() in customer views, never raw querysets.
    """

    def for_user(self, request: "HttpRequest") -> models.QuerySet[_T]:
        """
        Filter queryset by the authenticated user on the request.

        Args:
            request: HttpRequest with an authenticated user

        Returns:
            QuerySet filtered to rows owned by request.user

        Raises:
            ValueError: If the request is anonymous
        """
        user: Any = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            msg = "Request has no authenticated user. Is the view login-protected?"
            raise ValueError(msg)
        return self.filter(user=user)
