"""
Decorators for request handling, access control and validation.
"""

import json
import time
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.core.cache import cache
from django.http import HttpRequest, JsonResponse

from .http import client_ip, error_response


def api_login_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that returns 401 JSON for anonymous users.

    Unlike django.contrib.auth's login_required, API callers never get
    redirected to a login page.
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        if not request.user.is_authenticated:
            return error_response("Authentication required", status=401)
        return view_func(request, *args, **kwargs)

    return wrapper


def _role_required(
    check: Callable[[Any], bool], message: str
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(view_func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view_func)
        def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
            if not request.user.is_authenticated:
                return error_response("Authentication required", status=401)
            if not check(request.user):
                return error_response(message, status=403)
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator


staff_required = _role_required(
    lambda user: bool(getattr(user, "is_kitchen_staff", False)),
    "Staff access required",
)

admin_required = _role_required(
    lambda user: bool(getattr(user, "is_restaurant_admin", False)),
    "Admin access required",
)


def idempotency_key_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that requires an Idempotency-Key header for POST requests.

    If the same key is used twice by the same caller, returns the cached
    response from the first request. Cached responses are stored for 24 hours.

    Usage:
        @idempotency_key_required
        def create_order(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        key = request.headers.get("Idempotency-Key")

        if not key:
            return JsonResponse(
                {"error": "Idempotency-Key header is required"},
                status=400,
            )

        owner = request.user.pk if request.user.is_authenticated else "anon"
        cache_key = f"idempotency:{owner}:{key}"
        cached = cache.get(cache_key)

        if cached:
            # Return cached response
            return JsonResponse(
                cached["data"],
                status=cached["status"],
            )

        # Call the actual view
        response = view_func(request, *args, **kwargs)

        # Cache successful responses for 24 hours
        if response.status_code < 400:
            cache.set(
                cache_key,
                {
                    "data": json.loads(response.content),
                    "status": response.status_code,
                },
                timeout=86400,  # 24 hours
            )

        return response

    return wrapper


def rate_limited(
    key: str, limit: int, window: int
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Fixed-window rate limit backed by the Django cache.

    Callers are identified by user id when signed in, otherwise by IP.
    Over the limit the view is not called and a 429 is returned.

    Usage:
        @rate_limited("login", limit=10, window=300)
        def login_view(request):
            ...

    Args:
        key: Name of this limiter (separate counters per endpoint)
        limit: Requests allowed per window
        window: Window length in seconds
    """

    def decorator(view_func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view_func)
        def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
            if request.user.is_authenticated:
                identity = f"user:{request.user.pk}"
            else:
                identity = f"ip:{client_ip(request)}"

            now = int(time.time())
            window_start = now - (now % window)
            cache_key = f"ratelimit:{key}:{identity}:{window_start}"

            # add() is a no-op when the key exists, so the first hit seeds it
            cache.add(cache_key, 0, timeout=window)
            try:
                count = cache.incr(cache_key)
            except ValueError:
                # Expired between add() and incr()
                cache.set(cache_key, 1, timeout=window)
                count = 1

            if count > limit:
                response = error_response(
                    "Too many requests, please try again later",
                    status=429,
                )
                response["Retry-After"] = str(window_start + window - now)
                return response

            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator
