"""
Auth and health API views.

Customers authenticate with Django sessions; the browser fetches a CSRF
cookie from /api/auth/csrf before its first POST.
"""

import logging

from django.contrib.auth import authenticate, get_user_model, login, logout
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, connection, transaction
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from .decorators import api_login_required, rate_limited
from .http import (
    InvalidRequestBody,
    ValidationErrorDetail,
    error_response,
    json_response,
    parse_json_body,
    validation_error_response,
)
from .models import User
from .serializers import LoginRequest, ProfileResponse, SignupRequest

logger = logging.getLogger(__name__)


def _serialize_profile(user: User) -> ProfileResponse:
    return ProfileResponse(
        id=user.pk,
        email=user.email,
        full_name=user.full_name,
        phone_number=user.phone_number,
        role=user.role,
        is_staff=user.is_kitchen_staff,
        is_admin=user.is_restaurant_admin,
    )


@require_GET
@ensure_csrf_cookie
def csrf(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/auth/csrf

    Sets the csrftoken cookie for browser clients.
    """
    return json_response({"detail": "CSRF cookie set"})


@require_POST
@rate_limited("signup", limit=5, window=600)
def signup(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/signup

    Create a customer account and sign it in.
    """
    try:
        payload = parse_json_body(request, SignupRequest)
    except InvalidRequestBody as e:
        return e.response

    email = payload.email.lower()
    UserModel = get_user_model()

    if UserModel.objects.filter(email__iexact=email).exists():
        return validation_error_response(
            [ValidationErrorDetail(field="email", message="Email is already registered")]
        )

    candidate = UserModel(
        username=email,
        email=email,
        full_name=payload.full_name.strip(),
    )
    try:
        validate_password(payload.password, user=candidate)
    except DjangoValidationError as e:
        return validation_error_response(
            [ValidationErrorDetail(field="password", message=msg) for msg in e.messages]
        )

    with transaction.atomic():
        user = UserModel.objects.create_user(
            username=email,
            email=email,
            password=payload.password,
            full_name=payload.full_name.strip(),
            phone_number=payload.phone_number.strip(),
            role=User.Role.CUSTOMER,
        )

    login(request, user, backend="django.contrib.auth.backends.ModelBackend")
    logger.info("Customer signed up: user_id=%s", user.pk)

    return json_response(_serialize_profile(user).model_dump(), status=201)


@require_POST
@rate_limited("login", limit=10, window=300)
def login_view(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/login

    Email/password sign-in.
    """
    try:
        payload = parse_json_body(request, LoginRequest)
    except InvalidRequestBody as e:
        return e.response

    UserModel = get_user_model()
    account = UserModel.objects.filter(email__iexact=payload.email).first()

    user = None
    if account is not None:
        user = authenticate(
            request, username=account.get_username(), password=payload.password
        )

    if user is None:
        logger.info("Failed login attempt for %s", payload.email)
        return error_response("Invalid email or password", status=401)

    login(request, user)
    return json_response(_serialize_profile(user).model_dump())


@require_POST
def logout_view(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/logout
    """
    logout(request)
    return json_response({"success": True})


@require_GET
@api_login_required
def me(request: HttpRequest) -> JsonResponse:
    """
    GET /api/auth/me

    The signed-in user's profile.
    """
    return json_response(_serialize_profile(request.user).model_dump())  # type: ignore[arg-type]


@require_GET
def health(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/health

    Liveness plus a trivial database round-trip.
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        logger.exception("Health check database query failed")
        return json_response({"status": "degraded", "database": "error"}, status=503)

    return json_response({"status": "ok", "database": "ok"})
