"""
Notification preference API views.
"""

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_http_methods

from apps.web.core.decorators import api_login_required
from apps.web.core.http import InvalidRequestBody, json_response, parse_json_body
from apps.web.notifications.models import NotificationPreference
from apps.web.notifications.serializers import (
    NotificationPreferencesSchema,
    NotificationPreferencesUpdate,
)

logger = logging.getLogger(__name__)


@require_http_methods(["GET", "POST"])
@api_login_required
def preferences(request: HttpRequest) -> JsonResponse:
    """
    GET/POST /api/notifications/preferences

    GET returns the stored preferences (defaults when none saved).
    POST updates any subset of the flags and returns the full set.
    """
    prefs = NotificationPreference.for_user(request.user)

    if request.method == "POST":
        try:
            payload = parse_json_body(request, NotificationPreferencesUpdate)
        except InvalidRequestBody as e:
            return e.response

        for field, value in payload.model_dump(exclude_none=True).items():
            setattr(prefs, field, value)
        prefs.save()

        logger.info("Notification preferences updated: user_id=%s", request.user.pk)

    response = NotificationPreferencesSchema.model_validate(prefs)
    return json_response(response.model_dump())
