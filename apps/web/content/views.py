"""
Site content API views.

Public pages read their editable content and current events here; admins
save content and manage events.
"""

import logging

from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.cache import cache_control
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.web.content.models import Event, ThemeSetting
from apps.web.content.serializers import (
    ContentUpdateRequest,
    EventCreateRequest,
    EventListResponse,
    EventSchema,
    EventUpdateRequest,
    PageContentResponse,
)
from apps.web.core.decorators import admin_required
from apps.web.core.http import (
    InvalidRequestBody,
    ValidationErrorDetail,
    json_response,
    parse_json_body,
    validation_error_response,
)

logger = logging.getLogger(__name__)


def _page_settings(page_scope: str, category: str | None = None) -> dict[str, str]:
    queryset = ThemeSetting.objects.filter(page_scope=page_scope)
    if category:
        queryset = queryset.filter(category=category)
    return dict(queryset.values_list("setting_key", "setting_value"))


@require_GET
@cache_control(max_age=60, public=True)  # 1 minute
def page_content(request: HttpRequest, page_scope: str) -> JsonResponse:
    """
    GET /api/content/{page_scope}

    All saved settings for a page, optionally filtered by ?category=.
    """
    response = PageContentResponse(
        page_scope=page_scope,
        settings=_page_settings(page_scope, request.GET.get("category")),
    )
    return json_response(response.model_dump())


@require_POST
@admin_required
def save_page_content(request: HttpRequest, page_scope: str) -> JsonResponse:
    """
    POST /api/admin/content/{page_scope}

    Upsert every key in the request in one transaction.

    Request body: ContentUpdateRequest schema
    Response: PageContentResponse schema with the page's full settings
    """
    try:
        payload = parse_json_body(request, ContentUpdateRequest)
    except InvalidRequestBody as e:
        return e.response

    with transaction.atomic():
        for key, value in payload.settings.items():
            ThemeSetting.objects.update_or_create(
                page_scope=page_scope,
                setting_key=key,
                defaults={
                    "setting_value": value,
                    "category": payload.category,
                    "updated_by": request.user,
                },
            )

    logger.info(
        "Page content saved: page_scope=%s keys=%s user_id=%s",
        page_scope,
        len(payload.settings),
        request.user.pk,
    )

    response = PageContentResponse(
        page_scope=page_scope, settings=_page_settings(page_scope)
    )
    return json_response(response.model_dump())


@require_http_methods(["DELETE"])
@admin_required
def delete_page_setting(
    request: HttpRequest, page_scope: str, setting_key: str
) -> HttpResponse:
    """
    DELETE /api/admin/content/{page_scope}/{setting_key}

    Remove one setting so the page falls back to its built-in default.
    """
    deleted, _ = ThemeSetting.objects.filter(
        page_scope=page_scope, setting_key=setting_key
    ).delete()
    if not deleted:
        raise Http404(f"Setting {setting_key} not found on {page_scope}")

    logger.info(
        "Page setting deleted: page_scope=%s key=%s user_id=%s",
        page_scope,
        setting_key,
        request.user.pk,
    )
    return HttpResponse(status=204)


# =============================================================================
# Events and Specials
# =============================================================================


def _event_list(queryset) -> JsonResponse:
    response = EventListResponse(
        events=[EventSchema.model_validate(event) for event in queryset]
    )
    return json_response(response.model_dump(mode="json"))


def _get_event(event_id: int) -> Event:
    try:
        return Event.objects.get(pk=event_id)
    except Event.DoesNotExist as exc:
        raise Http404(f"Event {event_id} not found") from exc


@require_GET
@cache_control(max_age=60, public=True)  # 1 minute
def events(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/events

    Active events that have not ended yet, in display order.
    """
    today = timezone.localdate()
    queryset = Event.objects.filter(is_active=True).filter(
        Q(end_date__gte=today) | Q(end_date__isnull=True, start_date__gte=today)
    )
    return _event_list(queryset)


@require_http_methods(["GET", "POST"])
@admin_required
def admin_events(request: HttpRequest) -> JsonResponse:
    """
    GET/POST /api/admin/events

    List every event including inactive and past ones, or create one.

    Request body (POST): EventCreateRequest schema
    Response (POST): EventSchema, 201
    """
    if request.method == "GET":
        return _event_list(Event.objects.all())

    try:
        payload = parse_json_body(request, EventCreateRequest)
    except InvalidRequestBody as e:
        return e.response

    event = Event.objects.create(**payload.model_dump())
    logger.info(
        "Event created: event_id=%s type=%s user_id=%s",
        event.pk,
        event.event_type,
        request.user.pk,
    )
    return json_response(
        EventSchema.model_validate(event).model_dump(mode="json"), status=201
    )


@require_http_methods(["PUT", "DELETE"])
@admin_required
def admin_event_detail(request: HttpRequest, event_id: int) -> HttpResponse:
    """
    PUT/DELETE /api/admin/events/{event_id}

    Partially update or remove an event.
    """
    event = _get_event(event_id)

    if request.method == "DELETE":
        event.delete()
        logger.info("Event deleted: event_id=%s user_id=%s", event_id, request.user.pk)
        return HttpResponse(status=204)

    try:
        payload = parse_json_body(request, EventUpdateRequest)
    except InvalidRequestBody as e:
        return e.response

    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(event, field, value)

    if event.end_date and event.end_date < event.start_date:
        return validation_error_response(
            [
                ValidationErrorDetail(
                    field="end_date", message="end_date cannot be before start_date"
                )
            ]
        )

    event.save()
    logger.info("Event updated: event_id=%s user_id=%s", event.pk, request.user.pk)
    return json_response(EventSchema.model_validate(event).model_dump(mode="json"))
