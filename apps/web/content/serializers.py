"""
Pydantic schemas for visual editor and events payloads.
"""

import re
from datetime import date
from typing import Annotated, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

SETTING_KEY_RE = re.compile(r"^[a-z0-9][a-z0-9_.-]{0,99}$")
HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
MAX_VALUE_LENGTH = 10_000


class PageContentResponse(BaseModel):
    """Response for GET /api/content/{page_scope}."""

    page_scope: str
    settings: dict[str, str]


class ContentUpdateRequest(BaseModel):
    """Request body for POST /api/admin/content/{page_scope}."""

    settings: dict[str, str] = Field(..., min_length=1, max_length=200)
    category: str = Field(default="page_editor", min_length=1, max_length=50)

    @field_validator("settings")
    @classmethod
    def _check_settings(cls, value: dict[str, str]) -> dict[str, str]:
        for key, setting in value.items():
            if not SETTING_KEY_RE.match(key):
                raise ValueError(
                    f"Invalid key '{key}': use lowercase letters, digits, '_', '.' or '-'"
                )
            if len(setting) > MAX_VALUE_LENGTH:
                raise ValueError(f"Value for '{key}' exceeds {MAX_VALUE_LENGTH} characters")
            if key.endswith("_color") and not HEX_COLOR_RE.match(setting):
                raise ValueError(f"Value for '{key}' must be a hex color like #aabbcc")
        return value


# =============================================================================
# Events and Specials
# =============================================================================


def _check_color(value: str) -> str:
    if not HEX_COLOR_RE.match(value):
        raise ValueError("must be a hex color like #aabbcc")
    return value


def _check_link(value: str) -> str:
    if value and not value.startswith(("/", "https://", "http://")):
        raise ValueError("must be a site path or an http(s) URL")
    return value


HexColor = Annotated[str, AfterValidator(_check_color)]
ButtonLink = Annotated[str, Field(max_length=500), AfterValidator(_check_link)]


class EventSchema(BaseModel):
    """An event as listed on the homepage and in the admin."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    event_type: str
    start_date: date
    end_date: date | None
    image_url: str
    background_color: str
    text_color: str
    button_text: str
    button_link: str
    priority: int
    is_active: bool
    display_order: int


class EventListResponse(BaseModel):
    """Response for GET /api/events and GET /api/admin/events."""

    events: list[EventSchema]


class EventCreateRequest(BaseModel):
    """Request body for POST /api/admin/events."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    event_type: Literal["event", "special", "news"]
    start_date: date
    end_date: date | None = None
    image_url: str = Field(default="", max_length=200)
    background_color: HexColor = "#1a1a1a"
    text_color: HexColor = "#ffffff"
    button_text: str = Field(default="", max_length=50)
    button_link: ButtonLink = ""
    priority: int = Field(default=0, ge=0, le=100)
    is_active: bool = True
    display_order: int = 0

    @model_validator(mode="after")
    def _check_dates(self) -> "EventCreateRequest":
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class EventUpdateRequest(BaseModel):
    """Request body for PUT /api/admin/events/{id}. Omitted fields are unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    event_type: Literal["event", "special", "news"] | None = None
    start_date: date | None = None
    end_date: date | None = None
    image_url: str | None = Field(default=None, max_length=200)
    background_color: HexColor | None = None
    text_color: HexColor | None = None
    button_text: str | None = Field(default=None, max_length=50)
    button_link: ButtonLink | None = None
    priority: int | None = Field(default=None, ge=0, le=100)
    is_active: bool | None = None
    display_order: int | None = None
