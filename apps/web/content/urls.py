"""
URL routing for visual editor and events endpoints.
"""

from django.urls import path

from apps.web.content import views

app_name = "content"

urlpatterns = [
    path("content/<slug:page_scope>", views.page_content, name="page_content"),
    path(
        "admin/content/<slug:page_scope>",
        views.save_page_content,
        name="save_page_content",
    ),
    path(
        "admin/content/<slug:page_scope>/<str:setting_key>",
        views.delete_page_setting,
        name="delete_page_setting",
    ),
    path("events", views.events, name="events"),
    path("admin/events", views.admin_events, name="admin_events"),
    path(
        "admin/events/<int:event_id>",
        views.admin_event_detail,
        name="admin_event_detail",
    ),
]
