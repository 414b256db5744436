from django.urls import path

from .views import ActivityLogListView, HealthCheckView

urlpatterns = [
    path("activity_log", ActivityLogListView.as_view(), name="activity-log-list"),
    path("health", HealthCheckView.as_view(), name="health-check"),
]
