from django.urls import path

from fuel_finder import views

urlpatterns = [
    path("", views.upload_view, name="upload"),
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/process-gpx", views.process_gpx_view, name="process-gpx"),
    path("api/v1/download/<str:filename>", views.download_view, name="download"),
]
