from django.urls import path

from . import views

urlpatterns = [
    path("healthz/", views.healthz, name="healthz"),
    path("diagnostics/", views.diagnostics, name="diagnostics"),
]
