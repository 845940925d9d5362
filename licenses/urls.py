from django.urls import path

from . import views

urlpatterns = [
    path("", views.license_list, name="license_list"),
    path("create/", views.license_create, name="license_create"),
    path("<int:pk>/", views.license_detail, name="license_detail"),
    path("<int:pk>/pdf/", views.license_pdf, name="license_pdf"),
]
