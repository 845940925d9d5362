from django.contrib import admin
from django.urls import include, path

from accounts.views import home
from .views import dashboard

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", home, name="home"),
    path("accounts/", include("accounts.urls")),
    path("dashboard/", dashboard, name="dashboard"),
    path("checks/", include("copyright_check.urls")),
    path("cases/", include("cases.urls")),
    path("licenses/", include("licenses.urls")),
    path("certificates/", include("certificates.urls")),
    path("", include("core.urls")),
]
