from django.urls import path

from . import views

urlpatterns = [
    path("", views.check_list, name="check_list"),
    path("new/", views.wizard_start, name="check_start"),
    path("wizard/", views.wizard_step, name="check_wizard"),
    path("wizard/back/", views.wizard_back, name="check_wizard_back"),
    path("<int:pk>/", views.check_detail, name="check_detail"),
    path("<int:pk>/complete/", views.check_complete, name="check_complete"),
    path("<int:pk>/edit/", views.check_edit, name="check_edit"),
    path("<int:pk>/delete/", views.check_delete, name="check_delete"),
    path("<int:pk>/export/html/", views.check_export_html, name="check_export_html"),
    path("<int:pk>/export/pdf/", views.check_export_pdf, name="check_export_pdf"),
]
