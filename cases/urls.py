from django.urls import path

from . import views

urlpatterns = [
    path("", views.case_list, name="case_list"),
    path("create/", views.case_create, name="case_create"),
    path("<int:pk>/react/", views.case_react, name="case_react"),
    path("<int:pk>/tag/", views.case_tag, name="case_tag"),
    path("<int:pk>/comment/", views.case_comment, name="case_comment"),
]
