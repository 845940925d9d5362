from django.urls import path

from . import views

urlpatterns = [
    path("", views.certificate_index, name="certificate_index"),
    path("activity/", views.activity_certificate, name="certificate_activity"),
    path("protocol/", views.protocol_certificate, name="certificate_protocol"),
    path("cc-license/", views.cc_document, name="certificate_cc_document"),
]
