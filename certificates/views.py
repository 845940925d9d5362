import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render

from accounts.services import increment_activity
from core.pdf import pdf_response
from . import services

logger = logging.getLogger(__name__)


def _issue(request, template_name, context, filename):
    response = pdf_response(template_name, context, filename, request=request)
    if response.status_code == 200:
        increment_activity(request.user, "generated_certificates")
        logger.info(f"Certificate {filename} generated for user {request.user.pk}")
    return response


@login_required
def certificate_index(request):
    checks, passed, failed = services.split_checks(request.user)
    return render(
        request,
        "certificates/index.html",
        {
            "checks_count": len(checks),
            "passed_count": len(passed),
            "failed_count": len(failed),
            "cc_count": len([check for check in passed if check.cc_license]),
        },
    )


@login_required
def activity_certificate(request):
    return _issue(
        request,
        "certificates/activity_pdf.html",
        services.activity_context(request.user),
        services.activity_filename(request.user),
    )


@login_required
def protocol_certificate(request):
    context = services.protocol_context(request.user)
    if not context["checks"]:
        messages.info(request, "Du hast noch keine Prüfungen durchgeführt.")
        return redirect("certificate_index")
    return _issue(
        request,
        "certificates/protocol_pdf.html",
        context,
        services.protocol_filename(request.user),
    )


@login_required
def cc_document(request):
    context = services.cc_document_context(request.user)
    if not context["checks"]:
        messages.info(request, "Du hast noch keine Produkte mit Creative Commons Lizenz erstellt.")
        return redirect("certificate_index")
    return _issue(
        request,
        "certificates/cc_document_pdf.html",
        context,
        services.cc_document_filename(request.user),
    )
