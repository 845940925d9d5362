import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render

from .forms import LicenseForm
from .models import GeneratedLicense
from .services import generate_license_pdf, save_license

logger = logging.getLogger(__name__)


@login_required
def license_list(request):
    licenses = GeneratedLicense.objects.filter(owner=request.user)
    return render(request, "licenses/license_list.html", {"licenses": licenses})


@login_required
def license_create(request):
    if request.method == "POST":
        form = LicenseForm(request.POST)
        if form.is_valid():
            try:
                generated = save_license(request.user, form)
            except DatabaseError as exc:
                logger.error(f"Saving license failed: {exc}")
                messages.error(request, "Fehler beim Speichern der Lizenz.")
            else:
                messages.success(request, "Lizenz erstellt.")
                return redirect("license_detail", pk=generated.pk)
    else:
        form = LicenseForm(initial={"author_name": request.user.display_name})
    return render(request, "licenses/license_form.html", {"form": form})


@login_required
def license_detail(request, pk):
    generated = get_object_or_404(GeneratedLicense, pk=pk, owner=request.user)
    return render(request, "licenses/license_detail.html", {"license": generated})


@login_required
def license_pdf(request, pk):
    generated = get_object_or_404(GeneratedLicense, pk=pk, owner=request.user)
    return generate_license_pdf(generated)
