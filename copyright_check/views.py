import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from core.pdf import html_response, pdf_response
from .forms import form_for_step
from .models import CopyrightCheck
from .services import IncompleteAnswers, complete_check, delete_check, save_wizard_result
from .wizard import LAST_STEP, STEP_TITLES, WizardState

logger = logging.getLogger(__name__)

SESSION_KEY = "copyright_check_wizard"


def _load_state(request) -> WizardState:
    return WizardState.from_session(request.session.get(SESSION_KEY))


def _store_state(request, state: WizardState) -> None:
    request.session[SESSION_KEY] = state.to_session()


def _clear_state(request) -> None:
    request.session.pop(SESSION_KEY, None)


def _owned_check(request, pk):
    """Return the user's check, or ``None`` after flashing a message when it belongs to someone else."""
    check = get_object_or_404(CopyrightCheck.objects.select_related("owner"), pk=pk)
    if check.owner_id != request.user.pk:
        messages.error(request, "Diese Prüfung gehört einem anderen Konto.")
        return None
    return check


@login_required
def wizard_start(request):
    _store_state(request, WizardState())
    return redirect("check_wizard")


@login_required
def wizard_step(request):
    state = _load_state(request)

    if request.method == "POST":
        form = form_for_step(state, data=request.POST)
        if form.is_valid():
            state = state.answer(state.step, form.cleaned_data)
            _store_state(request, state)
            if not state.finished:
                return redirect("check_wizard")
            return _finish(request, state)
    else:
        form = form_for_step(state)

    return render(
        request,
        "copyright_check/wizard.html",
        {
            "form": form,
            "state": state,
            "step_title": state.title,
            "last_step": LAST_STEP,
            "visited": [(step, STEP_TITLES[step]) for step in state.history],
        },
    )


def _finish(request, state: WizardState):
    try:
        check = save_wizard_result(request.user, state)
    except IncompleteAnswers as exc:
        messages.error(request, str(exc))
        _store_state(request, WizardState(check_id=state.check_id))
        return redirect("check_wizard")
    except CopyrightCheck.DoesNotExist:
        messages.error(request, "Die bearbeitete Prüfung existiert nicht mehr.")
        _clear_state(request)
        return redirect("check_list")
    except DatabaseError as exc:
        logger.error(f"Saving check for user {request.user.pk} failed: {exc}")
        messages.error(request, "Fehler beim Speichern. Bitte versuche es erneut.")
        _store_state(request, state.back())
        return redirect("check_wizard")

    _clear_state(request)
    if state.check_id:
        messages.success(request, "Prüfung aktualisiert.")
    else:
        messages.success(request, "Prüfung gespeichert.")
    return redirect("check_detail", pk=check.pk)


@login_required
@require_POST
def wizard_back(request):
    state = _load_state(request)
    target = request.POST.get("step")
    if target and target.isdigit():
        state = state.goto(int(target))
    else:
        state = state.back()
    _store_state(request, state)
    return redirect("check_wizard")


@login_required
def check_list(request):
    checks = CopyrightCheck.objects.filter(owner=request.user)
    return render(request, "copyright_check/check_list.html", {"checks": checks})


@login_required
def check_detail(request, pk):
    check = _owned_check(request, pk)
    if check is None:
        return redirect("dashboard")
    return render(
        request,
        "copyright_check/check_detail.html",
        {"check": check, "outcome": check.outcome},
    )


@login_required
@require_POST
def check_complete(request, pk):
    check = _owned_check(request, pk)
    if check is None:
        return redirect("dashboard")
    try:
        complete_check(request.user, check)
    except DatabaseError as exc:
        logger.error(f"Completing check {pk} failed: {exc}")
        messages.error(request, "Fehler beim Abschliessen der Prüfung.")
    else:
        messages.success(request, "Prüfung abgeschlossen.")
    return redirect("check_detail", pk=pk)


@login_required
def check_edit(request, pk):
    check = _owned_check(request, pk)
    if check is None:
        return redirect("dashboard")
    _store_state(request, WizardState.for_check(check))
    return redirect("check_wizard")


@login_required
@require_POST
def check_delete(request, pk):
    check = _owned_check(request, pk)
    if check is None:
        return redirect("dashboard")
    try:
        delete_check(request.user, check)
    except DatabaseError as exc:
        logger.error(f"Deleting check {pk} failed: {exc}")
        messages.error(request, "Fehler beim Löschen.")
        return redirect("check_detail", pk=pk)
    messages.success(request, "Prüfung gelöscht.")
    return redirect("check_list")


def _export_context(check):
    return {"check": check, "outcome": check.outcome, "generated_at": timezone.now()}


@login_required
def check_export_html(request, pk):
    check = _owned_check(request, pk)
    if check is None:
        return redirect("dashboard")
    return html_response(
        "copyright_check/export.html",
        _export_context(check),
        f"urheberrechtspruefung-{check.pk}.html",
    )


@login_required
def check_export_pdf(request, pk):
    check = _owned_check(request, pk)
    if check is None:
        return redirect("dashboard")
    return pdf_response(
        "copyright_check/export.html",
        _export_context(check),
        f"urheberrechtspruefung-{check.pk}.pdf",
    )
