import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required
from .forms import AdminCommentForm, CaseExampleForm, CaseSearchForm
from .models import EMOJI_OPTIONS, TAG_OPTIONS, CaseExample
from .services import add_admin_comment, case_summary, create_case, search_cases, toggle_reaction, toggle_tag

logger = logging.getLogger(__name__)


def _back_to_list(request):
    target = request.POST.get("next") or ""
    if target.startswith(reverse("case_list")):
        return redirect(target)
    return redirect("case_list")


@login_required
def case_list(request):
    search = CaseSearchForm(request.GET or None)
    query, tags = "", []
    if search.is_valid():
        query = search.cleaned_data["q"]
        tags = search.cleaned_data["tags"]

    cases = search_cases(query, tags).prefetch_related("reactions", "tags")
    return render(
        request,
        "cases/case_list.html",
        {
            "search": search,
            "items": [case_summary(case, request.user) for case in cases],
            "tag_options": TAG_OPTIONS,
            "emoji_options": EMOJI_OPTIONS,
            "comment_form": AdminCommentForm(),
            "is_admin": request.user.is_ecrc_admin,
        },
    )


@login_required
def case_create(request):
    if request.method == "POST":
        form = CaseExampleForm(request.POST)
        if form.is_valid():
            try:
                create_case(
                    request.user,
                    title=form.cleaned_data["title"],
                    description=form.cleaned_data["description"],
                    category=form.cleaned_data["category"],
                    case_url=request.build_absolute_uri(reverse("case_list")),
                )
            except DatabaseError as exc:
                logger.error(f"Creating case example failed: {exc}")
                messages.error(request, "Fehler beim Hinzufügen")
            else:
                messages.success(request, "Fallbeispiel erfolgreich hinzugefügt!")
                return redirect("case_list")
    else:
        form = CaseExampleForm()
    return render(request, "cases/case_form.html", {"form": form})


@login_required
@require_POST
def case_react(request, pk):
    case = get_object_or_404(CaseExample, pk=pk)
    try:
        toggle_reaction(request.user, case, request.POST.get("emoji", ""))
    except ValueError:
        messages.error(request, "Unbekannte Reaktion.")
    except DatabaseError as exc:
        logger.error(f"Reaction on case {pk} failed: {exc}")
        messages.error(request, "Fehler beim Speichern der Reaktion.")
    return _back_to_list(request)


@login_required
@require_POST
def case_tag(request, pk):
    case = get_object_or_404(CaseExample, pk=pk)
    try:
        toggle_tag(request.user, case, request.POST.get("tag", ""))
    except ValueError:
        messages.error(request, "Unbekannter Tag.")
    except DatabaseError as exc:
        logger.error(f"Tagging case {pk} failed: {exc}")
        messages.error(request, "Fehler beim Speichern des Tags.")
    return _back_to_list(request)


@admin_required
@require_POST
def case_comment(request, pk):
    case = get_object_or_404(CaseExample, pk=pk)
    form = AdminCommentForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Bitte gib einen Kommentar ein.")
        return _back_to_list(request)
    try:
        add_admin_comment(request.user, case, form.cleaned_data["text"])
    except ValueError as exc:
        messages.error(request, str(exc))
    except DatabaseError as exc:
        logger.error(f"Admin comment on case {pk} failed: {exc}")
        messages.error(request, "Fehler beim Hinzufügen des Kommentars")
    else:
        messages.success(request, "Admin-Kommentar hinzugefügt!")
    return _back_to_list(request)
