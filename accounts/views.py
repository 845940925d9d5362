import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.mixins import LoginRequiredMixin
from django.contrib.auth.views import LoginView
from django.db import DatabaseError
from django.shortcuts import redirect, render
from django.urls import reverse_lazy
from django.views.generic import UpdateView

from .forms import AccessCodeLoginForm, AdminLoginForm, ProfileForm, RegisterForm
from .services import register_learner

logger = logging.getLogger(__name__)

_CODE_BACKEND = "accounts.backends.AccessCodeBackend"


def home(request):
    """Landing page: register with a Lernname or sign in with an access code."""
    if request.user.is_authenticated:
        return redirect("dashboard")
    return render(
        request,
        "registration/home.html",
        {
            "register_form": RegisterForm(),
            "login_form": AccessCodeLoginForm(),
        },
    )


def register(request):
    if request.method != "POST":
        return redirect("home")

    form = RegisterForm(request.POST)
    if not form.is_valid():
        return render(
            request,
            "registration/home.html",
            {"register_form": form, "login_form": AccessCodeLoginForm()},
        )

    try:
        user, code = register_learner(form.cleaned_data["display_name"])
    except DatabaseError as exc:
        logger.error(f"Registration failed: {exc}")
        messages.error(request, "Fehler bei der Registrierung. Bitte versuche es erneut.")
        return redirect("home")

    login(request, user, backend=_CODE_BACKEND)
    return render(request, "registration/code_created.html", {"code": code})


def code_login(request):
    if request.method != "POST":
        return redirect("home")

    form = AccessCodeLoginForm(request, data=request.POST)
    if form.is_valid():
        login(request, form.get_user(), backend=_CODE_BACKEND)
        return redirect("dashboard")
    return render(
        request,
        "registration/home.html",
        {"register_form": RegisterForm(), "login_form": form},
    )


class AdminLoginView(LoginView):
    form_class = AdminLoginForm
    template_name = "registration/login.html"
    redirect_authenticated_user = True


class ProfileView(LoginRequiredMixin, UpdateView):
    form_class = ProfileForm
    template_name = "registration/profile.html"
    success_url = reverse_lazy("profile")

    def get_object(self, queryset=None):
        return self.request.user
