from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied


def admin_required(view_func):
    """Anonymous users go to the login page, logged-in non-admins get a 403."""

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        if not request.user.is_ecrc_admin:
            raise PermissionDenied
        return view_func(request, *args, **kwargs)

    return _wrapped
