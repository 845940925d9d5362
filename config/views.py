from django.contrib.auth import get_user_model
from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from cases.models import CaseExample
from copyright_check.models import CopyrightCheck
from licenses.models import GeneratedLicense


@login_required
def dashboard(request):
    user = request.user
    recent_checks = CopyrightCheck.objects.filter(owner=user)[:5]

    stats = {
        "users": get_user_model().objects.filter(is_active=True).count(),
        "checks": CopyrightCheck.objects.count(),
        "cases": CaseExample.objects.count(),
        "licenses": GeneratedLicense.objects.count(),
    }

    return render(
        request,
        "dashboard.html",
        {
            "activity": user.activity,
            "total_activity": user.total_activity,
            "recent_checks": recent_checks,
            "draft_count": CopyrightCheck.objects.filter(owner=user, status=CopyrightCheck.Status.DRAFT).count(),
            "stats": stats,
            "is_admin": user.is_ecrc_admin,
        },
    )
