"""
Context builders for the three certificate documents.
Rendering goes through :func:`core.pdf.pdf_response`; views count each
successfully generated document as activity.
"""

import re

from django.utils import timezone

from copyright_check.models import CopyrightCheck


def _slug(value: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]", "_", value or "ECRC42")


def learner_name(user) -> str:
    return user.display_name or user.get_username()


def split_checks(user):
    checks = list(CopyrightCheck.objects.filter(owner=user).order_by("created_at"))
    passed = [check for check in checks if check.passed]
    failed = [check for check in checks if not check.passed]
    return checks, passed, failed


def cc_checks(user):
    _, passed, _ = split_checks(user)
    return [check for check in passed if check.cc_license]


def activity_context(user) -> dict:
    return {
        "name": learner_name(user),
        "activity": user.activity,
        "total_activity": user.total_activity,
        "issued_at": timezone.now(),
    }


def protocol_context(user) -> dict:
    checks, passed, failed = split_checks(user)
    return {
        "name": learner_name(user),
        "checked_products": user.checked_products,
        "checks": checks,
        "passed": passed,
        "failed": failed,
        "issued_at": timezone.now(),
    }


def cc_document_context(user) -> dict:
    return {
        "name": learner_name(user),
        "checks": cc_checks(user),
        "issued_at": timezone.now(),
    }


def activity_filename(user) -> str:
    return f"ECRC42_Aktivitaetszertifikat_{_slug(learner_name(user))}.pdf"


def protocol_filename(user) -> str:
    return f"ECRC42_Protokoll_{_slug(learner_name(user))}.pdf"


def cc_document_filename(user) -> str:
    return f"ECRC42_CC-Lizenz_{_slug(learner_name(user))}.pdf"
