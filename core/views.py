import logging
import os

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import connection
from django.db.models import Q
from django.db.migrations.executor import MigrationExecutor
from django.http import JsonResponse

from copyright_check.evaluator import AnswerSet, Category, evaluate
from .pdf import _write_pdf

logger = logging.getLogger(__name__)

REQUIRED_ENV = ("SECRET_KEY",)


class CheckFailed(Exception):
    pass


def _check_db():
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1;")
        cursor.fetchone()
    return "ok"


def _check_env():
    missing = [key for key in REQUIRED_ENV if not os.getenv(key)]
    if missing:
        raise CheckFailed(f"missing {', '.join(missing)}")
    return "ok"


def _check_migrations():
    executor = MigrationExecutor(connection)
    plan = executor.migration_plan(executor.loader.graph.leaf_nodes())
    if plan:
        pending = [f"{migration.app_label}.{migration.name}" for migration, _ in plan]
        raise CheckFailed("pending " + ", ".join(pending[:10]))
    return "ok"


def _check_evaluator():
    outcome = evaluate(AnswerSet(public_domain=True))
    if outcome.category != Category.ALLOWED:
        raise CheckFailed(f"unexpected category {outcome.category}")
    return "ok"


def _check_admins():
    admins = get_user_model().objects.filter(Q(role="admin") | Q(is_superuser=True))
    if admins.exists() or settings.ECRC_ADMIN_EMAILS:
        return "ok"
    # Only case comments depend on an admin.
    return "warn: no admin account"


def _check_webhook():
    return "configured" if settings.CASE_WEBHOOK_URL else "disabled"


def _check_pdf():
    if not _write_pdf("<html><body>ok</body></html>"):
        raise CheckFailed("empty output")
    return "ok"


CHECKS = (
    ("env", _check_env),
    ("db", _check_db),
    ("migrations", _check_migrations),
    ("evaluator", _check_evaluator),
    ("admins", _check_admins),
    ("webhook", _check_webhook),
    ("pdf", _check_pdf),
)

NEEDS_DB = {"migrations", "admins"}


def healthz(request):
    checks = {
        "status": "ok",
        "db": "ok",
        "debug": settings.DEBUG,
    }

    try:
        _check_db()
    except Exception as exc:
        logger.error(f"Health check: database unavailable: {exc}")
        checks["status"] = "fail"
        checks["db"] = f"fail: {type(exc).__name__}: {exc}"

    code = 200 if checks["status"] == "ok" else 500
    return JsonResponse(checks, status=code)


def diagnostics(request):
    result = {
        "status": "ok",
        "checks": {},
        "debug": settings.DEBUG,
    }

    for name, check in CHECKS:
        if name in NEEDS_DB and result["checks"].get("db") != "ok":
            result["checks"][name] = "skip: db unavailable"
            continue
        try:
            result["checks"][name] = check()
        except CheckFailed as exc:
            result["status"] = "fail"
            result["checks"][name] = f"fail: {exc}"
        except Exception as exc:
            logger.warning(f"Diagnostics check {name} raised {type(exc).__name__}: {exc}")
            result["status"] = "fail"
            result["checks"][name] = f"fail: {type(exc).__name__}: {exc}"

    code = 200 if result["status"] == "ok" else 500
    return JsonResponse(result, status=code)
