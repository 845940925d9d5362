import logging

from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.utils import timezone

from accounts.services import increment_activity
from .models import CopyrightCheck
from .wizard import WizardState

logger = logging.getLogger(__name__)


class IncompleteAnswers(ValueError):
    pass


def save_wizard_result(user, state: WizardState) -> CopyrightCheck:
    """
    Persist a finished wizard run.
    A fresh run creates a draft; an edit run updates the record it was started from.
    """
    if not state.is_complete:
        raise IncompleteAnswers("Bitte beantworte zuerst alle Fragen.")

    with transaction.atomic():
        if state.check_id:
            check = CopyrightCheck.objects.select_for_update().filter(pk=state.check_id).first()
            if check is None:
                raise CopyrightCheck.DoesNotExist(f"Check {state.check_id} no longer exists.")
            if check.owner_id != user.pk:
                raise PermissionDenied("Du kannst nur eigene Prüfungen bearbeiten.")
        else:
            check = CopyrightCheck(owner=user)

        outcome = check.apply_answers(state.answers, state.extras)
        check.save()

    logger.info(f"Check {check.pk} saved for user {user.pk}: {outcome.category} ({outcome.rule})")
    return check


def complete_check(user, check: CopyrightCheck) -> CopyrightCheck:
    """Move a draft to completed. Only the first completion is counted as activity."""
    if check.owner_id != user.pk:
        raise PermissionDenied("Du kannst nur eigene Prüfungen abschliessen.")
    if not check.is_draft:
        return check

    with transaction.atomic():
        check.status = CopyrightCheck.Status.COMPLETED
        check.completed_at = timezone.now()
        check.save(update_fields=["status", "completed_at", "updated_at"])

    # bookkeeping only, outside the record transaction
    increment_activity(user, "checked_products")
    logger.info(f"Check {check.pk} completed by user {user.pk}")
    return check


def delete_check(user, check: CopyrightCheck) -> None:
    if check.owner_id != user.pk:
        raise PermissionDenied("Du kannst nur eigene Prüfungen löschen.")
    pk = check.pk
    check.delete()
    logger.info(f"Check {pk} deleted by user {user.pk}")
