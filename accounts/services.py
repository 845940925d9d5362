import logging
import secrets

from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F

logger = logging.getLogger(__name__)

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 12
CODE_GROUP = 4
_MAX_CODE_ATTEMPTS = 5


def generate_code() -> str:
    """Return a fresh access code like ``ABCD-EFGH-JKLM``."""
    chars = [secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH)]
    groups = ["".join(chars[i : i + CODE_GROUP]) for i in range(0, CODE_LENGTH, CODE_GROUP)]
    return "-".join(groups)


def normalize_code(raw: str) -> str:
    cleaned = "".join(ch for ch in (raw or "").upper() if ch.isalnum())
    if len(cleaned) != CODE_LENGTH:
        return (raw or "").strip().upper()
    return "-".join(cleaned[i : i + CODE_GROUP] for i in range(0, CODE_LENGTH, CODE_GROUP))


def register_learner(display_name: str):
    """
    Create a learner account identified only by a generated access code.
    The code doubles as username; the account has no usable password.
    """
    User = get_user_model()
    last_error = None
    for _ in range(_MAX_CODE_ATTEMPTS):
        code = generate_code()
        try:
            with transaction.atomic():
                user = User(
                    username=code,
                    access_code=code,
                    display_name=display_name.strip(),
                    role=User.Role.LEARNER,
                )
                user.set_unusable_password()
                user.save()
        except IntegrityError as exc:
            logger.warning(f"Access code collision, retrying: {exc}")
            last_error = exc
            continue
        logger.info(f"Registered learner {user.pk} with a new access code")
        return user, code
    raise last_error


def increment_activity(user, field: str, delta: int = 1) -> bool:
    """
    Atomically adjust one of the user's activity counters.

    Counter updates are bookkeeping only: a failure is logged and reported
    through the return value but never raised to the caller.
    """
    User = get_user_model()
    if field not in User.ACTIVITY_FIELDS:
        raise ValueError(f"Unknown activity counter: {field}")
    if user is None or not getattr(user, "pk", None):
        return False

    qs = User.objects.filter(pk=user.pk)
    if delta < 0:
        qs = qs.filter(**{f"{field}__gte": -delta})
    try:
        updated = qs.update(**{field: F(field) + delta})
    except DatabaseError as exc:
        logger.error(f"Activity counter {field} for user {user.pk} not updated: {exc}")
        return False

    if updated:
        user.refresh_from_db(fields=[field])
    return bool(updated)
