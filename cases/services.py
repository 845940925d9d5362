import logging
import re
import threading
from collections import Counter

import requests
from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import IntegrityError, transaction
from django.db.models import Count, F, Q
from django.utils import timezone
from django.utils.html import escape, format_html
from django.utils.safestring import mark_safe

from accounts.services import increment_activity
from .models import EMOJI_OPTIONS, POPULAR_THRESHOLD, TAG_OPTIONS, CaseExample, CaseReaction, CaseTag

logger = logging.getLogger(__name__)

LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_SAFE_SCHEMES = ("http://", "https://", "mailto:")


# --- listing -----------------------------------------------------------------

def with_engagement(queryset):
    """Annotate engagement = 2 x reactions + distinct tags."""
    return queryset.annotate(
        reaction_count=Count("reactions", distinct=True),
        tag_count=Count("tags__tag", distinct=True),
    ).annotate(engagement=F("reaction_count") * 2 + F("tag_count"))


def search_cases(query: str = "", tags=None):
    qs = CaseExample.objects.all()
    query = (query or "").strip()
    if query:
        qs = qs.filter(Q(title__icontains=query) | Q(description__icontains=query))
    tags = [tag for tag in (tags or []) if tag in TAG_OPTIONS]
    if tags:
        # subquery keeps the tag join out of the engagement counts
        qs = qs.filter(pk__in=CaseTag.objects.filter(tag__in=tags).values("case_id"))
    return with_engagement(qs).order_by("-engagement", "-created_at")


def engagement_score(case: CaseExample) -> int:
    reactions = case.reactions.count()
    tags = case.tags.values("tag").distinct().count()
    return reactions * 2 + tags


def is_popular(score: int) -> bool:
    return score > POPULAR_THRESHOLD


def case_summary(case: CaseExample, user) -> dict:
    """Per-case data for the list template; expects reactions and tags prefetched."""
    reactions = list(case.reactions.all())
    tags = list(case.tags.all())
    counts = Counter(r.emoji for r in reactions)
    mine = {r.emoji for r in reactions if r.user_id == user.pk}
    score = getattr(case, "engagement", None)
    if score is None:
        score = len(reactions) * 2 + len({t.tag for t in tags})
    return {
        "case": case,
        "score": score,
        "popular": is_popular(score),
        "reactions": [(emoji, counts.get(emoji, 0), emoji in mine) for emoji in EMOJI_OPTIONS],
        "tags": sorted({t.tag for t in tags}),
        "my_tags": {t.tag for t in tags if t.user_id == user.pk},
        "comment_html": render_comment(case.admin_comment) if case.admin_comment else "",
    }


# --- create + webhook --------------------------------------------------------

def create_case(user, title: str, description: str, category: str, case_url: str = "") -> CaseExample:
    case = CaseExample.objects.create(
        author=user,
        author_name=getattr(user, "display_name", "") or user.get_username(),
        title=title,
        description=description,
        category=category,
    )
    increment_activity(user, "tagged_cases")
    logger.info(f"Case example {case.pk} created by user {user.pk}")
    notify_case_created(case, case_url)
    return case


def webhook_payload(case: CaseExample, case_url: str = "") -> dict:
    return {
        "title": case.title,
        "description": case.description,
        "category": case.category,
        "author": case.author_name,
        "tags": [],
        "url": case_url,
        "caseId": str(case.pk),
        "createdAt": case.created_at.isoformat(),
    }


def _post_webhook(url: str, payload: dict, timeout: float) -> None:
    try:
        response = requests.post(url, json=payload, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as exc:
        logger.warning(f"Case webhook failed for case {payload.get('caseId')}: {exc}")
        return
    logger.info(f"Case webhook delivered for case {payload.get('caseId')}")


def notify_case_created(case: CaseExample, case_url: str = "") -> None:
    """Fire-and-forget notification; never raises and never blocks the save."""
    url = getattr(settings, "CASE_WEBHOOK_URL", "")
    if not url:
        return
    timeout = getattr(settings, "CASE_WEBHOOK_TIMEOUT", 5)
    payload = webhook_payload(case, case_url)

    if getattr(settings, "CASE_WEBHOOK_SYNC", False):
        _post_webhook(url, payload, timeout)
        return
    worker = threading.Thread(target=_post_webhook, args=(url, payload, timeout), daemon=True)
    worker.start()


# --- reactions and tags ------------------------------------------------------

def _toggle(model, counter: str, user, case: CaseExample, **lookup) -> bool:
    """Add or remove a per-user marker; returns True when it was added."""
    existing = model.objects.filter(case=case, user=user, **lookup)
    if existing.exists():
        existing.delete()
        increment_activity(user, counter, -1)
        return False
    try:
        with transaction.atomic():
            model.objects.create(case=case, user=user, **lookup)
    except IntegrityError:
        # a concurrent request added the same marker
        return True
    increment_activity(user, counter)
    return True


def toggle_reaction(user, case: CaseExample, emoji: str) -> bool:
    if emoji not in EMOJI_OPTIONS:
        raise ValueError(f"Unsupported reaction: {emoji}")
    return _toggle(CaseReaction, "liked_cases", user, case, emoji=emoji)


def toggle_tag(user, case: CaseExample, tag: str) -> bool:
    if tag not in TAG_OPTIONS:
        raise ValueError(f"Unsupported tag: {tag}")
    return _toggle(CaseTag, "tagged_cases", user, case, tag=tag)


# --- admin comment -----------------------------------------------------------

def add_admin_comment(user, case: CaseExample, text: str) -> CaseExample:
    if not user.is_ecrc_admin:
        raise PermissionDenied("Nur Admins können Kommentare hinzufügen.")
    text = (text or "").strip()
    if not text:
        raise ValueError("Der Kommentar ist leer.")

    updated = CaseExample.objects.filter(pk=case.pk, admin_comment="").update(
        admin_comment=text,
        admin_comment_at=timezone.now(),
        admin_comment_by=user,
    )
    if not updated:
        raise ValueError("Dieses Fallbeispiel hat bereits einen Admin-Kommentar.")
    case.refresh_from_db(fields=["admin_comment", "admin_comment_at", "admin_comment_by"])
    logger.info(f"Admin comment added to case {case.pk} by user {user.pk}")
    return case


def render_comment(text: str):
    """Render ``[label](url)`` as links and escape everything else."""
    parts = []
    position = 0
    for match in LINK_RE.finditer(text or ""):
        parts.append(escape(text[position : match.start()]))
        label, url = match.group(1), match.group(2).strip()
        if url.lower().startswith(_SAFE_SCHEMES):
            parts.append(
                format_html('<a href="{}" target="_blank" rel="noopener noreferrer">{}</a>', url, label)
            )
        else:
            parts.append(escape(match.group(0)))
        position = match.end()
    parts.append(escape((text or "")[position:]))
    return mark_safe("".join(str(part) for part in parts))
