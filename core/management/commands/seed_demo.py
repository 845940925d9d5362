from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from accounts.services import register_learner
from cases.models import CaseExample, CaseReaction, CaseTag
from copyright_check.evaluator import AnswerSet
from copyright_check.models import CopyrightCheck
from licenses.models import GeneratedLicense


class Command(BaseCommand):
    help = "Seed demo data for testing."

    def handle(self, *args, **options):
        original_webhook = settings.CASE_WEBHOOK_URL
        settings.CASE_WEBHOOK_URL = ""
        try:
            admin = _ensure_admin()
            learners = _ensure_learners()
            _ensure_checks(learners)
            _ensure_cases(learners, admin)
            _ensure_licenses(learners)
        finally:
            settings.CASE_WEBHOOK_URL = original_webhook

        for name, code in learners["codes"].items():
            self.stdout.write(f"{name}: {code}")
        self.stdout.write(self.style.SUCCESS("Demo data ready."))


def _ensure_admin():
    User = get_user_model()
    admin = User.objects.filter(username="ecrc-admin").first()
    if not admin:
        admin = User(
            username="ecrc-admin",
            email="admin@ecrc42.demo",
            display_name="ECRC Admin",
            role=User.Role.ADMIN,
            is_staff=True,
        )
        admin.set_password("Test1234!")
        admin.save()
    return admin


def _ensure_learners():
    User = get_user_model()
    names = ["Mia", "Luca", "Noah"]
    users, codes = {}, {}
    for name in names:
        user = User.objects.filter(display_name=name, role=User.Role.LEARNER).first()
        if not user:
            user, code = register_learner(name)
            codes[name] = code
        else:
            codes[name] = user.access_code
        users[name] = user
    return {"users": users, "codes": codes}


def _ensure_checks(learners):
    scenarios = [
        ("Mia", AnswerSet(media_type="photo", source_type="internet", public_domain=True, usage_type="presentation")),
        (
            "Mia",
            AnswerSet(
                media_type="image",
                source_type="creative_commons",
                public_domain=False,
                has_cc_license=True,
                cc_license="CC-BY-SA",
                usage_type="school_website",
                is_commercial=False,
            ),
        ),
        (
            "Luca",
            AnswerSet(
                media_type="text",
                source_type="print",
                public_domain=False,
                has_cc_license=False,
                is_protected=True,
                usage_type="written_work",
                is_public=False,
                usage_context="zitat",
            ),
        ),
        (
            "Noah",
            AnswerSet(
                media_type="audio",
                source_type="internet",
                public_domain=False,
                has_cc_license=False,
                is_protected=True,
                usage_type="video_project",
                usage_context="hauptbild",
            ),
        ),
    ]
    for name, answers in scenarios:
        owner = learners["users"][name]
        if CopyrightCheck.objects.filter(owner=owner, media_type=answers.media_type).exists():
            continue
        check = CopyrightCheck(owner=owner, status=CopyrightCheck.Status.COMPLETED)
        check.apply_answers(answers)
        check.save()
        owner.checked_products += 1
        owner.save(update_fields=["checked_products"])


def _ensure_cases(learners, admin):
    users = learners["users"]
    cases_data = [
        (
            "Mia",
            "Foto vom Klassenausflug auf Instagram",
            "Darf ich ein Foto, auf dem Mitschüler*innen zu sehen sind, auf dem Schul-Account posten?",
            CaseExample.Category.PHOTO,
        ),
        (
            "Luca",
            "Songausschnitt im Erklärvideo",
            "Für ein Schulprojekt möchte ich 20 Sekunden eines bekannten Songs als Hintergrundmusik nutzen.",
            CaseExample.Category.MUSIC,
        ),
        (
            "Noah",
            "Wikipedia-Grafik in der Maturaarbeit",
            "Eine Grafik unter CC BY-SA soll in meine Maturaarbeit. Wie gebe ich die Quelle richtig an?",
            CaseExample.Category.CREATIVE_COMMONS,
        ),
    ]
    for name, title, description, category in cases_data:
        author = users[name]
        case, created = CaseExample.objects.get_or_create(
            title=title,
            defaults={
                "author": author,
                "author_name": author.display_name,
                "description": description,
                "category": category,
            },
        )
        if not created:
            continue
        for other in users.values():
            if other != author:
                CaseReaction.objects.get_or_create(case=case, user=other, emoji="👍")
                CaseTag.objects.get_or_create(case=case, user=other, tag="#relevant")

    wiki = CaseExample.objects.filter(title__startswith="Wikipedia-Grafik", admin_comment="").first()
    if wiki:
        wiki.admin_comment = "Nutze die TASL-Formel, siehe [Wikimedia Commons](https://commons.wikimedia.org)."
        wiki.admin_comment_by = admin
        wiki.admin_comment_at = timezone.now()
        wiki.save()


def _ensure_licenses(learners):
    owner = learners["users"]["Luca"]
    GeneratedLicense.objects.get_or_create(
        owner=owner,
        title="Herbstlandschaft",
        defaults={
            "media_type": GeneratedLicense.WorkType.PHOTO,
            "author_name": owner.display_name,
            "description": "Eigenes Foto, aufgenommen im Oktober im Jura.",
            "creative_work_reasons": ["Ich habe es selbst geschaffen"],
            "individual_character_reasons": ["Es zeigt meinen individuellen Stil"],
            "expression_forms": ["Digitales Werk (online verfügbar)"],
            "license": "CC-BY",
        },
    )
