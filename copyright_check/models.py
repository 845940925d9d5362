from django.conf import settings
from django.db import models

from .choices import CCLicense, MediaType, SourceType, UsageContext, UsageType
from .evaluator import AnswerSet, Outcome, evaluate


class CopyrightCheck(models.Model):
    class Status(models.TextChoices):
        DRAFT = "draft", "Entwurf"
        COMPLETED = "completed", "Abgeschlossen"

    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="checks")
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.DRAFT)

    # Phase 1: the work
    media_type = models.CharField(max_length=32, choices=MediaType.choices)
    source_type = models.CharField(max_length=32, choices=SourceType.choices, blank=True)
    description = models.TextField(blank=True)
    is_ai_created = models.BooleanField(null=True, blank=True)
    has_human_creativity = models.BooleanField(null=True, blank=True)

    # Phase 2: legal status
    is_public_domain = models.BooleanField(null=True, blank=True)
    has_cc_license = models.BooleanField(null=True, blank=True)
    cc_license = models.CharField(max_length=16, choices=CCLicense.choices, blank=True)
    is_protected = models.BooleanField(null=True, blank=True)

    # Phase 3: intended use
    usage_type = models.CharField(max_length=32, choices=UsageType.choices, blank=True)
    is_public = models.BooleanField(null=True, blank=True)
    usage_context = models.CharField(max_length=16, choices=UsageContext.choices, blank=True)
    has_license = models.BooleanField(null=True, blank=True)
    is_commercial = models.BooleanField(null=True, blank=True)

    result = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.get_media_type_display()} ({self.get_status_display()})"

    def answer_set(self) -> AnswerSet:
        return AnswerSet(
            media_type=self.media_type or None,
            source_type=self.source_type or None,
            public_domain=self.is_public_domain,
            has_cc_license=self.has_cc_license,
            cc_license=self.cc_license or None,
            is_protected=self.is_protected,
            usage_type=self.usage_type or None,
            is_public=self.is_public,
            usage_context=self.usage_context or None,
            has_license=self.has_license,
            is_commercial=self.is_commercial,
        )

    def apply_answers(self, answers: AnswerSet, extras=None) -> Outcome:
        """Copy *answers* onto the record and re-derive the stored outcome."""
        self.media_type = answers.media_type or ""
        self.source_type = answers.source_type or ""
        self.is_public_domain = answers.public_domain
        self.has_cc_license = answers.has_cc_license
        self.cc_license = answers.cc_license or ""
        self.is_protected = answers.is_protected
        self.usage_type = answers.usage_type or ""
        self.is_public = answers.is_public
        self.usage_context = answers.usage_context or ""
        self.has_license = answers.has_license
        self.is_commercial = answers.is_commercial
        if extras is not None:
            self.description = extras.description
            self.is_ai_created = extras.is_ai_created
            self.has_human_creativity = extras.has_human_creativity

        outcome = evaluate(answers)
        self.result = outcome.to_dict()
        return outcome

    @property
    def outcome(self) -> Outcome:
        return Outcome.from_dict(self.result or {})

    @property
    def passed(self) -> bool:
        return bool(self.result) and self.outcome.passed

    @property
    def is_draft(self) -> bool:
        return self.status == self.Status.DRAFT
