import itertools
import json

from django.test import SimpleTestCase

from copyright_check.choices import CCLicense, UsageType
from copyright_check.evaluator import AnswerSet, Category, evaluate, normalize_choice


def _protected(**kwargs):
    base = {"public_domain": False, "has_cc_license": False, "is_protected": True}
    base.update(kwargs)
    return AnswerSet(**base)


class EvaluatorExampleTests(SimpleTestCase):
    def test_public_domain_photo_is_free(self):
        outcome = evaluate(AnswerSet.from_mapping({"mediaType": "Photo", "publicDomain": True}))

        self.assertEqual(outcome.category, Category.ALLOWED)
        self.assertIn("frei nutzbar", outcome.title)

    def test_non_commercial_license_forbids_commercial_use(self):
        outcome = evaluate(
            AnswerSet.from_mapping(
                {"publicDomain": False, "hasCCLicense": True, "ccLicense": "CC-BY-NC", "isCommercial": True}
            )
        )

        self.assertEqual(outcome.category, Category.FORBIDDEN)
        self.assertIn("Kommerzielle Nutzung nicht erlaubt", outcome.forbidden_uses)

    def test_classroom_presentation_is_allowed(self):
        outcome = evaluate(
            AnswerSet.from_mapping(
                {
                    "publicDomain": False,
                    "hasCCLicense": False,
                    "isProtected": True,
                    "usageType": "Präsentation",
                    "isPublic": False,
                }
            )
        )

        self.assertEqual(outcome.category, Category.ALLOWED)
        self.assertIn("Im Klassenzimmer zeigen", outcome.allowed_uses)

    def test_public_presentation_is_forbidden(self):
        outcome = evaluate(
            AnswerSet.from_mapping(
                {
                    "publicDomain": False,
                    "hasCCLicense": False,
                    "isProtected": True,
                    "usageType": "Präsentation",
                    "isPublic": True,
                }
            )
        )

        self.assertEqual(outcome.category, Category.FORBIDDEN)

    def test_protected_without_usage_needs_review(self):
        outcome = evaluate(AnswerSet(is_protected=True))

        self.assertEqual(outcome.category, Category.CONDITIONAL)
        self.assertIn("weitere Prüfung nötig", outcome.title)
        self.assertTrue(outcome.needs_review)


class EvaluatorPropertyTests(SimpleTestCase):
    TRI = (True, False, None)

    def _grid(self):
        usages = [None, "unbekannt"] + [choice.value for choice in UsageType]
        licenses = [None, "CC-FOO"] + [choice.value for choice in CCLicense]
        for has_cc, protected, usage, public, commercial in itertools.product(
            self.TRI, self.TRI, usages, self.TRI, self.TRI
        ):
            for cc in licenses if has_cc else [None]:
                yield dict(
                    has_cc_license=has_cc,
                    cc_license=cc,
                    is_protected=protected,
                    usage_type=usage,
                    is_public=public,
                    is_commercial=commercial,
                )

    def test_public_domain_always_allowed(self):
        for values in self._grid():
            outcome = evaluate(AnswerSet(public_domain=True, **values))
            self.assertEqual(outcome.category, Category.ALLOWED, values)

    def test_never_raises_and_always_categorised(self):
        for public_domain in self.TRI:
            for values in self._grid():
                outcome = evaluate(AnswerSet(public_domain=public_domain, **values))
                self.assertIn(outcome.category, Category.COLORS)

    def test_non_commercial_variants_forbid_commercial_use(self):
        for variant in CCLicense:
            if not variant.non_commercial:
                continue
            outcome = evaluate(AnswerSet(has_cc_license=True, cc_license=variant.value, is_commercial=True))
            self.assertEqual(outcome.category, Category.FORBIDDEN, variant)

    def test_reevaluation_is_byte_identical(self):
        answers = _protected(usage_type="written_work", is_public=None, usage_context="zitat")

        first, second = evaluate(answers), evaluate(answers)

        self.assertEqual(first, second)
        self.assertEqual(
            json.dumps(first.to_dict(), sort_keys=True, ensure_ascii=False),
            json.dumps(second.to_dict(), sort_keys=True, ensure_ascii=False),
        )


class CCLicenseRuleTests(SimpleTestCase):
    def test_cc0_has_no_mandatory_attribution(self):
        outcome = evaluate(AnswerSet(has_cc_license=True, cc_license="CC0", is_commercial=True))

        self.assertEqual(outcome.category, Category.ALLOWED)
        self.assertFalse(any("Quellenangabe" in item for item in outcome.restricted_uses))

    def test_attribution_always_required_for_other_variants(self):
        outcome = evaluate(AnswerSet(has_cc_license=True, cc_license="CC-BY"))

        self.assertEqual(outcome.category, Category.CONDITIONAL)
        self.assertIn("Quellenangabe nach TASL-Formel erforderlich", outcome.restricted_uses)
        self.assertIn("Kommerziell erlaubt", outcome.allowed_uses)

    def test_no_derivatives_and_share_alike_restrictions(self):
        nd = evaluate(AnswerSet(has_cc_license=True, cc_license="CC-BY-ND"))
        sa = evaluate(AnswerSet(has_cc_license=True, cc_license="CC-BY-SA"))

        self.assertIn("Keine Bearbeitung erlaubt - nur unverändert nutzen", nd.restricted_uses)
        self.assertNotIn("Bearbeitung erlaubt", nd.allowed_uses)
        self.assertIn("Bearbeitungen müssen unter gleicher Lizenz geteilt werden", sa.restricted_uses)

    def test_unknown_variant_is_treated_as_most_restrictive(self):
        outcome = evaluate(AnswerSet(has_cc_license=True, cc_license=None))

        self.assertEqual(outcome.category, Category.CONDITIONAL)
        self.assertTrue(outcome.needs_review)
        self.assertIn("Keine Bearbeitung erlaubt - nur unverändert nutzen", outcome.restricted_uses)

    def test_commercial_usage_type_counts_as_commercial(self):
        outcome = evaluate(AnswerSet(has_cc_license=True, cc_license="CC-BY-NC", usage_type="commercial"))

        self.assertEqual(outcome.category, Category.FORBIDDEN)

    def test_non_commercial_variant_with_unknown_commercial_use_needs_review(self):
        unknown = evaluate(AnswerSet(has_cc_license=True, cc_license="CC-BY-NC-SA"))
        private = evaluate(AnswerSet(has_cc_license=True, cc_license="CC-BY-NC-SA", is_commercial=False))
        open_license = evaluate(AnswerSet(has_cc_license=True, cc_license="CC-BY"))

        self.assertEqual(unknown.category, Category.CONDITIONAL)
        self.assertTrue(unknown.needs_review)
        self.assertFalse(private.needs_review)
        self.assertFalse(open_license.needs_review)


class ProtectedUsageRuleTests(SimpleTestCase):
    def test_not_protected_is_allowed(self):
        outcome = evaluate(AnswerSet(public_domain=False, has_cc_license=False, is_protected=False))

        self.assertEqual(outcome.category, Category.ALLOWED)
        self.assertEqual(outcome.rule, "not_protected")

    def test_commercial_needs_license(self):
        licensed = evaluate(_protected(is_commercial=True, has_license=True))
        unlicensed = evaluate(_protected(is_commercial=True, has_license=False))
        unknown = evaluate(_protected(is_commercial=True))

        self.assertEqual(licensed.category, Category.ALLOWED)
        self.assertEqual(unlicensed.category, Category.FORBIDDEN)
        self.assertFalse(unlicensed.needs_review)
        self.assertEqual(unknown.category, Category.FORBIDDEN)
        self.assertTrue(unknown.needs_review)

    def test_written_work_outcomes(self):
        expected = {
            (False, "zitat"): Category.ALLOWED,
            (False, "hauptinhalt"): Category.CONDITIONAL,
            (False, "bearbeitet"): Category.FORBIDDEN,
            (True, "zitat"): Category.ALLOWED,
            (True, "hauptinhalt"): Category.FORBIDDEN,
            (True, "bearbeitet"): Category.FORBIDDEN,
        }
        for (is_public, context), category in expected.items():
            outcome = evaluate(_protected(
                    usage_type="written_work", is_public=is_public, usage_context=context, is_commercial=False
                ))
            self.assertEqual(outcome.category, category, (is_public, context))
            self.assertFalse(outcome.needs_review)

    def test_written_work_unknown_exposure_is_treated_as_public(self):
        outcome = evaluate(_protected(usage_type="written_work", usage_context="hauptinhalt"))

        self.assertEqual(outcome.category, Category.FORBIDDEN)
        self.assertTrue(outcome.needs_review)

    def test_online_usage(self):
        quotation = evaluate(_protected(usage_type="social_media", usage_context="zitat"))
        main_image = evaluate(_protected(usage_type="video_project", usage_context="hauptbild"))
        unknown = evaluate(_protected(usage_type="social_media"))

        self.assertEqual(quotation.category, Category.CONDITIONAL)
        self.assertEqual(main_image.category, Category.FORBIDDEN)
        self.assertTrue(unknown.needs_review)

    def test_unhandled_usage_falls_back_to_review(self):
        outcome = evaluate(_protected(usage_type="newsletter", is_public=True))

        self.assertEqual(outcome.category, Category.CONDITIONAL)
        self.assertEqual(outcome.rule, "fallback")
        self.assertTrue(any("IGE" in item for item in outcome.recommendations))


class AnswerSetTests(SimpleTestCase):
    def test_from_mapping_accepts_labels_and_blank_values(self):
        answers = AnswerSet.from_mapping({"usageType": "Präsentation", "ccLicense": "", "unknownKey": 1})

        self.assertEqual(answers.usage_type, "presentation")
        self.assertIsNone(answers.cc_license)

    def test_normalize_choice_keeps_unknown_values(self):
        self.assertEqual(normalize_choice(UsageType, "Zirkus"), "Zirkus")
        self.assertEqual(normalize_choice(UsageType, "SOCIAL_MEDIA"), "social_media")


class UnknownAnswerReviewTests(SimpleTestCase):
    def _classroom(self, **kwargs):
        base = {"is_protected": True, "usage_type": "presentation", "is_public": False, "is_commercial": False}
        base.update(kwargs)
        return evaluate(AnswerSet(**base))

    def test_settled_classroom_use_needs_no_review(self):
        outcome = self._classroom(public_domain=False, has_cc_license=False)

        self.assertEqual(outcome.category, Category.ALLOWED)
        self.assertFalse(outcome.needs_review)

    def test_unknown_status_answers_flag_review(self):
        outcome = self._classroom(public_domain=None, has_cc_license=None)

        self.assertEqual(outcome.category, Category.ALLOWED)
        self.assertEqual(outcome.rule, "presentation")
        self.assertTrue(outcome.needs_review)
        self.assertTrue(self._classroom(public_domain=False, has_cc_license=None).needs_review)

    def test_unknown_commercial_use_flags_review(self):
        outcome = self._classroom(public_domain=False, has_cc_license=False, is_commercial=None)

        self.assertEqual(outcome.category, Category.ALLOWED)
        self.assertTrue(outcome.needs_review)

    def test_commercial_usage_type_settles_commercial_question(self):
        outcome = evaluate(_protected(usage_type="commercial", has_license=False))

        self.assertEqual(outcome.category, Category.FORBIDDEN)
        self.assertFalse(outcome.needs_review)
