from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from copyright_check.evaluator import AnswerSet, Category
from copyright_check.forms import AiCreationForm
from copyright_check.models import CopyrightCheck
from copyright_check.views import SESSION_KEY
from copyright_check.wizard import LAST_STEP, WizardState
from core.pdf import PdfUnavailable

User = get_user_model()


class WizardStateTests(SimpleTestCase):
    def _through_step_three(self):
        state = WizardState()
        state = state.answer(1, {"media_type": "photo"})
        state = state.answer(2, {"is_ai_created": False})
        return state.answer(3, {"source_type": "internet", "description": "Matterhorn"})

    def test_public_domain_skips_license_questions(self):
        state = self._through_step_three().answer(4, {"public_domain": True})

        self.assertEqual(state.step, 7)
        self.assertFalse(state.answers.is_protected)
        self.assertEqual(state.history, (1, 2, 3, 4))

    def test_no_cc_license_assumes_protection(self):
        state = self._through_step_three().answer(4, {"public_domain": False})
        state = state.answer(5, {"has_cc_license": False})

        self.assertEqual(state.step, 7)
        self.assertTrue(state.answers.is_protected)

    def test_cc_license_asks_for_variant(self):
        state = self._through_step_three().answer(4, {"public_domain": False})
        state = state.answer(5, {"has_cc_license": True})

        self.assertEqual(state.step, 6)
        state = state.answer(6, {"cc_license": "CC-BY-SA"})
        self.assertEqual(state.answers.cc_license, "CC-BY-SA")
        self.assertEqual(state.step, 7)

    def test_last_step_finishes_and_skips_commercial_for_public_domain(self):
        state = self._through_step_three().answer(4, {"public_domain": True})
        state = state.answer(7, {"usage_type": "presentation"})
        state = state.answer(LAST_STEP, {"is_commercial": True, "is_public": False, "has_license": None})

        self.assertTrue(state.finished)
        self.assertTrue(state.is_complete)
        self.assertIsNone(state.answers.is_commercial)

    def test_premises_context_sets_exposure(self):
        state = self._through_step_three().answer(4, {"public_domain": False})
        state = state.answer(5, {"has_cc_license": False})
        state = state.answer(7, {"usage_type": "canteen"})
        state = state.answer(LAST_STEP, {"usage_context": "oeffentlich", "is_commercial": False})

        self.assertTrue(state.answers.is_public)

    def test_answer_for_wrong_step_is_rejected(self):
        with self.assertRaises(ValueError):
            WizardState().answer(3, {"source_type": "print"})

    def test_back_and_goto_return_to_visited_steps(self):
        state = self._through_step_three()

        self.assertEqual(state.back().step, 3)
        jumped = state.goto(2)
        self.assertEqual(jumped.step, 2)
        self.assertEqual(jumped.history, (1,))
        self.assertEqual(state.goto(6), state)

    def test_session_payload_restores_state(self):
        state = self._through_step_three()

        restored = WizardState.from_session(state.to_session())

        self.assertEqual(restored, state)


class AiCreationFormTests(SimpleTestCase):
    def test_ai_work_needs_a_yes_or_no_on_human_creativity(self):
        for value in ("", "unknown"):
            form = AiCreationForm(data={"is_ai_created": "yes", "has_human_creativity": value})
            self.assertFalse(form.is_valid(), value)
            self.assertIn("has_human_creativity", form.errors)

    def test_ai_work_with_human_creativity_answer_is_valid(self):
        form = AiCreationForm(data={"is_ai_created": "yes", "has_human_creativity": "no"})

        self.assertTrue(form.is_valid(), form.errors)
        self.assertIs(form.cleaned_data["has_human_creativity"], False)

    def test_human_creativity_is_optional_without_ai(self):
        form = AiCreationForm(data={"is_ai_created": "no"})

        self.assertTrue(form.is_valid(), form.errors)


class CheckViewTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="learner", password="pass1234", display_name="Mia")
        self.other = User.objects.create_user(username="other", password="pass1234", display_name="Luca")

    def _check(self, owner=None, **answers):
        data = {
            "media_type": "photo",
            "public_domain": False,
            "has_cc_license": False,
            "is_protected": True,
            "usage_type": "presentation",
            "is_public": False,
        }
        data.update(answers)
        check = CopyrightCheck(owner=owner or self.user, description="Alpenpanorama")
        check.apply_answers(AnswerSet(**data))
        check.save()
        return check

    def _walk_wizard(self):
        steps = [
            {"media_type": "photo"},
            {"is_ai_created": "no"},
            {"source_type": "internet", "description": "Foto aus Wikipedia"},
            {"public_domain": "no"},
            {"has_cc_license": "no"},
            {"usage_type": "presentation"},
            {"is_commercial": "no", "is_public": "no", "has_license": "no"},
        ]
        response = None
        for data in steps:
            response = self.client.post(reverse("check_wizard"), data)
        return response

    def test_wizard_creates_draft_with_outcome(self):
        self.client.force_login(self.user)
        self.client.get(reverse("check_start"))

        response = self._walk_wizard()

        check = CopyrightCheck.objects.get(owner=self.user)
        self.assertRedirects(response, reverse("check_detail", args=[check.pk]))
        self.assertEqual(check.status, CopyrightCheck.Status.DRAFT)
        self.assertEqual(check.result["category"], Category.ALLOWED)
        self.assertEqual(check.description, "Foto aus Wikipedia")
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_wizard_step_validation_rerenders(self):
        self.client.force_login(self.user)
        self.client.get(reverse("check_start"))
        self.client.post(reverse("check_wizard"), {"media_type": "photo"})

        response = self.client.post(reverse("check_wizard"), {"is_ai_created": "yes"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["state"].step, 2)
        self.assertTrue(response.context["form"].errors)

    def test_wizard_back_returns_to_previous_step(self):
        self.client.force_login(self.user)
        self.client.get(reverse("check_start"))
        self.client.post(reverse("check_wizard"), {"media_type": "video"})

        self.client.post(reverse("check_wizard_back"))

        self.assertEqual(self.client.session[SESSION_KEY]["step"], 1)

    def test_edit_run_updates_existing_record(self):
        check = self._check(is_public=True)
        self.assertEqual(check.outcome.category, Category.FORBIDDEN)
        self.client.force_login(self.user)

        self.client.get(reverse("check_edit", args=[check.pk]))
        self.assertEqual(self.client.session[SESSION_KEY]["check_id"], check.pk)
        self._walk_wizard()

        check.refresh_from_db()
        self.assertEqual(CopyrightCheck.objects.filter(owner=self.user).count(), 1)
        self.assertEqual(check.outcome.category, Category.ALLOWED)

    def test_detail_of_foreign_check_redirects_to_dashboard(self):
        check = self._check(owner=self.other)
        self.client.force_login(self.user)

        response = self.client.get(reverse("check_detail", args=[check.pk]))

        self.assertRedirects(response, reverse("dashboard"))
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        self.assertTrue(messages)

    def test_list_shows_only_own_checks(self):
        own = self._check()
        self._check(owner=self.other)
        self.client.force_login(self.user)

        response = self.client.get(reverse("check_list"))

        self.assertEqual(list(response.context["checks"]), [own])

    def test_complete_counts_activity_once(self):
        check = self._check()
        self.client.force_login(self.user)

        self.client.post(reverse("check_complete", args=[check.pk]))
        self.client.post(reverse("check_complete", args=[check.pk]))

        check.refresh_from_db()
        self.user.refresh_from_db()
        self.assertEqual(check.status, CopyrightCheck.Status.COMPLETED)
        self.assertIsNotNone(check.completed_at)
        self.assertEqual(self.user.checked_products, 1)

    def test_owner_can_delete_check(self):
        check = self._check()
        self.client.force_login(self.user)

        response = self.client.post(reverse("check_delete", args=[check.pk]))

        self.assertRedirects(response, reverse("check_list"))
        self.assertFalse(CopyrightCheck.objects.filter(pk=check.pk).exists())

    def test_foreign_check_is_not_deleted(self):
        check = self._check(owner=self.other)
        self.client.force_login(self.user)

        self.client.post(reverse("check_delete", args=[check.pk]))

        self.assertTrue(CopyrightCheck.objects.filter(pk=check.pk).exists())

    def test_html_export_contains_outcome(self):
        check = self._check()
        self.client.force_login(self.user)

        response = self.client.get(reverse("check_export_html", args=[check.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertIn("text/html", response["Content-Type"])
        self.assertIn("Im Klassenzimmer zeigen", response.content.decode())

    def test_pdf_export(self):
        check = self._check()
        self.client.force_login(self.user)

        with patch("core.pdf._write_pdf", return_value=b"%PDF-1.7 test") as write_pdf:
            response = self.client.get(reverse("check_export_pdf", args=[check.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "application/pdf")
        self.assertIn(f"urheberrechtspruefung-{check.pk}.pdf", response["Content-Disposition"])
        self.assertIn("Erlaubt für Unterricht!", write_pdf.call_args[0][0])

    def test_pdf_export_without_weasyprint_returns_501(self):
        check = self._check()
        self.client.force_login(self.user)

        with patch("core.pdf._write_pdf", side_effect=PdfUnavailable("no pango")):
            response = self.client.get(reverse("check_export_pdf", args=[check.pk]))

        self.assertEqual(response.status_code, 501)
