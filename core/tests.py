from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from copyright_check.evaluator import AnswerSet
from copyright_check.models import CopyrightCheck
from core.pdf import MISSING_DEPS_MESSAGE, PdfUnavailable, html_response, pdf_response

User = get_user_model()


class HealthTests(TestCase):
    def test_healthz_ok(self):
        response = self.client.get(reverse("healthz"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["db"], "ok")

    def test_diagnostics_reports_pdf_failure(self):
        with patch("core.views._write_pdf", side_effect=PdfUnavailable("no pango")):
            response = self.client.get(reverse("diagnostics"))

        self.assertEqual(response.status_code, 500)
        self.assertIn("PdfUnavailable", response.json()["checks"]["pdf"])


class PdfResponseTests(TestCase):
    def test_missing_weasyprint_returns_501_with_hint(self):
        with patch("core.pdf._write_pdf", side_effect=PdfUnavailable("missing")):
            response = pdf_response("certificates/activity_pdf.html", {"name": "Mia"}, "x.pdf")

        self.assertEqual(response.status_code, 501)
        self.assertEqual(response.content.decode(), MISSING_DEPS_MESSAGE)

    def test_html_response_is_attachment(self):
        response = html_response("certificates/activity_pdf.html", {"name": "Mia"}, "zertifikat.html")

        self.assertEqual(response["Content-Disposition"], 'attachment; filename="zertifikat.html"')
        self.assertIn("Mia", response.content.decode())


class DashboardTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="mia", password="pass1234", display_name="Mia")

    def test_dashboard_requires_login(self):
        response = self.client.get(reverse("dashboard"))

        self.assertEqual(response.status_code, 302)

    def test_dashboard_shows_activity_and_drafts(self):
        check = CopyrightCheck(owner=self.user, description="Plakat")
        check.apply_answers(AnswerSet(media_type="image", public_domain=True))
        check.save()
        self.user.checked_products = 2
        self.user.liked_cases = 1
        self.user.save()
        self.client.force_login(self.user)

        response = self.client.get(reverse("dashboard"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["total_activity"], 3)
        self.assertEqual(response.context["draft_count"], 1)
        self.assertEqual(list(response.context["recent_checks"]), [check])
