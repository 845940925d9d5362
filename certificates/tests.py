from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from certificates.services import protocol_context
from copyright_check.evaluator import AnswerSet
from copyright_check.models import CopyrightCheck

User = get_user_model()


class CertificateTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="noah", password="pass1234", display_name="Noah")
        self.client.force_login(self.user)

    def _check(self, **answers):
        check = CopyrightCheck(owner=self.user, description="Logo für das Schulfest")
        check.apply_answers(AnswerSet(media_type="design", **answers))
        check.save()
        return check

    def test_protocol_splits_passed_and_failed(self):
        allowed = self._check(public_domain=True)
        conditional = self._check(has_cc_license=True, cc_license="CC-BY")
        forbidden = self._check(has_cc_license=True, cc_license="CC-BY-NC", is_commercial=True)

        context = protocol_context(self.user)

        self.assertEqual(context["passed"], [allowed, conditional])
        self.assertEqual(context["failed"], [forbidden])

    def test_activity_certificate_counts_generation(self):
        with patch("core.pdf._write_pdf", return_value=b"%PDF-1.7") as write_pdf:
            response = self.client.get(reverse("certificate_activity"))

        self.assertEqual(response.status_code, 200)
        self.assertIn("ECRC42_Aktivitaetszertifikat_Noah.pdf", response["Content-Disposition"])
        self.assertIn("Aktivitätszertifikat", write_pdf.call_args[0][0])
        self.user.refresh_from_db()
        self.assertEqual(self.user.generated_certificates, 1)

    def test_protocol_requires_a_check(self):
        response = self.client.get(reverse("certificate_protocol"))

        self.assertRedirects(response, reverse("certificate_index"))

    def test_cc_document_without_cc_checks_shows_message(self):
        self._check(public_domain=True)

        response = self.client.get(reverse("certificate_cc_document"), follow=True)

        self.assertContains(response, "Du hast noch keine Produkte mit Creative Commons Lizenz erstellt.")
        self.user.refresh_from_db()
        self.assertEqual(self.user.generated_certificates, 0)

    def test_cc_document_has_one_page_per_passed_cc_check(self):
        self._check(has_cc_license=True, cc_license="CC-BY")
        self._check(has_cc_license=True, cc_license="CC-BY-SA")
        self._check(has_cc_license=True, cc_license="CC-BY-NC", is_commercial=True)

        with patch("core.pdf._write_pdf", return_value=b"%PDF-1.7") as write_pdf:
            response = self.client.get(reverse("certificate_cc_document"))

        self.assertEqual(response.status_code, 200)
        html = write_pdf.call_args[0][0]
        self.assertEqual(html.count('class="page"'), 2)
        self.assertNotIn("CC-BY-NC", html)

    def test_failed_rendering_is_not_counted(self):
        from core.pdf import PdfUnavailable

        with patch("core.pdf._write_pdf", side_effect=PdfUnavailable("missing")):
            response = self.client.get(reverse("certificate_activity"))

        self.assertEqual(response.status_code, 501)
        self.user.refresh_from_db()
        self.assertEqual(self.user.generated_certificates, 0)
