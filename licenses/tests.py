from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from licenses.forms import LicenseForm
from licenses.models import GeneratedLicense
from licenses.services import license_filename

User = get_user_model()


def _valid_data(**overrides):
    data = {
        "title": "Herbst im Jura",
        "media_type": "foto",
        "custom_media_type": "",
        "author_name": "Luca",
        "description": "Eigenes Foto einer Herbstlandschaft.",
        "work_link": "",
        "creative_work_reasons": ["Ich habe es selbst geschaffen"],
        "creative_work_custom": "",
        "individual_character_reasons": [],
        "individual_character_custom": "Ungewöhnlicher Bildausschnitt",
        "expression_forms": ["Digitales Werk (online verfügbar)"],
        "expression_custom": "",
        "license": "CC-BY-SA",
    }
    data.update(overrides)
    return data


class LicenseFormTests(TestCase):
    def test_valid_form(self):
        form = LicenseForm(data=_valid_data())

        self.assertTrue(form.is_valid(), form.errors)

    def test_each_justification_group_needs_a_reason(self):
        form = LicenseForm(data=_valid_data(expression_forms=[], expression_custom="  "))

        self.assertFalse(form.is_valid())
        self.assertIn("expression_forms", form.errors)

    def test_other_media_type_needs_custom_type(self):
        form = LicenseForm(data=_valid_data(media_type="anderes"))

        self.assertFalse(form.is_valid())
        self.assertIn("custom_media_type", form.errors)

    def test_license_is_required(self):
        form = LicenseForm(data=_valid_data(license=""))

        self.assertFalse(form.is_valid())
        self.assertIn("license", form.errors)


class LicenseModelTests(TestCase):
    def test_license_urls(self):
        self.assertEqual(
            GeneratedLicense(license="CC-BY-NC-SA").license_url,
            "https://creativecommons.org/licenses/by-nc-sa/4.0/",
        )
        self.assertEqual(
            GeneratedLicense(license="CC0").license_url,
            "https://creativecommons.org/publicdomain/zero/1.0/",
        )

    def test_filename_replaces_special_characters(self):
        self.assertEqual(license_filename(GeneratedLicense(title="Mein Bild #1")), "CC-Lizenz_Mein_Bild__1.pdf")


class LicenseViewTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="luca", password="pass1234", display_name="Luca")
        self.client.force_login(self.user)

    def test_create_saves_and_counts_activity(self):
        response = self.client.post(reverse("license_create"), _valid_data())

        generated = GeneratedLicense.objects.get(owner=self.user)
        self.assertRedirects(response, reverse("license_detail", args=[generated.pk]))
        self.assertEqual(generated.creative_work_reasons, ["Ich habe es selbst geschaffen"])
        self.user.refresh_from_db()
        self.assertEqual(self.user.generated_licenses, 1)

    def test_detail_of_foreign_license_is_404(self):
        other = User.objects.create_user(username="mia", password="pass1234")
        generated = GeneratedLicense.objects.create(
            owner=other,
            title="Fremd",
            media_type="text",
            author_name="Mia",
            description="-",
            license="CC0",
        )

        response = self.client.get(reverse("license_detail", args=[generated.pk]))

        self.assertEqual(response.status_code, 404)

    def test_pdf_contains_license_url_and_declaration(self):
        self.client.post(reverse("license_create"), _valid_data())
        generated = GeneratedLicense.objects.get(owner=self.user)

        with patch("core.pdf._write_pdf", return_value=b"%PDF-1.7") as write_pdf:
            response = self.client.get(reverse("license_pdf", args=[generated.pk]))

        self.assertEqual(response.status_code, 200)
        html = write_pdf.call_args[0][0]
        self.assertIn("https://creativecommons.org/licenses/by-sa/4.0/", html)
        self.assertIn("Hiermit erkläre ich, Luca", html)
