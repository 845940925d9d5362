import re
from unittest.mock import patch

from django.contrib.auth import authenticate, get_user_model
from django.db import DatabaseError
from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.services import CODE_ALPHABET, generate_code, increment_activity, normalize_code, register_learner

User = get_user_model()

CODE_RE = re.compile(rf"^[{CODE_ALPHABET}]{{4}}-[{CODE_ALPHABET}]{{4}}-[{CODE_ALPHABET}]{{4}}$")


class AccessCodeTests(TestCase):
    def test_generated_codes_use_unambiguous_alphabet(self):
        for _ in range(20):
            self.assertRegex(generate_code(), CODE_RE)

    def test_normalize_code_accepts_lowercase_without_dashes(self):
        self.assertEqual(normalize_code(" abcd efgh jkmn "), "ABCD-EFGH-JKMN")

    def test_register_learner_creates_code_only_account(self):
        user, code = register_learner("  Mia  ")

        self.assertEqual(user.display_name, "Mia")
        self.assertEqual(user.access_code, code)
        self.assertEqual(user.username, code)
        self.assertFalse(user.has_usable_password())
        self.assertEqual(user.role, User.Role.LEARNER)

    def test_backend_authenticates_by_code(self):
        user, code = register_learner("Luca")

        self.assertEqual(authenticate(None, access_code=code.lower()), user)
        self.assertIsNone(authenticate(None, access_code="AAAA-BBBB-CCCC"))


class ActivityCounterTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="learner", password="pass1234")

    def test_increment_and_decrement(self):
        self.assertTrue(increment_activity(self.user, "liked_cases"))
        self.assertTrue(increment_activity(self.user, "liked_cases"))
        self.assertTrue(increment_activity(self.user, "liked_cases", -1))

        self.user.refresh_from_db()
        self.assertEqual(self.user.liked_cases, 1)

    def test_counter_never_goes_negative(self):
        self.assertFalse(increment_activity(self.user, "tagged_cases", -1))

        self.user.refresh_from_db()
        self.assertEqual(self.user.tagged_cases, 0)

    def test_unknown_counter_is_rejected(self):
        with self.assertRaises(ValueError):
            increment_activity(self.user, "is_superuser")

    def test_database_failure_is_not_raised(self):
        with patch("django.db.models.query.QuerySet.update", side_effect=DatabaseError("down")):
            self.assertFalse(increment_activity(self.user, "checked_products"))

    def test_total_activity(self):
        self.user.checked_products = 2
        self.user.tagged_cases = 3
        self.user.liked_cases = 4
        self.user.generated_licenses = 10

        self.assertEqual(self.user.total_activity, 9)


class AccountViewTests(TestCase):
    def test_register_logs_in_and_shows_code(self):
        response = self.client.post(reverse("register"), {"display_name": "Noah"})

        self.assertEqual(response.status_code, 200)
        user = User.objects.get(display_name="Noah")
        self.assertContains(response, user.access_code)
        self.assertEqual(int(self.client.session["_auth_user_id"]), user.pk)

    def test_register_requires_display_name(self):
        response = self.client.post(reverse("register"), {"display_name": "   "})

        self.assertEqual(response.status_code, 200)
        self.assertFalse(User.objects.exists())

    def test_code_login(self):
        user, code = register_learner("Mia")

        response = self.client.post(reverse("code_login"), {"access_code": code})

        self.assertRedirects(response, reverse("dashboard"))
        self.assertEqual(int(self.client.session["_auth_user_id"]), user.pk)

    def test_code_login_with_wrong_code(self):
        response = self.client.post(reverse("code_login"), {"access_code": "ZZZZ-ZZZZ-ZZZZ"})

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Ungültiger Zugangscode")

    def test_admin_login_with_email(self):
        User.objects.create_user(username="admin1", email="admin@ecrc42.ch", password="Sicher-1234", role="admin")

        response = self.client.post(reverse("login"), {"username": "admin@ecrc42.ch", "password": "Sicher-1234"})

        self.assertRedirects(response, reverse("dashboard"))

    def test_home_redirects_authenticated_user(self):
        user, _ = register_learner("Mia")
        self.client.force_login(user)

        response = self.client.get(reverse("home"))

        self.assertRedirects(response, reverse("dashboard"))

    def test_profile_update(self):
        user, _ = register_learner("Mia")
        self.client.force_login(user)

        response = self.client.post(reverse("profile"), {"display_name": "Mia K.", "email": "mia@example.ch"})

        self.assertRedirects(response, reverse("profile"))
        user.refresh_from_db()
        self.assertEqual(user.display_name, "Mia K.")

    def test_logout_via_post(self):
        user, _ = register_learner("Mia")
        self.client.force_login(user)

        response = self.client.post(reverse("logout"))

        self.assertRedirects(response, reverse("home"))
        self.assertNotIn("_auth_user_id", self.client.session)

    @override_settings(ECRC_ADMIN_EMAILS=["lehrer@schule.ch"])
    def test_admin_email_grants_admin_rights(self):
        user = User.objects.create_user(username="lehrer", email="Lehrer@Schule.ch", password="pass1234")

        self.assertTrue(user.is_ecrc_admin)
