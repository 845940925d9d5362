from unittest.mock import patch

import requests
from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.test import TestCase, override_settings
from django.urls import reverse

from cases.models import CaseExample, CaseReaction, CaseTag
from cases.services import (
    add_admin_comment,
    engagement_score,
    render_comment,
    search_cases,
    toggle_reaction,
    toggle_tag,
)

User = get_user_model()


class CaseTestMixin:
    def _create_user(self, username, role="learner", **extra):
        return User.objects.create_user(
            username=username, password="pass1234", role=role, display_name=username.title(), **extra
        )

    def _create_case(self, author, title="Foto im Newsletter", description="Darf ich das?", category="foto"):
        return CaseExample.objects.create(
            author=author,
            author_name=author.display_name,
            title=title,
            description=description,
            category=category,
        )


class EngagementTests(CaseTestMixin, TestCase):
    def setUp(self):
        self.users = [self._create_user(f"user{i}") for i in range(4)]
        self.quiet = self._create_case(self.users[0], title="Leises Beispiel")
        self.busy = self._create_case(self.users[0], title="Beliebtes Beispiel", description="Musik im Video")

    def test_score_counts_reactions_twice_and_distinct_tags(self):
        for user in self.users[:3]:
            CaseReaction.objects.create(case=self.busy, user=user, emoji="👍")
            CaseTag.objects.create(case=self.busy, user=user, tag="#relevant")
        CaseTag.objects.create(case=self.busy, user=self.users[3], tag="#wichtig")

        self.assertEqual(engagement_score(self.busy), 3 * 2 + 2)
        ranked = list(search_cases())
        self.assertEqual(ranked[0], self.busy)
        self.assertEqual(ranked[0].engagement, 8)

    def test_search_is_case_insensitive_over_title_and_description(self):
        self.assertEqual(list(search_cases("MUSIK")), [self.busy])
        self.assertEqual(list(search_cases("leises")), [self.quiet])

    def test_tag_filter_matches_any_selected_tag(self):
        CaseTag.objects.create(case=self.quiet, user=self.users[1], tag="#komplex")

        self.assertEqual(list(search_cases(tags=["#komplex", "#kreativ"])), [self.quiet])
        self.assertEqual(list(search_cases(tags=["#kreativ"])), [])


class ToggleTests(CaseTestMixin, TestCase):
    def setUp(self):
        self.author = self._create_user("author")
        self.user = self._create_user("reader")
        self.case = self._create_case(self.author)

    def test_reaction_toggle_updates_liked_counter(self):
        self.assertTrue(toggle_reaction(self.user, self.case, "🔥"))
        self.user.refresh_from_db()
        self.assertEqual(self.user.liked_cases, 1)

        self.assertFalse(toggle_reaction(self.user, self.case, "🔥"))
        self.user.refresh_from_db()
        self.assertEqual(self.user.liked_cases, 0)
        self.assertFalse(CaseReaction.objects.exists())

    def test_tag_toggle_updates_tagged_counter(self):
        toggle_tag(self.user, self.case, "#nützlich")
        self.user.refresh_from_db()
        self.assertEqual(self.user.tagged_cases, 1)

        toggle_tag(self.user, self.case, "#nützlich")
        self.user.refresh_from_db()
        self.assertEqual(self.user.tagged_cases, 0)

    def test_unknown_reaction_is_rejected(self):
        with self.assertRaises(ValueError):
            toggle_reaction(self.user, self.case, "🍕")


class AdminCommentTests(CaseTestMixin, TestCase):
    def setUp(self):
        self.admin = self._create_user("admin", role="admin")
        self.learner = self._create_user("learner")
        self.case = self._create_case(self.learner)

    def test_render_comment_links_and_escapes(self):
        html = render_comment("Siehe [IGE](https://www.ige.ch) <b>jetzt</b> & [x](javascript:alert(1))")

        self.assertIn('<a href="https://www.ige.ch" target="_blank" rel="noopener noreferrer">IGE</a>', html)
        self.assertIn("&lt;b&gt;jetzt&lt;/b&gt; &amp;", html)
        self.assertNotIn('href="javascript', html)

    def test_only_one_comment_per_case(self):
        add_admin_comment(self.admin, self.case, "Gute Frage.")

        with self.assertRaises(ValueError):
            add_admin_comment(self.admin, self.case, "Noch ein Kommentar.")
        self.case.refresh_from_db()
        self.assertEqual(self.case.admin_comment, "Gute Frage.")
        self.assertEqual(self.case.admin_comment_by, self.admin)

    def test_learner_cannot_comment(self):
        with self.assertRaises(PermissionDenied):
            add_admin_comment(self.learner, self.case, "Hallo")

    def test_comment_view_forbidden_for_learner(self):
        self.client.force_login(self.learner)

        response = self.client.post(reverse("case_comment", args=[self.case.pk]), {"text": "Hallo"})

        self.assertEqual(response.status_code, 403)


@override_settings(CASE_WEBHOOK_URL="https://hooks.example.test/case", CASE_WEBHOOK_SYNC=True)
class CaseCreateViewTests(CaseTestMixin, TestCase):
    def setUp(self):
        self.user = self._create_user("mia")
        self.client.force_login(self.user)

    def _post(self):
        return self.client.post(
            reverse("case_create"),
            {"title": "Song im Erklärvideo", "description": "20 Sekunden Hintergrundmusik", "category": "musik"},
        )

    def test_create_posts_webhook_and_counts_activity(self):
        with patch("cases.services.requests.post") as post:
            response = self._post()

        self.assertRedirects(response, reverse("case_list"))
        case = CaseExample.objects.get()
        self.assertEqual(case.author_name, "Mia")
        self.user.refresh_from_db()
        self.assertEqual(self.user.tagged_cases, 1)

        post.assert_called_once()
        payload = post.call_args.kwargs["json"]
        self.assertEqual(payload["caseId"], str(case.pk))
        self.assertEqual(payload["author"], "Mia")
        self.assertEqual(payload["tags"], [])
        self.assertTrue(payload["url"].endswith(reverse("case_list")))
        self.assertEqual(
            set(payload),
            {"title", "description", "category", "author", "tags", "url", "caseId", "createdAt"},
        )

    def test_webhook_failure_does_not_block_save(self):
        with patch("cases.services.requests.post", side_effect=requests.exceptions.ConnectionError("offline")):
            response = self._post()

        self.assertRedirects(response, reverse("case_list"))
        self.assertTrue(CaseExample.objects.exists())

    @override_settings(CASE_WEBHOOK_URL="")
    def test_no_webhook_without_url(self):
        with patch("cases.services.requests.post") as post:
            self._post()

        post.assert_not_called()

    def test_title_length_is_validated(self):
        response = self.client.post(
            reverse("case_create"),
            {"title": "x" * 101, "description": "zu lang", "category": "text"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertFalse(CaseExample.objects.exists())


class CaseListViewTests(CaseTestMixin, TestCase):
    def test_list_marks_popular_cases(self):
        author = self._create_user("author")
        case = self._create_case(author)
        for i in range(6):
            reader = self._create_user(f"reader{i}")
            CaseReaction.objects.create(case=case, user=reader, emoji="⭐")
        self.client.force_login(author)

        response = self.client.get(reverse("case_list"))

        item = response.context["items"][0]
        self.assertEqual(item["score"], 12)
        self.assertTrue(item["popular"])

    def test_react_view_toggles(self):
        author = self._create_user("author")
        case = self._create_case(author)
        self.client.force_login(author)

        response = self.client.post(reverse("case_react", args=[case.pk]), {"emoji": "👍"})

        self.assertRedirects(response, reverse("case_list"))
        self.assertTrue(CaseReaction.objects.filter(case=case, user=author, emoji="👍").exists())
