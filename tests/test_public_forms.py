from unittest.mock import Mock, patch

import redis

from tests.admin.base import *  # noqa: F401,F403

from outreach.services.rate_limit import RedisRateLimiter


class PublicFormTests(OutreachApiBase):
    CONTACT = {
        "name": "Jordan Lee",
        "email": "jordan@example.com",
        "phone": "(555) 123-4567",
        "subject": "Events",
        "message": "When is the next clinic?",
    }

    def test_get_form_returns_schema_in_declaration_order(self):
        response = self.client.get("/api/public/forms/contact")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["form_type"], "contact")
        self.assertEqual([f["id"] for f in body["fields"]], ["name", "email", "phone", "subject", "message"])
        self.assertTrue(body["enabled"])

    def test_unknown_form_is_404(self):
        response = self.client.get("/api/public/forms/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Form configuration not found"})

    def test_disabled_form_is_403_and_never_stores(self):
        with self.SessionLocal() as db:
            db.get(FormConfig, "contact").enabled = False
            db.commit()

        self.assertEqual(self.client.get("/api/public/forms/contact").status_code, 403)
        response = self.client.post("/api/public/forms/contact/submissions", json={"data": self.CONTACT})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"], "This form is currently disabled")
        with self.SessionLocal() as db:
            self.assertEqual(db.query(FormSubmission).count(), 0)

    def test_valid_submission_is_stored_as_new(self):
        response = self.client.post("/api/public/forms/contact/submissions", json={"data": self.CONTACT, "_honeypot": ""})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Thank you for reaching out! We'll get back to you within 2 business days.")
        self.assertGreater(body["submission_id"], 0)

        with self.SessionLocal() as db:
            row = db.get(FormSubmission, body["submission_id"])
            self.assertEqual(row.status, "new")
            self.assertEqual(row.form_type, "contact")
            self.assertEqual(row.data["email"], "jordan@example.com")

    def test_invalid_submission_returns_field_errors(self):
        data = dict(self.CONTACT, email="not-an-email", name="")
        response = self.client.post("/api/public/forms/contact/submissions", json={"data": data})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"], "Full Name is required")
        self.assertEqual(
            body["field_errors"],
            {"name": "Full Name is required", "email": "Please enter a valid email address"},
        )
        with self.SessionLocal() as db:
            self.assertEqual(db.query(FormSubmission).count(), 0)

    def test_honeypot_looks_like_success_but_stores_nothing(self):
        response = self.client.post(
            "/api/public/forms/contact/submissions",
            json={"data": {"email": "bot"}, "_honeypot": "http://spam.example"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(set(response.json()), {"success", "message", "submission_id"})
        self.assertTrue(response.json()["success"])
        with self.SessionLocal() as db:
            self.assertEqual(db.query(FormSubmission).count(), 0)

    def test_whitespace_or_non_string_honeypot_still_trips(self):
        for decoy in ("   ", 1, True):
            response = self.client.post(
                "/api/public/forms/contact/submissions", json={"data": self.CONTACT, "_honeypot": decoy}
            )
            self.assertEqual(response.status_code, 200, decoy)
            self.assertEqual(response.json()["submission_id"], 0)
        with self.SessionLocal() as db:
            self.assertEqual(db.query(FormSubmission).count(), 0)

    def test_non_string_values_are_stored_as_strings(self):
        data = dict(self.CONTACT, subject="Other", message=["line one", "line two"])
        response = self.client.post("/api/public/forms/contact/submissions", json={"data": data})
        self.assertEqual(response.status_code, 200)
        with self.SessionLocal() as db:
            row = db.get(FormSubmission, response.json()["submission_id"])
            self.assertEqual(row.data["message"], "line one, line two")

    def test_notification_is_scheduled_after_store(self):
        with patch("outreach.api.public.forms.notify_submission") as notify:
            response = self.client.post("/api/public/forms/contact/submissions", json={"data": self.CONTACT})
        self.assertEqual(response.status_code, 200)
        notify.assert_called_once()
        form_type, record, reference_id, _message = notify.call_args.args
        self.assertEqual(form_type, "contact")
        self.assertEqual(record["name"], "Jordan Lee")
        self.assertEqual(reference_id, response.json()["submission_id"])

    def test_email_failure_does_not_affect_response(self):
        from outreach.services.email_service import EmailDeliveryError

        with (
            patch("outreach.services.submission_mail.settings.ADMIN_NOTIFICATION_EMAILS", "team@example.org"),
            patch("outreach.services.submission_mail.send_email_message", side_effect=EmailDeliveryError("down")),
        ):
            response = self.client.post("/api/public/forms/contact/submissions", json={"data": self.CONTACT})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])

    def test_submissions_are_rate_limited_per_ip(self):
        with (
            patch("outreach.services.rate_limit.settings.PUBLIC_SUBMIT_RATE_LIMIT", 2),
            patch("outreach.services.rate_limit.settings.PUBLIC_SUBMIT_RATE_WINDOW_SECONDS", 60),
        ):
            codes = [
                self.client.post("/api/public/forms/contact/submissions", json={"data": self.CONTACT}).status_code
                for _ in range(3)
            ]
            blocked = self.client.post("/api/public/forms/contact/submissions", json={"data": self.CONTACT})
        self.assertEqual(codes, [200, 200, 429])
        self.assertIn("error", blocked.json())
        self.assertIsNotNone(blocked.headers.get("retry-after"))

    def test_submit_survives_redis_dropping_after_startup(self):
        broken = Mock()
        broken.incr.side_effect = redis.ConnectionError("connection reset")
        with patch("outreach.services.rate_limit.get_rate_limiter", return_value=RedisRateLimiter(broken)):
            response = self.client.post("/api/public/forms/contact/submissions", json={"data": self.CONTACT})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])
        with self.SessionLocal() as db:
            self.assertEqual(db.query(FormSubmission).count(), 1)

    def test_public_setting_is_readable_and_private_keys_are_hidden(self):
        response = self.client.get("/api/public/settings/donation_url")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["value"].startswith("https://"))
        self.assertEqual(self.client.get("/api/public/settings/secret_key").status_code, 404)
