import os
import unittest
from unittest.mock import Mock, patch

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from outreach.core.config import settings
from outreach.services.email_service import EmailDeliveryError, email_provider_health, send_email_message
from outreach.services import submission_mail


class EmailServiceTests(unittest.TestCase):
    def setUp(self):
        self._backup = {
            "EMAIL_PROVIDER": settings.EMAIL_PROVIDER,
            "EMAIL_SERVICE_URL": settings.EMAIL_SERVICE_URL,
            "INTERNAL_SERVICE_TOKEN": settings.INTERNAL_SERVICE_TOKEN,
            "SMTP_HOST": settings.SMTP_HOST,
            "ADMIN_NOTIFICATION_EMAILS": settings.ADMIN_NOTIFICATION_EMAILS,
        }

    def tearDown(self):
        for key, value in self._backup.items():
            setattr(settings, key, value)

    def test_dummy_provider_only_logs(self):
        settings.EMAIL_PROVIDER = "dummy"
        payload = send_email_message(recipients="User@Example.com", subject="Hi", body="Body")
        self.assertEqual(payload.get("provider"), "mock_email")
        self.assertFalse(payload.get("sent"))

    def test_service_provider_calls_internal_email_service(self):
        settings.EMAIL_PROVIDER = "service"
        settings.EMAIL_SERVICE_URL = "http://email-service:8010"
        settings.INTERNAL_SERVICE_TOKEN = "token"

        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.content = b'{"status":"sent"}'
        mock_response.json.return_value = {"status": "sent"}

        mock_client = Mock()
        mock_client.__enter__ = Mock(return_value=mock_client)
        mock_client.__exit__ = Mock(return_value=False)
        mock_client.post.return_value = mock_response

        with patch("outreach.services.email_service.httpx.Client", return_value=mock_client):
            payload = send_email_message(recipients=["a@example.com", "A@example.com"], subject="S", body="B")
        self.assertEqual(payload.get("provider"), "email-service")
        self.assertTrue(bool(payload.get("sent")))
        self.assertEqual(mock_client.post.call_args.kwargs["json"]["to"], ["a@example.com"])
        self.assertEqual(mock_client.post.call_args.kwargs["headers"]["X-Internal-Token"], "token")

    def test_service_error_status_raises(self):
        settings.EMAIL_PROVIDER = "service"
        settings.INTERNAL_SERVICE_TOKEN = "token"
        mock_response = Mock()
        mock_response.status_code = 502
        mock_response.content = b'{"detail":"upstream"}'
        mock_response.json.return_value = {"detail": "upstream"}
        mock_client = Mock()
        mock_client.__enter__ = Mock(return_value=mock_client)
        mock_client.__exit__ = Mock(return_value=False)
        mock_client.post.return_value = mock_response

        with patch("outreach.services.email_service.httpx.Client", return_value=mock_client):
            with self.assertRaises(EmailDeliveryError):
                send_email_message(recipients="a@example.com", subject="S", body="B")

    def test_smtp_without_host_raises(self):
        settings.EMAIL_PROVIDER = "smtp"
        settings.SMTP_HOST = ""
        with self.assertRaises(EmailDeliveryError):
            send_email_message(recipients="a@example.com", subject="S", body="B")

    def test_unknown_provider_raises(self):
        settings.EMAIL_PROVIDER = "unknown"
        with self.assertRaises(EmailDeliveryError):
            send_email_message(recipients="user@example.com", subject="S", body="B")

    def test_empty_recipients_raise(self):
        settings.EMAIL_PROVIDER = "dummy"
        with self.assertRaises(EmailDeliveryError):
            send_email_message(recipients=["  "], subject="S", body="B")

    def test_health_reports_missing_smtp_settings(self):
        settings.EMAIL_PROVIDER = "smtp"
        settings.SMTP_HOST = ""
        health = email_provider_health()
        self.assertEqual(health["status"], "degraded")
        self.assertFalse(health["can_send"])


class SubmissionMailTests(unittest.TestCase):
    def setUp(self):
        self._backup = settings.ADMIN_NOTIFICATION_EMAILS
        settings.ADMIN_NOTIFICATION_EMAILS = "team@example.org, director@example.org"

    def tearDown(self):
        settings.ADMIN_NOTIFICATION_EMAILS = self._backup

    def test_admin_notification_lists_fields_and_reference(self):
        subject, body = submission_mail.build_admin_notification(
            "volunteer", {"name": "Kim", "email": "kim@example.com", "availability": "Weekends"}, 17
        )
        self.assertEqual(subject, "New Volunteer Application Submission from Kim")
        self.assertIn("Availability: Weekends", body)
        self.assertIn("Reference ID: #17", body)

    def test_event_registration_notification_names_the_event(self):
        subject, body = submission_mail.build_admin_notification(
            "event_registration_7",
            {"name": "Alex", "email": "alex@example.com", "event_title": "Wheelchair Basketball Clinic", "event_date": "2026-11-14"},
            7,
        )
        self.assertEqual(subject, "New Event Registration Submission from Alex")
        self.assertIn("Event Title: Wheelchair Basketball Clinic", body)
        self.assertIn("Event Date: 2026-11-14", body)

    def test_confirmation_uses_form_specific_next_steps(self):
        subject, body = submission_mail.build_confirmation("contact", {"name": "Kim"}, 5, "Thanks!")
        self.assertIn("contact form", subject)
        self.assertIn("within 2 business days", body)
        self.assertIn("#5", body)

        _, fallback = submission_mail.build_confirmation("event_registration", {}, 9, "See you")
        self.assertIn("Hi there,", fallback)
        self.assertIn("We'll be in touch soon!", fallback)

    def test_notify_sends_admin_and_confirmation(self):
        with patch("outreach.services.submission_mail.send_email_message") as send:
            submission_mail.notify_submission("contact", {"name": "Kim", "email": "kim@example.com"}, 3, "Thanks!")
        self.assertEqual(send.call_count, 2)
        self.assertEqual(send.call_args_list[0].kwargs["recipients"], ["team@example.org", "director@example.org"])
        self.assertEqual(send.call_args_list[1].kwargs["recipients"], "kim@example.com")

    def test_delivery_failures_are_swallowed(self):
        with patch("outreach.services.submission_mail.send_email_message", side_effect=EmailDeliveryError("down")) as send:
            submission_mail.notify_submission("contact", {"email": "kim@example.com"}, 3, "Thanks!")
        self.assertEqual(send.call_count, 2)

    def test_no_email_collected_skips_confirmation(self):
        with patch("outreach.services.submission_mail.send_email_message") as send:
            self.assertFalse(submission_mail.send_confirmation_email("contact", {"name": "Kim"}, 3, "Thanks!"))
        send.assert_not_called()
