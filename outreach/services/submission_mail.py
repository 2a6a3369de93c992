"""Best-effort email notifications sent after a submission is stored.

Callers schedule ``notify_submission`` as a background task; delivery
failures are logged here and never reach the submitter.
"""
from __future__ import annotations

import logging
from typing import Mapping

from outreach.core.config import settings
from outreach.services.email_service import EmailDeliveryError, send_email_message

_LOG = logging.getLogger("outreach.email")

FORM_DISPLAY_NAMES = {
    "contact": "Contact Form",
    "volunteer": "Volunteer Application",
    "grant_application": "Grant Application",
    "patient_referral": "Patient Referral",
    "equipment_donation": "Equipment Donation",
    "corporate_sponsorship": "Corporate Sponsorship Inquiry",
}

NEXT_STEPS = {
    "contact": "Our team will review your message and get back to you within 2 business days.",
    "volunteer": "We'll review your application and reach out to discuss next steps.",
    "grant_application": "Our grants committee will review your application and contact you with a decision.",
    "patient_referral": "Our program team will reach out to the patient to discuss how we can help.",
    "equipment_donation": "We'll review your donation and contact you to arrange pickup or drop-off.",
    "corporate_sponsorship": "A member of our partnerships team will contact you within 2 business days.",
}

DEFAULT_NEXT_STEPS = "We'll be in touch soon!"


def form_display_name(form_type: str) -> str:
    if form_type.startswith("event_registration"):
        return "Event Registration"
    return FORM_DISPLAY_NAMES.get(form_type, form_type.replace("_", " ").title())


def _humanize_key(key: str) -> str:
    return key.replace("_", " ").title()


def submitter_name(data: Mapping[str, str], default: str) -> str:
    return str(data.get("name") or data.get("contact_name") or data.get("referrer_name") or default)


def submitter_email(data: Mapping[str, str]) -> str:
    return str(data.get("email") or data.get("referrer_email") or "").strip()


def build_admin_notification(form_type: str, data: Mapping[str, str], reference_id: int) -> tuple[str, str]:
    form_name = form_display_name(form_type)
    name = submitter_name(data, "Unknown")
    email = submitter_email(data) or "Not provided"
    lines = [
        f"You have received a new {form_name} submission from {name} ({email}).",
        "",
        "Submission details:",
    ]
    lines.extend(f"  {_humanize_key(key)}: {value}" for key, value in data.items())
    lines.extend(
        [
            "",
            f"Reference ID: #{reference_id}",
            f"Manage submissions in the admin dashboard: {settings.SITE_URL.rstrip('/')}/admin",
        ]
    )
    return f"New {form_name} Submission from {name}", "\n".join(lines)


def build_confirmation(form_type: str, data: Mapping[str, str], reference_id: int, success_message: str) -> tuple[str, str]:
    form_name = form_display_name(form_type)
    lines = [
        f"Hi {submitter_name(data, 'there')},",
        "",
        success_message,
        "",
        f"What's next? {NEXT_STEPS.get(form_type, DEFAULT_NEXT_STEPS)}",
        "",
        f"Your reference number is #{reference_id}. Please keep this for your records.",
        "",
        f"{settings.ORGANIZATION_NAME} - {settings.SITE_URL}",
    ]
    return f"Thank you for your {form_name.lower()} - {settings.ORGANIZATION_NAME}", "\n".join(lines)


def send_admin_notification(form_type: str, data: Mapping[str, str], reference_id: int) -> bool:
    recipients = settings.admin_notification_emails_list
    if not recipients:
        _LOG.info("admin notification skipped: ADMIN_NOTIFICATION_EMAILS is empty")
        return False
    subject, body = build_admin_notification(form_type, data, reference_id)
    try:
        send_email_message(recipients=recipients, subject=subject, body=body, reply_to=submitter_email(data) or None)
    except EmailDeliveryError as exc:
        _LOG.error("admin notification failed form_type=%s reference=%s: %s", form_type, reference_id, exc)
        return False
    return True


def send_confirmation_email(form_type: str, data: Mapping[str, str], reference_id: int, success_message: str) -> bool:
    recipient = submitter_email(data)
    if not recipient:
        _LOG.info("confirmation skipped: no email collected reference=%s", reference_id)
        return False
    subject, body = build_confirmation(form_type, data, reference_id, success_message)
    try:
        send_email_message(recipients=recipient, subject=subject, body=body)
    except EmailDeliveryError as exc:
        _LOG.error("confirmation email failed form_type=%s reference=%s: %s", form_type, reference_id, exc)
        return False
    return True


def notify_submission(form_type: str, data: Mapping[str, str], reference_id: int, success_message: str) -> None:
    try:
        send_admin_notification(form_type, data, reference_id)
        send_confirmation_email(form_type, data, reference_id, success_message)
    except Exception:
        # Runs after the response was sent; nothing may propagate to the submitter.
        _LOG.exception("submission notification crashed form_type=%s reference=%s", form_type, reference_id)
